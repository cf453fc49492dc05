# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from srcupdate.filesystem.paths import _best_effort_resolve


@pytest.fixture(autouse=True)
def _reset_path_cache() -> Iterator[None]:
    """Drop memoized path resolutions between tests."""

    yield
    _best_effort_resolve.cache_clear()
