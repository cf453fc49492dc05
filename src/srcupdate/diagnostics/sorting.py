# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ordering helpers for diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from ..core.models import Diagnostic


def compare_positions(first: Diagnostic, second: Diagnostic) -> int:
    """Compare two diagnostics by line, then column.

    Returns:
        int: ``-1``, ``0`` or ``1`` following the usual comparator contract.
    """

    if first.line != second.line:
        return -1 if first.line < second.line else 1
    if first.column != second.column:
        return -1 if first.column < second.column else 1
    return 0


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return ``diagnostics`` ordered by position.

    :func:`sorted` is stable, so diagnostics sharing a position keep their
    input order.
    """

    return sorted(diagnostics, key=cmp_to_key(compare_positions))


__all__ = ["compare_positions", "sort_diagnostics"]
