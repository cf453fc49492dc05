# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for paths and byte offsets."""

from __future__ import annotations

from .offsets import FileOffsets, FileOffsetsFactory
from .paths import resolve_within, to_location

__all__ = ["FileOffsets", "FileOffsetsFactory", "resolve_within", "to_location"]
