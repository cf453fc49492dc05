# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting diagnostics to serializable data."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TypeAlias

from .models import Diagnostic

JsonScalar: TypeAlias = str | int | float | bool | None


def serialize_diagnostic(diag: Diagnostic) -> dict[str, JsonScalar]:
    """Convert a diagnostic into the mapping emitted by the ``update`` command."""

    return {
        "message": diag.message,
        "filename": diag.file,
        "line": diag.line,
        "column": diag.column,
        "warning": diag.is_warning,
    }


def dump_diagnostics(diagnostics: Sequence[Diagnostic] | None, *, indent: int | None = None) -> str:
    """Return ``diagnostics`` as a JSON document.

    Args:
        diagnostics: Validation result, ``None`` when nothing was computed.
        indent: Optional indentation passed to :func:`json.dumps`.

    Returns:
        str: ``null`` for a ``None`` result, otherwise a JSON array.
    """

    if diagnostics is None:
        return json.dumps(None)
    return json.dumps([serialize_diagnostic(diag) for diag in diagnostics], indent=indent)


__all__ = ["dump_diagnostics", "serialize_diagnostic"]
