# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class Severity(str, Enum):
    """Severity levels surfaced to callers of the validation pipeline."""

    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def from_flag(cls, is_warning: bool) -> Severity:
        """Return the severity matching a diagnostic's warning flag.

        Args:
            is_warning: ``True`` when the diagnostic is a warning.

        Returns:
            Severity: ``WARNING`` for warnings, ``ERROR`` otherwise.
        """

        return cls.WARNING if is_warning else cls.ERROR


class MarkerSeverity(IntEnum):
    """Integer severity values stored in a marker's ``severity`` attribute."""

    INFO = 0
    WARNING = 1
    ERROR = 2


SEVERITY_ERROR: Final[int] = MarkerSeverity.ERROR.value


def marker_is_warning(severity: int | None) -> bool:
    """Return whether a marker with ``severity`` should be reported as a warning.

    Markers that do not carry a severity are treated as warnings; only the
    explicit error value produces an error.

    Args:
        severity: Raw ``severity`` attribute, ``None`` when absent.

    Returns:
        bool: ``True`` unless ``severity`` equals :data:`SEVERITY_ERROR`.
    """

    return severity is None or severity != SEVERITY_ERROR


__all__ = ["MarkerSeverity", "SEVERITY_ERROR", "Severity", "marker_is_warning"]
