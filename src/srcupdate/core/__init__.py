# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models, severities, and errors shared across srcupdate."""

from __future__ import annotations

from .errors import (
    BuildSchedulingError,
    CheckerRunError,
    ConfigError,
    IndexAccessError,
    ResourceNotFoundError,
    SrcUpdateError,
    ValidationError,
)
from .models import (
    Diagnostic,
    DiagnosticCandidate,
    MarkerAttribute,
    MarkerKind,
    Position,
    RawMarker,
    RawProblem,
    ValidationRequest,
)
from .severity import SEVERITY_ERROR, MarkerSeverity, Severity

__all__ = [
    "BuildSchedulingError",
    "CheckerRunError",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCandidate",
    "IndexAccessError",
    "MarkerAttribute",
    "MarkerKind",
    "MarkerSeverity",
    "Position",
    "RawMarker",
    "RawProblem",
    "ResourceNotFoundError",
    "SEVERITY_ERROR",
    "Severity",
    "SrcUpdateError",
    "ValidationError",
    "ValidationRequest",
]
