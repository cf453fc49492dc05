# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostics package exposing collection, normalisation, and ordering helpers."""

from __future__ import annotations

from .collectors import PROBLEM_AST_STYLE, MarkerCollector, ProblemCollector, read_locked
from .core import marker_position, normalize_candidate, normalize_candidates, normalize_diagnostics
from .pipeline import DiagnosticPipeline, DiagnosticPipelineRequest
from .sorting import compare_positions, sort_diagnostics

__all__ = (
    "PROBLEM_AST_STYLE",
    "DiagnosticPipeline",
    "DiagnosticPipelineRequest",
    "MarkerCollector",
    "ProblemCollector",
    "compare_positions",
    "marker_position",
    "normalize_candidate",
    "normalize_candidates",
    "normalize_diagnostics",
    "read_locked",
    "sort_diagnostics",
)
