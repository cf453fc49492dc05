# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the core data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from srcupdate.core.errors import ValidationError
from srcupdate.core.models import Diagnostic, MarkerAttribute, MarkerKind, Position, RawMarker, RawProblem
from srcupdate.core.severity import Severity, marker_is_warning


def test_marker_kind_hierarchy() -> None:
    assert MarkerKind.CHECKER_PROBLEM.is_subtype_of(MarkerKind.PROBLEM)
    assert MarkerKind.CHECKER_PROBLEM.is_subtype_of(MarkerKind.MARKER)
    assert MarkerKind.TASK.is_subtype_of(MarkerKind.MARKER)
    assert not MarkerKind.TASK.is_subtype_of(MarkerKind.PROBLEM)
    assert not MarkerKind.PROBLEM.is_subtype_of(MarkerKind.CHECKER_PROBLEM)
    assert MarkerKind.MARKER.parent is None


def test_marker_accessors_ignore_mistyped_values() -> None:
    marker = RawMarker(attributes={"message": 3, "charStart": "10", "lineNumber": 4, "severity": False})

    assert marker.message is None
    assert marker.char_start is None
    assert marker.line_number == 4
    assert marker.severity is None
    assert marker.get_attribute(MarkerAttribute.CHAR_START) == "10"
    assert marker.get_attribute("missing") is None


def test_raw_models_are_frozen() -> None:
    problem = RawProblem(message="x", start_offset=0)

    with pytest.raises(PydanticValidationError):
        problem.message = "y"  # type: ignore[misc]


def test_raw_problem_rejects_negative_offsets() -> None:
    with pytest.raises(PydanticValidationError):
        RawProblem(message="x", start_offset=-1)


def test_diagnostic_positions_are_one_based() -> None:
    with pytest.raises(PydanticValidationError):
        Diagnostic(message="x", file="a.c", line=0, column=1, is_warning=False)
    with pytest.raises(ValueError):
        Position(1, 0)


def test_diagnostic_severity_follows_warning_flag() -> None:
    warning = Diagnostic(message="x", file="a.c", line=2, column=3, is_warning=True)
    error = warning.model_copy(update={"is_warning": False})

    assert warning.severity is Severity.WARNING
    assert error.severity is Severity.ERROR
    assert warning.position == Position(2, 3)


def test_marker_is_warning_only_false_for_error() -> None:
    assert marker_is_warning(None)
    assert marker_is_warning(0)
    assert marker_is_warning(1)
    assert not marker_is_warning(2)


def test_validation_error_carries_context() -> None:
    exc = ValidationError("index locked", project="demo", file="src/a.c")

    assert str(exc) == "demo:src/a.c: index locked"
    assert (exc.project, exc.file) == ("demo", "src/a.c")
