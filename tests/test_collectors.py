# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the problem and marker collectors."""

from __future__ import annotations

from pathlib import Path

import pytest

from srcupdate.core.errors import IndexAccessError
from srcupdate.core.models import RawMarker, RawProblem
from srcupdate.diagnostics import PROBLEM_AST_STYLE, MarkerCollector, ProblemCollector, read_locked
from srcupdate.interfaces.checkers import CheckerLaunchMode, MarkerDepth
from srcupdate.interfaces.index import AstStyle, SyntaxTree
from tests.helpers.fakes import (
    FakeCheckerService,
    FakeIndex,
    FakeIndexService,
    FakeMarkerStore,
    FakeProject,
    FakeRegistry,
    FakeResource,
    FakeUnit,
)


def _unit(tmp_path: Path) -> FakeUnit:
    project = FakeProject("demo", tmp_path)
    return FakeUnit(project=project, resource=FakeResource(tmp_path / "main.c"))


def test_problems_are_preprocessor_first(tmp_path: Path) -> None:
    events: list[str] = []
    tree = SyntaxTree(
        preprocessor_problems=(RawProblem(message="pp", start_offset=50, is_warning=True),),
        semantic_problems=(RawProblem(message="sem", start_offset=1),),
    )
    unit = _unit(tmp_path)
    service = FakeIndexService(events, tree=tree)

    problems = ProblemCollector(service, FakeRegistry(unit.project)).collect(unit)

    assert [problem.message for problem in problems] == ["pp", "sem"]
    assert events == ["lock", "problems", "unlock"]
    assert service.lock_held_during_build is True
    assert service.index_projects == [(unit.project,)]


def test_problem_collector_uses_source_context_and_skips_indexed_headers(tmp_path: Path) -> None:
    unit = _unit(tmp_path)
    service = FakeIndexService([])

    ProblemCollector(service, FakeRegistry(unit.project)).collect(unit)

    assert service.styles == [PROBLEM_AST_STYLE]
    assert AstStyle.USE_SOURCE_CONTEXT in PROBLEM_AST_STYLE
    assert AstStyle.SKIP_INDEXED_HEADERS in PROBLEM_AST_STYLE


def test_lock_is_released_when_tree_build_fails(tmp_path: Path) -> None:
    unit = _unit(tmp_path)
    service = FakeIndexService([], error=IndexAccessError("broken"))

    with pytest.raises(IndexAccessError):
        ProblemCollector(service, FakeRegistry(unit.project)).collect(unit)

    assert service.index.held == 0
    assert service.index.released == 1


def test_lock_failure_skips_tree_build(tmp_path: Path) -> None:
    events: list[str] = []
    unit = _unit(tmp_path)
    service = FakeIndexService(events, fail_acquire=True)

    with pytest.raises(IndexAccessError):
        ProblemCollector(service, FakeRegistry(unit.project)).collect(unit)

    assert events == []
    assert service.index.released == 0


def test_read_locked_yields_index() -> None:
    index = FakeIndex([])

    with read_locked(index) as locked:
        assert locked is index
        assert index.held == 1
    assert index.held == 0


def test_marker_collector_runs_checkers_before_reading(tmp_path: Path) -> None:
    events: list[str] = []
    resource = FakeResource(tmp_path / "main.c")
    stored = [RawMarker(attributes={"message": "m", "lineNumber": 1})]
    checkers = FakeCheckerService(events)
    store = FakeMarkerStore(events, stored)

    markers = MarkerCollector(checkers, store).collect(resource)

    assert markers == stored
    assert events == ["checkers", "markers"]
    assert checkers.runs == [(resource, CheckerLaunchMode.ON_DEMAND)]
    assert store.queries == [(None, True, MarkerDepth.ZERO)]
