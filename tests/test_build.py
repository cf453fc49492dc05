# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the background incremental builder."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from srcupdate.core.errors import BuildSchedulingError
from srcupdate.workspace.build import BackgroundBuilder
from srcupdate.workspace.projects import WorkspaceProject
from tests.helpers.fakes import FakeProject


def _project(tmp_path: Path, *command: str) -> WorkspaceProject:
    return WorkspaceProject(name="demo", root=tmp_path, build_command=command)


def test_build_runs_in_background(tmp_path: Path) -> None:
    builder = BackgroundBuilder()
    marker = tmp_path / "built.txt"
    project = _project(tmp_path, sys.executable, "-c", "open('built.txt', 'w').write('ok')")

    future = builder.schedule_incremental(project)
    assert future is not None

    assert future.result(timeout=30) == 0
    assert marker.read_text(encoding="utf-8") == "ok"
    builder.shutdown()


def test_failing_build_reports_status(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    builder = BackgroundBuilder()
    project = _project(tmp_path, sys.executable, "-c", "raise SystemExit(3)")

    with caplog.at_level(logging.WARNING, logger="srcupdate"):
        future = builder.schedule_incremental(project)
        assert future is not None
        assert future.result(timeout=30) == 3
    builder.shutdown()

    assert "exited with status 3" in caplog.text


def test_missing_executable_reports_failure_status(tmp_path: Path) -> None:
    builder = BackgroundBuilder()
    future = builder.schedule_incremental(_project(tmp_path, "srcupdate-no-such-build-tool"))

    assert future is not None
    assert future.result(timeout=30) == 127
    builder.shutdown()


def test_projects_without_build_command_are_skipped(tmp_path: Path) -> None:
    builder = BackgroundBuilder()

    assert builder.schedule_incremental(_project(tmp_path)) is None
    assert builder.schedule_incremental(FakeProject("demo", tmp_path)) is None
    builder.shutdown()


def test_shutdown_builder_refuses_new_builds(tmp_path: Path) -> None:
    builder = BackgroundBuilder()
    builder.shutdown()

    with pytest.raises(BuildSchedulingError):
        builder.schedule_incremental(_project(tmp_path, sys.executable, "-c", "pass"))
