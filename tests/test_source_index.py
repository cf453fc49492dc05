# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the in-memory semantic index."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from textwrap import dedent

import pytest

from srcupdate.core.errors import IndexAccessError
from srcupdate.diagnostics import PROBLEM_AST_STYLE
from srcupdate.interfaces.index import AstStyle, UpdateMode
from srcupdate.workspace.index import ReadWriteLock, SourceIndex
from srcupdate.workspace.projects import FileResource, SourceUnit, WorkspaceProject
from tests.helpers.fakes import FakeIndex


def _unit(root: Path, name: str, text: str, *, include_dirs: tuple[Path, ...] = ()) -> SourceUnit:
    path = (root / name).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text), encoding="utf-8")
    project = WorkspaceProject(name="demo", root=root.resolve(), include_dirs=include_dirs)
    return SourceUnit(project=project, resource=FileResource(path))


def test_read_write_lock_excludes_writers_while_reading() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()
    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            entered.set()

    thread = threading.Thread(target=writer)
    thread.start()
    assert not entered.wait(timeout=0.1)
    assert lock.readers == 1

    lock.release_read()
    thread.join(timeout=5)
    assert entered.is_set()


def test_read_lock_over_release_raises() -> None:
    with pytest.raises(RuntimeError):
        ReadWriteLock().release_read()


def test_refresh_indexes_file_and_quoted_includes(tmp_path: Path) -> None:
    (tmp_path / "include").mkdir()
    (tmp_path / "include" / "util.h").write_text("int util(void);\n", encoding="utf-8")
    unit = _unit(
        tmp_path,
        "main.c",
        """\
        #include "util.h"
        #include <stdio.h>
        #include "missing.h"
        int main(void) { return util(); }
        """,
        include_dirs=((tmp_path / "include").resolve(),),
    )
    index = SourceIndex()

    index.refresh(unit)

    header = (tmp_path / "include" / "util.h").resolve()
    assert set(index.entries) == {unit.resource.path, header}
    assert index.entries[unit.resource.path].includes == (header,)


def test_check_timestamps_keeps_unchanged_entries(tmp_path: Path) -> None:
    unit = _unit(tmp_path, "main.c", "int a;\n")
    index = SourceIndex()
    index.refresh(unit)
    original = index.entries[unit.resource.path]

    index.refresh(unit, UpdateMode.CHECK_TIMESTAMPS)
    assert index.entries[unit.resource.path] is original

    unit.resource.path.write_text("int b;\n", encoding="utf-8")
    os.utime(unit.resource.path, ns=(original.mtime_ns, original.mtime_ns + 1_000_000))
    index.refresh(unit, UpdateMode.CHECK_TIMESTAMPS)
    assert index.entries[unit.resource.path].content == b"int b;\n"


def test_refresh_of_missing_file_raises(tmp_path: Path) -> None:
    unit = _unit(tmp_path, "main.c", "")
    unit.resource.path.unlink()

    with pytest.raises(IndexAccessError):
        SourceIndex().refresh(unit)


def test_closed_index_refuses_read_locks(tmp_path: Path) -> None:
    index = SourceIndex()
    view = index.get_index([WorkspaceProject(name="demo", root=tmp_path)])
    index.close()

    with pytest.raises(IndexAccessError):
        view.acquire_read_lock()


def test_view_only_covers_its_projects(tmp_path: Path) -> None:
    inside = _unit(tmp_path / "a", "main.c", "int a;\n")
    outside = _unit(tmp_path / "b", "main.c", "int b;\n")
    index = SourceIndex()
    index.refresh(inside)
    index.refresh(outside)

    view = index.get_index([inside.project])

    assert view.is_indexed(inside.resource.path)
    assert not view.is_indexed(outside.resource.path)


def test_build_syntax_tree_requires_source_index_view(tmp_path: Path) -> None:
    unit = _unit(tmp_path, "main.c", "int a;\n")

    with pytest.raises(TypeError):
        SourceIndex().build_syntax_tree(unit, FakeIndex([]), PROBLEM_AST_STYLE)  # type: ignore[arg-type]


def test_snapshot_style_requires_indexed_file(tmp_path: Path) -> None:
    unit = _unit(tmp_path, "main.c", "int a;\n")
    index = SourceIndex()

    with pytest.raises(IndexAccessError, match="has not been indexed"):
        index.build_syntax_tree(unit, index.get_index([unit.project]), AstStyle.NONE)


def test_preprocessor_problems(tmp_path: Path) -> None:
    pytest.importorskip("tree_sitter_c")
    (tmp_path / "known.h").write_text("\n", encoding="utf-8")
    text = """\
    #include "known.h"
    #include "absent.h"
    #include <system.h>
    #error stop here
    #warning be careful
    #ifdef DEBUG
    #error only in debug
    #endif
    int main(void) { return 0; }
    """
    unit = _unit(tmp_path, "main.c", text)
    index = SourceIndex()
    index.refresh(unit)
    view = index.get_index([unit.project])

    view.acquire_read_lock()
    try:
        tree = index.build_syntax_tree(unit, view, PROBLEM_AST_STYLE)
    finally:
        view.release_read_lock()

    source = dedent(text)
    assert [(problem.message, problem.is_warning) for problem in tree.preprocessor_problems] == [
        ("Unresolved inclusion: absent.h", True),
        ("#error encountered with text: stop here", False),
        ("#warning encountered with text: be careful", True),
    ]
    assert tree.preprocessor_problems[0].start_offset == source.index('#include "absent.h"')
    assert tree.semantic_problems == ()


def test_skip_indexed_headers_trusts_index(tmp_path: Path) -> None:
    pytest.importorskip("tree_sitter_c")
    header = tmp_path / "gen.h"
    header.write_text("\n", encoding="utf-8")
    unit = _unit(tmp_path, "main.c", '#include "gen.h"\n')
    index = SourceIndex()
    index.refresh(unit)
    header.unlink()
    view = index.get_index([unit.project])

    trusted = index.build_syntax_tree(unit, view, PROBLEM_AST_STYLE)
    checked = index.build_syntax_tree(unit, view, AstStyle.USE_SOURCE_CONTEXT)

    assert trusted.preprocessor_problems == ()
    assert [problem.message for problem in checked.preprocessor_problems] == ["Unresolved inclusion: gen.h"]


def test_syntax_problems(tmp_path: Path) -> None:
    pytest.importorskip("tree_sitter_c")
    unit = _unit(tmp_path, "main.c", "int main(void) {\n  return 0\n}\n")
    index = SourceIndex()
    index.refresh(unit)

    tree = index.build_syntax_tree(unit, index.get_index([unit.project]), PROBLEM_AST_STYLE)

    assert tree.semantic_problems
    assert all(problem.message in {"Syntax error", "Missing ';'"} for problem in tree.semantic_problems)
    assert all(not problem.is_warning for problem in tree.semantic_problems)
