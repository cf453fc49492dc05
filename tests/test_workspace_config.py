# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for workspace configuration loading."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from srcupdate.core.errors import ConfigError
from srcupdate.workspace.config import (
    CONFIG_FILENAME,
    WORKSPACE_ENV,
    CheckerConfig,
    default_workspace_root,
    load_workspace_config,
    parse_workspace_config,
)


def _write_config(root: Path, body: str) -> None:
    (root / CONFIG_FILENAME).write_text(dedent(body), encoding="utf-8")


def test_load_workspace_config(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
        [[project]]
        name = "engine"
        root = "engine"
        nature = "cpp"
        include_dirs = ["include"]
        build_command = ["make", "-C", "engine"]

        [[project]]
        name = "docs"
        nature = "python"

        [checkers]
        task_tags = ["TODO", "HACK"]
        cpplint = true
        cpplint_error_confidence = 3
        """,
    )

    config = load_workspace_config(tmp_path)

    engine, docs = config.projects
    assert config.root == tmp_path.resolve()
    assert engine.managed and not docs.managed
    assert config.project_root(engine) == (tmp_path / "engine").resolve()
    assert config.include_dirs(engine) == ((tmp_path / "engine" / "include").resolve(),)
    assert engine.build_command == ("make", "-C", "engine")
    assert config.checkers.task_tags == ("TODO", "HACK")
    assert config.checkers.cpplint is True
    assert config.checkers.cpplint_error_confidence == 3
    assert config.checkers.assignment_in_condition is True


def test_defaults_when_sections_are_missing(tmp_path: Path) -> None:
    config = parse_workspace_config({}, root=tmp_path)

    assert config.projects == ()
    assert config.checkers == CheckerConfig()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_workspace_config(tmp_path)


def test_invalid_toml_raises(tmp_path: Path) -> None:
    _write_config(tmp_path, "[[project]\nname = ")

    with pytest.raises(ConfigError, match="unable to read"):
        load_workspace_config(tmp_path)


@pytest.mark.parametrize(
    "data",
    [
        {"tools": {}},
        {"project": [{"name": "a"}, {"name": "a"}]},
        {"project": [{"name": "a", "unknown": 1}]},
        {"checkers": {"cpplint_error_confidence": 9}},
    ],
)
def test_invalid_documents_raise(tmp_path: Path, data: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        parse_workspace_config(data, root=tmp_path)


def test_default_workspace_root_prefers_environment(tmp_path: Path) -> None:
    assert default_workspace_root({WORKSPACE_ENV: str(tmp_path)}) == tmp_path
    assert default_workspace_root({}) == Path.cwd()
