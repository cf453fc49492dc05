# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace configuration models and the ``srcupdate.toml`` loader."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ConfigError

CONFIG_FILENAME: Final[str] = "srcupdate.toml"
WORKSPACE_ENV: Final[str] = "SRCUPDATE_WORKSPACE"
PROJECT_TABLE_KEY: Final[str] = "project"
CHECKERS_TABLE_KEY: Final[str] = "checkers"
MANAGED_NATURES: Final[frozenset[str]] = frozenset({"c", "cpp"})


class CheckerConfig(BaseModel):
    """Settings for the built-in static checkers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    task_tags: tuple[str, ...] = ("TODO", "FIXME", "XXX")
    assignment_in_condition: bool = True
    cpplint: bool = False
    cpplint_executable: str = "cpplint"
    cpplint_error_confidence: int = Field(default=5, ge=1, le=5)


class ProjectConfig(BaseModel):
    """Single ``[[project]]`` entry of a workspace."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    root: Path = Path(".")
    nature: str = "c"
    include_dirs: tuple[Path, ...] = ()
    build_command: tuple[str, ...] = ()

    @property
    def managed(self) -> bool:
        """Return whether the project is a C or C++ project."""

        return self.nature.lower() in MANAGED_NATURES


class WorkspaceConfig(BaseModel):
    """Validated contents of a workspace's ``srcupdate.toml``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path
    projects: tuple[ProjectConfig, ...] = ()
    checkers: CheckerConfig = Field(default_factory=CheckerConfig)

    @model_validator(mode="after")
    def _check_unique_names(self) -> WorkspaceConfig:
        seen: set[str] = set()
        for project in self.projects:
            if project.name in seen:
                raise ValueError(f"duplicate project name '{project.name}'")
            seen.add(project.name)
        return self

    def project_root(self, project: ProjectConfig) -> Path:
        """Return the absolute root directory of ``project``."""

        root = project.root.expanduser()
        return (root if root.is_absolute() else self.root / root).resolve()

    def include_dirs(self, project: ProjectConfig) -> tuple[Path, ...]:
        """Return ``project``'s include directories as absolute paths."""

        base = self.project_root(project)
        return tuple(
            (entry if entry.is_absolute() else base / entry).resolve() for entry in project.include_dirs
        )


def default_workspace_root(env: Mapping[str, str] | None = None) -> Path:
    """Return the workspace root named by ``SRCUPDATE_WORKSPACE`` or the cwd."""

    source = os.environ if env is None else env
    value = source.get(WORKSPACE_ENV)
    return Path(value).expanduser() if value else Path.cwd()


def load_workspace_config(root: Path) -> WorkspaceConfig:
    """Load ``srcupdate.toml`` from the workspace at ``root``.

    Args:
        root: Workspace directory.

    Returns:
        WorkspaceConfig: Validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """

    resolved = root.expanduser().resolve()
    path = resolved / CONFIG_FILENAME
    if not path.is_file():
        raise ConfigError(f"{path} does not exist")
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"unable to read {path}: {exc}") from exc
    return parse_workspace_config(data, root=resolved)


def parse_workspace_config(data: Mapping[str, Any], *, root: Path) -> WorkspaceConfig:
    """Validate a decoded ``srcupdate.toml`` document.

    Raises:
        ConfigError: If the document does not match the schema.
    """

    unknown = set(data) - {PROJECT_TABLE_KEY, CHECKERS_TABLE_KEY}
    if unknown:
        raise ConfigError(f"unknown configuration section(s): {', '.join(sorted(unknown))}")
    payload = {
        "root": root,
        "projects": data.get(PROJECT_TABLE_KEY, []),
        "checkers": data.get(CHECKERS_TABLE_KEY, {}),
    }
    try:
        return WorkspaceConfig.model_validate(payload)
    except PydanticValidationError as exc:
        raise ConfigError(f"invalid workspace configuration: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "CheckerConfig",
    "ProjectConfig",
    "WORKSPACE_ENV",
    "WorkspaceConfig",
    "default_workspace_root",
    "load_workspace_config",
    "parse_workspace_config",
]
