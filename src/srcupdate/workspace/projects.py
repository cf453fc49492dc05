# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Projects, resources, and translation units backed by a workspace directory."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import ResourceNotFoundError
from ..filesystem.paths import resolve_within, to_location
from ..interfaces.workspace import LanguageModel, Project, ProjectRegistry
from .config import WorkspaceConfig


@dataclass(frozen=True, slots=True)
class WorkspaceProject:
    """C or C++ project declared in ``srcupdate.toml``."""

    name: str
    root: Path
    include_dirs: tuple[Path, ...] = ()
    build_command: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileResource:
    """File inside a project."""

    path: Path


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """Translation unit for a single source file."""

    project: WorkspaceProject
    resource: FileResource
    location: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "location", to_location(self.resource.path))


class WorkspaceRegistry(ProjectRegistry):
    """Resolve the managed projects declared by a workspace configuration."""

    def __init__(self, config: WorkspaceConfig) -> None:
        self._projects: dict[str, WorkspaceProject] = {
            entry.name: WorkspaceProject(
                name=entry.name,
                root=config.project_root(entry),
                include_dirs=config.include_dirs(entry),
                build_command=entry.build_command,
            )
            for entry in config.projects
            if entry.managed
        }

    def resolve(self, name: str) -> WorkspaceProject | None:
        return self._projects.get(name)

    def projects(self) -> Sequence[WorkspaceProject]:
        return tuple(self._projects.values())


class WorkspaceLanguageModel(LanguageModel):
    """Map file paths to :class:`SourceUnit` instances."""

    def find_unit(self, project: Project, file_path: str) -> SourceUnit:
        """Return the unit for ``file_path``.

        Raises:
            ResourceNotFoundError: If the path leaves the project or is not a file.
        """

        if not isinstance(project, WorkspaceProject):
            raise TypeError(f"unsupported project type: {type(project).__name__}")
        path = resolve_within(file_path, project.root)
        if path is None:
            raise ResourceNotFoundError(f"{file_path} is outside project '{project.name}'")
        if not path.is_file():
            raise ResourceNotFoundError(f"{path} is not a file")
        return SourceUnit(project=project, resource=FileResource(path))


__all__ = ["FileResource", "SourceUnit", "WorkspaceLanguageModel", "WorkspaceProject", "WorkspaceRegistry"]
