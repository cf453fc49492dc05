# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing projects, resources, and translation units."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Project(Protocol):
    """Managed C or C++ project."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the project name used to resolve requests."""
        raise NotImplementedError

    @property
    @abstractmethod
    def root(self) -> Path:
        """Return the absolute project root directory."""
        raise NotImplementedError


@runtime_checkable
class Resource(Protocol):
    """File-backed resource that markers attach to."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Return the absolute path of the resource."""
        raise NotImplementedError


@runtime_checkable
class TranslationUnit(Protocol):
    """Source file of a project as seen by the language model."""

    @property
    @abstractmethod
    def project(self) -> Project:
        """Return the project owning the unit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def resource(self) -> Resource:
        """Return the resource backing the unit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def location(self) -> str:
        """Return the unit's absolute location using forward slashes."""
        raise NotImplementedError


@runtime_checkable
class ProjectRegistry(Protocol):
    """Resolve project names to managed C/C++ projects."""

    @abstractmethod
    def resolve(self, name: str) -> Project | None:
        """Return the project called ``name``.

        Args:
            name: Project name supplied with the request.

        Returns:
            Project | None: ``None`` when no managed C/C++ project has that name.
        """
        raise NotImplementedError

    @abstractmethod
    def projects(self) -> Sequence[Project]:
        """Return every managed project known to the registry."""
        raise NotImplementedError


@runtime_checkable
class LanguageModel(Protocol):
    """Locate translation units inside projects."""

    @abstractmethod
    def find_unit(self, project: Project, file_path: str) -> TranslationUnit:
        """Return the translation unit for ``file_path`` inside ``project``.

        Args:
            project: Project owning the file.
            file_path: Path relative to the project root, or absolute.

        Returns:
            TranslationUnit: Unit backed by the file.
        """
        raise NotImplementedError


__all__ = ["LanguageModel", "Project", "ProjectRegistry", "Resource", "TranslationUnit"]
