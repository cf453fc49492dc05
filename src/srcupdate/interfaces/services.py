# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols for position resolution and rebuild scheduling."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from abc import abstractmethod
from concurrent.futures import Future
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..core.models import Position
from .workspace import Project


@runtime_checkable
class PositionResolver(Protocol):
    """Map byte offsets within a single file to positions."""

    @abstractmethod
    def resolve(self, offset: int) -> Position:
        """Return the one-based position of byte ``offset``."""
        raise NotImplementedError


@runtime_checkable
class PositionResolverFactory(Protocol):
    """Provide position resolvers per file."""

    @abstractmethod
    def for_file(self, path: Path | str) -> PositionResolver:
        """Return a resolver for ``path``."""
        raise NotImplementedError


@runtime_checkable
class BuildService(Protocol):
    """Schedule project builds."""

    @abstractmethod
    def schedule_incremental(self, project: Project) -> Future[int] | None:
        """Schedule an incremental build of ``project`` without waiting for it.

        Args:
            project: Project to rebuild.

        Returns:
            Future[int] | None: Handle resolving to the build's exit status, or
            ``None`` when the project has nothing to build.

        Raises:
            BuildSchedulingError: If the build cannot be scheduled.
        """
        raise NotImplementedError


__all__ = ["BuildService", "PositionResolver", "PositionResolverFactory"]
