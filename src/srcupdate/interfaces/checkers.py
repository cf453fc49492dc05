# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing static checkers and the marker store they write to."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from enum import Enum, IntEnum
from typing import Protocol, runtime_checkable

from ..core.models import MarkerKind, RawMarker
from .workspace import Resource


class CheckerLaunchMode(str, Enum):
    """Events that may trigger a checker run."""

    ON_DEMAND = "on-demand"
    ON_OPEN = "on-open"
    ON_SAVE = "on-save"


class MarkerDepth(IntEnum):
    """How far below a resource marker lookups descend."""

    ZERO = 0
    ONE = 1
    INFINITE = 2


@runtime_checkable
class MarkerStore(Protocol):
    """Persist markers per resource."""

    @abstractmethod
    def find_markers(
        self,
        resource: Resource,
        kind: MarkerKind | None = None,
        *,
        include_subtypes: bool = True,
        depth: MarkerDepth = MarkerDepth.ZERO,
    ) -> list[RawMarker]:
        """Return markers attached to ``resource``.

        Args:
            resource: Resource whose markers are requested.
            kind: Marker kind to match, ``None`` for all kinds.
            include_subtypes: Whether subtypes of ``kind`` also match.
            depth: Whether markers of resources below ``resource`` are included.

        Returns:
            list[RawMarker]: Matching markers in store order.
        """
        raise NotImplementedError

    @abstractmethod
    def replace_markers(self, resource: Resource, owner: str, markers: Sequence[RawMarker]) -> None:
        """Replace every marker ``owner`` previously attached to ``resource``."""
        raise NotImplementedError


@runtime_checkable
class Checker(Protocol):
    """Single static check producing markers for a resource."""

    @property
    @abstractmethod
    def checker_id(self) -> str:
        """Return the identifier recorded as the owner of produced markers."""
        raise NotImplementedError

    @abstractmethod
    def enabled_for(self, mode: CheckerLaunchMode) -> bool:
        """Return whether the checker runs for launches of ``mode``."""
        raise NotImplementedError

    @abstractmethod
    def check(self, resource: Resource) -> list[RawMarker]:
        """Return markers describing issues found in ``resource``.

        Raises:
            CheckerRunError: If the check cannot be completed.
        """
        raise NotImplementedError


@runtime_checkable
class StaticCheckerService(Protocol):
    """Run static checkers against resources."""

    @abstractmethod
    def process_resource(self, resource: Resource, mode: CheckerLaunchMode) -> None:
        """Run every checker enabled for ``mode`` and store the resulting markers.

        Raises:
            CheckerRunError: If a checker fails.
        """
        raise NotImplementedError


__all__ = ["Checker", "CheckerLaunchMode", "MarkerDepth", "MarkerStore", "StaticCheckerService"]
