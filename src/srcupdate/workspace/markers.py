# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory marker store keyed by resource path."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from threading import Lock

from ..core.models import MarkerKind, RawMarker
from ..interfaces.checkers import MarkerDepth, MarkerStore
from ..interfaces.workspace import Resource


class InMemoryMarkerStore(MarkerStore):
    """Keep markers per resource, grouped by the checker that produced them."""

    def __init__(self) -> None:
        self._markers: dict[Path, dict[str, list[RawMarker]]] = {}
        self._lock = Lock()

    def find_markers(
        self,
        resource: Resource,
        kind: MarkerKind | None = None,
        *,
        include_subtypes: bool = True,
        depth: MarkerDepth = MarkerDepth.ZERO,
    ) -> list[RawMarker]:
        with self._lock:
            paths = [path for path in self._markers if _within_depth(path, resource.path, depth)]
            found: list[RawMarker] = []
            for path in paths:
                for owned in self._markers[path].values():
                    found.extend(marker for marker in owned if _matches(marker, kind, include_subtypes))
        return found

    def replace_markers(self, resource: Resource, owner: str, markers: Sequence[RawMarker]) -> None:
        with self._lock:
            owned = self._markers.setdefault(resource.path, {})
            owned[owner] = [marker.model_copy(update={"owner": owner}) for marker in markers]

    def clear(self, resource: Resource) -> None:
        """Remove every marker attached directly to ``resource``."""

        with self._lock:
            self._markers.pop(resource.path, None)


def _within_depth(candidate: Path, base: Path, depth: MarkerDepth) -> bool:
    if candidate == base:
        return True
    if depth is MarkerDepth.ZERO:
        return False
    if depth is MarkerDepth.ONE:
        return candidate.parent == base
    return base in candidate.parents


def _matches(marker: RawMarker, kind: MarkerKind | None, include_subtypes: bool) -> bool:
    if kind is None:
        return True
    if include_subtypes:
        return marker.is_subtype_of(kind)
    return marker.kind is kind


__all__ = ["InMemoryMarkerStore"]
