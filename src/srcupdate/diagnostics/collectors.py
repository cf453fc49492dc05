# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collect raw problems and markers from the index and the static checkers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final

from ..core.models import RawMarker, RawProblem
from ..interfaces.checkers import CheckerLaunchMode, MarkerDepth, MarkerStore, StaticCheckerService
from ..interfaces.index import AstStyle, IndexService, SemanticIndex
from ..interfaces.workspace import ProjectRegistry, Resource, TranslationUnit

PROBLEM_AST_STYLE: Final[AstStyle] = AstStyle.USE_SOURCE_CONTEXT | AstStyle.SKIP_INDEXED_HEADERS


@contextmanager
def read_locked(index: SemanticIndex) -> Iterator[SemanticIndex]:
    """Hold a read lock on ``index`` for the duration of the block.

    Raises:
        IndexAccessError: If the lock cannot be acquired.
    """

    index.acquire_read_lock()
    try:
        yield index
    finally:
        index.release_read_lock()


@dataclass(slots=True)
class ProblemCollector:
    """Extract parser and semantic problems for a translation unit.

    Attributes:
        index_service: Service building syntax trees from the index.
        registry: Registry listing every project covered by the aggregate index.
        style: Flags used when building the syntax tree.
    """

    index_service: IndexService
    registry: ProjectRegistry
    style: AstStyle = PROBLEM_AST_STYLE

    def collect(self, unit: TranslationUnit) -> list[RawProblem]:
        """Return preprocessor problems followed by semantic problems for ``unit``.

        Raises:
            IndexAccessError: If the index cannot be locked or the tree cannot be built.
        """

        index = self.index_service.get_index(self.registry.projects())
        with read_locked(index):
            tree = self.index_service.build_syntax_tree(unit, index, self.style)
        return [*tree.preprocessor_problems, *tree.semantic_problems]


@dataclass(slots=True)
class MarkerCollector:
    """Run the static checkers on demand and read back the resource's markers."""

    checkers: StaticCheckerService
    markers: MarkerStore

    def collect(self, resource: Resource) -> list[RawMarker]:
        """Return markers attached to ``resource`` after an on-demand checker run.

        Raises:
            CheckerRunError: If the checker run fails.
        """

        self.checkers.process_resource(resource, CheckerLaunchMode.ON_DEMAND)
        return self.markers.find_markers(resource, None, include_subtypes=True, depth=MarkerDepth.ZERO)


__all__ = ["MarkerCollector", "PROBLEM_AST_STYLE", "ProblemCollector", "read_locked"]
