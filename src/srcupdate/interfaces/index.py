# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the semantic index and syntax tree construction."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Protocol, runtime_checkable

from ..core.models import RawProblem
from .workspace import Project, TranslationUnit


class UpdateMode(str, Enum):
    """How an index refresh decides whether a file needs re-indexing."""

    ALL = "all"
    CHECK_TIMESTAMPS = "check-timestamps"


class AstStyle(IntFlag):
    """Options controlling how a syntax tree is built from an index."""

    NONE = 0
    USE_SOURCE_CONTEXT = 1
    SKIP_INDEXED_HEADERS = 2


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """Problems extracted while building a translation unit's syntax tree.

    Attributes:
        preprocessor_problems: Problems raised while preprocessing, in source order.
        semantic_problems: Problems raised by parsing and name resolution, in source order.
    """

    preprocessor_problems: tuple[RawProblem, ...] = ()
    semantic_problems: tuple[RawProblem, ...] = ()


@runtime_checkable
class SemanticIndex(Protocol):
    """Shared index that must be read-locked while syntax trees are built."""

    @abstractmethod
    def acquire_read_lock(self) -> None:
        """Block until a shared read lock is held.

        Raises:
            IndexAccessError: If the index cannot be locked.
        """
        raise NotImplementedError

    @abstractmethod
    def release_read_lock(self) -> None:
        """Release one previously acquired read lock."""
        raise NotImplementedError


@runtime_checkable
class IndexService(Protocol):
    """Maintain the semantic index and build syntax trees from it."""

    @abstractmethod
    def refresh(self, unit: TranslationUnit, mode: UpdateMode = UpdateMode.ALL) -> None:
        """Update the index entry for ``unit``.

        Args:
            unit: Translation unit whose entry should be refreshed.
            mode: Refresh policy.
        """
        raise NotImplementedError

    @abstractmethod
    def get_index(self, projects: Sequence[Project]) -> SemanticIndex:
        """Return the aggregate index covering ``projects``."""
        raise NotImplementedError

    @abstractmethod
    def build_syntax_tree(self, unit: TranslationUnit, index: SemanticIndex, style: AstStyle) -> SyntaxTree:
        """Build the syntax tree for ``unit`` while ``index`` is read-locked.

        Args:
            unit: Translation unit to parse.
            index: Read-locked index providing header information.
            style: Flags controlling the build.

        Returns:
            SyntaxTree: Problems extracted from the tree.

        Raises:
            IndexAccessError: If the tree cannot be built.
        """
        raise NotImplementedError


__all__ = ["AstStyle", "IndexService", "SemanticIndex", "SyntaxTree", "UpdateMode"]
