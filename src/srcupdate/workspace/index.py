# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory semantic index with Tree-sitter backed syntax tree construction."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tree_sitter import Node

from ..core.errors import IndexAccessError
from ..core.models import RawProblem
from ..interfaces.index import AstStyle, IndexService, SemanticIndex, SyntaxTree, UpdateMode
from ..interfaces.workspace import Project, TranslationUnit
from .projects import WorkspaceProject
from .treesitter import iter_nodes, node_text, parse_source

LOGGER = logging.getLogger(__name__)

_QUOTED_INCLUDE: Final[re.Pattern[str]] = re.compile(r'^[ \t]*#[ \t]*include[ \t]*"([^"\n]+)"', re.MULTILINE)
_INCLUDE_NODE: Final[str] = "preproc_include"
_CALL_NODE: Final[str] = "preproc_call"
_STRING_LITERAL: Final[str] = "string_literal"
_ERROR_NODE: Final[str] = "ERROR"
_UNRESOLVED_INCLUSION: Final[str] = "Unresolved inclusion: {header}"
_DIRECTIVE_MESSAGE: Final[str] = "{directive} encountered with text: {text}"
_SYNTAX_ERROR: Final[str] = "Syntax error"
_MISSING_TOKEN: Final[str] = "Missing '{token}'"
_WARNING_DIRECTIVES: Final[frozenset[str]] = frozenset({"#warning"})
_ERROR_DIRECTIVES: Final[frozenset[str]] = frozenset({"#error"})
_CONDITIONAL_NODES: Final[frozenset[str]] = frozenset(
    {"preproc_if", "preproc_ifdef", "preproc_elif", "preproc_elifdef", "preproc_else"},
)


class ReadWriteLock:
    """Reader/writer lock allowing many readers or a single writer."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._readers = 0
        self._writer = False

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers == 0:
                raise RuntimeError("read lock released more times than it was acquired")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    @property
    def readers(self) -> int:
        """Return the number of read locks currently held."""

        with self._condition:
            return self._readers

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive write lock for the duration of the block."""

        with self._condition:
            while self._writer or self._readers:
                self._condition.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._condition:
                self._writer = False
                self._condition.notify_all()


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """Snapshot of an indexed file.

    Attributes:
        path: Absolute path of the file.
        content: File bytes captured by the last refresh.
        mtime_ns: Modification time captured by the last refresh.
        includes: Headers the file's quoted includes resolved to.
    """

    path: Path
    content: bytes
    mtime_ns: int
    includes: tuple[Path, ...] = ()


class IndexView(SemanticIndex):
    """Read-lockable view of a :class:`SourceIndex` restricted to some projects."""

    def __init__(self, index: SourceIndex, projects: Sequence[Project]) -> None:
        self._index = index
        self._roots = tuple(project.root for project in projects)

    def acquire_read_lock(self) -> None:
        if self._index.closed:
            raise IndexAccessError("the semantic index has been closed")
        self._index.lock.acquire_read()

    def release_read_lock(self) -> None:
        self._index.lock.release_read()

    def entry(self, path: Path) -> IndexEntry | None:
        """Return the entry for ``path`` when it belongs to a covered project."""

        entry = self._index.entries.get(path)
        if entry is None or not self._covers(path):
            return None
        return entry

    def is_indexed(self, path: Path) -> bool:
        """Return whether ``path`` is known to the view."""

        return self.entry(path) is not None

    def _covers(self, path: Path) -> bool:
        return any(root == path or root in path.parents for root in self._roots)


class SourceIndex(IndexService):
    """Index of project files and the headers they include."""

    def __init__(self) -> None:
        self.lock = ReadWriteLock()
        self.entries: dict[Path, IndexEntry] = {}
        self.closed = False

    def close(self) -> None:
        """Refuse further read locks."""

        self.closed = True

    def refresh(self, unit: TranslationUnit, mode: UpdateMode = UpdateMode.ALL) -> None:
        """Re-index ``unit`` and the headers it includes.

        Raises:
            IndexAccessError: If the file cannot be read.
        """

        include_dirs = unit.project.include_dirs if isinstance(unit.project, WorkspaceProject) else ()
        pending = [unit.resource.path]
        visited: set[Path] = set()
        with self.lock.write_locked():
            while pending:
                path = pending.pop()
                if path in visited:
                    continue
                visited.add(path)
                entry = self._refresh_file(path, mode, include_dirs)
                pending.extend(entry.includes)
        LOGGER.debug("indexed %d file(s) for %s", len(visited), unit.location)

    def _refresh_file(self, path: Path, mode: UpdateMode, include_dirs: Sequence[Path]) -> IndexEntry:
        try:
            mtime_ns = path.stat().st_mtime_ns
            current = self.entries.get(path)
            if mode is UpdateMode.CHECK_TIMESTAMPS and current is not None and current.mtime_ns == mtime_ns:
                return current
            content = path.read_bytes()
        except OSError as exc:
            raise IndexAccessError(f"unable to index {path}: {exc}") from exc
        text = content.decode("utf-8", errors="replace")
        includes = tuple(
            resolved
            for header in _QUOTED_INCLUDE.findall(text)
            if (resolved := _search_header(header, path.parent, include_dirs)) is not None
        )
        entry = IndexEntry(path=path, content=content, mtime_ns=mtime_ns, includes=includes)
        self.entries[path] = entry
        return entry

    def get_index(self, projects: Sequence[Project]) -> IndexView:
        return IndexView(self, projects)

    def build_syntax_tree(self, unit: TranslationUnit, index: SemanticIndex, style: AstStyle) -> SyntaxTree:
        """Parse ``unit`` and extract its preprocessor and syntax problems.

        Raises:
            IndexAccessError: If the source cannot be read or parsed.
        """

        if not isinstance(index, IndexView):
            raise TypeError(f"unsupported index type: {type(index).__name__}")
        path = unit.resource.path
        content = self._source_for(path, index, style)
        try:
            tree = parse_source(content, path)
        except (RuntimeError, ValueError) as exc:
            raise IndexAccessError(f"unable to parse {path}: {exc}") from exc

        include_dirs = unit.project.include_dirs if isinstance(unit.project, WorkspaceProject) else ()
        resolver = _HeaderResolver(path.parent, include_dirs, index if style & AstStyle.SKIP_INDEXED_HEADERS else None)
        return SyntaxTree(
            preprocessor_problems=tuple(_preprocessor_problems(tree.root_node, content, resolver)),
            semantic_problems=tuple(_syntax_problems(tree.root_node, content)),
        )

    @staticmethod
    def _source_for(path: Path, index: IndexView, style: AstStyle) -> bytes:
        if style & AstStyle.USE_SOURCE_CONTEXT:
            try:
                return path.read_bytes()
            except OSError as exc:
                raise IndexAccessError(f"unable to read {path}: {exc}") from exc
        entry = index.entry(path)
        if entry is None:
            raise IndexAccessError(f"{path} has not been indexed")
        return entry.content


@dataclass(frozen=True, slots=True)
class _HeaderResolver:
    directory: Path
    include_dirs: Sequence[Path]
    index: IndexView | None

    def resolves(self, header: str) -> bool:
        if self.index is not None:
            for candidate in _header_candidates(header, self.directory, self.include_dirs):
                if self.index.is_indexed(candidate):
                    return True
        return _search_header(header, self.directory, self.include_dirs) is not None


def _header_candidates(header: str, directory: Path, include_dirs: Sequence[Path]) -> Iterator[Path]:
    for base in (directory, *include_dirs):
        yield (base / header).resolve()


def _search_header(header: str, directory: Path, include_dirs: Sequence[Path]) -> Path | None:
    for candidate in _header_candidates(header, directory, include_dirs):
        if candidate.is_file():
            return candidate
    return None


def _preprocessor_problems(root: Node, content: bytes, resolver: _HeaderResolver) -> Iterator[RawProblem]:
    for node in iter_nodes(root):
        if node.type == _INCLUDE_NODE:
            target = node.child_by_field_name("path")
            if target is None or target.type != _STRING_LITERAL:
                continue
            header = node_text(content, target).strip('"')
            if not resolver.resolves(header):
                yield RawProblem(
                    message=_UNRESOLVED_INCLUSION.format(header=header),
                    start_offset=node.start_byte,
                    is_warning=True,
                )
        elif node.type == _CALL_NODE:
            directive_node = node.child_by_field_name("directive")
            if directive_node is None:
                continue
            directive = node_text(content, directive_node).strip()
            if directive not in _ERROR_DIRECTIVES and directive not in _WARNING_DIRECTIVES:
                continue
            # Conditions are not evaluated, so only unconditional directives are reported.
            if _is_conditional(node):
                continue
            argument = node.child_by_field_name("argument")
            text = node_text(content, argument).strip() if argument is not None else ""
            yield RawProblem(
                message=_DIRECTIVE_MESSAGE.format(directive=directive, text=text),
                start_offset=node.start_byte,
                is_warning=directive in _WARNING_DIRECTIVES,
            )


def _is_conditional(node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type in _CONDITIONAL_NODES:
            return True
        parent = parent.parent
    return False


def _syntax_problems(root: Node, content: bytes) -> Iterator[RawProblem]:
    if not root.has_error:
        return
    for node in iter_nodes(root, skip_errors=True):
        if node.type == _ERROR_NODE:
            yield RawProblem(message=_SYNTAX_ERROR, start_offset=node.start_byte)
        elif node.is_missing:
            token = node.type or node_text(content, node)
            yield RawProblem(message=_MISSING_TOKEN.format(token=token), start_offset=node.start_byte)


__all__ = ["IndexEntry", "IndexView", "ReadWriteLock", "SourceIndex"]
