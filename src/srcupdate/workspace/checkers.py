# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Static checkers producing markers for C and C++ sources."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tree_sitter import Node

from ..core.errors import CheckerRunError
from ..core.models import MarkerAttribute, MarkerKind, MarkerValue, RawMarker
from ..core.severity import MarkerSeverity
from ..filesystem.offsets import FileOffsets
from ..interfaces.checkers import Checker, CheckerLaunchMode, MarkerStore, StaticCheckerService
from ..interfaces.workspace import Resource
from ..subprocess_utils import run_command
from .config import CheckerConfig
from .treesitter import iter_nodes, node_text, parse_source

LOGGER = logging.getLogger(__name__)

TASK_CHECKER_ID: Final[str] = "task-tags"
ASSIGNMENT_CHECKER_ID: Final[str] = "assignment-in-condition"
CPPLINT_CHECKER_ID: Final[str] = "cpplint"

_ALL_MODES: Final[frozenset[CheckerLaunchMode]] = frozenset(CheckerLaunchMode)
_ON_DEMAND_ONLY: Final[frozenset[CheckerLaunchMode]] = frozenset({CheckerLaunchMode.ON_DEMAND})
_COMMENT_NODE: Final[str] = "comment"
_CONDITION_OWNERS: Final[frozenset[str]] = frozenset({"if_statement", "while_statement", "do_statement"})
_ASSIGNMENT_NODE: Final[str] = "assignment_expression"
_ASSIGNMENT_MESSAGE: Final[str] = "Possible assignment in condition '{text}'"
_CPPLINT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"""
    ^(?P<file>.+?):(?P<line>\d+):\s+
    (?P<message>.+?)\s+\[(?P<category>[^\]]+)\]\s+\[(?P<confidence>\d+)\]$
    """,
    re.VERBOSE,
)


def _marker(kind: MarkerKind, **attributes: MarkerValue) -> RawMarker:
    return RawMarker(kind=kind, attributes={MarkerAttribute(name).value: value for name, value in attributes.items()})


def _read_source(resource: Resource) -> bytes:
    try:
        return resource.path.read_bytes()
    except OSError as exc:
        raise CheckerRunError(f"unable to read {resource.path}: {exc}") from exc


def _parse(content: bytes, path: Path) -> Node:
    try:
        return parse_source(content, path).root_node
    except (RuntimeError, ValueError) as exc:
        raise CheckerRunError(f"unable to parse {path}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class TaskTagChecker(Checker):
    """Create task markers for tags such as ``TODO`` found in comments."""

    tags: tuple[str, ...]

    @property
    def checker_id(self) -> str:
        return TASK_CHECKER_ID

    def enabled_for(self, mode: CheckerLaunchMode) -> bool:
        return bool(self.tags) and mode in _ALL_MODES

    def check(self, resource: Resource) -> list[RawMarker]:
        if not self.tags:
            return []
        content = _read_source(resource)
        offsets = FileOffsets(content)
        alternatives = b"|".join(re.escape(tag.encode("utf-8")) for tag in self.tags)
        pattern = re.compile(rb"\b(?:" + alternatives + rb")\b[^\r\n]*")
        markers: list[RawMarker] = []
        for node in iter_nodes(_parse(content, resource.path)):
            if node.type != _COMMENT_NODE:
                continue
            for match in pattern.finditer(content, node.start_byte, node.end_byte):
                start = match.start()
                text = match.group(0).decode("utf-8", errors="replace").rstrip().removesuffix("*/").rstrip()
                markers.append(
                    _marker(
                        MarkerKind.TASK,
                        message=text,
                        charStart=start,
                        charEnd=match.end(),
                        lineNumber=offsets.resolve(start).line,
                    ),
                )
        return markers


@dataclass(frozen=True, slots=True)
class AssignmentInConditionChecker(Checker):
    """Flag conditions whose top-level expression is an assignment."""

    @property
    def checker_id(self) -> str:
        return ASSIGNMENT_CHECKER_ID

    def enabled_for(self, mode: CheckerLaunchMode) -> bool:
        return mode in _ALL_MODES

    def check(self, resource: Resource) -> list[RawMarker]:
        content = _read_source(resource)
        offsets = FileOffsets(content)
        markers: list[RawMarker] = []
        for expression in _assignment_conditions(_parse(content, resource.path)):
            markers.append(
                _marker(
                    MarkerKind.CHECKER_PROBLEM,
                    message=_ASSIGNMENT_MESSAGE.format(text=node_text(content, expression)),
                    charStart=expression.start_byte,
                    charEnd=expression.end_byte,
                    lineNumber=offsets.resolve(expression.start_byte).line,
                    severity=MarkerSeverity.WARNING.value,
                ),
            )
        return markers


def _assignment_conditions(root: Node) -> Iterator[Node]:
    for node in iter_nodes(root):
        if node.type not in _CONDITION_OWNERS:
            continue
        condition = node.child_by_field_name("condition")
        if condition is None:
            continue
        inner = condition.child_by_field_name("value")
        if inner is None and condition.named_children:
            inner = condition.named_children[0]
        if inner is not None and inner.type == _ASSIGNMENT_NODE:
            yield inner


@dataclass(frozen=True, slots=True)
class CpplintChecker(Checker):
    """Run the external ``cpplint`` tool and report its findings as line markers."""

    executable: str = "cpplint"
    error_confidence: int = 5

    @property
    def checker_id(self) -> str:
        return CPPLINT_CHECKER_ID

    def enabled_for(self, mode: CheckerLaunchMode) -> bool:
        return mode in _ON_DEMAND_ONLY

    def check(self, resource: Resource) -> list[RawMarker]:
        try:
            completed = run_command([self.executable, str(resource.path)], cwd=resource.path.parent)
        except (FileNotFoundError, subprocess.SubprocessError) as exc:
            raise CheckerRunError(f"cpplint failed for {resource.path}: {exc}") from exc
        return self.parse_output([*completed.stderr.splitlines(), *completed.stdout.splitlines()])

    def parse_output(self, lines: Sequence[str]) -> list[RawMarker]:
        """Convert cpplint output lines into markers."""

        markers: list[RawMarker] = []
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith(("Done processing", "Total errors")):
                continue
            match = _CPPLINT_PATTERN.match(stripped)
            if not match:
                continue
            confidence = int(match.group("confidence"))
            severity = MarkerSeverity.ERROR if confidence >= self.error_confidence else MarkerSeverity.WARNING
            markers.append(
                _marker(
                    MarkerKind.CHECKER_PROBLEM,
                    message=f"{match.group('message').strip()} [{match.group('category').strip()}]",
                    lineNumber=int(match.group("line")),
                    severity=severity.value,
                ),
            )
        return markers


class CheckerRunner(StaticCheckerService):
    """Run checkers for a resource and replace their previous markers."""

    def __init__(self, store: MarkerStore, checkers: Sequence[Checker]) -> None:
        self._store = store
        self._checkers = tuple(checkers)

    @property
    def checkers(self) -> tuple[Checker, ...]:
        """Return the registered checkers."""

        return self._checkers

    def process_resource(self, resource: Resource, mode: CheckerLaunchMode) -> None:
        for checker in self._checkers:
            if not checker.enabled_for(mode):
                continue
            markers = checker.check(resource)
            LOGGER.debug("%s produced %d marker(s) for %s", checker.checker_id, len(markers), resource.path)
            self._store.replace_markers(resource, checker.checker_id, markers)


def build_checkers(config: CheckerConfig) -> list[Checker]:
    """Return the checkers enabled by ``config``."""

    checkers: list[Checker] = [TaskTagChecker(tags=config.task_tags)]
    if config.assignment_in_condition:
        checkers.append(AssignmentInConditionChecker())
    if config.cpplint:
        checkers.append(
            CpplintChecker(executable=config.cpplint_executable, error_confidence=config.cpplint_error_confidence),
        )
    return checkers


__all__ = [
    "AssignmentInConditionChecker",
    "CheckerRunner",
    "CpplintChecker",
    "TaskTagChecker",
    "build_checkers",
]
