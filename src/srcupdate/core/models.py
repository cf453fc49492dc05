# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the srcupdate package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

MarkerValue: TypeAlias = str | int | bool | None


class MarkerKind(str, Enum):
    """Marker types known to the marker store, arranged as a small hierarchy."""

    MARKER = "marker"
    PROBLEM = "problem"
    TASK = "task"
    BOOKMARK = "bookmark"
    CHECKER_PROBLEM = "checker-problem"

    @property
    def parent(self) -> MarkerKind | None:
        """Return the super type of this kind, ``None`` for the root kind."""

        return _MARKER_KIND_PARENTS.get(self)

    def is_subtype_of(self, other: MarkerKind) -> bool:
        """Return whether this kind equals ``other`` or derives from it.

        Args:
            other: Candidate super type.

        Returns:
            bool: ``True`` when ``other`` appears in this kind's ancestry.
        """

        current: MarkerKind | None = self
        while current is not None:
            if current is other:
                return True
            current = current.parent
        return False


_MARKER_KIND_PARENTS: Final[dict[MarkerKind, MarkerKind]] = {
    MarkerKind.PROBLEM: MarkerKind.MARKER,
    MarkerKind.TASK: MarkerKind.MARKER,
    MarkerKind.BOOKMARK: MarkerKind.MARKER,
    MarkerKind.CHECKER_PROBLEM: MarkerKind.PROBLEM,
}


class MarkerAttribute(str, Enum):
    """Well-known marker attribute names."""

    MESSAGE = "message"
    CHAR_START = "charStart"
    CHAR_END = "charEnd"
    LINE_NUMBER = "lineNumber"
    SEVERITY = "severity"


class RawProblem(BaseModel):
    """Problem reported by the parser or semantic analysis of a translation unit."""

    model_config = ConfigDict(frozen=True)

    source: Literal["problem"] = "problem"
    message: str
    start_offset: int = Field(ge=0)
    is_warning: bool = False


class RawMarker(BaseModel):
    """Marker attached to a resource by a static checker.

    Attribute values are loosely typed: any of them may be missing or hold a
    value of an unexpected type, in which case the typed accessors return
    ``None``.
    """

    model_config = ConfigDict(frozen=True)

    source: Literal["marker"] = "marker"
    kind: MarkerKind = MarkerKind.PROBLEM
    attributes: dict[str, MarkerValue] = Field(default_factory=dict)
    owner: str | None = None

    def get_attribute(self, name: MarkerAttribute | str) -> MarkerValue:
        """Return the raw attribute stored under ``name`` or ``None``."""

        key = name.value if isinstance(name, MarkerAttribute) else name
        return self.attributes.get(key)

    def is_subtype_of(self, kind: MarkerKind) -> bool:
        """Return whether the marker's kind is ``kind`` or one of its subtypes."""

        return self.kind.is_subtype_of(kind)

    @property
    def message(self) -> str | None:
        """Return the ``message`` attribute when it is a string."""

        value = self.get_attribute(MarkerAttribute.MESSAGE)
        return value if isinstance(value, str) else None

    @property
    def char_start(self) -> int | None:
        """Return the ``charStart`` attribute when it is an integer."""

        return _int_attribute(self.get_attribute(MarkerAttribute.CHAR_START))

    @property
    def line_number(self) -> int | None:
        """Return the ``lineNumber`` attribute when it is an integer."""

        return _int_attribute(self.get_attribute(MarkerAttribute.LINE_NUMBER))

    @property
    def severity(self) -> int | None:
        """Return the ``severity`` attribute when it is an integer."""

        return _int_attribute(self.get_attribute(MarkerAttribute.SEVERITY))


def _int_attribute(value: MarkerValue) -> int | None:
    # bool is an int subclass but never a valid offset, line, or severity.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


DiagnosticCandidate: TypeAlias = RawProblem | RawMarker


@dataclass(frozen=True, slots=True)
class Position:
    """One-based line and column within a file."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 1 or self.column < 1:
            raise ValueError(f"positions are one-based, got {self.line}:{self.column}")


class Diagnostic(BaseModel):
    """Positioned error or warning produced by the validation pipeline."""

    model_config = ConfigDict(frozen=True)

    message: str
    file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    is_warning: bool

    @property
    def severity(self) -> Severity:
        """Return the severity matching :attr:`is_warning`."""

        return Severity.from_flag(self.is_warning)

    @property
    def position(self) -> Position:
        """Return the diagnostic's position."""

        return Position(self.line, self.column)


@dataclass(frozen=True, slots=True)
class ValidationRequest:
    """Input bundle describing a single update/validate invocation.

    Attributes:
        project: Name of the project owning ``file``.
        file: Path of the source file, relative to the project root or absolute.
        validate: Compute diagnostics after refreshing the index.
        build: Schedule an incremental rebuild once diagnostics are computed.
    """

    project: str
    file: str
    validate: bool = False
    build: bool = False


__all__ = [
    "Diagnostic",
    "DiagnosticCandidate",
    "MarkerAttribute",
    "MarkerKind",
    "MarkerValue",
    "Position",
    "RawMarker",
    "RawProblem",
    "ValidationRequest",
]
