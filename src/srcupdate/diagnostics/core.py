# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic normalization for parser problems and checker markers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from itertools import chain

from ..core.models import Diagnostic, DiagnosticCandidate, MarkerKind, Position, RawMarker, RawProblem
from ..core.severity import marker_is_warning
from ..interfaces.services import PositionResolver

LOGGER = logging.getLogger(__name__)


def normalize_diagnostics(
    problems: Sequence[RawProblem],
    markers: Sequence[RawMarker],
    *,
    file: str,
    resolver: PositionResolver,
) -> list[Diagnostic]:
    """Convert problems and markers into diagnostics for ``file``.

    Problem diagnostics come first in producer order, followed by the
    markers that survive filtering in store order. Sorting relies on this
    order to break ties between diagnostics sharing a position.

    Args:
        problems: Problems reported while building the syntax tree.
        markers: Markers attached to the file by static checkers.
        file: Location recorded on every diagnostic.
        resolver: Resolver mapping byte offsets within ``file`` to positions.

    Returns:
        list[Diagnostic]: Diagnostics in pre-sort order.
    """

    return normalize_candidates(chain(problems, markers), file=file, resolver=resolver)


def normalize_candidates(
    candidates: Iterable[DiagnosticCandidate],
    *,
    file: str,
    resolver: PositionResolver,
) -> list[Diagnostic]:
    """Normalize a mixed stream of problems and markers, preserving order."""

    normalized: list[Diagnostic] = []
    for candidate in candidates:
        diagnostic = normalize_candidate(candidate, file=file, resolver=resolver)
        if diagnostic is not None:
            normalized.append(diagnostic)
    return normalized


def normalize_candidate(
    candidate: DiagnosticCandidate,
    *,
    file: str,
    resolver: PositionResolver,
) -> Diagnostic | None:
    """Return the diagnostic for ``candidate`` or ``None`` when it is filtered.

    Args:
        candidate: Problem or marker to convert.
        file: Location recorded on the diagnostic.
        resolver: Resolver mapping byte offsets to positions.

    Returns:
        Diagnostic | None: Normalised diagnostic, ``None`` for task markers and
        markers without usable position information.
    """

    match candidate:
        case RawProblem():
            position = resolver.resolve(candidate.start_offset)
            return Diagnostic(
                message=candidate.message,
                file=file,
                line=position.line,
                column=position.column,
                is_warning=candidate.is_warning,
            )
        case RawMarker():
            return _normalize_marker(candidate, file, resolver)


def _normalize_marker(marker: RawMarker, file: str, resolver: PositionResolver) -> Diagnostic | None:
    if marker.is_subtype_of(MarkerKind.TASK):
        return None
    position = marker_position(marker, resolver)
    if position is None:
        LOGGER.debug("dropping %s marker without position: %s", marker.kind.value, marker.message)
        return None
    return Diagnostic(
        message=marker.message or "",
        file=file,
        line=position.line,
        column=position.column,
        is_warning=marker_is_warning(marker.severity),
    )


def marker_position(marker: RawMarker, resolver: PositionResolver) -> Position | None:
    """Return the position of ``marker``.

    A positive ``charStart`` is resolved through ``resolver``; otherwise a
    positive ``lineNumber`` yields column one of that line.

    Args:
        marker: Marker whose position is requested.
        resolver: Resolver mapping byte offsets to positions.

    Returns:
        Position | None: Marker position, ``None`` when neither attribute is usable.
    """

    start = marker.char_start
    if start is not None and start > 0:
        return resolver.resolve(start)
    line = marker.line_number
    if line is not None and line > 0:
        return Position(line, 1)
    return None


__all__ = ["marker_position", "normalize_candidate", "normalize_candidates", "normalize_diagnostics"]
