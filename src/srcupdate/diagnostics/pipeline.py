# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Composable diagnostic processing pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from ..core.models import Diagnostic, RawMarker, RawProblem
from ..interfaces.services import PositionResolver
from .core import normalize_diagnostics
from .sorting import sort_diagnostics


@dataclass(frozen=True, slots=True)
class DiagnosticPipelineRequest:
    """Represent a request bundle consumed by :class:`DiagnosticPipeline`."""

    problems: Sequence[RawProblem]
    markers: Sequence[RawMarker]
    file: str
    resolver: PositionResolver


Normalizer = Callable[[DiagnosticPipelineRequest], list[Diagnostic]]
Sorter = Callable[[Iterable[Diagnostic]], list[Diagnostic]]


def _default_normalizer(request: DiagnosticPipelineRequest) -> list[Diagnostic]:
    return normalize_diagnostics(request.problems, request.markers, file=request.file, resolver=request.resolver)


@dataclass(slots=True)
class DiagnosticPipeline:
    """Pipeline that normalises raw problems and markers and orders the result.

    Attributes:
        normalize: Callable converting the request's raw inputs into diagnostics.
        sort: Callable ordering normalised diagnostics; must be stable.
    """

    normalize: Normalizer = _default_normalizer
    sort: Sorter = sort_diagnostics

    def run(self, request: DiagnosticPipelineRequest) -> list[Diagnostic]:
        """Execute the pipeline and return the ordered diagnostics.

        Args:
            request: Raw inputs plus the file and resolver they refer to.

        Returns:
            list[Diagnostic]: Diagnostics sorted by position.
        """

        return self.sort(self.normalize(request))


__all__ = ["DiagnosticPipeline", "DiagnosticPipelineRequest"]
