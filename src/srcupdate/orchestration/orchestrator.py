# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrator refreshing the index and validating a single source file."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass

from ..core.errors import BuildSchedulingError, SrcUpdateError, ValidationError
from ..core.models import Diagnostic, ValidationRequest
from ..diagnostics.collectors import MarkerCollector, ProblemCollector
from ..diagnostics.pipeline import DiagnosticPipeline, DiagnosticPipelineRequest
from ..interfaces.checkers import MarkerStore, StaticCheckerService
from ..interfaces.index import IndexService, UpdateMode
from ..interfaces.services import BuildService, PositionResolverFactory
from ..interfaces.workspace import LanguageModel, Project, ProjectRegistry, TranslationUnit

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationServices:
    """Collaborators required by :class:`ValidationOrchestrator`.

    Attributes:
        registry: Resolves project names.
        language_model: Locates translation units.
        index: Maintains the semantic index and builds syntax trees.
        checkers: Runs static checkers.
        markers: Stores checker markers.
        builder: Schedules incremental rebuilds.
        positions: Provides byte offset to position resolvers.
    """

    registry: ProjectRegistry
    language_model: LanguageModel
    index: IndexService
    checkers: StaticCheckerService
    markers: MarkerStore
    builder: BuildService
    positions: PositionResolverFactory


class ValidationOrchestrator:
    """Refresh a file's index entry and optionally validate and rebuild its project."""

    def __init__(self, services: ValidationServices, *, pipeline: DiagnosticPipeline | None = None) -> None:
        self._services = services
        self._pipeline = pipeline or DiagnosticPipeline()
        self._problems = ProblemCollector(services.index, services.registry)
        self._markers = MarkerCollector(services.checkers, services.markers)
        self._pending_build: Future[int] | None = None

    @property
    def pending_build(self) -> Future[int] | None:
        """Return the handle of the most recently scheduled rebuild, if any."""

        return self._pending_build

    def run(self, request: ValidationRequest) -> list[Diagnostic] | None:
        """Process ``request``.

        The index entry for the file is always refreshed. Diagnostics are
        only computed when ``request.validate`` is set; ``request.build`` is
        honoured only in that case and the rebuild is scheduled after the
        diagnostics are final, without waiting for it.

        Args:
            request: Project, file and flags of the invocation.

        Returns:
            list[Diagnostic] | None: Diagnostics sorted by position, or ``None``
            when the project is not a managed C/C++ project or validation was
            not requested.

        Raises:
            ValidationError: If the file cannot be located, indexed, parsed or checked.
        """

        project = self._services.registry.resolve(request.project)
        if project is None:
            LOGGER.debug("project '%s' is not a managed C/C++ project", request.project)
            return None

        try:
            unit = self._services.language_model.find_unit(project, request.file)
            self._services.index.refresh(unit, UpdateMode.ALL)
            if not request.validate:
                LOGGER.debug("refreshed %s without validation", unit.location)
                return None
            diagnostics = self._validate(unit)
        except SrcUpdateError as exc:
            raise ValidationError(str(exc), project=request.project, file=request.file) from exc

        if request.build:
            self._schedule_build(project)
        return diagnostics

    def _validate(self, unit: TranslationUnit) -> list[Diagnostic]:
        problems = self._problems.collect(unit)
        markers = self._markers.collect(unit.resource)
        LOGGER.debug("collected %d problem(s) and %d marker(s) for %s", len(problems), len(markers), unit.location)
        return self._pipeline.run(
            DiagnosticPipelineRequest(
                problems=problems,
                markers=markers,
                file=unit.location,
                resolver=self._services.positions.for_file(unit.location),
            ),
        )

    def _schedule_build(self, project: Project) -> None:
        try:
            self._pending_build = self._services.builder.schedule_incremental(project)
        except BuildSchedulingError as exc:
            LOGGER.warning("incremental build of '%s' could not be scheduled: %s", project.name, exc)


__all__ = ["ValidationOrchestrator", "ValidationServices"]
