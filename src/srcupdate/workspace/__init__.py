# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Workspace-backed implementations of the pipeline's collaborators."""

from __future__ import annotations

from pathlib import Path

from ..filesystem.offsets import FileOffsetsFactory
from ..orchestration.orchestrator import ValidationServices
from .build import BackgroundBuilder
from .checkers import CheckerRunner, build_checkers
from .config import WorkspaceConfig, load_workspace_config
from .index import SourceIndex
from .markers import InMemoryMarkerStore
from .projects import WorkspaceLanguageModel, WorkspaceRegistry


def create_services(config: WorkspaceConfig) -> ValidationServices:
    """Wire the workspace collaborators described by ``config``."""

    markers = InMemoryMarkerStore()
    return ValidationServices(
        registry=WorkspaceRegistry(config),
        language_model=WorkspaceLanguageModel(),
        index=SourceIndex(),
        checkers=CheckerRunner(markers, build_checkers(config.checkers)),
        markers=markers,
        builder=BackgroundBuilder(),
        positions=FileOffsetsFactory(),
    )


def open_workspace(root: Path) -> ValidationServices:
    """Load ``srcupdate.toml`` from ``root`` and wire its collaborators.

    Raises:
        ConfigError: If the configuration is missing or invalid.
    """

    return create_services(load_workspace_config(root))


__all__ = ["create_services", "open_workspace"]
