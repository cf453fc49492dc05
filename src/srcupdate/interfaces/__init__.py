# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols for the collaborators consumed by the validation pipeline."""

from __future__ import annotations

from .checkers import Checker, CheckerLaunchMode, MarkerDepth, MarkerStore, StaticCheckerService
from .index import AstStyle, IndexService, SemanticIndex, SyntaxTree, UpdateMode
from .services import BuildService, PositionResolver, PositionResolverFactory
from .workspace import LanguageModel, Project, ProjectRegistry, Resource, TranslationUnit

__all__ = [
    "AstStyle",
    "BuildService",
    "Checker",
    "CheckerLaunchMode",
    "IndexService",
    "LanguageModel",
    "MarkerDepth",
    "MarkerStore",
    "PositionResolver",
    "PositionResolverFactory",
    "Project",
    "ProjectRegistry",
    "Resource",
    "SemanticIndex",
    "StaticCheckerService",
    "SyntaxTree",
    "TranslationUnit",
    "UpdateMode",
]
