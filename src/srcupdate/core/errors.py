# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the validation pipeline and its collaborators."""

from __future__ import annotations


class SrcUpdateError(Exception):
    """Base class for failures reported by :mod:`srcupdate`."""


class ConfigError(SrcUpdateError):
    """Raised when workspace configuration input is invalid."""


class IndexAccessError(SrcUpdateError):
    """Raised when the semantic index cannot be locked or a syntax tree cannot be built."""


class CheckerRunError(SrcUpdateError):
    """Raised when an on-demand static checker run fails."""


class BuildSchedulingError(SrcUpdateError):
    """Raised when an incremental rebuild cannot be scheduled."""


class ResourceNotFoundError(SrcUpdateError):
    """Raised when a file path does not correspond to a resource of the project."""


class ValidationError(SrcUpdateError):
    """Raised when validating a file fails for a reason other than a negative outcome.

    Attributes:
        project: Name of the project the request targeted.
        file: File path supplied with the request.
    """

    def __init__(self, message: str, *, project: str, file: str) -> None:
        super().__init__(f"{project}:{file}: {message}")
        self.project = project
        self.file = file


__all__ = [
    "BuildSchedulingError",
    "CheckerRunError",
    "ConfigError",
    "IndexAccessError",
    "ResourceNotFoundError",
    "SrcUpdateError",
    "ValidationError",
]
