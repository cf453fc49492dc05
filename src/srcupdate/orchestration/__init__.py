# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Top-level orchestration of the update and validation pipeline."""

from __future__ import annotations

from .orchestrator import ValidationOrchestrator, ValidationServices

__all__ = ["ValidationOrchestrator", "ValidationServices"]
