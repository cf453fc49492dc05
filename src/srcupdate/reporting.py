# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render diagnostics for terminal output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from rich.console import Console
from rich.text import Text

from .core.models import Diagnostic
from .core.severity import Severity

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


def format_diagnostic(diag: Diagnostic) -> Text:
    """Return ``diag`` as ``file:line:column: severity: message``."""

    text = Text(f"{diag.file}:{diag.line}:{diag.column}: ")
    text.append(diag.severity.value, style=_SEVERITY_STYLES[diag.severity])
    text.append(f": {diag.message}")
    return text


def render_diagnostics(diagnostics: Sequence[Diagnostic], console: Console) -> None:
    """Print one line per diagnostic to ``console``."""

    for diag in diagnostics:
        console.print(format_diagnostic(diag))


__all__ = ["format_diagnostic", "render_diagnostics"]
