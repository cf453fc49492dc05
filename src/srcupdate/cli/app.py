# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for the update command."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from ..core.errors import SrcUpdateError
from ..core.models import ValidationRequest
from ..core.serialization import dump_diagnostics
from ..logging import configure_logging, detect_tty, fail, get_console
from ..orchestration.orchestrator import ValidationOrchestrator
from ..reporting import render_diagnostics
from ..workspace import open_workspace
from ..workspace.config import WORKSPACE_ENV, default_workspace_root


class OutputFormat(str, Enum):
    """Output formats supported by ``update``."""

    JSON = "json"
    TEXT = "text"


app = typer.Typer(
    help="Refresh and validate C/C++ sources of a workspace.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Refresh and validate C/C++ sources of a workspace."""


@app.command("update")
def update(
    project: Annotated[str, typer.Option("--project", "-p", help="Name of the project owning the file.")],
    file: Annotated[str, typer.Option("--file", "-f", help="Source file, relative to the project root.")],
    validate: Annotated[bool, typer.Option("--validate", "-v", help="Report diagnostics for the file.")] = False,
    build: Annotated[
        bool,
        typer.Option("--build", "-b", help="Schedule an incremental build after validating."),
    ] = False,
    workspace: Annotated[
        Path | None,
        typer.Option("--workspace", "-w", envvar=WORKSPACE_ENV, help="Workspace directory containing srcupdate.toml."),
    ] = None,
    output_format: Annotated[OutputFormat, typer.Option("--format", help="Output format.")] = OutputFormat.JSON,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log pipeline progress to stderr.")] = False,
) -> None:
    """Refresh the index entry of a file and optionally validate and rebuild it."""

    configure_logging(verbose=verbose)
    root = workspace if workspace is not None else default_workspace_root()
    request = ValidationRequest(project=project, file=file, validate=validate, build=build)
    try:
        orchestrator = ValidationOrchestrator(open_workspace(root))
        diagnostics = orchestrator.run(request)
    except SrcUpdateError as exc:
        fail(str(exc))
        raise typer.Exit(code=1) from exc

    if output_format is OutputFormat.JSON:
        typer.echo(dump_diagnostics(diagnostics))
    elif diagnostics:
        render_diagnostics(diagnostics, get_console(color=detect_tty(), emoji=False))


__all__ = ["OutputFormat", "app"]
