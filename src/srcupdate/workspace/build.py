# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Background execution of incremental project builds."""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Final

from ..core.errors import BuildSchedulingError
from ..interfaces.services import BuildService
from ..interfaces.workspace import Project
from ..subprocess_utils import run_command
from .projects import WorkspaceProject

LOGGER = logging.getLogger(__name__)

_BUILD_FAILED_STATUS: Final[int] = 127


class BackgroundBuilder(BuildService):
    """Run each project's ``build_command`` on a worker thread."""

    def __init__(self, *, max_workers: int = 1) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="srcupdate-build")

    def schedule_incremental(self, project: Project) -> Future[int] | None:
        """Submit the project's build command without waiting for it.

        Returns:
            Future[int] | None: Future resolving to the command's exit status,
            ``None`` when the project declares no build command.

        Raises:
            BuildSchedulingError: If the builder has been shut down.
        """

        if not isinstance(project, WorkspaceProject) or not project.build_command:
            LOGGER.info("project '%s' has no build command; skipping rebuild", project.name)
            return None
        try:
            future = self._executor.submit(_run_build, project)
        except RuntimeError as exc:
            raise BuildSchedulingError(f"unable to schedule build of '{project.name}': {exc}") from exc
        LOGGER.debug("scheduled incremental build of '%s'", project.name)
        return future

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop accepting builds, optionally waiting for running ones."""

        self._executor.shutdown(wait=wait)


def _run_build(project: WorkspaceProject) -> int:
    name = project.name
    try:
        completed = run_command(project.build_command, cwd=project.root)
    except (FileNotFoundError, subprocess.SubprocessError) as exc:
        LOGGER.warning("build of '%s' could not run: %s", name, exc)
        return _BUILD_FAILED_STATUS
    if completed.returncode:
        LOGGER.warning("build of '%s' exited with status %d", name, completed.returncode)
    else:
        LOGGER.debug("build of '%s' finished", name)
    return completed.returncode


__all__ = ["BackgroundBuilder"]
