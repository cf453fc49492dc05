# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console helpers with optional colour and emoji support."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

PACKAGE_LOGGER: Final[str] = "srcupdate"


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Return a cached Rich console honouring the colour and emoji preferences.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        stderr: Write to standard error instead of standard output.

    Returns:
        Console: Console configured with the requested presentation flags.
    """

    tty = detect_tty()
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        stderr=stderr,
    )


def _print_line(msg: str, *, style: str | None, symbol: str, use_emoji: bool, stderr: bool = False) -> None:
    console = get_console(color=detect_tty(), emoji=use_emoji, stderr=stderr)
    text = Text(f"{symbol if use_emoji else ''}{msg}")
    if style:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool = False) -> None:
    """Emit an informational message."""

    _print_line(msg, style="cyan", symbol="ℹ️ ", use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool = False) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", symbol="✅ ", use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool = False) -> None:
    """Emit a warning message on standard error."""

    _print_line(msg, style="yellow", symbol="⚠️ ", use_emoji=use_emoji, stderr=True)


def fail(msg: str, *, use_emoji: bool = False) -> None:
    """Emit an error message on standard error."""

    _print_line(msg, style="bold red", symbol="❌ ", use_emoji=use_emoji, stderr=True)


def configure_logging(*, verbose: bool) -> None:
    """Route package log records to stderr, including debug records when ``verbose`` is set."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(logger, "_srcupdate_configured", False):
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        return
    handler = RichHandler(
        console=get_console(color=detect_tty(), emoji=False, stderr=True),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    setattr(logger, "_srcupdate_configured", True)


__all__ = ["configure_logging", "detect_tty", "fail", "get_console", "info", "ok", "warn"]
