# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console helpers and log configuration."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from srcupdate.logging import PACKAGE_LOGGER, configure_logging, fail, info, ok, warn


def test_helpers_route_by_severity(capsys: pytest.CaptureFixture[str]) -> None:
    info("indexing")
    ok("validated")
    warn("careful")
    fail("broken")

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["indexing", "validated"]
    assert captured.err.splitlines() == ["careful", "broken"]


def test_emoji_prefix_is_optional(capsys: pytest.CaptureFixture[str]) -> None:
    ok("done", use_emoji=True)

    assert capsys.readouterr().out.strip().endswith("done")


def test_configure_logging_installs_one_handler() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    try:
        configure_logging(verbose=True)
        configure_logging(verbose=False)

        handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.WARNING
        configure_logging(verbose=True)
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(level)
