# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Final

_Pathish = str | PathLike[str] | Path
_DEFAULT_CACHE_SIZE: Final[int] = 1024


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising."""

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def resolve_within(path: _Pathish, root: _Pathish) -> Path | None:
    """Return the absolute form of ``path`` when it lies inside ``root``.

    Args:
        path: Absolute path, or a path relative to ``root``.
        root: Directory the path must stay within.

    Returns:
        Path | None: Resolved absolute path, ``None`` when it escapes ``root``.
    """

    base = _best_effort_resolve(Path(root).expanduser())
    raw_path = Path(path).expanduser()
    candidate = _best_effort_resolve(raw_path if raw_path.is_absolute() else base / raw_path)
    if candidate == base or base in candidate.parents:
        return candidate
    return None


def to_location(path: _Pathish) -> str:
    """Return ``path`` as an absolute string using forward slashes."""

    return _best_effort_resolve(Path(path)).as_posix().replace("\\", "/")


__all__ = ["resolve_within", "to_location"]
