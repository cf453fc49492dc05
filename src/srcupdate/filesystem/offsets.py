# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Byte offset to line/column resolution for source files."""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path
from threading import Lock
from typing import Final

from ..core.models import Position

_NEWLINE: Final[int] = ord("\n")
_DEFAULT_CACHE_SIZE: Final[int] = 64


class FileOffsets:
    """Line start table for a single file.

    Lines end at ``\\n``; a preceding ``\\r`` counts as part of the line.
    Columns are one-based byte columns. Offsets past the end of the file
    resolve against the last line.
    """

    __slots__ = ("_starts",)

    def __init__(self, content: bytes) -> None:
        starts = [0]
        starts.extend(index + 1 for index, byte in enumerate(content) if byte == _NEWLINE)
        self._starts: tuple[int, ...] = tuple(starts)

    @classmethod
    def compile(cls, path: Path | str) -> FileOffsets:
        """Build the table for the file at ``path``."""

        return cls(Path(path).read_bytes())

    @property
    def line_count(self) -> int:
        """Return the number of lines, counting a trailing partial line."""

        return len(self._starts)

    def resolve(self, offset: int) -> Position:
        """Return the position of byte ``offset``.

        Raises:
            ValueError: If ``offset`` is negative.
        """

        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        line_index = bisect_right(self._starts, offset) - 1
        return Position(line_index + 1, offset - self._starts[line_index] + 1)


class FileOffsetsFactory:
    """Provide :class:`FileOffsets` tables memoized per file version."""

    def __init__(self, *, maxsize: int = _DEFAULT_CACHE_SIZE) -> None:
        self._maxsize = maxsize
        self._cache: dict[tuple[Path, int, int], FileOffsets] = {}
        self._lock = Lock()

    def for_file(self, path: Path | str) -> FileOffsets:
        """Return the offsets table for ``path``, reusing it while the file is unchanged."""

        resolved = Path(path).resolve()
        stat = resolved.stat()
        key = (resolved, stat.st_mtime_ns, stat.st_size)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        offsets = FileOffsets.compile(resolved)
        with self._lock:
            stale = [entry for entry in self._cache if entry[0] == resolved]
            for entry in stale:
                del self._cache[entry]
            if len(self._cache) >= self._maxsize:
                del self._cache[next(iter(self._cache))]
            self._cache[key] = offsets
        return offsets

    def clear(self) -> None:
        """Drop every cached table."""

        with self._lock:
            self._cache.clear()


__all__ = ["FileOffsets", "FileOffsetsFactory"]
