"""Byte iterator that tracks line, column and byte offset."""

from __future__ import annotations

from typing import Iterable, Iterator

_NEWLINE = 0x0A


class LineColIterator:
    """Yield bytes from an iterable of ints while counting lines and columns.

    Lines start at 1. The column is 0 just after a newline and counts the
    bytes read on the current line.
    """

    def __init__(self, iterable: Iterable[int]) -> None:
        self._iter = iter(iterable)
        self._line = 1
        self._col = 0
        self._start_of_line = 0

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        byte = next(self._iter)
        if byte == _NEWLINE:
            self._start_of_line += self._col + 1
            self._line += 1
            self._col = 0
        else:
            self._col += 1
        return byte

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    @property
    def byte_offset(self) -> int:
        return self._start_of_line + self._col