"""Iterate over a sequence of JSON values read from one input."""

from __future__ import annotations

from typing import Any, Iterator

from .de import Deserializer
from .error import ErrorCode, JsonError
from .reader import Reader

_WHITESPACE = frozenset(b" \n\t\r")
# Bytes that may directly follow a value without a clear end of its own.
_VALUE_BOUNDARY = frozenset(b' \n\t\r"[]{},:')
_SELF_DELINEATED = frozenset(b'["{')


class StreamDeserializer:
    """Yield successive JSON values from text, bytes, a stream or a :class:`Reader`.

    Values that have no clear end of their own (numbers, ``true``, ``null``
    and the like) must be followed by whitespace, the end of the input or
    the start of a self-delineated value.

    A failed value raises :class:`JsonError` from ``__next__``; after a
    failure that left the input unusable the iteration stops.
    """

    def __init__(self, source: Any) -> None:
        # In-memory input is cut short at the failure point; other input
        # simply stops being read.
        self._in_memory = isinstance(source, (str, bytes, bytearray, memoryview))
        reader = source if isinstance(source, Reader) else Reader(source)
        self._de = Deserializer(reader)
        self._offset = reader.byte_offset()
        self._failed = False

    @property
    def _reader(self) -> Reader:
        return self._de.reader

    def __iter__(self) -> Iterator[Any]:
        return self

    def byte_offset(self) -> int:
        """Number of bytes consumed by values read successfully so far.

        After an end-of-input error, new data can be appended to the input
        from this offset on and read again.
        """
        return self._offset

    def _peek_end_of_value(self) -> None:
        byte = self._reader.peek()
        if byte is not None and byte not in _VALUE_BOUNDARY:
            raise self._reader.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def __next__(self) -> Any:
        if self._failed:
            if self._in_memory:
                self._offset = self._reader.byte_offset()
            raise StopIteration

        try:
            peek = self._de.parse_whitespace()
        except JsonError:
            self._failed = True
            raise

        if peek is None:
            self._offset = self._reader.byte_offset()
            raise StopIteration

        self._offset = self._reader.byte_offset()
        try:
            value = self._de.parse_value()
        except JsonError:
            self._failed = True
            raise

        self._offset = self._reader.byte_offset()
        if peek not in _SELF_DELINEATED:
            self._peek_end_of_value()
        return value


def iter_values(source: Any) -> StreamDeserializer:
    """Iterate over the JSON values held one after another in ``source``."""
    return StreamDeserializer(source)