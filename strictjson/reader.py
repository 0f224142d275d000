"""Byte source for the parser: peeking, positions and JSON string scanning."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .error import ErrorCode, JsonError, io_error, syntax_error

_NEWLINE = 0x0A
_QUOTE = 0x22
_BACKSLASH = 0x5C
_LOWER_U = 0x75
_CHUNK_SIZE = 8192

# Bytes that end a run of plain string content.
_SPECIAL = re.compile(rb'["\\\x00-\x1f]')

_SIMPLE_ESCAPES = {
    ord('"'): 0x22,
    ord("\\"): 0x5C,
    ord("/"): 0x2F,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
}


@dataclass(frozen=True)
class Position:
    """One-based line and column of a place in the input."""

    line: int
    column: int


def _hex_value(byte: int) -> Optional[int]:
    if 0x30 <= byte <= 0x39:
        return byte - 0x30
    if 0x41 <= byte <= 0x46:
        return byte - 0x41 + 10
    if 0x61 <= byte <= 0x66:
        return byte - 0x61 + 10
    return None


class Reader:
    """Read bytes one at a time from text, bytes or a readable stream.

    Streams are read lazily, so a value can be taken from the front of a
    stream that has not ended yet.
    """

    def __init__(self, source: Any) -> None:
        self._stream: Any = None
        self._read_chunk: Optional[Callable[[], Any]] = None
        if isinstance(source, str):
            self._buf = source.encode("utf-8")
        elif isinstance(source, (bytes, bytearray, memoryview)):
            self._buf = bytes(source)
        elif hasattr(source, "read"):
            self._buf = b""
            self._stream = source
            read1 = getattr(source, "read1", None)
            if callable(read1):
                self._read_chunk = lambda: read1(_CHUNK_SIZE)
            else:
                self._read_chunk = lambda: source.read(1)
        else:
            raise TypeError(
                f"cannot read JSON from {type(source).__name__!s} object"
            )
        self._pos = 0
        self._offset = 0
        self._line = 1
        self._line_start = 0

    # -- buffering -----------------------------------------------------

    def _available(self) -> bool:
        """True if at least one unread byte is buffered, reading more if needed."""
        if self._pos < len(self._buf):
            return True
        if self._stream is None or self._read_chunk is None:
            return False
        try:
            chunk = self._read_chunk()
        except OSError as exc:
            raise io_error(exc) from exc
        if not chunk:
            self._stream = None
            self._read_chunk = None
            return False
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._buf = bytes(chunk)
        self._pos = 0
        return True

    def _advance(self, byte: int) -> None:
        self._pos += 1
        self._offset += 1
        if byte == _NEWLINE:
            self._line += 1
            self._line_start = self._offset

    # -- byte access ---------------------------------------------------

    def peek(self) -> Optional[int]:
        """The next byte without consuming it, or None at the end."""
        if not self._available():
            return None
        return self._buf[self._pos]

    def next(self) -> Optional[int]:
        """Consume and return the next byte, or None at the end."""
        byte = self.peek()
        if byte is not None:
            self._advance(byte)
        return byte

    def discard(self) -> None:
        """Consume the next byte, if there is one."""
        self.next()

    # -- positions -----------------------------------------------------

    def position(self) -> Position:
        """Position of the last byte consumed."""
        return Position(self._line, self._offset - self._line_start)

    def peek_position(self) -> Position:
        """Position of the byte that peek() returned, once it is buffered."""
        if self._pos < len(self._buf):
            if self._buf[self._pos] == _NEWLINE:
                return Position(self._line + 1, 0)
            return Position(self._line, self._offset + 1 - self._line_start)
        return self.position()

    def byte_offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    def error(self, code: ErrorCode) -> JsonError:
        """Syntax error at the last consumed byte."""
        pos = self.position()
        return syntax_error(code, pos.line, pos.column)

    def peek_error(self, code: ErrorCode) -> JsonError:
        """Syntax error at the peeked byte."""
        pos = self.peek_position()
        return syntax_error(code, pos.line, pos.column)

    # -- strings -------------------------------------------------------

    def _take_plain(self) -> bytes:
        """Consume buffered string content up to the next special byte."""
        match = _SPECIAL.search(self._buf, self._pos)
        end = match.start() if match else len(self._buf)
        chunk = self._buf[self._pos:end]
        self._pos = end
        self._offset += len(chunk)
        return chunk

    def _scan_str(self, scratch: Optional[bytearray], validate: bool) -> None:
        while True:
            if not self._available():
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            plain = self._take_plain()
            if plain:
                if scratch is not None:
                    scratch += plain
                continue
            byte = self.next()
            if byte == _QUOTE:
                return
            if byte == _BACKSLASH:
                self._parse_escape(scratch, validate)
            else:
                raise self.error(ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING)

    def _parse_escape(self, scratch: Optional[bytearray], validate: bool) -> None:
        byte = self.next()
        if byte is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        simple = _SIMPLE_ESCAPES.get(byte)
        if simple is not None:
            if scratch is not None:
                scratch.append(simple)
            return
        if byte != _LOWER_U:
            raise self.error(ErrorCode.INVALID_ESCAPE)
        if not validate:
            self._decode_hex_escape()
            return
        code_point = self._parse_unicode_escape()
        if scratch is not None:
            scratch += chr(code_point).encode("utf-8")

    def _parse_unicode_escape(self) -> int:
        first = self._decode_hex_escape()
        if 0xDC00 <= first <= 0xDFFF:
            raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
        if not 0xD800 <= first <= 0xDBFF:
            return first
        for expected in (_BACKSLASH, _LOWER_U):
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            if byte != expected:
                raise self.error(ErrorCode.UNEXPECTED_END_OF_HEX_ESCAPE)
        second = self._decode_hex_escape()
        if not 0xDC00 <= second <= 0xDFFF:
            raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
        return (((first - 0xD800) << 10) | (second - 0xDC00)) + 0x10000

    def _decode_hex_escape(self) -> int:
        value = 0
        for _ in range(4):
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            digit = _hex_value(byte)
            if digit is None:
                raise self.error(ErrorCode.INVALID_ESCAPE)
            value = value * 16 + digit
        return value

    def parse_str(self) -> str:
        """Read the rest of a string whose opening quote was consumed."""
        scratch = bytearray()
        self._scan_str(scratch, validate=True)
        try:
            return scratch.decode("utf-8")
        except UnicodeDecodeError:
            raise self.error(ErrorCode.INVALID_UNICODE_CODE_POINT) from None

    def ignore_str(self) -> None:
        """Skip the rest of a string whose opening quote was consumed."""
        self._scan_str(None, validate=False)