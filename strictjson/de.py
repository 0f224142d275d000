"""Parse JSON text into Python values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .error import ErrorCode, JsonError
from .numbers import ignore_integer, parse_integer
from .reader import Reader

_SPACE = 0x20
_TAB = 0x09
_LF = 0x0A
_CR = 0x0D
_WHITESPACE = frozenset({_SPACE, _TAB, _LF, _CR})

_QUOTE = 0x22
_COMMA = 0x2C
_COLON = 0x3A
_MINUS = 0x2D
_ZERO = 0x30
_NINE = 0x39
_OPEN_BRACKET = 0x5B
_CLOSE_BRACKET = 0x5D
_OPEN_BRACE = 0x7B
_CLOSE_BRACE = 0x7D
_LOWER_N = 0x6E
_LOWER_T = 0x74
_LOWER_F = 0x66

_DEFAULT_DEPTH = 128

# Marks a container that was just opened and has no element yet.
_OPENED = object()


@dataclass
class _Frame:
    container: Union[List[Any], Dict[str, Any]]
    first: bool = True
    key: Optional[str] = field(default=None)

    @property
    def is_list(self) -> bool:
        return isinstance(self.container, list)

    def add(self, value: Any) -> None:
        if isinstance(self.container, list):
            self.container.append(value)
        else:
            assert self.key is not None
            self.container[self.key] = value


class Deserializer:
    """Read JSON values from text, bytes, a readable stream or a :class:`Reader`.

    Objects become dicts in input order; a repeated key keeps its first
    place and takes its last value.
    """

    def __init__(self, source: Any) -> None:
        self._reader = source if isinstance(source, Reader) else Reader(source)
        self._remaining_depth = _DEFAULT_DEPTH
        self._check_depth = True

    @property
    def reader(self) -> Reader:
        """The underlying byte reader."""
        return self._reader

    def disable_recursion_limit(self) -> None:
        """Allow nesting deeper than 128 levels."""
        self._check_depth = False

    def end(self) -> None:
        """Raise unless only whitespace remains in the input."""
        if self.parse_whitespace() is not None:
            raise self._reader.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def parse_whitespace(self) -> Optional[int]:
        """Skip whitespace and return the next byte without consuming it."""
        reader = self._reader
        while True:
            byte = reader.peek()
            if byte in _WHITESPACE:
                reader.discard()
            else:
                return byte

    # -- values ----------------------------------------------------------

    def parse_value(self) -> Any:
        """Parse one JSON value and return it as a Python object."""
        try:
            return self._parse_any()
        except JsonError as exc:
            fixed = exc.fix_position(self._reader.error)
            if fixed is exc:
                raise
            raise fixed

    def _parse_any(self) -> Any:
        reader = self._reader
        stack: List[_Frame] = []
        while True:
            peek = self.parse_whitespace()
            if peek is None:
                raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

            completed: Any
            if peek == _OPEN_BRACKET or peek == _OPEN_BRACE:
                self._enter()
                reader.discard()
                stack.append(_Frame([] if peek == _OPEN_BRACKET else {}))
                completed = _OPENED
            else:
                completed = self._parse_scalar(peek)

            while True:
                if not stack:
                    return completed
                frame = stack[-1]
                if completed is not _OPENED:
                    frame.add(completed)
                more = self._next_element(frame) if frame.is_list else self._next_entry(frame)
                if more:
                    break
                reader.discard()
                self._leave()
                stack.pop()
                completed = frame.container

    def _parse_scalar(self, peek: int) -> Any:
        reader = self._reader
        if peek == _LOWER_N:
            reader.discard()
            self._parse_ident(b"ull")
            return None
        if peek == _LOWER_T:
            reader.discard()
            self._parse_ident(b"rue")
            return True
        if peek == _LOWER_F:
            reader.discard()
            self._parse_ident(b"alse")
            return False
        if peek == _MINUS:
            reader.discard()
            return parse_integer(reader, False)
        if _ZERO <= peek <= _NINE:
            return parse_integer(reader, True)
        if peek == _QUOTE:
            reader.discard()
            return reader.parse_str()
        raise reader.peek_error(ErrorCode.EXPECTED_SOME_VALUE)

    def _parse_ident(self, ident: bytes) -> None:
        reader = self._reader
        for expected in ident:
            byte = reader.next()
            if byte is None:
                raise reader.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            if byte != expected:
                raise reader.error(ErrorCode.EXPECTED_SOME_IDENT)

    def _next_element(self, frame: _Frame) -> bool:
        """Position at the next list element; False when ``]`` is next."""
        reader = self._reader
        peek = self.parse_whitespace()
        if peek == _CLOSE_BRACKET:
            return False
        if peek == _COMMA and not frame.first:
            reader.discard()
            peek = self.parse_whitespace()
        elif peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_LIST)
        elif frame.first:
            frame.first = False
        else:
            raise reader.peek_error(ErrorCode.EXPECTED_LIST_COMMA_OR_END)

        if peek == _CLOSE_BRACKET:
            raise reader.peek_error(ErrorCode.TRAILING_COMMA)
        if peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        return True

    def _next_entry(self, frame: _Frame) -> bool:
        """Read the next key and colon; False when ``}`` is next."""
        reader = self._reader
        peek = self.parse_whitespace()
        if peek == _CLOSE_BRACE:
            return False
        if peek == _COMMA and not frame.first:
            reader.discard()
            peek = self.parse_whitespace()
        elif peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        elif frame.first:
            frame.first = False
        else:
            raise reader.peek_error(ErrorCode.EXPECTED_OBJECT_COMMA_OR_END)

        if peek == _QUOTE:
            reader.discard()
            frame.key = reader.parse_str()
        elif peek == _CLOSE_BRACE:
            raise reader.peek_error(ErrorCode.TRAILING_COMMA)
        elif peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        else:
            raise reader.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)

        self._parse_object_colon()
        return True

    def _parse_object_colon(self) -> None:
        peek = self.parse_whitespace()
        if peek == _COLON:
            self._reader.discard()
        elif peek is None:
            raise self._reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        else:
            raise self._reader.peek_error(ErrorCode.EXPECTED_COLON)

    def _enter(self) -> None:
        if not self._check_depth:
            return
        self._remaining_depth -= 1
        if self._remaining_depth == 0:
            raise self._reader.peek_error(ErrorCode.RECURSION_LIMIT_EXCEEDED)

    def _leave(self) -> None:
        if self._check_depth:
            self._remaining_depth += 1

    # -- skipping --------------------------------------------------------

    def ignore_value(self) -> None:
        """Check and skip one JSON value without building it."""
        reader = self._reader
        frames: List[int] = []
        enclosing: Optional[int] = None

        while True:
            peek = self.parse_whitespace()
            if peek is None:
                raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

            opened: Optional[int] = None
            if peek == _LOWER_N:
                reader.discard()
                self._parse_ident(b"ull")
            elif peek == _LOWER_T:
                reader.discard()
                self._parse_ident(b"rue")
            elif peek == _LOWER_F:
                reader.discard()
                self._parse_ident(b"alse")
            elif peek == _MINUS:
                reader.discard()
                ignore_integer(reader)
            elif _ZERO <= peek <= _NINE:
                ignore_integer(reader)
            elif peek == _QUOTE:
                reader.discard()
                reader.ignore_str()
            elif peek == _OPEN_BRACKET or peek == _OPEN_BRACE:
                if enclosing is not None:
                    frames.append(enclosing)
                    enclosing = None
                reader.discard()
                opened = peek
            else:
                raise reader.peek_error(ErrorCode.EXPECTED_SOME_VALUE)

            if opened is not None:
                accept_comma = False
                frame = opened
            elif enclosing is not None:
                accept_comma = True
                frame = enclosing
                enclosing = None
            elif frames:
                accept_comma = True
                frame = frames.pop()
            else:
                return

            while True:
                byte = self.parse_whitespace()
                if byte == _COMMA and accept_comma:
                    reader.discard()
                    break
                if (byte == _CLOSE_BRACKET and frame == _OPEN_BRACKET) or (
                    byte == _CLOSE_BRACE and frame == _OPEN_BRACE
                ):
                    pass
                elif byte is not None:
                    if accept_comma:
                        raise reader.peek_error(
                            ErrorCode.EXPECTED_LIST_COMMA_OR_END
                            if frame == _OPEN_BRACKET
                            else ErrorCode.EXPECTED_OBJECT_COMMA_OR_END
                        )
                    break
                else:
                    raise reader.peek_error(
                        ErrorCode.EOF_WHILE_PARSING_LIST
                        if frame == _OPEN_BRACKET
                        else ErrorCode.EOF_WHILE_PARSING_OBJECT
                    )
                reader.discard()
                if not frames:
                    return
                frame = frames.pop()
                accept_comma = True

            if frame == _OPEN_BRACE:
                byte = self.parse_whitespace()
                if byte == _QUOTE:
                    reader.discard()
                elif byte is None:
                    raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
                else:
                    raise reader.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)
                reader.ignore_str()
                byte = self.parse_whitespace()
                if byte == _COLON:
                    reader.discard()
                elif byte is None:
                    raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
                else:
                    raise reader.peek_error(ErrorCode.EXPECTED_COLON)

            enclosing = frame


def _parse_whole(source: Any) -> Any:
    de = Deserializer(source)
    value = de.parse_value()
    de.end()
    return value


def from_str(text: str) -> Any:
    """Parse a complete JSON document held in a string."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, not {type(text).__name__}")
    return _parse_whole(text)


def from_slice(data: Union[bytes, bytearray, memoryview]) -> Any:
    """Parse a complete JSON document held in bytes."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, not {type(data).__name__}")
    return _parse_whole(data)


def from_reader(stream: Any) -> Any:
    """Parse a complete JSON document read from a stream until it ends."""
    if not hasattr(stream, "read"):
        raise TypeError(f"expected a readable stream, not {type(stream).__name__}")
    return _parse_whole(stream)