"""Errors raised while reading or writing JSON."""

from __future__ import annotations

import enum
import math
from decimal import Decimal
from typing import Any, Callable, Optional, Tuple


class Category(enum.Enum):
    """Broad cause of a :class:`JsonError`."""

    IO = "io"
    SYNTAX = "syntax"
    DATA = "data"
    EOF = "eof"


class ErrorCode(enum.Enum):
    """Specific reason for a :class:`JsonError`; the value is its description."""

    MESSAGE = "message"
    IO = "io"
    EOF_WHILE_PARSING_LIST = "EOF while parsing a list"
    EOF_WHILE_PARSING_OBJECT = "EOF while parsing an object"
    EOF_WHILE_PARSING_STRING = "EOF while parsing a string"
    EOF_WHILE_PARSING_VALUE = "EOF while parsing a value"
    EXPECTED_COLON = "expected `:`"
    EXPECTED_LIST_COMMA_OR_END = "expected `,` or `]`"
    EXPECTED_OBJECT_COMMA_OR_END = "expected `,` or `}`"
    EXPECTED_SOME_IDENT = "expected ident"
    EXPECTED_SOME_VALUE = "expected value"
    EXPECTED_DOUBLE_QUOTE = "expected `\"`"
    INVALID_ESCAPE = "invalid escape"
    INVALID_NUMBER = "invalid number"
    NUMBER_OUT_OF_RANGE = "number out of range"
    INVALID_UNICODE_CODE_POINT = "invalid unicode code point"
    CONTROL_CHARACTER_WHILE_PARSING_STRING = (
        "control character (\\u0000-\\u001F) found while parsing a string"
    )
    KEY_MUST_BE_A_STRING = "key must be a string"
    EXPECTED_NUMERIC_KEY = "invalid value: expected key to be a number in quotes"
    FLOAT_KEY_MUST_BE_FINITE = "float key must be finite (got NaN or +/-inf)"
    LONE_LEADING_SURROGATE_IN_HEX_ESCAPE = "lone leading surrogate in hex escape"
    TRAILING_COMMA = "trailing comma"
    TRAILING_CHARACTERS = "trailing characters"
    UNEXPECTED_END_OF_HEX_ESCAPE = "unexpected end of hex escape"
    RECURSION_LIMIT_EXCEEDED = "recursion limit exceeded"

    def __str__(self) -> str:
        return self.value

    @property
    def category(self) -> Category:
        if self is ErrorCode.MESSAGE:
            return Category.DATA
        if self is ErrorCode.IO:
            return Category.IO
        if self in _EOF_CODES:
            return Category.EOF
        return Category.SYNTAX


_EOF_CODES = frozenset(
    {
        ErrorCode.EOF_WHILE_PARSING_LIST,
        ErrorCode.EOF_WHILE_PARSING_OBJECT,
        ErrorCode.EOF_WHILE_PARSING_STRING,
        ErrorCode.EOF_WHILE_PARSING_VALUE,
    }
)

_FREE_TEXT_CODES = frozenset({ErrorCode.MESSAGE, ErrorCode.IO})


def _debug_str(text: str) -> str:
    """Quote a string with backslash escapes for diagnostics."""
    pieces = ['"']
    for ch in text:
        if ch == "\\":
            pieces.append("\\\\")
        elif ch == '"':
            pieces.append('\\"')
        elif ch == "\n":
            pieces.append("\\n")
        elif ch == "\r":
            pieces.append("\\r")
        elif ch == "\t":
            pieces.append("\\t")
        elif ch == "\0":
            pieces.append("\\0")
        elif ch != " " and not ch.isprintable():
            pieces.append(f"\\u{{{ord(ch):x}}}")
        else:
            pieces.append(ch)
    pieces.append('"')
    return "".join(pieces)


def _format_float(value: float) -> str:
    """Shortest round-trip text of a float, e.g. ``1.0`` or ``1.2e41``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0.0"
    parts = Decimal(repr(abs(value))).as_tuple()
    raw = "".join(str(digit) for digit in parts.digits)
    digits = raw.rstrip("0")
    exponent = int(parts.exponent) + (len(raw) - len(digits))
    length = len(digits)
    kk = length + exponent
    if 0 <= exponent and kk <= 16:
        body = digits + "0" * exponent + ".0"
    elif 0 < kk <= 16:
        body = digits[:kk] + "." + digits[kk:]
    elif -5 < kk <= 0:
        body = "0." + "0" * (-kk) + digits
    elif length == 1:
        body = f"{digits}e{kk - 1}"
    else:
        body = f"{digits[0]}.{digits[1:]}e{kk - 1}"
    return sign + body


def _describe_unexpected(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean `{'true' if value else 'false'}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{_format_float(value)}`"
    if isinstance(value, str):
        return f"string {_debug_str(value)}"
    if isinstance(value, (bytes, bytearray)):
        return "byte array"
    if isinstance(value, (list, tuple)):
        return "sequence"
    if isinstance(value, dict):
        return "map"
    return str(value)


class JsonError(Exception):
    """Any failure while reading or writing JSON, with its position."""

    def __init__(
        self,
        code: ErrorCode,
        line: int,
        column: int,
        message: Optional[str] = None,
    ) -> None:
        self.code = code
        self.line = line
        self.column = column
        self.message = message if code in _FREE_TEXT_CODES else None
        super().__init__(str(self))

    @property
    def description(self) -> str:
        """The reason without the position suffix."""
        if self.code in _FREE_TEXT_CODES:
            return self.message or ""
        return str(self.code)

    def __str__(self) -> str:
        if self.line == 0:
            return self.description
        return f"{self.description} at line {self.line} column {self.column}"

    def __repr__(self) -> str:
        return (
            f"Error({_debug_str(self.description)}, "
            f"line: {self.line}, column: {self.column})"
        )

    def classify(self) -> Category:
        return self.code.category

    def is_io(self) -> bool:
        return self.classify() is Category.IO

    def is_syntax(self) -> bool:
        return self.classify() is Category.SYNTAX

    def is_data(self) -> bool:
        return self.classify() is Category.DATA

    def is_eof(self) -> bool:
        return self.classify() is Category.EOF

    def fix_position(self, make: Callable[[ErrorCode], "JsonError"]) -> "JsonError":
        """Return this error placed where ``make`` says, if it has no position yet."""
        if self.line != 0:
            return self
        located = make(self.code)
        fixed = JsonError(self.code, located.line, located.column, self.message)
        fixed.__cause__ = self.__cause__
        return fixed


def syntax_error(code: ErrorCode, line: int, column: int) -> JsonError:
    """Error for malformed input at the given position."""
    return JsonError(code, line, column)


def io_error(exc: BaseException) -> JsonError:
    """Wrap an I/O failure; the original exception is kept as the cause."""
    err = JsonError(ErrorCode.IO, 0, 0, str(exc))
    err.__cause__ = exc
    return err


def parse_line_col(msg: str) -> Optional[Tuple[str, int, int]]:
    """Split ``"... at line L column C"`` into the text, L and C, or return None."""
    marker = " at line "
    start_of_suffix = msg.rfind(marker)
    if start_of_suffix < 0:
        return None

    start_of_line = start_of_suffix + len(marker)
    end_of_line = _skip_digits(msg, start_of_line)
    if not msg.startswith(" column ", end_of_line):
        return None

    start_of_column = end_of_line + len(" column ")
    end_of_column = _skip_digits(msg, start_of_column)
    if end_of_column < len(msg):
        return None

    line_text = msg[start_of_line:end_of_line]
    column_text = msg[start_of_column:end_of_column]
    if not line_text or not column_text:
        return None
    return msg[:start_of_suffix], int(line_text), int(column_text)


def _skip_digits(text: str, index: int) -> int:
    while index < len(text) and text[index] in "0123456789":
        index += 1
    return index


def make_error(msg: str) -> JsonError:
    """Data error from free text, taking a trailing position suffix into account."""
    parsed = parse_line_col(msg)
    if parsed is None:
        return JsonError(ErrorCode.MESSAGE, 0, 0, msg)
    text, line, column = parsed
    return JsonError(ErrorCode.MESSAGE, line, column, text)


def invalid_type(unexpected: Any, expected: Any) -> JsonError:
    """Data error for a value of the wrong kind."""
    return make_error(
        f"invalid type: {_describe_unexpected(unexpected)}, expected {expected}"
    )