"""Parsing and skipping of JSON numbers."""

from __future__ import annotations

import math
from typing import List, Optional, Union

from .error import ErrorCode, JsonError
from .reader import Reader

_ZERO = 0x30
_NINE = 0x39
_MINUS = 0x2D
_PLUS = 0x2B
_DOT = 0x2E
_LOWER_E = 0x65
_UPPER_E = 0x45

_U64_MAX = 2**64 - 1
_I64_MIN_MAGNITUDE = 2**63
_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)
_I128_MIN = -(2**127)
_I128_MAX = 2**127 - 1
_U128_MAX = 2**128 - 1

_POW10 = tuple(float(f"1e{i}") for i in range(309))

Number = Union[int, float]


def _is_digit(byte: Optional[int]) -> bool:
    return byte is not None and _ZERO <= byte <= _NINE


def _is_exponent_mark(byte: Optional[int]) -> bool:
    return byte == _LOWER_E or byte == _UPPER_E


def _peek_or_null(reader: Reader) -> int:
    byte = reader.peek()
    return 0 if byte is None else byte


def _next_or_null(reader: Reader) -> int:
    byte = reader.next()
    return 0 if byte is None else byte


def _overflows(acc: int, digit: int, limit: int) -> bool:
    """True if ``acc * 10 + digit`` would exceed ``limit``."""
    return acc >= limit // 10 and (acc > limit // 10 or digit > limit % 10)


def _saturate_i32(value: int) -> int:
    return max(_I32_MIN, min(_I32_MAX, value))


def _skip_digits(reader: Reader) -> None:
    while _is_digit(_peek_or_null(reader)):
        reader.discard()


def f64_from_parts(reader: Reader, positive: bool, significand: int, exponent: int) -> float:
    """Combine a decimal significand and power-of-ten exponent into a float."""
    value = float(significand)
    while True:
        index = abs(exponent)
        if index < len(_POW10):
            power = _POW10[index]
            if exponent >= 0:
                value *= power
                if math.isinf(value):
                    raise reader.error(ErrorCode.NUMBER_OUT_OF_RANGE)
            else:
                value /= power
            break
        if value == 0.0:
            break
        if exponent >= 0:
            raise reader.error(ErrorCode.NUMBER_OUT_OF_RANGE)
        value /= 1e308
        exponent += 308
    return value if positive else -value


def parse_integer(reader: Reader, positive: bool) -> Number:
    """Parse a number whose sign, if any, was already consumed.

    Integers that fit 64 bits come back as ``int``; everything else,
    including ``-0``, as ``float``.
    """
    first = reader.next()
    if first is None:
        raise reader.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
    if first == _ZERO:
        if _is_digit(_peek_or_null(reader)):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        return _parse_number(reader, positive, 0)
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)

    significand = first - _ZERO
    while True:
        byte = _peek_or_null(reader)
        if not _is_digit(byte):
            return _parse_number(reader, positive, significand)
        digit = byte - _ZERO
        if _overflows(significand, digit, _U64_MAX):
            return _parse_long_integer(reader, positive, significand)
        reader.discard()
        significand = significand * 10 + digit


def _parse_number(reader: Reader, positive: bool, significand: int) -> Number:
    byte = _peek_or_null(reader)
    if byte == _DOT:
        return _parse_decimal(reader, positive, significand, 0)
    if _is_exponent_mark(byte):
        return _parse_exponent(reader, positive, significand, 0)
    if positive:
        return significand
    # Too large for a signed 64-bit integer, or negative zero: use a float.
    if significand == 0 or significand > _I64_MIN_MAGNITUDE:
        return -float(significand)
    return -significand


def _parse_decimal(
    reader: Reader, positive: bool, significand: int, exponent_before_point: int
) -> float:
    reader.discard()
    exponent_after_point = 0
    while True:
        byte = _peek_or_null(reader)
        if not _is_digit(byte):
            break
        digit = byte - _ZERO
        if _overflows(significand, digit, _U64_MAX):
            return _parse_decimal_overflow(
                reader, positive, significand, exponent_before_point + exponent_after_point
            )
        reader.discard()
        significand = significand * 10 + digit
        exponent_after_point -= 1

    if exponent_after_point == 0:
        if reader.peek() is not None:
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

    exponent = exponent_before_point + exponent_after_point
    if _is_exponent_mark(_peek_or_null(reader)):
        return _parse_exponent(reader, positive, significand, exponent)
    return f64_from_parts(reader, positive, significand, exponent)


def _parse_exponent(
    reader: Reader, positive: bool, significand: int, starting_exponent: int
) -> float:
    reader.discard()
    positive_exp = True
    sign = _peek_or_null(reader)
    if sign == _PLUS:
        reader.discard()
    elif sign == _MINUS:
        reader.discard()
        positive_exp = False

    first = reader.next()
    if first is None:
        raise reader.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)

    exp = first - _ZERO
    while True:
        byte = _peek_or_null(reader)
        if not _is_digit(byte):
            break
        reader.discard()
        digit = byte - _ZERO
        if _overflows(exp, digit, _I32_MAX):
            return _parse_exponent_overflow(reader, positive, significand == 0, positive_exp)
        exp = exp * 10 + digit

    if positive_exp:
        final_exponent = _saturate_i32(starting_exponent + exp)
    else:
        final_exponent = _saturate_i32(starting_exponent - exp)
    return f64_from_parts(reader, positive, significand, final_exponent)


def _parse_long_integer(reader: Reader, positive: bool, significand: int) -> float:
    exponent = 0
    while True:
        byte = _peek_or_null(reader)
        if _is_digit(byte):
            reader.discard()
            exponent += 1
        elif byte == _DOT:
            return _parse_decimal(reader, positive, significand, exponent)
        elif _is_exponent_mark(byte):
            return _parse_exponent(reader, positive, significand, exponent)
        else:
            return f64_from_parts(reader, positive, significand, exponent)


def _parse_decimal_overflow(
    reader: Reader, positive: bool, significand: int, exponent: int
) -> float:
    # Further digits cannot change the significand; drop them.
    _skip_digits(reader)
    if _is_exponent_mark(_peek_or_null(reader)):
        return _parse_exponent(reader, positive, significand, exponent)
    return f64_from_parts(reader, positive, significand, exponent)


def _parse_exponent_overflow(
    reader: Reader, positive: bool, zero_significand: bool, positive_exp: bool
) -> float:
    if not zero_significand and positive_exp:
        raise reader.error(ErrorCode.NUMBER_OUT_OF_RANGE)
    _skip_digits(reader)
    return 0.0 if positive else -0.0


def _scan_integer128(reader: Reader) -> str:
    first = _next_or_null(reader)
    if first == _ZERO:
        if _is_digit(_peek_or_null(reader)):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        return "0"
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)
    digits: List[str] = [chr(first)]
    while True:
        byte = _peek_or_null(reader)
        if not _is_digit(byte):
            return "".join(digits)
        reader.discard()
        digits.append(chr(byte))


def parse_integer128(reader: Reader, signed: bool) -> int:
    """Parse an integer into the signed or unsigned 128-bit range."""
    peek = reader.peek()
    if peek is None:
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
    sign = ""
    if peek == _MINUS:
        if not signed:
            raise reader.peek_error(ErrorCode.NUMBER_OUT_OF_RANGE)
        reader.discard()
        sign = "-"
    value = int(sign + _scan_integer128(reader))
    low, high = (_I128_MIN, _I128_MAX) if signed else (0, _U128_MAX)
    if not low <= value <= high:
        raise reader.error(ErrorCode.NUMBER_OUT_OF_RANGE)
    return value


def ignore_integer(reader: Reader) -> None:
    """Skip over a number whose sign, if any, was already consumed."""
    first = _next_or_null(reader)
    if first == _ZERO:
        if _is_digit(_peek_or_null(reader)):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    elif _is_digit(first):
        _skip_digits(reader)
    else:
        raise reader.error(ErrorCode.INVALID_NUMBER)

    byte = _peek_or_null(reader)
    if byte == _DOT:
        _ignore_decimal(reader)
    elif _is_exponent_mark(byte):
        _ignore_exponent(reader)


def _ignore_decimal(reader: Reader) -> None:
    reader.discard()
    if not _is_digit(_peek_or_null(reader)):
        raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    _skip_digits(reader)
    if _is_exponent_mark(_peek_or_null(reader)):
        _ignore_exponent(reader)


def _ignore_exponent(reader: Reader) -> None:
    reader.discard()
    if _peek_or_null(reader) in (_PLUS, _MINUS):
        reader.discard()
    if not _is_digit(_next_or_null(reader)):
        raise reader.error(ErrorCode.INVALID_NUMBER)
    _skip_digits(reader)


def number_from_str(text: str) -> Number:
    """Parse text that must hold exactly one JSON number and nothing else."""
    reader = Reader(text)
    peek = reader.peek()
    if peek is None:
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

    value: Optional[Number] = None
    failure: Optional[JsonError] = None
    try:
        if peek == _MINUS:
            reader.discard()
            value = parse_integer(reader, False)
        elif _is_digit(peek):
            value = parse_integer(reader, True)
        else:
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    except JsonError as exc:
        failure = exc

    if reader.peek() is not None:
        raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    if failure is not None:
        raise failure
    assert value is not None
    return value