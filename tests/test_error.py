import pytest

from strictjson.error import (
    Category,
    ErrorCode,
    JsonError,
    invalid_type,
    io_error,
    make_error,
    parse_line_col,
    syntax_error,
)


def test_error_debug_representation():
    err = syntax_error(ErrorCode.KEY_MUST_BE_A_STRING, 1, 2)
    assert repr(err) == 'Error("key must be a string", line: 1, column: 2)'


def test_float_one_keeps_fraction():
    err = invalid_type(1.0, "a string")
    assert str(err) == "invalid type: floating point `1.0`, expected a string"


def test_large_float_uses_exponent():
    err = invalid_type(12e40, "a string")
    assert str(err) == "invalid type: floating point `1.2e41`, expected a string"


def test_null_unexpected():
    err = invalid_type(None, "a boolean")
    assert str(err) == "invalid type: null, expected a boolean"
    assert err.is_data()


@pytest.mark.parametrize(
    "code, category",
    [
        (ErrorCode.EOF_WHILE_PARSING_LIST, Category.EOF),
        (ErrorCode.EOF_WHILE_PARSING_OBJECT, Category.EOF),
        (ErrorCode.EOF_WHILE_PARSING_STRING, Category.EOF),
        (ErrorCode.EOF_WHILE_PARSING_VALUE, Category.EOF),
        (ErrorCode.EXPECTED_COLON, Category.SYNTAX),
        (ErrorCode.TRAILING_COMMA, Category.SYNTAX),
        (ErrorCode.RECURSION_LIMIT_EXCEEDED, Category.SYNTAX),
        (ErrorCode.NUMBER_OUT_OF_RANGE, Category.SYNTAX),
    ],
)
def test_classify(code, category):
    assert syntax_error(code, 1, 1).classify() is category


def test_predicates_are_exclusive():
    err = syntax_error(ErrorCode.EOF_WHILE_PARSING_VALUE, 1, 1)
    assert err.is_eof()
    assert not err.is_syntax()
    assert not err.is_data()
    assert not err.is_io()


def test_display_with_position():
    err = syntax_error(ErrorCode.EXPECTED_COLON, 2, 5)
    assert str(err) == "expected `:` at line 2 column 5"


def test_display_without_position():
    err = syntax_error(ErrorCode.TRAILING_CHARACTERS, 0, 0)
    assert str(err) == "trailing characters"


def test_io_error_keeps_cause():
    cause = OSError("boom")
    err = io_error(cause)
    assert err.is_io()
    assert str(err) == "boom"
    assert err.__cause__ is cause
    assert (err.line, err.column) == (0, 0)


def test_parse_line_col_splits_suffix():
    assert parse_line_col("bad thing at line 12 column 7") == ("bad thing", 12, 7)


@pytest.mark.parametrize(
    "msg",
    [
        "no suffix here",
        "bad at line x column 7",
        "bad at line 1 column 2 extra",
        "bad at line 1 column ",
        "bad at line 1 col 2",
    ],
)
def test_parse_line_col_rejects(msg):
    assert parse_line_col(msg) is None


def test_make_error_round_trips_position():
    original = syntax_error(ErrorCode.TRAILING_COMMA, 4, 9)
    rebuilt = make_error(str(original))
    assert (rebuilt.line, rebuilt.column) == (4, 9)
    assert rebuilt.description == "trailing comma"
    assert rebuilt.is_data()
    assert str(rebuilt) == str(original)


def test_make_error_plain_message():
    err = make_error("oops")
    assert err.code is ErrorCode.MESSAGE
    assert str(err) == "oops"
    assert err.line == 0


def test_fix_position_fills_missing_position():
    err = make_error("oops")
    fixed = err.fix_position(lambda code: syntax_error(code, 3, 4))
    assert str(fixed) == "oops at line 3 column 4"
    assert fixed.code is ErrorCode.MESSAGE


def test_fix_position_keeps_existing_position():
    err = syntax_error(ErrorCode.INVALID_NUMBER, 5, 6)
    fixed = err.fix_position(lambda code: syntax_error(code, 1, 1))
    assert fixed is err
    assert (fixed.line, fixed.column) == (5, 6)


def test_error_is_raisable():
    err = syntax_error(ErrorCode.INVALID_ESCAPE, 1, 3)
    with pytest.raises(JsonError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "invalid escape at line 1 column 3"
    assert info.value.code is ErrorCode.INVALID_ESCAPE


def test_debug_escapes_quotes():
    err = syntax_error(ErrorCode.EXPECTED_DOUBLE_QUOTE, 1, 1)
    assert repr(err) == 'Error("expected `\\"`", line: 1, column: 1)'