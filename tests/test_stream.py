import io
import json

import pytest

from strictjson.error import ErrorCode, JsonError
from strictjson.stream import StreamDeserializer, iter_values


def test_mixed_values_from_text():
    data = '{"k": 3}1"cool""stuff" 3{}  [0, 1, 2]'
    assert list(iter_values(data)) == [{"k": 3}, 1, "cool", "stuff", 3, {}, [0, 1, 2]]


def test_byte_offset_progress_and_eof_error():
    data = b"[0] [1] ["
    stream = StreamDeserializer(data)
    assert stream.byte_offset() == 0

    assert next(stream) == [0]
    assert stream.byte_offset() == 3

    assert next(stream) == [1]
    assert stream.byte_offset() == 7

    with pytest.raises(JsonError) as info:
        next(stream)
    assert info.value.is_eof()
    assert stream.byte_offset() == 8


def test_exhausted_after_failure_in_memory():
    data = b"[0] [1] ["
    stream = StreamDeserializer(data)
    next(stream)
    next(stream)
    with pytest.raises(JsonError):
        next(stream)
    with pytest.raises(StopIteration):
        next(stream)
    assert stream.byte_offset() == len(data)


def test_empty_input_yields_nothing():
    stream = iter_values("")
    assert list(stream) == []
    assert stream.byte_offset() == 0


def test_whitespace_only_consumes_everything():
    data = "  \n\t "
    stream = iter_values(data)
    assert list(stream) == []
    assert stream.byte_offset() == len(data)


def test_number_followed_by_garbage_is_trailing_characters():
    stream = iter_values("1x")
    with pytest.raises(JsonError) as info:
        next(stream)
    assert info.value.code is ErrorCode.TRAILING_CHARACTERS
    assert (info.value.line, info.value.column) == (1, 2)
    assert stream.byte_offset() == 1

    with pytest.raises(JsonError) as info:
        next(stream)
    assert info.value.code is ErrorCode.EXPECTED_SOME_VALUE

    with pytest.raises(StopIteration):
        next(stream)


def test_literals_must_be_separated():
    stream = iter_values("truefalse")
    with pytest.raises(JsonError) as info:
        next(stream)
    assert info.value.code is ErrorCode.TRAILING_CHARACTERS
    assert (info.value.line, info.value.column) == (1, 5)
    assert stream.byte_offset() == 4


def test_literals_separated_by_whitespace():
    assert list(iter_values("true false null")) == [True, False, None]


def test_number_followed_by_delineated_value():
    assert list(iter_values('1[2]"a"{"b":null}')) == [1, [2], "a", {"b": None}]


def test_string_directly_followed_by_number():
    assert list(iter_values('"a"1')) == ["a", 1]


def test_reads_from_binary_stream():
    stream = io.BytesIO(b'{"a": 1}\n[2, 3]\n"x"\n')
    assert list(iter_values(stream)) == [{"a": 1}, [2, 3], "x"]


def test_stream_stops_after_failure():
    stream = iter_values(io.BytesIO(b"[1] ]"))
    assert next(stream) == [1]
    with pytest.raises(JsonError) as info:
        next(stream)
    assert info.value.code is ErrorCode.EXPECTED_SOME_VALUE
    with pytest.raises(StopIteration):
        next(stream)


def test_iter_returns_self():
    stream = StreamDeserializer("[]")
    assert iter(stream) is stream
    assert list(stream) == [[]]


@pytest.mark.parametrize(
    "values",
    [
        [1, 2, 3],
        ["a", "b"],
        [{"x": [1, {"y": None}]}, [], {}],
        [-1.5, True, None],
    ],
)
def test_round_trip_with_standard_encoder(values):
    text = " ".join(json.dumps(value) for value in values)
    assert list(iter_values(text)) == values


def test_offset_reaches_end_after_complete_read():
    data = b'{"a":[1,2]} 7 "z"'
    stream = iter_values(data)
    list(stream)
    assert stream.byte_offset() == len(data)


def test_rejects_unreadable_source():
    with pytest.raises(TypeError):
        StreamDeserializer(42)