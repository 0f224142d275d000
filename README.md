# strictjson

A strict JSON parser for Python. Input that is not valid JSON is rejected
with a `JsonError` that says what went wrong and where. The error gives a
one-based line and column. It also gives a category that tells bad syntax,
an unexpected end of input, I/O failures and unsuitable data apart.

## Features

- Reads JSON from text (`from_str`), from bytes (`from_slice`) or from any
  object with a `read` method (`from_reader`). Streams are read lazily.
- Strict grammar. All of these are errors:
  - trailing commas
  - leading zeros
  - a number with a `.` or an `e` that no digit follows
  - invalid escapes and lone surrogates in `\u` escapes
  - control characters inside strings
  - anything but whitespace after the value
- Objects become `dict`s in input order. A repeated key keeps its first
  place and takes its last value.
- Non-negative integers up to 2**64 - 1 and negative integers down to
  -2**63 come back as exact `int`s. Other numbers, and `-0`, come back as
  `float`s.
- Numbers too large for a float raise a "number out of range" error. They
  do not become infinity.
- Nesting is limited to 128 levels by default. The limit can be switched off
  for each parser.
- Several values that follow one another in one input can be read one by
  one. The parser reports how many bytes it has consumed so far.

## Installation

```
pip install strictjson
```

## Usage

Parse a whole document:

```python
from strictjson.de import from_str, from_slice

from_str('{"name": "widget", "sizes": [1, 2, 3]}')
# {'name': 'widget', 'sizes': [1, 2, 3]}
from_slice(b"[true, false, null]")
# [True, False, None]
```

Read from a stream:

```python
from strictjson.de import from_reader

with open("data.json", "rb") as stream:
    value = from_reader(stream)
```

Handle errors:

```python
from strictjson.de import from_str
from strictjson.error import Category, JsonError

try:
    from_str("{0}")
except JsonError as err:
    print(err)              # key must be a string at line 1 column 2
    print(err.line, err.column)
    print(err.classify())   # Category.SYNTAX
    if err.is_eof():
        ...                 # more input may still arrive
```

`JsonError` also has `is_syntax()`, `is_data()` and `is_io()`. Its `code`
attribute holds an `ErrorCode` member that names the exact reason. If
reading from a stream raises `OSError`, that error is wrapped in a
`JsonError` of category `Category.IO`, and the `OSError` is kept as its
cause.

Read a sequence of values from one input:

```python
from strictjson.stream import iter_values

for value in iter_values('{"k": 3}1"cool""stuff" 3{}  [0, 1, 2]'):
    print(value)
```

Some values have no clear end of their own, such as numbers, `true` and
`null`. Each of these must be followed by one of the following:

- whitespace
- the end of the input
- one of `"[]{},:`

With `StreamDeserializer`, `byte_offset()` tells how many bytes the values
read successfully have taken up. A partial input can then be resumed once
more data arrives:

```python
from strictjson.error import JsonError
from strictjson.stream import StreamDeserializer

data = b"[0] [1] ["
stream = StreamDeserializer(data)
try:
    for value in stream:
        print(value)
except JsonError as err:
    if err.is_eof():
        remaining = data[stream.byte_offset():]   # b"["
```

Parse without a depth limit:

```python
from strictjson.de import Deserializer

parser = Deserializer("[" * 1000 + "]" * 1000)
parser.disable_recursion_limit()
value = parser.parse_value()
parser.end()   # raises if anything but whitespace follows
```

`Deserializer.ignore_value()` checks the next value and skips it without
building it.

Smaller building blocks:

- `strictjson.numbers.number_from_str` parses text that holds exactly one
  JSON number and nothing else.
- `strictjson.reader.Reader` is the byte source the parser reads from. It
  peeks at bytes, tracks positions and scans strings.
- `strictjson.linecol.LineColIterator` wraps an iterable of byte values. It
  counts lines, columns and the byte offset as it goes.

## What it does not do

The package only reads JSON. It does not turn Python values into JSON text.
It does not map parsed values onto classes or schemas. It has no command of
its own.

## Running the tests

```
pip install -e ".[test]"
pytest
```