# jsonpull

`jsonpull` is a pull-style JSON reader. Instead of turning a whole document
into Python objects at once, you walk the input and ask for the next value in
the shape you expect: a string, an integer of a given width, a float, an
array element, an object field, or a value to skip.

The iterator reads from `bytes`, a `str`, or any binary stream with a
`read(size)` method, loading more input as it goes.

## Installation

```
pip install jsonpull
```

## Creating an iterator

`jsonpull.iterator` has three constructors, each taking a
`jsonpull.values.Config` (or `None` for the defaults):

- `parse(config, reader, buf_size=4096)` reads from a binary stream,
  `buf_size` bytes at a time;
- `parse_bytes(config, data)` reads from bytes held in memory;
- `parse_string(config, text)` reads from a `str`.

An `Iterator` can be reused with `reset(reader)` or `reset_bytes(data)`.

## Reading values

```python
from jsonpull.iterator import parse_string
from jsonpull.values import Config

it = parse_string(Config(), '{"name": "widget", "sizes": [1, 2, 3], "price": 9.5}')

field = it.read_object()
while field:
    if field == "name":
        print(it.read_string())
    elif field == "sizes":
        while it.read_array():
            print(it.read_int32())
    elif field == "price":
        print(it.read_float64())
    else:
        it.skip()
    field = it.read_object()
```

`read_object()` returns the next field name, or the empty string when the
object ends (or the value is `null`). `read_array()` returns `True` while
there is another element to read.

`read()` returns the next value as plain Python data (`dict`, `list`,
`str`, `float`, `bool` or `None`). With `Config(use_number=True)` numbers
come back as `jsonpull.numbers.Number`, a `str` subclass that keeps the
literal text:

```python
from jsonpull.iterator import parse_string
from jsonpull.values import Config

it = parse_string(Config(use_number=True), "123456789123456789123456789")
value = it.read()
print(str(value))        # 123456789123456789123456789
```

`Number.float64()` and `Number.int64()` convert it, raising `ValueError`
when the text is invalid or out of range.

`what_is_next()` returns the `ValueType` of the upcoming value
(`STRING`, `NUMBER`, `NIL`, `BOOL`, `ARRAY`, `OBJECT` or `INVALID`)
without consuming it.

### Typed readers

- strings: `read_string()` (handles escapes and surrogate pairs; `null`
  reads as `""`), `read_string_as_slice()` (raw bytes, escapes untouched);
- integers: `read_int8`, `read_int16`, `read_int32`, `read_int64`,
  `read_uint8`, `read_uint16`, `read_uint32`, `read_uint64`, and
  `read_int` / `read_uint` (64-bit);
- floats: `read_float64()`, and `read_float32()` which rounds to single
  precision;
- exact numbers: `read_big_int()` returns an `int` of any size,
  `read_big_float()` a `decimal.Decimal`, `read_number()` a `Number`;
- literals: `read_bool()`, and `read_nil()` which consumes `null` and
  returns `True`, or leaves the input alone and returns `False`.

## Streams

```python
import io
from jsonpull.iterator import parse
from jsonpull.values import Config

it = parse(Config(), io.BytesIO(b'[1, 2, 3]'), 4096)
print(it.read())        # [1.0, 2.0, 3.0]
```

## Callbacks

`read_array_cb`, `read_object_cb` and `read_map_cb` call a function for
every element or field, leaving the value for the callback to read. Return
`True` from the callback to continue, `False` to stop; the method returns
`False` if it was stopped. Nesting through these methods is limited to a
depth of 10000.

```python
from jsonpull.iterator import parse_string
from jsonpull.values import Config

seen = {}

def on_field(it, key):
    seen[key] = it.read()
    return True

parse_string(Config(), '{"a": 1, "b": [true, null]}').read_map_cb(on_field)
```

## Errors

Malformed input raises `jsonpull.values.JsonIterError`, a `ValueError`
whose `operation` attribute names the step that failed. The message shows
the bytes around the position where the problem was found, and the error is
also kept on the iterator's `error` attribute. `current_buffer()` describes
the cursor position and buffered input for debugging.

Integer readers check their range: `read_int8()` on `128` raises, as does
reading `1.5` as an integer.

## Skipping and raw capture

`skip()` moves past the next value, validating it on the way.
`skip_and_return_bytes()` does the same and returns the raw bytes of the
skipped value, which is handy for deferring the decoding of part of a
document; `skip_and_append_bytes(buf)` returns them after `buf`.

Setting the `sloppy` attribute of an iterator to `True` makes `skip()` find
the ends of numbers, strings, arrays and objects by scanning, without
validating their contents.

## Helpers

- `jsonpull.values.value_type_of(byte)` gives the `ValueType` a byte starts;
- `jsonpull.floats.validate_float(text)` returns why a number's text is not
  a valid float, or `""`;
- `jsonpull.containers.calc_hash(text, case_sensitive)` is the FNV-1a hash
  of a field name as a signed 64-bit value;
- `jsonpull.strings.encode_rune(code)` gives the UTF-8 bytes of a code
  point, with invalid ones replaced by U+FFFD;
- `jsonpull.numbers.cast_json_number(value)` returns the text of a `Number`
  or `None`.

## What it does not do

`jsonpull` only reads. It has no writer or encoder for producing JSON, and
it does not bind JSON to classes or dataclasses: mapping values onto your
own types is done by hand with the readers above.