import io
import json

import pytest

from jsonpull.strings import StringReading, encode_rune
from jsonpull.values import JsonIterError

SAMPLES = [
    '"hello"',
    '""',
    r'"a\nb\t\"\\/\b\f\r"',
    r'"\u4e2d\u6587"',
    r'"\ud83d\ude00 smile"',
    r'"\u00e9t\u00E9"',
    '"plain \\u0041 mixed"',
]


@pytest.mark.parametrize("text", SAMPLES)
def test_read_string_matches_json(text):
    assert StringReading(data=text).read_string() == json.loads(text)


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("buf_size", [1, 2, 3, 7])
def test_read_string_from_stream(text, buf_size):
    reader = StringReading(reader=io.BytesIO(text.encode()), buf_size=buf_size)
    assert reader.read_string() == json.loads(text)


def test_read_utf8_string():
    text = json.dumps("héllo wörld", ensure_ascii=False)
    assert StringReading(data=text).read_string() == "héllo wörld"


def test_null_reads_as_empty_string():
    reader = StringReading(data=' null "x"')
    assert reader.read_string() == ""
    assert reader.read_string() == "x"


def test_consecutive_strings():
    reader = StringReading(data='"a" , "b\\n"')
    assert reader.read_string() == "a"
    assert reader._next_token() == ord(",")
    assert reader.read_string() == "b\n"


def test_lone_surrogate_followed_by_text():
    assert StringReading(data=r'"\ud83dx"').read_string() == "\ufffdx"


def test_lone_surrogate_followed_by_other_escape():
    assert StringReading(data=r'"\ud83d\n"').read_string() == "\ufffd\n"


def test_high_surrogate_with_non_surrogate_escape():
    assert StringReading(data=r'"\ud83d\u0041"').read_string() == "\ufffdA"


def test_control_character_is_rejected():
    with pytest.raises(JsonIterError, match="invalid control character found: 1"):
        StringReading(data=b'"a\x01b"').read_string()


def test_unterminated_string():
    with pytest.raises(JsonIterError, match="unexpected end of input"):
        StringReading(data=r'"abc\n').read_string()


def test_unterminated_surrogate():
    with pytest.raises(JsonIterError, match="unexpected end of input"):
        StringReading(data=r'"\ud83d').read_string()


def test_invalid_escape():
    with pytest.raises(JsonIterError, match="invalid escape char after"):
        StringReading(data=r'"\q"').read_string()


def test_invalid_hex_digit():
    with pytest.raises(JsonIterError, match="expects 0~9 or a~f, but found g"):
        StringReading(data=r'"\u00g0"').read_string()


def test_non_string_token():
    with pytest.raises(JsonIterError, match='expects " or n, but found 1') as info:
        StringReading(data="1").read_string()
    assert info.value.operation == "ReadString"


def test_bad_null_literal():
    with pytest.raises(JsonIterError, match="expect ull"):
        StringReading(data="nope").read_string()


def test_read_string_as_slice():
    reader = StringReading(data=b'"abc" "def"')
    assert reader.read_string_as_slice() == b"abc"
    assert reader.read_string_as_slice() == b"def"


def test_read_string_as_slice_from_stream():
    reader = StringReading(reader=io.BytesIO(b'"abcdef" '), buf_size=2)
    assert reader.read_string_as_slice() == b"abcdef"


def test_read_string_as_slice_rejects_non_string():
    with pytest.raises(JsonIterError, match='expects " or n, but found n'):
        StringReading(data=b"null").read_string_as_slice()


@pytest.mark.parametrize("code", [0, 0x41, 0x7F, 0x80, 0x7FF, 0x800, 0xFFFF, 0x10000, 0x10FFFF])
def test_encode_rune_valid(code):
    assert encode_rune(code) == chr(code).encode("utf-8")


@pytest.mark.parametrize("code", [0xD800, 0xDBFF, 0xDC00, 0xDFFF, 0x110000, -1])
def test_encode_rune_invalid_is_replacement(code):
    assert encode_rune(code) == "\uFFFD".encode("utf-8")