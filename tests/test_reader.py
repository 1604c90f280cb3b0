import io

import pytest

from jsonpull.reader import MAX_DEPTH, ReaderCore
from jsonpull.values import Config, JsonIterError


def test_report_error_raises_with_context():
    core = ReaderCore(data=b"[1, 2, 3]")
    with pytest.raises(JsonIterError) as info:
        core.report_error("Read", "unexpected value type")
    assert info.value.operation == "Read"
    assert str(info.value).startswith(
        "Read: unexpected value type, error found in #0 byte of ...|[1, 2, 3]|..."
    )
    assert core.error is info.value


def test_report_error_peeks_ten_bytes_around_head():
    core = ReaderCore(data=b"x" * 30)
    core.head = 25
    with pytest.raises(JsonIterError) as info:
        core.report_error("op", "msg")
    assert "#10 byte of ...|" + "x" * 15 + "|..." in str(info.value)
    assert "bigger context ...|" + "x" * 30 + "|..." in str(info.value)


def test_current_buffer_describes_position():
    core = ReaderCore(data=b"abc")
    assert core._next_token() == ord("a")
    assert core.current_buffer() == "parsing #1 byte, around ...|a|..., whole buffer ...|abc|..."


def test_stream_is_read_in_chunks():
    data = b'{"key": [1, 2, 3], "other": "value"}'
    core = ReaderCore(reader=io.BytesIO(data), buf_size=3)
    assert bytes(iter(core._read_byte, 0)) == data
    assert core._eof


def test_next_token_skips_whitespace_across_chunks():
    core = ReaderCore(reader=io.BytesIO(b"   \n\t  {"), buf_size=2)
    assert core._next_token() == ord("{")
    assert core._next_token() == 0


def test_next_token_at_end_returns_zero_and_unread_is_ignored():
    core = ReaderCore(data=b"  ")
    assert core._next_token() == 0
    head = core.head
    core._unread_byte()
    assert core.head == head == core.tail


def test_unread_moves_back_one_byte():
    core = ReaderCore(data=b" [1]")
    assert core._next_token() == ord("[")
    core._unread_byte()
    assert core._next_token() == ord("[")


def test_reset_bytes_reuses_reader():
    core = ReaderCore(data=b"")
    assert core._next_token() == 0
    assert core.reset_bytes(b" [") is core
    assert core._next_token() == ord("[")


def test_reset_with_stream():
    core = ReaderCore(data=b"abc")
    core.reset(io.BytesIO(b"xyz"))
    assert bytes(iter(core._read_byte, 0)) == b"xyz"


def test_text_data_is_encoded():
    core = ReaderCore(data="ä")
    assert bytes(iter(core._read_byte, 0)) == "ä".encode("utf-8")


def test_buf_size_must_be_positive_for_streams():
    with pytest.raises(ValueError):
        ReaderCore(reader=io.BytesIO(b"1"), buf_size=0)


def test_default_config():
    config = Config(case_sensitive=True)
    assert ReaderCore(config=config).config is config
    assert ReaderCore().config == Config()


def test_depth_limit():
    core = ReaderCore(data=b"[]")
    core.depth = MAX_DEPTH - 1
    core._increment_depth()
    assert core.depth == MAX_DEPTH
    with pytest.raises(JsonIterError, match="exceeded max depth"):
        core._increment_depth()


def test_negative_depth_is_an_error():
    core = ReaderCore(data=b"]")
    with pytest.raises(JsonIterError, match="unexpected negative nesting"):
        core._decrement_depth()


def test_skip_bytes_matches_literal():
    core = ReaderCore(data=b"null,")
    core._skip_bytes(b"null")
    assert core._next_token() == ord(",")


def test_skip_bytes_mismatch():
    core = ReaderCore(data=b"nulx")
    with pytest.raises(JsonIterError, match="expect null") as info:
        core._skip_bytes(b"null")
    assert info.value.operation == "skipFourBytes"


def test_skip_whitespaces_without_load_more():
    core = ReaderCore(data=b"   x")
    assert core._skip_whitespaces_without_load_more() is False
    assert core.buf[core.head] == ord("x")
    empty = ReaderCore(data=b" \t\n")
    assert empty._skip_whitespaces_without_load_more() is True


def test_is_object_end():
    core = ReaderCore(data=b", }")
    assert core._is_object_end() is False
    assert core._is_object_end() is True


def test_is_object_end_unexpected_char():
    core = ReaderCore(data=b"]")
    with pytest.raises(JsonIterError, match="object ended prematurely, unexpected char ]"):
        core._is_object_end()