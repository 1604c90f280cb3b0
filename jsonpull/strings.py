"""Reading JSON strings, including escapes and UTF-16 surrogate pairs."""

from __future__ import annotations

import re

from jsonpull.reader import ReaderCore

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_STRING_STOP = re.compile(rb'["\\\x00-\x1f]')
_REPLACEMENT = "\ufffd".encode("utf-8")
_MAX_RUNE = 0x10FFFF

_SIMPLE_ESCAPES: dict[int, bytes] = {
    ord('"'): b'"',
    ord("\\"): b"\\",
    ord("/"): b"/",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
}

_HEX_DIGITS: dict[int, int] = {byte: int(chr(byte), 16) for byte in b"0123456789abcdefABCDEF"}


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF


def _combine_surrogates(high: int, low: int) -> int:
    if 0xD800 <= high < 0xDC00 and 0xDC00 <= low <= 0xDFFF:
        return (((high - 0xD800) << 10) | (low - 0xDC00)) + 0x10000
    return 0xFFFD


def encode_rune(code: int) -> bytes:
    """UTF-8 bytes of a code point; invalid ones become U+FFFD."""
    if 0 <= code <= _MAX_RUNE and not _is_surrogate(code):
        return chr(code).encode("utf-8")
    return _REPLACEMENT


class StringReading(ReaderCore):
    """String reading operations of the parser."""

    def read_string(self) -> str:
        """Read a JSON string; ``null`` reads as the empty string."""
        token = self._next_token()
        if token == _QUOTE:
            match = _STRING_STOP.search(self.buf, self.head, self.tail)
            if match is not None:
                stop = self.buf[match.start()]
                if stop == _QUOTE:
                    text = self._text(self.buf[self.head:match.start()])
                    self.head = match.end()
                    return text
                if stop != _BACKSLASH:
                    self.report_error("ReadString", f"invalid control character found: {stop}")
            return self._read_string_slow_path()
        if token == ord("n"):
            self._skip_bytes(b"ull")
            return ""
        self.report_error("ReadString", 'expects " or n, but found ' + self._char(token))

    def read_string_as_slice(self) -> bytes:
        """Read the raw bytes of a JSON string without handling escapes."""
        token = self._next_token()
        if token != _QUOTE:
            self.report_error(
                "ReadStringAsSlice", 'expects " or n, but found ' + self._char(token)
            )
        end = self.buf.find(b'"', self.head, self.tail)
        if end != -1:
            raw = bytes(self.buf[self.head:end])
            self.head = end + 1
            return raw
        copied = bytearray(self.buf[self.head:self.tail])
        self.head = self.tail
        while not self._eof:
            byte = self._read_byte()
            if self._eof:
                break
            if byte == _QUOTE:
                break
            copied.append(byte)
        return bytes(copied)

    def _read_string_slow_path(self) -> str:
        out = bytearray()
        while not self._eof:
            byte = self._read_byte()
            if byte == _QUOTE:
                return self._text(out)
            if byte == _BACKSLASH:
                self._read_escaped_char(self._read_byte(), out)
            else:
                out.append(byte)
        self.report_error("readStringSlowPath", "unexpected end of input")

    def _read_escaped_char(self, byte: int, out: bytearray) -> None:
        if byte == ord("u"):
            self._read_unicode_escape(out)
            return
        simple = _SIMPLE_ESCAPES.get(byte)
        if simple is None:
            self.report_error("readEscapedChar", "invalid escape char after \\")
        out += simple

    def _read_unicode_escape(self, out: bytearray) -> None:
        code = self._read_u4()
        if not _is_surrogate(code):
            out += encode_rune(code)
            return
        byte = self._read_byte()
        if self._eof:
            return
        if byte != _BACKSLASH:
            self._unread_byte()
            out += encode_rune(code)
            return
        byte = self._read_byte()
        if self._eof:
            return
        if byte != ord("u"):
            out += encode_rune(code)
            self._read_escaped_char(byte, out)
            return
        low = self._read_u4()
        if self._eof:
            return
        combined = _combine_surrogates(code, low)
        if combined == 0xFFFD:
            out += encode_rune(code)
            out += encode_rune(low)
        else:
            out += encode_rune(combined)

    def _read_u4(self) -> int:
        value = 0
        for _ in range(4):
            byte = self._read_byte()
            if self._eof:
                return value
            digit = _HEX_DIGITS.get(byte)
            if digit is None:
                self.report_error("readU4", "expects 0~9 or a~f, but found " + self._char(byte))
            value = value * 16 + digit
        return value