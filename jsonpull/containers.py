"""Reading JSON arrays and objects element by element or through callbacks."""

from __future__ import annotations

import re
from typing import Callable

from jsonpull.strings import StringReading

_QUOTE = ord('"')
_COLON = ord(":")
_COMMA = ord(",")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_LBRACE = ord("{")
_RBRACE = ord("}")
_NULL_START = ord("n")
_FIELD_STOP = re.compile(rb'["\\]')

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x1000193


def _wrap_int64(value: int) -> int:
    return ((value + (1 << 63)) % (1 << 64)) - (1 << 63)


def _fnv_step(hash_value: int, code: int) -> int:
    return _wrap_int64((hash_value ^ code) * _FNV_PRIME)


def _fold(code: int, case_sensitive: bool) -> int:
    if not case_sensitive and ord("A") <= code <= ord("Z"):
        return code + (ord("a") - ord("A"))
    return code


def calc_hash(text: str, case_sensitive: bool) -> int:
    """FNV-1a hash of a field name as a signed 64-bit value."""
    if not case_sensitive:
        text = text.lower()
    hash_value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        hash_value = _fnv_step(hash_value, byte)
    return hash_value


class ContainerReading(StringReading):
    """Array and object reading operations of the parser."""

    def read_array(self) -> bool:
        """Advance into an array; True while there is another element to read."""
        token = self._next_token()
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return False
        if token == _LBRACKET:
            if self._next_token() != _RBRACKET:
                self._unread_byte()
                return True
            return False
        if token == _RBRACKET:
            return False
        if token == _COMMA:
            return True
        self.report_error(
            "ReadArray", "expect [ or , or ] or n, but found " + self._char(token)
        )

    def read_array_cb(self, callback: Callable[["ContainerReading"], bool]) -> bool:
        """Call ``callback`` once per array element; False if it asked to stop."""
        token = self._next_token()
        if token == _LBRACKET:
            self._increment_depth()
            token = self._next_token()
            if token != _RBRACKET:
                self._unread_byte()
                if not callback(self):
                    self._decrement_depth()
                    return False
                token = self._next_token()
                while token == _COMMA:
                    if not callback(self):
                        self._decrement_depth()
                        return False
                    token = self._next_token()
                if token != _RBRACKET:
                    self.depth -= 1
                    self.report_error(
                        "ReadArrayCB", "expect ] in the end, but found " + self._char(token)
                    )
            self._decrement_depth()
            return True
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return True
        self.report_error("ReadArrayCB", "expect [ or n, but found " + self._char(token))

    def read_object(self) -> str:
        """Read the next field name of an object; the empty string when it ends."""
        token = self._next_token()
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return ""
        if token == _LBRACE:
            token = self._next_token()
            if token == _QUOTE:
                self._unread_byte()
                return self._read_field_name("ReadObject")
            if token == _RBRACE:
                return ""
            self.report_error("ReadObject", 'expect " after {, but found ' + self._char(token))
        if token == _COMMA:
            return self._read_field_name("ReadObject")
        if token == _RBRACE:
            return ""
        self.report_error(
            "ReadObject", "expect { or , or } or n, but found " + self._char(token)
        )

    def read_object_cb(self, callback: Callable[["ContainerReading", str], bool]) -> bool:
        """Call ``callback`` with each field name; the value is left for it to read."""
        return self._read_fields(callback, "ReadObject", "ReadObjectCB")

    def read_map_cb(self, callback: Callable[["ContainerReading", str], bool]) -> bool:
        """Call ``callback`` with each key of an object used as a map."""
        return self._read_fields(callback, "ReadMapCB", "ReadMapCB")

    def _read_fields(
        self,
        callback: Callable[["ContainerReading", str], bool],
        field_operation: str,
        operation: str,
    ) -> bool:
        token = self._next_token()
        if token == _LBRACE:
            self._increment_depth()
            token = self._next_token()
            if token == _QUOTE:
                self._unread_byte()
                if not callback(self, self._read_field_name(field_operation)):
                    self._decrement_depth()
                    return False
                token = self._next_token()
                while token == _COMMA:
                    if not callback(self, self._read_field_name(field_operation)):
                        self._decrement_depth()
                        return False
                    token = self._next_token()
                if token != _RBRACE:
                    self.depth -= 1
                    self.report_error(operation, "object not ended with }")
                self._decrement_depth()
                return True
            if token == _RBRACE:
                self._decrement_depth()
                return True
            self.depth -= 1
            self.report_error(operation, 'expect " after {, but found ' + self._char(token))
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return True
        self.report_error(operation, "expect { or n, but found " + self._char(token))

    def _read_field_name(self, operation: str) -> str:
        field = self.read_string()
        token = self._next_token()
        if token != _COLON:
            self.report_error(
                operation, "expect : after object field, but found " + self._char(token)
            )
        return field

    def _read_field_hash(self) -> int:
        case_sensitive = self.config.case_sensitive
        hash_value = _FNV_OFFSET
        token = self._next_token()
        if token != _QUOTE:
            self.report_error("readFieldHash", 'expect ", but found ' + self._char(token))
        while True:
            match = _FIELD_STOP.search(self.buf, self.head, self.tail)
            end = match.start() if match is not None else self.tail
            for byte in self.buf[self.head:end]:
                hash_value = _fnv_step(hash_value, _fold(byte, case_sensitive))
            if match is not None:
                if self.buf[end] == _QUOTE:
                    self.head = end + 1
                else:
                    self.head = end
                    for char in self._read_string_slow_path():
                        hash_value = _fnv_step(hash_value, _fold(ord(char), case_sensitive))
                token = self._next_token()
                if token != _COLON:
                    self.report_error("readFieldHash", "expect :, but found " + self._char(token))
                return hash_value
            self.head = self.tail
            if not self._load_more():
                self.report_error("readFieldHash", "incomplete field name")

    def _read_object_start(self) -> bool:
        token = self._next_token()
        if token == _LBRACE:
            if self._next_token() == _RBRACE:
                return False
            self._unread_byte()
            return True
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return False
        self.report_error("readObjectStart", "expect { or n, but found " + self._char(token))

    def _read_object_field_as_bytes(self) -> bytes:
        field = self.read_string_as_slice()
        if self._skip_whitespaces_without_load_more() and not self._load_more():
            return field
        if self.buf[self.head] != _COLON:
            self.report_error(
                "readObjectFieldAsBytes",
                "expect : after object field, but found " + self._char(self.buf[self.head]),
            )
        self.head += 1
        if self._skip_whitespaces_without_load_more():
            self._load_more()
        return field