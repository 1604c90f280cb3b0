"""Skipping over JSON values, with optional capture of the skipped bytes."""

from __future__ import annotations

import re

from jsonpull.containers import ContainerReading
from jsonpull.floats import FloatReading
from jsonpull.values import JsonIterError

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_LBRACKET = ord("[")
_LBRACE = ord("{")
_NULL_START = ord("n")
_TRUE_START = ord("t")
_FALSE_START = ord("f")
_ZERO = ord("0")
_NUMBER_STARTS = frozenset(b"-123456789")
_DIGITS = frozenset(b"0123456789")
_STRICT_NUMBER_END = frozenset(b",]} \t\n\r")

_DIGITS_AND_DOTS = re.compile(rb"[0-9.]*")
_DOT = re.compile(rb"\.")
_STRING_STOP = re.compile(rb'["\\\x00-\x1f]')
_STRING_MARKS = re.compile(rb'["\\]')
_NUMBER_TERMINATORS = re.compile(rb"[ \n\r\t,}\]]")
_ARRAY_MARKS = re.compile(rb'["\[\]]')
_OBJECT_MARKS = re.compile(rb'["{}]')


def _trailing_backslashes(raw: bytes) -> int:
    return len(raw) - len(raw.rstrip(b"\\"))


class Skipping(ContainerReading, FloatReading):
    """Operations that read literals or step over whole JSON values.

    With ``sloppy`` set, numbers, strings, arrays and objects are skipped
    by scanning for their ends without validating their contents.
    """

    sloppy: bool = False

    def read_nil(self) -> bool:
        """Consume ``null`` and return True; otherwise leave the input and return False."""
        token = self._next_token()
        if token == _NULL_START:
            self._skip_bytes(b"ull")
            return True
        self._unread_byte()
        return False

    def read_bool(self) -> bool:
        """Read ``true`` or ``false``."""
        token = self._next_token()
        if token == _TRUE_START:
            self._skip_bytes(b"rue")
            return True
        if token == _FALSE_START:
            self._skip_bytes(b"alse")
            return False
        self.report_error("ReadBool", "expect t or f, but found " + self._char(token))

    def skip(self) -> None:
        """Step over the next JSON value."""
        token = self._next_token()
        if token == _QUOTE:
            self._skip_string()
        elif token == _NULL_START:
            self._skip_bytes(b"ull")
        elif token == _TRUE_START:
            self._skip_bytes(b"rue")
        elif token == _FALSE_START:
            self._skip_bytes(b"alse")
        elif token == _ZERO:
            self._unread_byte()
            self.read_float32()
        elif token in _NUMBER_STARTS:
            self._skip_number()
        elif token == _LBRACKET:
            self._skip_array()
        elif token == _LBRACE:
            self._skip_object()
        else:
            self.report_error("Skip", f"do not know how to skip: {token}")

    def skip_and_return_bytes(self) -> bytes:
        """Step over the next value and return a copy of its bytes."""
        return self.skip_and_append_bytes(b"")

    def skip_and_append_bytes(self, buf: bytes | bytearray) -> bytes:
        """Step over the next value and return ``buf`` followed by its bytes."""
        self._start_capture(buf)
        try:
            self.skip()
        except JsonIterError:
            self._captured = None
            self._capture_started_at = -1
            raise
        return self._stop_capture()

    def find_string_end(self) -> tuple[int, bool]:
        """Find the end of a string body in the buffer.

        Returns the position just past the closing quote, or -1 if the buffer
        holds none, and whether a backslash escape was seen (for -1: whether
        the buffer ends in an unfinished escape).
        """
        escaped = False
        position = self.head
        while True:
            match = _STRING_MARKS.search(self.buf, position, self.tail)
            if match is None:
                break
            index = match.start()
            position = index + 1
            if self.buf[index] == _BACKSLASH:
                escaped = True
                continue
            if not escaped:
                return index + 1, False
            if _trailing_backslashes(self.buf[self.head:index]) % 2 == 0:
                return index + 1, True
        if _trailing_backslashes(self.buf[self.head:self.tail]) % 2 == 0:
            return -1, False
        return -1, True

    def _start_capture(self, buf: bytes | bytearray) -> None:
        if self._captured is not None:
            raise RuntimeError("already in capture mode")
        self._capture_started_at = self.head
        self._captured = bytearray(buf)

    def _stop_capture(self) -> bytes:
        if self._captured is None:
            raise RuntimeError("not in capture mode")
        captured = self._captured + self.buf[self._capture_started_at:self.head]
        self._captured = None
        self._capture_started_at = -1
        return bytes(captured)

    def _skip_number(self) -> None:
        if self.sloppy:
            self._skip_number_sloppy()
            return
        if self._try_skip_number():
            return
        self._unread_byte()
        try:
            self.read_float64()
        except JsonIterError:
            self.error = None
            self.read_big_float()

    def _try_skip_number(self) -> bool:
        end = _DIGITS_AND_DOTS.match(self.buf, self.head, self.tail).end()
        dot_found = False
        for dot in _DOT.finditer(self.buf, self.head, end):
            index = dot.start()
            if dot_found:
                self.report_error("validateNumber", "more than one dot found in number")
            if index + 1 == self.tail:
                return False
            if self.buf[index + 1] not in _DIGITS:
                self.report_error("validateNumber", "missing digit after dot")
            dot_found = True
        if end == self.tail:
            return False
        if self.buf[end] in _STRICT_NUMBER_END:
            if end == self.head:
                return False
            self.head = end
            return True
        return False

    def _skip_string(self) -> None:
        if self.sloppy:
            self._skip_string_sloppy()
            return
        match = _STRING_STOP.search(self.buf, self.head, self.tail)
        if match is not None:
            stop = self.buf[match.start()]
            if stop == _QUOTE:
                self.head = match.end()
                return
            if stop != _BACKSLASH:
                self.report_error("trySkipString", f"invalid control character found: {stop}")
        self._unread_byte()
        self.read_string()

    def _skip_object(self) -> None:
        if self.sloppy:
            self._skip_nested_sloppy(_OBJECT_MARKS, _LBRACE, "incomplete object")
            return

        def skip_field(reader: "Skipping", field: str) -> bool:
            reader.skip()
            return True

        self._unread_byte()
        self.read_object_cb(skip_field)

    def _skip_array(self) -> None:
        if self.sloppy:
            self._skip_nested_sloppy(_ARRAY_MARKS, _LBRACKET, "incomplete array")
            return

        def skip_element(reader: "Skipping") -> bool:
            reader.skip()
            return True

        self._unread_byte()
        self.read_array_cb(skip_element)

    def _skip_number_sloppy(self) -> None:
        while True:
            match = _NUMBER_TERMINATORS.search(self.buf, self.head, self.tail)
            if match is not None:
                self.head = match.start()
                return
            if not self._load_more():
                return

    def _skip_string_sloppy(self) -> None:
        while True:
            end, escaped = self.find_string_end()
            if end != -1:
                self.head = end
                return
            if not self._load_more():
                self.report_error("skipString", "incomplete string")
            if escaped:
                self.head = 1

    def _skip_nested_sloppy(self, marks: re.Pattern, opener: int, incomplete: str) -> None:
        level = 1
        self._increment_depth()
        while True:
            match = marks.search(self.buf, self.head, self.tail)
            if match is None:
                if not self._load_more():
                    self.report_error("skipObject", incomplete)
                continue
            mark = self.buf[match.start()]
            self.head = match.end()
            if mark == _QUOTE:
                self._skip_string_sloppy()
            elif mark == opener:
                level += 1
                self._increment_depth()
            else:
                level -= 1
                self._decrement_depth()
                if level == 0:
                    return