"""Reading JSON numbers as floats, arbitrary-precision values and raw text."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal, InvalidOperation
from typing import NoReturn

from jsonpull.numbers import Number
from jsonpull.reader import ReaderCore
from jsonpull.values import JsonIterError

_NUMBER_CHARS = re.compile(rb"[+\-.eE0-9]*")
_END_OF_NUMBER = frozenset(b",]} \t\n")
_DIGITS = frozenset(b"0123456789")
_MINUS = ord("-")
_DOT = ord(".")
_ZERO = ord("0")


def validate_float(text: str) -> str:
    """Return why ``text`` is not a valid JSON float, or an empty string if it is."""
    if not text:
        return "empty number"
    if text[0] == "-":
        return "-- is not valid"
    dot = text.find(".")
    if dot != -1:
        if dot == len(text) - 1:
            return "dot can not be last character"
        if text[dot + 1] not in "0123456789":
            return "missing digit after dot"
    return ""


class FloatReading(ReaderCore):
    """Floating point and textual number reading operations of the parser."""

    def read_big_float(self) -> Decimal:
        """Read a number exactly, as a Decimal."""
        text = self._read_number_as_string()
        try:
            return Decimal(text)
        except InvalidOperation:
            self._fail("ReadBigFloat", f'parsing "{text}": invalid syntax')

    def read_big_int(self) -> int:
        """Read an integer of any size."""
        text = self._read_number_as_string()
        try:
            return int(text, 10)
        except ValueError:
            self.report_error("ReadBigInt", "invalid big int")

    def read_float32(self) -> float:
        """Read a number rounded to single precision."""
        token = self._next_token()
        if token == _MINUS:
            return -self._read_positive_float(32)
        self._unread_byte()
        return self._read_positive_float(32)

    def read_float64(self) -> float:
        """Read a number as a double precision float."""
        token = self._next_token()
        if token == _MINUS:
            return -self._read_positive_float(64)
        self._unread_byte()
        return self._read_positive_float(64)

    def read_number(self) -> Number:
        """Read a number and keep its literal text."""
        return Number(self._read_number_as_string())

    def _read_positive_float(self, bits: int) -> float:
        operation = f"readFloat{bits}"
        if self.head < self.tail:
            first = self.buf[self.head]
            if first in _END_OF_NUMBER:
                self.report_error(operation, "empty number")
            if first == _DOT:
                self.report_error(operation, "leading dot is invalid")
            if (
                first == _ZERO
                and self.head + 1 < self.tail
                and self.buf[self.head + 1] in _DIGITS
            ):
                self.report_error(operation, "leading zero is invalid")
        return self._read_float_slow_path(bits)

    def _read_float_slow_path(self, bits: int) -> float:
        operation = f"readFloat{bits}SlowPath"
        text = self._read_number_as_string()
        problem = validate_float(text)
        if problem:
            self.report_error(operation, problem)
        try:
            value = float(text)
        except ValueError:
            self._fail(operation, f'parsing "{text}": invalid syntax')
        if math.isinf(value):
            self._fail(operation, f'parsing "{text}": value out of range')
        if bits == 32:
            try:
                packed = struct.pack("<f", value)
            except OverflowError:
                self._fail(operation, f'parsing "{text}": value out of range')
            value = struct.unpack("<f", packed)[0]
        return value

    def _read_number_as_string(self) -> str:
        collected = bytearray()
        while True:
            end = _NUMBER_CHARS.match(self.buf, self.head, self.tail).end()
            collected += self.buf[self.head:end]
            if end < self.tail:
                self.head = end
                break
            self.head = end
            if not self._load_more():
                break
        if not collected:
            self.report_error("readNumberAsString", "invalid number")
        return collected.decode("ascii")

    def _fail(self, operation: str, message: str) -> NoReturn:
        error = JsonIterError(message, operation)
        self.error = error
        raise error