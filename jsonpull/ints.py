"""Reading JSON integers into bounded signed and unsigned ranges."""

from __future__ import annotations

import re

from jsonpull.reader import ReaderCore

_ZERO = ord("0")
_MINUS = ord("-")
_DOT = ord(".")
_DIGIT_RUN = re.compile(rb"[0-9]*")


class IntegerReading(ReaderCore):
    """Integer reading operations of the parser."""

    def read_uint(self) -> int:
        """Read an unsigned integer of the platform word size (64 bits)."""
        return self.read_uint64()

    def read_int(self) -> int:
        """Read a signed integer of the platform word size (64 bits)."""
        return self.read_int64()

    def read_int8(self) -> int:
        """Read an integer in the int8 range."""
        return self._read_signed(8, "ReadInt8")

    def read_uint8(self) -> int:
        """Read an integer in the uint8 range."""
        return self._read_small_unsigned(8, "ReadUint8")

    def read_int16(self) -> int:
        """Read an integer in the int16 range."""
        return self._read_signed(16, "ReadInt16")

    def read_uint16(self) -> int:
        """Read an integer in the uint16 range."""
        return self._read_small_unsigned(16, "ReadUint16")

    def read_int32(self) -> int:
        """Read an integer in the int32 range."""
        return self._read_signed(32, "ReadInt32")

    def read_uint32(self) -> int:
        """Read an integer in the uint32 range."""
        return self._read_unsigned(self._next_token(), 32)

    def read_int64(self) -> int:
        """Read an integer in the int64 range."""
        return self._read_signed(64, "ReadInt64")

    def read_uint64(self) -> int:
        """Read an integer in the uint64 range."""
        return self._read_unsigned(self._next_token(), 64)

    def _read_small_unsigned(self, bits: int, operation: str) -> int:
        value = self._read_unsigned(self._next_token(), 32)
        if value > (1 << bits) - 1:
            self.report_error(operation, f"overflow: {value}")
        return value

    def _read_signed(self, bits: int, operation: str) -> int:
        source_bits = 64 if bits == 64 else 32
        token = self._next_token()
        if token == _MINUS:
            magnitude = self._read_unsigned(self._read_byte(), source_bits)
            if magnitude > 1 << (bits - 1):
                self.report_error(operation, f"overflow: {magnitude}")
            return -magnitude
        value = self._read_unsigned(token, source_bits)
        if value > (1 << (bits - 1)) - 1:
            self.report_error(operation, f"overflow: {value}")
        return value

    def _read_unsigned(self, first: int, bits: int) -> int:
        operation = f"readUint{bits}"
        limit = (1 << bits) - 1
        if first == _ZERO:
            self._assert_integer()
            return 0
        if not _ZERO < first <= ord("9"):
            self.report_error(operation, "unexpected character: " + self._char(first))
        value = first - _ZERO
        while True:
            end = _DIGIT_RUN.match(self.buf, self.head, self.tail).end()
            if end > self.head:
                run = self.buf[self.head:end]
                value = value * 10 ** len(run) + int(run)
                if value > limit:
                    self.report_error(operation, "overflow")
                self.head = end
            if end < self.tail:
                self._assert_integer()
                return value
            if not self._load_more():
                self._assert_integer()
                return value

    def _assert_integer(self) -> None:
        if self.head < self.tail and self.buf[self.head] == _DOT:
            self.report_error("assertInteger", "can not decode float as int")