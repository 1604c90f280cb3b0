"""Buffered byte source with the low-level cursor operations of the parser."""

from __future__ import annotations

import re
from typing import BinaryIO, NoReturn, Union

from jsonpull.values import Config, JsonIterError

MAX_DEPTH = 10000

_NON_WHITESPACE = re.compile(rb"[^ \n\t\r]")

Data = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: Data | None) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class ReaderCore:
    """Cursor over JSON input held in memory or pulled from a binary stream.

    ``head`` is the position of the next unread byte in ``buf`` and ``tail``
    the end of the valid data. A stream is read ``buf_size`` bytes at a time.
    """

    def __init__(
        self,
        config: Config | None = None,
        reader: BinaryIO | None = None,
        data: Data | None = b"",
        buf_size: int = 4096,
    ) -> None:
        if reader is not None and buf_size < 1:
            raise ValueError("buf_size must be positive")
        self.config = config if config is not None else Config()
        self.attachment: object = None
        self.error: JsonIterError | None = None
        self._buf_size = buf_size
        self._captured: bytearray | None = None
        self._capture_started_at = -1
        if reader is not None:
            self.reset(reader)
        else:
            self.reset_bytes(data)

    def reset(self, reader: BinaryIO) -> "ReaderCore":
        """Start over reading from another stream."""
        self._reader: BinaryIO | None = reader
        self.buf = b""
        self.head = 0
        self.tail = 0
        self.depth = 0
        self._eof = False
        self.error = None
        return self

    def reset_bytes(self, data: Data | None) -> "ReaderCore":
        """Start over reading from another in-memory input."""
        self._reader = None
        self.buf = _as_bytes(data)
        self.head = 0
        self.tail = len(self.buf)
        self.depth = 0
        self._eof = False
        self.error = None
        return self

    def report_error(self, operation: str, msg: str) -> NoReturn:
        """Raise a JsonIterError describing ``msg`` with the input around the cursor."""
        head = self.head
        peek_start = max(head - 10, 0)
        peek_end = min(head + 10, self.tail)
        context_start = max(head - 50, 0)
        context_end = min(head + 50, self.tail)
        parsing = self._text(self.buf[peek_start:peek_end])
        context = self._text(self.buf[context_start:context_end])
        error = JsonIterError(
            f"{operation}: {msg}, error found in #{head - peek_start} byte of "
            f"...|{parsing}|..., bigger context ...|{context}|...",
            operation,
        )
        self.error = error
        raise error

    def current_buffer(self) -> str:
        """Describe the cursor position and the buffered input, for debugging."""
        peek_start = max(self.head - 10, 0)
        around = self._text(self.buf[peek_start:self.head])
        whole = self._text(self.buf[:self.tail])
        return f"parsing #{self.head} byte, around ...|{around}|..., whole buffer ...|{whole}|..."

    @staticmethod
    def _text(raw: bytes | bytearray) -> str:
        return bytes(raw).decode("utf-8", errors="replace")

    @staticmethod
    def _char(byte: int) -> str:
        return chr(byte)

    def _load_more(self) -> bool:
        if self._reader is None:
            if not self._eof:
                self.head = self.tail
                self._eof = True
            return False
        chunk = self._reader.read(self._buf_size)
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if not chunk:
            self.head = self.tail
            self._eof = True
            return False
        if self._captured is not None:
            self._captured += self.buf[self._capture_started_at:self.tail]
            self._capture_started_at = 0
        self.buf = bytes(chunk)
        self.head = 0
        self.tail = len(self.buf)
        return True

    def _read_byte(self) -> int:
        if self.head == self.tail and not self._load_more():
            return 0
        byte = self.buf[self.head]
        self.head += 1
        return byte

    def _unread_byte(self) -> None:
        if self._eof or self.error is not None:
            return
        self.head -= 1

    def _next_token(self) -> int:
        """Consume and return the next non-whitespace byte, or 0 at the end."""
        while True:
            match = _NON_WHITESPACE.search(self.buf, self.head, self.tail)
            if match is not None:
                self.head = match.end()
                return self.buf[match.start()]
            if not self._load_more():
                return 0

    def _skip_whitespaces_without_load_more(self) -> bool:
        """Move past whitespace in the buffer; True if the buffer ran out."""
        match = _NON_WHITESPACE.search(self.buf, self.head, self.tail)
        if match is None:
            return True
        self.head = match.start()
        return False

    def _skip_bytes(self, expected: bytes) -> None:
        operation = "skipThreeBytes" if len(expected) == 3 else "skipFourBytes"
        for byte in expected:
            if self._read_byte() != byte:
                self.report_error(operation, f"expect {expected.decode('ascii')}")

    def _is_object_end(self) -> bool:
        token = self._next_token()
        if token == ord(","):
            return False
        if token == ord("}"):
            return True
        self.report_error(
            "isObjectEnd", "object ended prematurely, unexpected char " + self._char(token)
        )

    def _increment_depth(self) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            self.report_error("incrementDepth", "exceeded max depth")

    def _decrement_depth(self) -> None:
        self.depth -= 1
        if self.depth < 0:
            self.report_error("decrementDepth", "unexpected negative nesting")