"""Value kinds, parser configuration and the error raised on malformed input."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ValueType(enum.IntEnum):
    """Kind of the next JSON element, judged from its first byte."""

    INVALID = 0
    STRING = 1
    NUMBER = 2
    NIL = 3
    BOOL = 4
    ARRAY = 5
    OBJECT = 6


_LEADING_BYTES: dict[int, ValueType] = {
    ord('"'): ValueType.STRING,
    ord("-"): ValueType.NUMBER,
    **{digit: ValueType.NUMBER for digit in b"0123456789"},
    ord("t"): ValueType.BOOL,
    ord("f"): ValueType.BOOL,
    ord("n"): ValueType.NIL,
    ord("["): ValueType.ARRAY,
    ord("{"): ValueType.OBJECT,
}


def value_type_of(byte: int) -> ValueType:
    """Return the kind of JSON element that starts with ``byte``."""
    return _LEADING_BYTES.get(byte, ValueType.INVALID)


@dataclass(frozen=True)
class Config:
    """Options shared by every reader built from it."""

    use_number: bool = False
    case_sensitive: bool = False


class JsonIterError(ValueError):
    """Raised when the input is not the JSON the caller asked for."""

    def __init__(self, message: str, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation