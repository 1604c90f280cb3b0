"""The textual JSON number type."""

from __future__ import annotations

import math
import re

_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class Number(str):
    """A JSON number kept as its literal text."""

    __slots__ = ()

    def float64(self) -> float:
        """The number as a float; raises ValueError if invalid or out of range."""
        text = str(self)
        if _SPECIAL_FLOAT.fullmatch(text):
            return float(text)
        if not _DECIMAL_FLOAT.fullmatch(text):
            raise ValueError(f"invalid syntax for float: {text!r}")
        value = float(text)
        if math.isinf(value):
            raise ValueError(f"value out of range: {text!r}")
        return value

    def int64(self) -> int:
        """The number as a 64-bit integer; raises ValueError if invalid or out of range."""
        text = str(self)
        if not _DECIMAL_INT.fullmatch(text):
            raise ValueError(f"invalid syntax for integer: {text!r}")
        value = int(text)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"value out of range: {text!r}")
        return value


def cast_json_number(value: object) -> str | None:
    """Return the literal text of a Number, or None for anything else."""
    if isinstance(value, Number):
        return str(value)
    return None