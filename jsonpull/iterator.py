"""The pull parser that reads JSON values one by one."""

from __future__ import annotations

from typing import Any, BinaryIO

from jsonpull.ints import IntegerReading
from jsonpull.reader import Data
from jsonpull.skipping import Skipping
from jsonpull.values import Config, ValueType, value_type_of


class Iterator(Skipping, IntegerReading):
    """Reads JSON from bytes, text or a binary stream, value by value."""

    def what_is_next(self) -> ValueType:
        """Kind of the next value, without consuming it."""
        value_type = value_type_of(self._next_token())
        self._unread_byte()
        return value_type

    def read(self) -> Any:
        """Read the next value as plain Python data.

        Numbers become floats, or Number when the config asks for them.
        """
        value_type = self.what_is_next()
        if value_type is ValueType.STRING:
            return self.read_string()
        if value_type is ValueType.NUMBER:
            if self.config.use_number:
                return self.read_number()
            return self.read_float64()
        if value_type is ValueType.NIL:
            self._skip_bytes(b"null")
            return None
        if value_type is ValueType.BOOL:
            return self.read_bool()
        if value_type is ValueType.ARRAY:
            return self._read_list()
        if value_type is ValueType.OBJECT:
            return self._read_dict()
        self.report_error("Read", f"unexpected value type: {int(value_type)}")

    def _read_list(self) -> list[Any]:
        items: list[Any] = []

        def collect(reader: "Iterator") -> bool:
            items.append(reader.read())
            return True

        self.read_array_cb(collect)
        return items

    def _read_dict(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}

        def collect(reader: "Iterator", field: str) -> bool:
            fields[field] = reader.read()
            return True

        self.read_map_cb(collect)
        return fields


def parse(config: Config | None, reader: BinaryIO, buf_size: int = 4096) -> Iterator:
    """Iterator over a binary stream read ``buf_size`` bytes at a time."""
    return Iterator(config, reader=reader, buf_size=buf_size)


def parse_bytes(config: Config | None, data: Data) -> Iterator:
    """Iterator over bytes held in memory."""
    return Iterator(config, data=data)


def parse_string(config: Config | None, text: str) -> Iterator:
    """Iterator over a text string."""
    return Iterator(config, data=text)