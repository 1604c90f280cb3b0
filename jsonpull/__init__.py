"""Pull-style JSON reader: read values one by one from bytes, text or binary streams."""

__version__ = "0.1.0"

__all__ = [
    "containers",
    "floats",
    "ints",
    "iterator",
    "numbers",
    "reader",
    "skipping",
    "strings",
    "values",
]