"""
Field types for export schemas.

Each type knows its Arrow representation (used by the CSV codec and reader)
and how to check a value coming out of the store.
"""

from typing import Any

import pyarrow as pa


class BaseType:
    """Base class for schema field types."""

    name = "base"

    def to_arrow(self) -> pa.DataType:
        raise NotImplementedError

    def accepts(self, value: Any) -> bool:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class String(BaseType):
    """UTF-8 string field. Empty strings are valid values; None is not."""

    name = "string"

    def to_arrow(self) -> pa.DataType:
        return pa.string()

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)
