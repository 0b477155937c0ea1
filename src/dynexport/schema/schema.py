"""
Record schema for the export.

A Schema is an ordered mapping of field name -> type. Field order is the
column order of the exported CSV and of every Record tuple.

    Store item (dict)                       Record (tuple)
    {"UUID": "a1", "Customer": "acme",  ->  ("a1", "acme")
     "extra": ...}

Attributes not declared in the schema are ignored. A declared field that is
missing or has the wrong type fails the whole export with EncodingError.
"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple

import pyarrow as pa

from dynexport.errors import EncodingError
from dynexport.schema.types import BaseType, String

Record = Tuple[str, ...]


class Schema:
    """
    Ordered, fixed set of export fields.

    Example:
        >>> schema = Schema({"UUID": String(), "Customer": String()})
        >>> schema.record_from_item({"UUID": "a1", "Customer": "acme"})
        ('a1', 'acme')
    """

    def __init__(self, fields: Dict[str, BaseType]):
        if not fields:
            raise ValueError("Schema requires at least one field")
        self.fields: Dict[str, BaseType] = dict(fields)

    @property
    def field_names(self) -> List[str]:
        return list(self.fields)

    def to_arrow(self) -> pa.Schema:
        # Non-nullable: records never carry missing values
        return pa.schema(
            [pa.field(name, ftype.to_arrow(), nullable=False) for name, ftype in self.fields.items()]
        )

    def record_from_item(self, item: Mapping[str, Any]) -> Record:
        """
        Build a Record from a raw store item.

        Raises:
            EncodingError: if a declared field is absent or mistyped
        """
        values = []
        for name, ftype in self.fields.items():
            if name not in item:
                raise EncodingError(f"Item is missing field {name!r}: {dict(item)!r}")
            value = item[name]
            if not ftype.accepts(value):
                raise EncodingError(
                    f"Field {name!r} expected {ftype.name}, got {type(value).__name__}: {value!r}"
                )
            values.append(value)
        return tuple(values)

    def validate_record(self, record: Sequence[Any]) -> None:
        """Raise EncodingError unless record has exactly one valid value per field."""
        if len(record) != len(self.fields):
            raise EncodingError(
                f"Record has {len(record)} values, schema has {len(self.fields)} fields: {record!r}"
            )
        for (name, ftype), value in zip(self.fields.items(), record):
            if not ftype.accepts(value):
                raise EncodingError(
                    f"Field {name!r} expected {ftype.name}, got {type(value).__name__}: {value!r}"
                )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Schema) and self.fields == other.fields

    def __repr__(self) -> str:
        return f"Schema({self.fields!r})"


# Layout of the exported table
EXPORT_SCHEMA = Schema({"UUID": String(), "Customer": String()})
