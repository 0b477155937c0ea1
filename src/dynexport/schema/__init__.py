"""
Schema system for dynexport.

Provides field types and the record schema for exported tables.
"""

from .types import (
    BaseType,
    String,
)

# Import types module for Types.X syntax
from . import types as Types
from .schema import EXPORT_SCHEMA, Record, Schema

__all__ = [
    # Types module for Types.X syntax
    "Types",
    # Individual type classes
    "BaseType",
    "String",
    # Schema
    "Schema",
    "Record",
    "EXPORT_SCHEMA",
]
