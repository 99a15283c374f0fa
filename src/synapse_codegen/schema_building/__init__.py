"""Schema building domain exports."""

from .schema_builder import build_schemas
from .schema_models import (
    CompositeType,
    Field,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    Schema,
    SequenceType,
    StringType,
    TypeDescriptor,
    UnknownType,
    describe_type,
)
from .type_token_parser import resolve_type_token

__all__ = [
    "CompositeType",
    "Field",
    "OptionalType",
    "PrimitiveKind",
    "PrimitiveType",
    "Schema",
    "SequenceType",
    "StringType",
    "TypeDescriptor",
    "UnknownType",
    "build_schemas",
    "describe_type",
    "resolve_type_token",
]
