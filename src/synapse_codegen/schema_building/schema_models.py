"""Canonical, language-neutral schema entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from synapse_codegen.diagnostics.diagnostic_models import SourceLocation


class PrimitiveKind(str, Enum):
    """Fixed-width scalar kinds recognised in source declarations."""

    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"


@dataclass(frozen=True)
class PrimitiveType:
    kind: PrimitiveKind


@dataclass(frozen=True)
class StringType:
    pass


@dataclass(frozen=True)
class CompositeType:
    """Reference to another declaration by name."""

    name: str


@dataclass(frozen=True)
class SequenceType:
    element: TypeDescriptor


@dataclass(frozen=True)
class OptionalType:
    inner: TypeDescriptor


@dataclass(frozen=True)
class UnknownType:
    """Type token with no known classification; must never reach emission."""

    raw: str


TypeDescriptor = (
    PrimitiveType | StringType | CompositeType | SequenceType | OptionalType | UnknownType
)


@dataclass(frozen=True)
class Field:
    """Named field of a schema with its resolved type."""

    name: str
    type: TypeDescriptor
    doc: str | None
    location: SourceLocation


@dataclass(frozen=True)
class Schema:
    """Canonical description of one marked structure."""

    name: str
    fields: tuple[Field, ...]
    doc: str | None
    location: SourceLocation


def describe_type(descriptor: TypeDescriptor) -> str:
    """Render a descriptor in source notation for messages."""
    if isinstance(descriptor, PrimitiveType):
        return descriptor.kind.value
    if isinstance(descriptor, StringType):
        return "String"
    if isinstance(descriptor, CompositeType):
        return descriptor.name
    if isinstance(descriptor, SequenceType):
        return f"Vec<{describe_type(descriptor.element)}>"
    if isinstance(descriptor, OptionalType):
        return f"Option<{describe_type(descriptor.inner)}>"
    return descriptor.raw
