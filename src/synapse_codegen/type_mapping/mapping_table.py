"""Fixed Rust to Swift type correspondence table."""

from __future__ import annotations

from synapse_codegen.schema_building.schema_models import PrimitiveKind

SWIFT_PRIMITIVE_TYPES: dict[PrimitiveKind, str] = {
    PrimitiveKind.BOOL: "Bool",
    PrimitiveKind.I8: "Int8",
    PrimitiveKind.I16: "Int16",
    PrimitiveKind.I32: "Int32",
    PrimitiveKind.I64: "Int64",
    PrimitiveKind.U8: "UInt8",
    PrimitiveKind.U16: "UInt16",
    PrimitiveKind.U32: "UInt32",
    PrimitiveKind.U64: "UInt64",
    PrimitiveKind.F32: "Float",
    PrimitiveKind.F64: "Double",
}

SWIFT_STRING_TYPE = "String"


def swift_sequence_type(element: str) -> str:
    return f"[{element}]"


def swift_optional_type(inner: str) -> str:
    return f"{inner}?"
