"""Type token resolution tests."""

from __future__ import annotations

import pytest
from synapse_codegen.schema_building import (
    CompositeType,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    SequenceType,
    StringType,
    UnknownType,
    resolve_type_token,
)

KNOWN = frozenset({"Reef", "Telemetry"})


@pytest.mark.parametrize(
    ("token", "kind"),
    [
        ("bool", PrimitiveKind.BOOL),
        ("i8", PrimitiveKind.I8),
        ("i16", PrimitiveKind.I16),
        ("i32", PrimitiveKind.I32),
        ("i64", PrimitiveKind.I64),
        ("u8", PrimitiveKind.U8),
        ("u16", PrimitiveKind.U16),
        ("u32", PrimitiveKind.U32),
        ("u64", PrimitiveKind.U64),
        ("f32", PrimitiveKind.F32),
        ("f64", PrimitiveKind.F64),
    ],
)
def test_primitives(token: str, kind: PrimitiveKind) -> None:
    assert resolve_type_token(token, KNOWN) == PrimitiveType(kind=kind)


@pytest.mark.parametrize(
    "token", ["String", "std::string::String", "::std::string::String", "&str", "&'static str"]
)
def test_string_like_tokens(token: str) -> None:
    assert resolve_type_token(token, KNOWN) == StringType()


def test_nested_wrappers_resolve_recursively() -> None:
    assert resolve_type_token("Vec<Option<Reef>>", KNOWN) == SequenceType(
        element=OptionalType(inner=CompositeType(name="Reef"))
    )
    assert resolve_type_token("std::option::Option<Vec<f64>>", KNOWN) == OptionalType(
        inner=SequenceType(element=PrimitiveType(kind=PrimitiveKind.F64))
    )
    assert resolve_type_token("[i32; 3]", KNOWN) == SequenceType(
        element=PrimitiveType(kind=PrimitiveKind.I32)
    )
    assert resolve_type_token("&'a [Telemetry]", KNOWN) == SequenceType(
        element=CompositeType(name="Telemetry")
    )
    assert resolve_type_token("VecDeque<String>", KNOWN) == SequenceType(element=StringType())


def test_composite_requires_a_scanned_declaration_name() -> None:
    assert resolve_type_token("Reef", KNOWN) == CompositeType(name="Reef")
    assert resolve_type_token("Meters", KNOWN) == UnknownType(raw="Meters")
    assert resolve_type_token("crate::Reef", KNOWN) == UnknownType(raw="crate::Reef")


@pytest.mark.parametrize(
    "token",
    [
        "usize",
        "isize",
        "i128",
        "char",
        "HashMap<String, i32>",
        "Box<Reef>",
        "(i32, i32)",
        "()",
        "Vec<i32, Global>",
        "Option",
        "dyn Fn()",
        "Vec<",
    ],
)
def test_unsupported_tokens_are_unknown(token: str) -> None:
    assert isinstance(resolve_type_token(token, KNOWN), UnknownType)


def test_unknown_inside_wrapper_keeps_inner_token() -> None:
    assert resolve_type_token("Vec<Uuid>", KNOWN) == SequenceType(element=UnknownType(raw="Uuid"))
