"""Rust source scanner tests."""

from __future__ import annotations

from synapse_codegen.diagnostics.diagnostic_models import DiagnosticKind
from synapse_codegen.source_scanning import (
    DeclarationKind,
    DeclarationShape,
    SourceText,
    scan_source,
)


def _scan(text: str):
    return scan_source(SourceText(path="models.rs", text=text))


def test_extracts_struct_with_fields_attributes_and_docs() -> None:
    result = _scan(
        """
/// A reef location with vibe scoring
#[derive(Debug, Clone, Synapse)]
pub struct Reef {
    /// Latitude in degrees
    pub lat: f64,
    pub vibe_score: i32,
    pub name: String,
}
"""
    )

    assert result.diagnostics == ()
    (reef,) = result.declarations
    assert reef.name == "Reef"
    assert reef.kind == DeclarationKind.STRUCT
    assert reef.shape == DeclarationShape.NAMED
    assert reef.doc == "A reef location with vibe scoring"
    assert [attribute.text for attribute in reef.attributes] == ["derive(Debug, Clone, Synapse)"]
    assert [(field.name, field.type_token) for field in reef.fields] == [
        ("lat", "f64"),
        ("vibe_score", "i32"),
        ("name", "String"),
    ]
    assert reef.fields[0].doc == "Latitude in degrees"
    assert reef.location.line == 4
    assert reef.fields[1].location.line == 7


def test_keeps_type_tokens_verbatim() -> None:
    result = _scan(
        """
struct Holder<'a, T: Clone> {
    items: Vec<Option< std::string::String >>,
    bytes: [u8; 4],
    label: &'a str,
    lookup: HashMap<String, Vec<T>>,
}
"""
    )

    (holder,) = result.declarations
    assert [field.type_token for field in holder.fields] == [
        "Vec<Option< std::string::String >>",
        "[u8; 4]",
        "&'a str",
        "HashMap<String, Vec<T>>",
    ]
    assert holder.generic_params == ("T",)


def test_ignores_unrelated_items_and_comments() -> None:
    result = _scan(
        """
//! Crate docs mentioning #[derive(Synapse)] struct Fake { a: i32 }
use std::fmt;

// struct Commented { x: i32 }
/* struct Blocked { y: i32 } */
const GREETING: &str = "struct NotReal { z: i32 }";

fn helper(value: i32) -> i32 {
    struct Local { inner: i32 }
    value + 1
}

impl fmt::Display for Thing {
    fn fmt(&self, f: &mut fmt::Formatter<'_>) -> fmt::Result {
        write!(f, "{}", '}')
    }
}

pub struct Thing {
    pub value: u8,
}
"""
    )

    assert result.diagnostics == ()
    assert [declaration.name for declaration in result.declarations] == ["Thing"]


def test_scans_enums_unit_and_tuple_structs() -> None:
    result = _scan(
        """
#[derive(Synapse)]
pub enum Mood { Calm, Stormy(u8) }

pub struct Marker;

pub(crate) struct Pair(pub i32, pub i32);
"""
    )

    kinds = [(d.name, d.kind, d.shape) for d in result.declarations]
    assert kinds == [
        ("Mood", DeclarationKind.ENUM, DeclarationShape.NAMED),
        ("Marker", DeclarationKind.STRUCT, DeclarationShape.UNIT),
        ("Pair", DeclarationKind.STRUCT, DeclarationShape.TUPLE),
    ]
    assert result.declarations[0].attributes[0].text == "derive(Synapse)"


def test_scans_structs_inside_inline_modules() -> None:
    result = _scan(
        """
pub mod models {
    #[derive(Synapse)]
    pub struct Inner {
        pub id: u64,
    }
}

pub struct Outer {
    pub inner: Inner,
}
"""
    )

    assert [declaration.name for declaration in result.declarations] == ["Inner", "Outer"]


def test_field_attributes_visibility_and_raw_identifiers() -> None:
    result = _scan(
        """
struct Wire {
    #[serde(rename = "kind")]
    pub(crate) r#type: String,
    count: u32
}
"""
    )

    (wire,) = result.declarations
    assert [field.name for field in wire.fields] == ["type", "count"]
    assert wire.fields[0].attributes[0].text == 'serde(rename = "kind")'
    assert wire.fields[1].type_token == "u32"


def test_attributes_do_not_leak_across_items() -> None:
    result = _scan(
        """
#[derive(Synapse)]
fn not_a_struct() {}

struct Plain {
    a: i32,
}
"""
    )

    (plain,) = result.declarations
    assert plain.attributes == ()


def test_malformed_declaration_is_reported_and_scanning_continues() -> None:
    result = _scan(
        """
#[derive(Synapse)]
pub struct Broken {
    pub missing_colon f64,
}

#[derive(Synapse)]
pub struct Healthy {
    pub ok: bool,
}
"""
    )

    assert [declaration.name for declaration in result.declarations] == ["Healthy"]
    (diagnostic,) = result.diagnostics
    assert diagnostic.kind == DiagnosticKind.MALFORMED_DECLARATION
    assert diagnostic.structure == "Broken"
    assert diagnostic.location is not None
    assert diagnostic.location.line == 4


def test_unterminated_body_does_not_swallow_next_declaration() -> None:
    result = _scan(
        """
#[derive(Synapse)]
pub struct Open {
    pub a: i32,

#[derive(Synapse)]
pub struct Next {
    pub b: i32,
}
"""
    )

    assert [declaration.name for declaration in result.declarations] == ["Next"]
    assert [diagnostic.kind for diagnostic in result.diagnostics] == [
        DiagnosticKind.MALFORMED_DECLARATION
    ]
    assert result.diagnostics[0].structure == "Open"


def test_unbalanced_type_is_malformed() -> None:
    result = _scan(
        """
struct Bad {
    values: Vec<i32>>,
}
struct Good {
    value: i32,
}
"""
    )

    assert [declaration.name for declaration in result.declarations] == ["Good"]
    assert result.diagnostics[0].kind == DiagnosticKind.MALFORMED_DECLARATION


def test_eof_inside_body_is_reported() -> None:
    result = _scan("struct Cut {\n    a: i32,\n")

    assert result.declarations == ()
    assert result.diagnostics[0].kind == DiagnosticKind.MALFORMED_DECLARATION


def test_block_doc_comments_are_captured() -> None:
    result = _scan(
        """
/**
 * Multi-line
 * description
 */
struct Documented {
    a: i32,
}
"""
    )

    assert result.declarations[0].doc == "Multi-line\ndescription"


def test_unterminated_body_inside_module_recovers_at_sibling_item() -> None:
    result = _scan(
        """
mod models {
    #[derive(Synapse)]
    pub struct Broken {
        pub a: i32,

    /// Still scanned.
    #[derive(Synapse)]
    pub struct Fine {
        pub ok: bool,
    }
}

struct After {
    b: u8,
}
"""
    )

    assert [declaration.name for declaration in result.declarations] == ["Fine", "After"]
    (diagnostic,) = result.diagnostics
    assert diagnostic.kind == DiagnosticKind.MALFORMED_DECLARATION
    assert diagnostic.structure == "Broken"
    assert result.declarations[0].doc == "Still scanned."


def test_unindented_fields_are_not_mistaken_for_items() -> None:
    result = _scan(
        """
struct Flat {
#[serde(rename = "kind")]
r#type: String,
union: u8,
count: u32,
}
"""
    )

    assert result.diagnostics == ()
    (flat,) = result.declarations
    assert [field.name for field in flat.fields] == ["type", "union", "count"]
    assert flat.fields[0].attributes[0].text == 'serde(rename = "kind")'


def test_attribute_text_drops_comments() -> None:
    result = _scan("#[derive(Debug, /* note */ Synapse)]\nstruct A {\n    a: i32,\n}\n")

    (declaration,) = result.declarations
    assert declaration.attributes[0].text == "derive(Debug, Synapse)"
