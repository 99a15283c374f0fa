"""Schema builder tests."""

from __future__ import annotations

from synapse_codegen.diagnostics import DiagnosticCollector, DiagnosticKind
from synapse_codegen.marker_filtering import filter_marked
from synapse_codegen.schema_building import (
    CompositeType,
    PrimitiveKind,
    PrimitiveType,
    UnknownType,
    build_schemas,
)
from synapse_codegen.source_scanning import SourceText, scan_source


def _build(*texts: str):
    declarations = []
    for index, text in enumerate(texts):
        declarations.extend(
            scan_source(SourceText(path=f"file{index}.rs", text=text)).declarations
        )
    collector = DiagnosticCollector()
    marked = filter_marked(declarations, collector)
    return build_schemas(declarations, marked, collector), collector


def test_preserves_field_order_and_names() -> None:
    schemas, collector = _build(
        """
#[derive(Synapse)]
struct Ordered {
    b: i32,
    a: bool,
    c: f64,
}
"""
    )

    assert collector.diagnostics == ()
    (schema,) = schemas
    assert [field.name for field in schema.fields] == ["b", "a", "c"]
    assert schema.fields[1].type == PrimitiveType(kind=PrimitiveKind.BOOL)


def test_forward_references_resolve_across_files() -> None:
    schemas, collector = _build(
        "#[derive(Synapse)]\nstruct Session { player: Player, history: Vec<Player> }\n",
        "#[derive(Synapse)]\nstruct Player { name: String }\n",
    )

    assert collector.diagnostics == ()
    assert [schema.name for schema in schemas] == ["Session", "Player"]
    assert schemas[0].fields[0].type == CompositeType(name="Player")


def test_unmarked_structure_reference_is_still_composite() -> None:
    schemas, _ = _build(
        "#[derive(Synapse)]\nstruct Owner { state: InternalState }\n"
        "struct InternalState { cache_hit: bool }\n"
    )

    assert schemas[0].fields[0].type == CompositeType(name="InternalState")


def test_generic_parameters_are_not_composites() -> None:
    schemas, _ = _build(
        "struct T { a: i32 }\n#[derive(Synapse)]\nstruct Wrapper<T> { value: T }\n"
    )

    assert schemas[0].fields[0].type == UnknownType(raw="T")


def test_duplicate_marked_names_report_every_location() -> None:
    schemas, collector = _build(
        "#[derive(Synapse)]\nstruct Reef { a: i32 }\n",
        "struct Other { b: i32 }\n#[derive(Synapse)]\nstruct Reef { c: i32 }\n",
    )

    (diagnostic,) = collector.diagnostics
    assert diagnostic.kind == DiagnosticKind.DUPLICATE_NAME
    assert diagnostic.is_error
    assert str(diagnostic.location) == "file1.rs:3:1"
    assert [str(location) for location in diagnostic.related_locations] == ["file0.rs:2:1"]
    assert "file0.rs:2:1" in diagnostic.message and "file1.rs:3:1" in diagnostic.message
    assert [schema.name for schema in schemas] == ["Reef", "Reef"]


def test_unmarked_duplicates_are_not_reported() -> None:
    _, collector = _build("struct Cache { a: i32 }\n", "struct Cache { b: i32 }\n")

    assert collector.diagnostics == ()


def test_duplicate_field_names_skip_the_declaration() -> None:
    schemas, collector = _build(
        "#[derive(Synapse)]\nstruct Twice { a: i32, a: i64 }\n"
        "#[derive(Synapse)]\nstruct Once { a: i32 }\n"
    )

    assert [schema.name for schema in schemas] == ["Once"]
    (diagnostic,) = collector.diagnostics
    assert diagnostic.kind == DiagnosticKind.MALFORMED_DECLARATION
    assert diagnostic.field == "a"


def test_marked_tuple_struct_is_skipped_and_unit_struct_is_empty() -> None:
    schemas, collector = _build(
        "#[derive(Synapse)]\nstruct Pair(i32, i32);\n#[derive(Synapse)]\nstruct Ping;\n"
    )

    assert [schema.name for schema in schemas] == ["Ping"]
    assert schemas[0].fields == ()
    assert [diagnostic.kind for diagnostic in collector.diagnostics] == [
        DiagnosticKind.MALFORMED_DECLARATION
    ]
