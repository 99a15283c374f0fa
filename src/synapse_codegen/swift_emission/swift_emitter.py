"""Swift source rendering for mapped schemas."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from synapse_codegen.configuration.runtime_settings import (
    DEFAULT_MARKER,
    AccessLevel,
    FieldNaming,
    SwiftSettings,
)
from synapse_codegen.diagnostics.diagnostic_collector import default_severity
from synapse_codegen.diagnostics.diagnostic_models import Diagnostic, DiagnosticKind
from synapse_codegen.type_mapping.mapping_models import MappedField, MappedSchema

from .constants import CODABLE_PROTOCOLS, GENERATED_HEADER, SWIFT_RESERVED_WORDS

_LOGGER = logging.getLogger(__name__)


def emit_swift(
    schemas: Sequence[MappedSchema],
    settings: SwiftSettings | None = None,
    *,
    marker: str = DEFAULT_MARKER,
) -> str:
    """Render schemas as one Swift source file.

    Schemas are emitted in the given order and fields in declaration order.
    The text contains nothing run-specific, so identical input always yields
    identical bytes.
    """
    resolved = settings or SwiftSettings()
    lines: list[str] = [
        GENERATED_HEADER,
        f"// Source of truth: Rust structures marked with #[derive({marker})].",
    ]
    if resolved.imports:
        lines.append("")
        lines.extend(f"import {module}" for module in resolved.imports)
    for schema in schemas:
        lines.append("")
        lines.extend(_render_struct(schema, resolved))
    _LOGGER.debug("Emitted %d Swift declaration(s)", len(schemas))
    return "\n".join(lines) + "\n"


def swift_property_name(field_name: str, naming: FieldNaming) -> str:
    """Return the Swift property name for a Rust field name (unescaped)."""
    if naming == FieldNaming.PRESERVE:
        return field_name
    return _camel_case(field_name)


def find_property_collisions(
    schemas: Sequence[MappedSchema], settings: SwiftSettings
) -> tuple[Diagnostic, ...]:
    """Report fields that would share one Swift property name after renaming."""
    diagnostics: list[Diagnostic] = []
    for schema in schemas:
        owners: dict[str, MappedField] = {}
        for field in schema.fields:
            property_name = swift_property_name(field.name, settings.field_naming)
            previous = owners.get(property_name)
            if previous is None:
                owners[property_name] = field
                continue
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.DUPLICATE_NAME,
                    severity=default_severity(DiagnosticKind.DUPLICATE_NAME),
                    message=(
                        f"Fields '{previous.name}' and '{field.name}' of '{schema.name}' "
                        f"both become Swift property '{property_name}'."
                    ),
                    location=field.location,
                    structure=schema.name,
                    field=field.name,
                    related_locations=(previous.location,) if previous.location else (),
                )
            )
    return tuple(diagnostics)


def _render_struct(schema: MappedSchema, settings: SwiftSettings) -> list[str]:
    indent = " " * settings.indent_width
    modifier = _access_modifier(settings)
    lines = _doc_lines(schema.doc, "")
    conformances = f": {', '.join(settings.conformances)}" if settings.conformances else ""
    lines.append(f"{modifier}struct {schema.name}{conformances} {{")

    properties = [
        (field, swift_property_name(field.name, settings.field_naming)) for field in schema.fields
    ]
    for field, property_name in properties:
        lines.extend(_doc_lines(field.doc, indent))
        lines.append(f"{indent}{modifier}var {_escape(property_name)}: {field.swift_type}")

    sections: list[list[str]] = []
    if _needs_coding_keys(properties, settings):
        sections.append(_render_coding_keys(properties, indent))
    if settings.emit_initializer:
        sections.append(_render_initializer(properties, modifier, indent))
    for index, section in enumerate(sections):
        if properties or index > 0:
            lines.append("")
        lines.extend(section)

    lines.append("}")
    return lines


def _render_coding_keys(properties: list[tuple[MappedField, str]], indent: str) -> list[str]:
    lines = [f"{indent}enum CodingKeys: String, CodingKey {{"]
    for field, property_name in properties:
        case = f"{indent * 2}case {_escape(property_name)}"
        if property_name != field.name:
            case += f' = "{field.name}"'
        lines.append(case)
    lines.append(f"{indent}}}")
    return lines


def _render_initializer(
    properties: list[tuple[MappedField, str]], modifier: str, indent: str
) -> list[str]:
    if not properties:
        return [f"{indent}{modifier}init() {{}}"]
    parameters = ", ".join(
        f"{_escape(property_name)}: {field.swift_type}" for field, property_name in properties
    )
    lines = [f"{indent}{modifier}init({parameters}) {{"]
    for _, property_name in properties:
        escaped = _escape(property_name)
        lines.append(f"{indent * 2}self.{escaped} = {escaped}")
    lines.append(f"{indent}}}")
    return lines


def _needs_coding_keys(properties: list[tuple[MappedField, str]], settings: SwiftSettings) -> bool:
    if not CODABLE_PROTOCOLS.intersection(settings.conformances):
        return False
    return any(field.name != property_name for field, property_name in properties)


def _access_modifier(settings: SwiftSettings) -> str:
    if settings.access_level == AccessLevel.INTERNAL:
        return ""
    return f"{settings.access_level.value} "


def _doc_lines(doc: str | None, indent: str) -> list[str]:
    if doc is None:
        return []
    return [f"{indent}///{' ' + line if line else ''}".rstrip() for line in doc.splitlines()] or [
        f"{indent}///"
    ]


def _escape(identifier: str) -> str:
    if identifier in SWIFT_RESERVED_WORDS:
        return f"`{identifier}`"
    return identifier


def _camel_case(name: str) -> str:
    stripped = name.lstrip("_")
    prefix = name[: len(name) - len(stripped)]
    parts = [part for part in stripped.split("_") if part]
    if not parts:
        return name
    head, *rest = parts
    return prefix + head + "".join(part[:1].upper() + part[1:] for part in rest)
