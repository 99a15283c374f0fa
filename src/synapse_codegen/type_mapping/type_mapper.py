"""Translation of schema type descriptors into Swift type tokens."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence

from synapse_codegen.diagnostics.diagnostic_collector import DiagnosticCollector, default_severity
from synapse_codegen.diagnostics.diagnostic_models import Diagnostic, DiagnosticKind
from synapse_codegen.schema_building.schema_models import (
    CompositeType,
    Field,
    OptionalType,
    PrimitiveType,
    Schema,
    SequenceType,
    StringType,
    TypeDescriptor,
    UnknownType,
)

from .mapping_models import MappedField, MappedSchema, MappingResult
from .mapping_table import (
    SWIFT_PRIMITIVE_TYPES,
    SWIFT_STRING_TYPE,
    swift_optional_type,
    swift_sequence_type,
)

_LOGGER = logging.getLogger(__name__)


def map_type(
    descriptor: TypeDescriptor,
    generated_names: Collection[str],
    *,
    schema: Schema,
    field: Field,
) -> MappingResult:
    """Map one descriptor; composite types must name a generated structure.

    There is no fallback type: an unknown token or a reference to a structure
    that is not generated yields a diagnostic instead of a Swift type.
    """
    if isinstance(descriptor, PrimitiveType):
        return MappingResult(swift_type=SWIFT_PRIMITIVE_TYPES[descriptor.kind])
    if isinstance(descriptor, StringType):
        return MappingResult(swift_type=SWIFT_STRING_TYPE)
    if isinstance(descriptor, CompositeType):
        if descriptor.name in generated_names:
            return MappingResult(swift_type=descriptor.name)
        return MappingResult(
            diagnostic=_field_diagnostic(
                DiagnosticKind.UNRESOLVED_REFERENCE,
                f"Field '{schema.name}.{field.name}' references '{descriptor.name}', "
                "which is not a generated structure; mark it for generation as well.",
                schema,
                field,
            )
        )
    if isinstance(descriptor, SequenceType):
        element = map_type(descriptor.element, generated_names, schema=schema, field=field)
        if not element.is_mapped:
            return element
        return MappingResult(swift_type=swift_sequence_type(element.swift_type or ""))
    if isinstance(descriptor, OptionalType):
        inner = map_type(descriptor.inner, generated_names, schema=schema, field=field)
        if not inner.is_mapped:
            return inner
        return MappingResult(swift_type=swift_optional_type(inner.swift_type or ""))
    if not isinstance(descriptor, UnknownType):
        raise TypeError(f"Unsupported type descriptor: {descriptor!r}")
    return MappingResult(
        diagnostic=_field_diagnostic(
            DiagnosticKind.UNMAPPABLE_TYPE,
            f"Field '{schema.name}.{field.name}' has type '{descriptor.raw}', "
            "which has no Swift equivalent.",
            schema,
            field,
        )
    )


def map_schemas(
    schemas: Sequence[Schema], collector: DiagnosticCollector
) -> tuple[MappedSchema, ...]:
    """Map all schemas, recording one diagnostic per field that cannot be mapped.

    Only schemas whose fields all mapped are returned.
    """
    generated_names = frozenset(schema.name for schema in schemas)
    mapped: list[MappedSchema] = []
    for schema in schemas:
        fields: list[MappedField] = []
        for field in schema.fields:
            result = map_type(field.type, generated_names, schema=schema, field=field)
            if result.diagnostic is not None:
                collector.add(result.diagnostic)
                continue
            fields.append(
                MappedField(
                    name=field.name,
                    swift_type=result.swift_type or "",
                    doc=field.doc,
                    location=field.location,
                )
            )
        if len(fields) == len(schema.fields):
            mapped.append(
                MappedSchema(
                    name=schema.name,
                    fields=tuple(fields),
                    doc=schema.doc,
                    location=schema.location,
                )
            )
    _LOGGER.debug("Mapped %d of %d schema(s)", len(mapped), len(schemas))
    return tuple(mapped)


def _field_diagnostic(
    kind: DiagnosticKind, message: str, schema: Schema, field: Field
) -> Diagnostic:
    return Diagnostic(
        kind=kind,
        severity=default_severity(kind),
        message=message,
        location=field.location,
        structure=schema.name,
        field=field.name,
    )
