"""Builds canonical schemas from marked declarations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from synapse_codegen.diagnostics.diagnostic_collector import DiagnosticCollector
from synapse_codegen.diagnostics.diagnostic_models import DiagnosticKind
from synapse_codegen.source_scanning.declaration_models import Declaration, DeclarationShape

from .schema_models import Field, Schema
from .type_token_parser import resolve_type_token

_LOGGER = logging.getLogger(__name__)


def build_schemas(
    declarations: Sequence[Declaration],
    marked: Sequence[Declaration],
    collector: DiagnosticCollector,
) -> tuple[Schema, ...]:
    """Resolve every marked declaration into a schema.

    `declarations` must hold every declaration of the run (from all sources),
    so that references resolve regardless of declaration or file order.
    Schemas keep the order of `marked`. When a name is marked more than once a
    DuplicateName error is recorded and every occurrence is still built, so
    that type problems in all of them are reported in the same run.
    """
    known_names = frozenset(declaration.name for declaration in declarations)
    _report_duplicate_names(marked, collector)

    schemas: list[Schema] = []
    for declaration in marked:
        schema = _build_schema(declaration, known_names, collector)
        if schema is not None:
            schemas.append(schema)
    _LOGGER.debug("Built %d schema(s)", len(schemas))
    return tuple(schemas)


def _report_duplicate_names(marked: Sequence[Declaration], collector: DiagnosticCollector) -> None:
    occurrences: dict[str, list[Declaration]] = {}
    for declaration in marked:
        occurrences.setdefault(declaration.name, []).append(declaration)
    for name, group in occurrences.items():
        if len(group) < 2:
            continue
        locations = ", ".join(str(declaration.location) for declaration in group)
        collector.report(
            DiagnosticKind.DUPLICATE_NAME,
            f"Structure '{name}' is marked {len(group)} times ({locations}); "
            "generated names must be unique.",
            location=group[1].location,
            structure=name,
            related_locations=[
                declaration.location for index, declaration in enumerate(group) if index != 1
            ],
        )


def _build_schema(
    declaration: Declaration,
    known_names: frozenset[str],
    collector: DiagnosticCollector,
) -> Schema | None:
    if declaration.shape == DeclarationShape.TUPLE:
        collector.report(
            DiagnosticKind.MALFORMED_DECLARATION,
            f"Tuple structure '{declaration.name}' has no named fields to generate.",
            location=declaration.location,
            structure=declaration.name,
        )
        return None

    seen: set[str] = set()
    for raw_field in declaration.fields:
        if raw_field.name in seen:
            collector.report(
                DiagnosticKind.MALFORMED_DECLARATION,
                f"Field '{raw_field.name}' is declared more than once in '{declaration.name}'.",
                location=raw_field.location,
                structure=declaration.name,
                field=raw_field.name,
            )
            return None
        seen.add(raw_field.name)

    resolvable = known_names - set(declaration.generic_params)
    fields = tuple(
        Field(
            name=raw_field.name,
            type=resolve_type_token(raw_field.type_token, resolvable),
            doc=raw_field.doc,
            location=raw_field.location,
        )
        for raw_field in declaration.fields
    )
    return Schema(
        name=declaration.name,
        fields=fields,
        doc=declaration.doc,
        location=declaration.location,
    )
