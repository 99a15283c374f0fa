"""Allow-list filter that keeps only declarations opted in with the marker."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from synapse_codegen.configuration.runtime_settings import DEFAULT_MARKER
from synapse_codegen.diagnostics.diagnostic_collector import DiagnosticCollector
from synapse_codegen.diagnostics.diagnostic_models import DiagnosticKind
from synapse_codegen.source_scanning.declaration_models import (
    Attribute,
    Declaration,
    DeclarationKind,
)

_LOGGER = logging.getLogger(__name__)


def derived_names(attribute: Attribute) -> tuple[str, ...]:
    """Return the entries of a `derive(...)` attribute, or an empty tuple."""
    text = attribute.text
    if not text.startswith("derive"):
        return ()
    remainder = text[len("derive") :].lstrip()
    if not (remainder.startswith("(") and remainder.endswith(")")):
        return ()
    return tuple(entry.strip() for entry in remainder[1:-1].split(",") if entry.strip())


def carries_marker(declaration: Declaration, marker: str = DEFAULT_MARKER) -> bool:
    """Return True when any derive attribute lists the marker verbatim."""
    return any(marker in derived_names(attribute) for attribute in declaration.attributes)


def is_marked(declaration: Declaration, marker: str = DEFAULT_MARKER) -> bool:
    """Return True only for structures that carry the exact marker."""
    return declaration.kind == DeclarationKind.STRUCT and carries_marker(declaration, marker)


def filter_marked(
    declarations: Iterable[Declaration],
    collector: DiagnosticCollector,
    marker: str = DEFAULT_MARKER,
) -> tuple[Declaration, ...]:
    """Keep marked structures in input order.

    A marker on anything other than a structure is reported and ignored.
    """
    marked: list[Declaration] = []
    for declaration in declarations:
        if is_marked(declaration, marker):
            marked.append(declaration)
        elif carries_marker(declaration, marker):
            collector.report(
                DiagnosticKind.IGNORED_MARKER,
                f"'{marker}' on {declaration.kind.value} '{declaration.name}' is ignored; "
                "only structures can be generated.",
                location=declaration.location,
                structure=declaration.name,
            )
    _LOGGER.debug("Marker filter kept %d declaration(s)", len(marked))
    return tuple(marked)
