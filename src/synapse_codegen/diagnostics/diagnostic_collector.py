"""Diagnostic accumulation and report assembly."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .diagnostic_models import (
    Diagnostic,
    DiagnosticKind,
    GenerationReport,
    Severity,
    SourceLocation,
)

_LOGGER = logging.getLogger(__name__)

_DEFAULT_SEVERITY: dict[DiagnosticKind, Severity] = {
    DiagnosticKind.MALFORMED_DECLARATION: Severity.WARNING,
    DiagnosticKind.IGNORED_MARKER: Severity.WARNING,
    DiagnosticKind.DUPLICATE_NAME: Severity.ERROR,
    DiagnosticKind.UNRESOLVED_REFERENCE: Severity.ERROR,
    DiagnosticKind.UNMAPPABLE_TYPE: Severity.ERROR,
    DiagnosticKind.IO_FAILURE: Severity.ERROR,
}


def default_severity(kind: DiagnosticKind) -> Severity:
    """Return the severity assigned to a diagnostic kind by the fatality policy."""
    return _DEFAULT_SEVERITY[kind]


class DiagnosticCollector:
    """Ordered, append-only sink shared by every pipeline stage of one run."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        location: SourceLocation | None = None,
        structure: str | None = None,
        field: str | None = None,
        related_locations: Sequence[SourceLocation] = (),
    ) -> Diagnostic:
        """Record a diagnostic using the default severity of its kind."""
        diagnostic = Diagnostic(
            kind=kind,
            severity=default_severity(kind),
            message=message,
            location=location,
            structure=structure,
            field=field,
            related_locations=tuple(related_locations),
        )
        self.add(diagnostic)
        return diagnostic

    def add(self, diagnostic: Diagnostic) -> None:
        _LOGGER.debug("%s: %s", diagnostic.kind.value, diagnostic.message)
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(diagnostic.is_error for diagnostic in self._diagnostics)


def build_generation_report(
    diagnostics: Sequence[Diagnostic],
    output_text: str,
    schema_names: Sequence[str],
    *,
    fail_on_warnings: bool = False,
) -> GenerationReport:
    """Apply the fatality policy and return the final run report.

    A fatal report never carries output text, so callers cannot write a
    partially-typed binding by accident.
    """
    has_errors = any(diagnostic.is_error for diagnostic in diagnostics)
    fatal = has_errors or (fail_on_warnings and bool(diagnostics))
    return GenerationReport(
        diagnostics=tuple(diagnostics),
        output_text="" if fatal else output_text,
        schema_names=() if fatal else tuple(schema_names),
        fatal=fatal,
    )


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render one diagnostic as `location: severity[kind] message`."""
    prefix = f"{diagnostic.location}: " if diagnostic.location else ""
    lines = [f"{prefix}{diagnostic.severity.value}[{diagnostic.kind.value}] {diagnostic.message}"]
    for related in diagnostic.related_locations:
        lines.append(f"    also declared at {related}")
    return "\n".join(lines)


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    """Render diagnostics in collection order, one block per diagnostic."""
    return "\n".join(format_diagnostic(diagnostic) for diagnostic in diagnostics)
