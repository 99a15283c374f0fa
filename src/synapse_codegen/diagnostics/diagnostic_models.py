"""Diagnostics domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DiagnosticKind(str, Enum):
    """Category of a problem found while generating bindings."""

    MALFORMED_DECLARATION = "MalformedDeclaration"
    DUPLICATE_NAME = "DuplicateName"
    UNRESOLVED_REFERENCE = "UnresolvedReference"
    UNMAPPABLE_TYPE = "UnmappableType"
    IO_FAILURE = "IOFailure"
    IGNORED_MARKER = "IgnoredMarker"


class Severity(str, Enum):
    """How a diagnostic affects the run outcome."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class SourceLocation:
    """Position in a source file; line and column are 1-based."""

    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Diagnostic:
    """One problem reported by a pipeline stage."""

    kind: DiagnosticKind
    severity: Severity
    message: str
    location: SourceLocation | None = None
    structure: str | None = None
    field: str | None = None
    related_locations: tuple[SourceLocation, ...] = ()

    @property
    def is_error(self) -> bool:
        """Return True when the diagnostic is run-fatal."""
        return self.severity == Severity.ERROR


@dataclass(frozen=True)
class GenerationReport:
    """Outcome of one generation run: diagnostics plus emitted text."""

    diagnostics: tuple[Diagnostic, ...]
    output_text: str
    schema_names: tuple[str, ...] = field(default=())
    fatal: bool = False

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(item for item in self.diagnostics if item.is_error)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(item for item in self.diagnostics if not item.is_error)

    @property
    def is_fatal(self) -> bool:
        """Return True when no output may be written for this run."""
        return self.fatal or bool(self.errors)
