"""Type mapping entities."""

from __future__ import annotations

from dataclasses import dataclass

from synapse_codegen.diagnostics.diagnostic_models import Diagnostic, SourceLocation


@dataclass(frozen=True)
class MappingResult:
    """Either a Swift type token or the diagnostic explaining why none exists."""

    swift_type: str | None = None
    diagnostic: Diagnostic | None = None

    @property
    def is_mapped(self) -> bool:
        return self.swift_type is not None


@dataclass(frozen=True)
class MappedField:
    name: str
    swift_type: str
    doc: str | None
    location: SourceLocation | None = None


@dataclass(frozen=True)
class MappedSchema:
    """Schema whose every field has a Swift type."""

    name: str
    fields: tuple[MappedField, ...]
    doc: str | None
    location: SourceLocation | None = None
