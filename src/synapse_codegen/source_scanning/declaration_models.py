"""Source scanning entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from synapse_codegen.diagnostics.diagnostic_models import Diagnostic, SourceLocation


class DeclarationKind(str, Enum):
    """Item kinds the scanner reports."""

    STRUCT = "struct"
    ENUM = "enum"


class DeclarationShape(str, Enum):
    """Body shape of a scanned item."""

    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


@dataclass(frozen=True)
class Attribute:
    """Outer attribute text between `#[` and `]`, kept verbatim."""

    text: str
    location: SourceLocation


@dataclass(frozen=True)
class RawField:
    """Named field with its unparsed type token."""

    name: str
    type_token: str
    attributes: tuple[Attribute, ...]
    doc: str | None
    location: SourceLocation


@dataclass(frozen=True)
class Declaration:  # pylint: disable=too-many-instance-attributes
    """Raw structural declaration found in source text."""

    name: str
    kind: DeclarationKind
    shape: DeclarationShape
    attributes: tuple[Attribute, ...]
    fields: tuple[RawField, ...]
    doc: str | None
    location: SourceLocation
    generic_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceText:
    """Source text handed to the scanner together with its display path."""

    path: str
    text: str


@dataclass(frozen=True)
class ScanResult:
    """Declarations and scanner diagnostics for one source text."""

    declarations: tuple[Declaration, ...]
    diagnostics: tuple[Diagnostic, ...]
