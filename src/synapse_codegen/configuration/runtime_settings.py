"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

DEFAULT_MARKER = "Synapse"


class AccessLevel(str, Enum):
    """Swift access level applied to generated declarations."""

    PUBLIC = "public"
    INTERNAL = "internal"


class FieldNaming(str, Enum):
    """How Rust field names become Swift property names."""

    PRESERVE = "preserve"
    CAMEL_CASE = "camel_case"


@dataclass(frozen=True)
class SwiftSettings:
    """Swift emission options."""

    access_level: AccessLevel = AccessLevel.PUBLIC
    conformances: tuple[str, ...] = ("Codable", "Equatable", "Hashable")
    imports: tuple[str, ...] = ("Foundation",)
    field_naming: FieldNaming = FieldNaming.PRESERVE
    emit_initializer: bool = True
    indent_width: int = 4


@dataclass(frozen=True)
class DiagnosticsSettings:
    """Fatality policy overrides."""

    fail_on_warnings: bool = False


@dataclass(frozen=True)
class ScanSettings:
    """Source scanning options."""

    workers: int = 1


@dataclass(frozen=True)
class GeneratorConfiguration:
    """Top-level configuration aggregate."""

    sources: tuple[Path, ...]
    output: Path
    marker: str = DEFAULT_MARKER
    swift: SwiftSettings = field(default_factory=SwiftSettings)
    diagnostics: DiagnosticsSettings = field(default_factory=DiagnosticsSettings)
    scan: ScanSettings = field(default_factory=ScanSettings)
    path: Path | None = None
