"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_MARKER,
    AccessLevel,
    DiagnosticsSettings,
    FieldNaming,
    GeneratorConfiguration,
    ScanSettings,
    SwiftSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> GeneratorConfiguration:
    """Load and validate a generator configuration file (YAML or JSON)."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    sources = _parse_sources(parsed.get("sources"), base_path)
    output = _resolve_path(base_path, _require_non_empty_string(parsed.get("output"), "output"))
    marker = _parse_marker(parsed.get("marker", DEFAULT_MARKER))

    return GeneratorConfiguration(
        sources=sources,
        output=output,
        marker=marker,
        swift=_parse_swift_section(parsed.get("swift")),
        diagnostics=_parse_diagnostics_section(parsed.get("diagnostics")),
        scan=_parse_scan_section(parsed.get("scan")),
        path=path.resolve(),
    )


def build_default_configuration(
    sources: Sequence[Path | str],
    output: Path | str,
    *,
    marker: str = DEFAULT_MARKER,
) -> GeneratorConfiguration:
    """Build a configuration from explicit paths, using defaults for everything else."""
    if not sources:
        raise ConfigurationError("At least one source path is required.")
    return GeneratorConfiguration(
        sources=tuple(Path(source) for source in sources),
        output=Path(output),
        marker=_parse_marker(marker),
    )


def _parse_sources(value: Any, base_path: Path) -> tuple[Path, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence) or not value:
        raise ConfigurationError("sources must be a non-empty list of paths.")
    sources: list[Path] = []
    for index, item in enumerate(value):
        raw = _require_non_empty_string(item, f"sources[{index}]")
        sources.append(_resolve_path(base_path, raw))
    return tuple(sources)


def _parse_marker(value: Any) -> str:
    marker = _require_non_empty_string(value, "marker")
    if not marker.isidentifier():
        raise ConfigurationError(f"marker '{marker}' must be a single identifier.")
    return marker


def _parse_swift_section(value: Any) -> SwiftSettings:
    if value is None:
        return SwiftSettings()
    section = _require_mapping(value, "swift")
    defaults = SwiftSettings()
    access_level = _parse_enum(
        section.get("access_level", defaults.access_level.value), AccessLevel, "swift.access_level"
    )
    field_naming = _parse_enum(
        section.get("field_naming", defaults.field_naming.value), FieldNaming, "swift.field_naming"
    )
    conformances = _normalize_identifier_sequence(
        section.get("conformances", list(defaults.conformances)), "swift.conformances"
    )
    imports = _normalize_identifier_sequence(
        section.get("imports", list(defaults.imports)), "swift.imports"
    )
    emit_initializer = _require_bool(
        section.get("emit_initializer", defaults.emit_initializer), "swift.emit_initializer"
    )
    indent_width = _require_positive_int(
        section.get("indent_width", defaults.indent_width), "swift.indent_width"
    )
    return SwiftSettings(
        access_level=access_level,
        conformances=conformances,
        imports=imports,
        field_naming=field_naming,
        emit_initializer=emit_initializer,
        indent_width=indent_width,
    )


def _parse_diagnostics_section(value: Any) -> DiagnosticsSettings:
    if value is None:
        return DiagnosticsSettings()
    section = _require_mapping(value, "diagnostics")
    return DiagnosticsSettings(
        fail_on_warnings=_require_bool(
            section.get("fail_on_warnings", False), "diagnostics.fail_on_warnings"
        )
    )


def _parse_scan_section(value: Any) -> ScanSettings:
    if value is None:
        return ScanSettings()
    section = _require_mapping(value, "scan")
    return ScanSettings(workers=_require_positive_int(section.get("workers", 1), "scan.workers"))


def _parse_enum(value: Any, enum_type, field_name: str):
    raw = _require_non_empty_string(value, field_name).lower()
    try:
        return enum_type(raw)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _normalize_identifier_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Sequence):
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    normalized: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{field_name} entries must be strings.")
        stripped = item.strip()
        if not stripped:
            continue
        if not all(part.isidentifier() for part in stripped.split(".")):
            raise ConfigurationError(f"{field_name} entry '{stripped}' is not a Swift identifier.")
        if stripped not in normalized:
            normalized.append(stripped)
    return tuple(normalized)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
