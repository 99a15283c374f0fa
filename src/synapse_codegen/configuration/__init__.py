"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, build_default_configuration, load_configuration
from .runtime_settings import (
    DEFAULT_MARKER,
    AccessLevel,
    DiagnosticsSettings,
    FieldNaming,
    GeneratorConfiguration,
    ScanSettings,
    SwiftSettings,
)

__all__ = [
    "AccessLevel",
    "DiagnosticsSettings",
    "FieldNaming",
    "GeneratorConfiguration",
    "ScanSettings",
    "SwiftSettings",
    "DEFAULT_MARKER",
    "ConfigurationError",
    "build_default_configuration",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
