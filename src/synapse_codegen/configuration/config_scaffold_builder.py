"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "synapse.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration for synapse-codegen.
# Paths are resolved relative to this file.

# Rust files or directories to scan. Directories are searched for *.rs files.
sources:
  - "src/models.rs"

# Swift file to (re)write. It is only replaced when the content changes.
output: "Generated/Generated.swift"

# Structures opt in with #[derive(<marker>)].
marker: "Synapse"

swift:
  # public or internal
  access_level: "public"
  conformances: ["Codable", "Equatable", "Hashable"]
  imports: ["Foundation"]
  # preserve keeps Rust field names; camel_case adds CodingKeys for the wire names.
  field_naming: "preserve"
  emit_initializer: true
  indent_width: 4

diagnostics:
  # Treat recovered problems (skipped declarations, ignored markers) as fatal.
  fail_on_warnings: false

scan:
  workers: 1
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
