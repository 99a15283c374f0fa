"""Boundary tests for the pure pipeline packages."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_pipeline_core_does_not_import_io_layers() -> None:
    package_dir = _project_root() / "src" / "synapse_codegen"
    core_packages = (
        "source_scanning",
        "marker_filtering",
        "schema_building",
        "type_mapping",
        "swift_emission",
        "diagnostics",
    )
    forbidden_import_fragments = (
        "synapse_codegen.output_writing",
        "synapse_codegen.generation_run",
        "synapse_codegen.cli",
        "import click",
    )

    for package in core_packages:
        for module_path in sorted((package_dir / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, (
                    f"Forbidden core dependency in {module_path}: {fragment}"
                )
