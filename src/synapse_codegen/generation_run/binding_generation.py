"""Pure source-to-Swift generation pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from synapse_codegen.configuration.runtime_settings import (
    DEFAULT_MARKER,
    GeneratorConfiguration,
    SwiftSettings,
)
from synapse_codegen.diagnostics.diagnostic_collector import (
    DiagnosticCollector,
    build_generation_report,
)
from synapse_codegen.diagnostics.diagnostic_models import GenerationReport
from synapse_codegen.marker_filtering.marker_filter import filter_marked
from synapse_codegen.schema_building.schema_builder import build_schemas
from synapse_codegen.source_scanning.declaration_models import (
    Declaration,
    ScanResult,
    SourceText,
)
from synapse_codegen.source_scanning.rust_scanner import scan_source
from synapse_codegen.swift_emission.swift_emitter import emit_swift, find_property_collisions
from synapse_codegen.type_mapping.type_mapper import map_schemas

_LOGGER = logging.getLogger(__name__)


def generate_bindings(
    sources: Sequence[SourceText],
    *,
    marker: str = DEFAULT_MARKER,
    swift: SwiftSettings | None = None,
    fail_on_warnings: bool = False,
    workers: int = 1,
) -> GenerationReport:
    """Turn Rust source texts into Swift text plus diagnostics.

    Sources are scanned independently (concurrently when `workers` > 1) and
    joined in input order before any name is resolved. Every stage runs to
    completion so the report lists all problems; a fatal report carries no
    output text.
    """
    swift_settings = swift or SwiftSettings()
    collector = DiagnosticCollector()

    scan_results = _scan_all(sources, workers)
    declarations: list[Declaration] = []
    for result in scan_results:
        declarations.extend(result.declarations)
        collector.extend(result.diagnostics)

    marked = filter_marked(declarations, collector, marker)
    schemas = build_schemas(declarations, marked, collector)
    mapped = map_schemas(schemas, collector)
    collector.extend(find_property_collisions(mapped, swift_settings))

    output_text = ""
    if not collector.has_errors:
        output_text = emit_swift(mapped, swift_settings, marker=marker)
    report = build_generation_report(
        collector.diagnostics,
        output_text,
        [schema.name for schema in mapped],
        fail_on_warnings=fail_on_warnings,
    )
    _LOGGER.debug(
        "Generation finished: %d schema(s), %d error(s), %d warning(s)",
        len(report.schema_names),
        len(report.errors),
        len(report.warnings),
    )
    return report


def generate_from_configuration(
    sources: Sequence[SourceText], configuration: GeneratorConfiguration
) -> GenerationReport:
    """Run the pipeline with the options of a loaded configuration."""
    return generate_bindings(
        sources,
        marker=configuration.marker,
        swift=configuration.swift,
        fail_on_warnings=configuration.diagnostics.fail_on_warnings,
        workers=configuration.scan.workers,
    )


def _scan_all(sources: Sequence[SourceText], workers: int) -> list[ScanResult]:
    if workers > 1 and len(sources) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(scan_source, sources))
    return [scan_source(source) for source in sources]
