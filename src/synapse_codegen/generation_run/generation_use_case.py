"""Generation run use-case service."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from synapse_codegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    GeneratorConfiguration,
    build_default_configuration,
    load_configuration,
)
from synapse_codegen.diagnostics.diagnostic_collector import default_severity
from synapse_codegen.diagnostics.diagnostic_models import (
    Diagnostic,
    DiagnosticKind,
    GenerationReport,
)
from synapse_codegen.output_writing import (
    OutputWriteError,
    WriteOutcome,
    detect_drift,
    write_generated_file,
)
from synapse_codegen.source_scanning.declaration_models import SourceText

from .binding_generation import generate_from_configuration
from .run_contracts import RunOutcome, RunRequest
from .source_collection import SourceReadError, collect_source_files, read_sources

_LOGGER = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a run cannot be completed because of configuration or I/O."""

    def __init__(self, message: str, diagnostic: Diagnostic | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


class GenerationFailedError(Exception):
    """Raised when generation produced fatal diagnostics; nothing was written."""

    def __init__(self, report: GenerationReport) -> None:
        count = len(report.errors) or len(report.diagnostics)
        super().__init__(f"Generation failed with {count} problem(s); no output was written.")
        self.report = report


def execute_generation_run(request: RunRequest) -> RunOutcome:
    """Generate the Swift file, or verify it is current when `request.check` is set."""
    configuration = resolve_run_configuration(request)
    sources = _load_sources(configuration)
    report = generate_from_configuration(sources, configuration)
    if report.is_fatal:
        raise GenerationFailedError(report)

    outcome = _write_or_check(configuration.output, report.output_text, check=request.check)
    _LOGGER.info("%s: %s", outcome.path, outcome.status.value)
    return RunOutcome(
        output_path=outcome.path,
        status=outcome.status,
        schema_names=report.schema_names,
        warnings=report.warnings,
        diff=outcome.diff,
    )


def resolve_run_configuration(request: RunRequest) -> GeneratorConfiguration:
    """Combine a configuration file with explicit command-line overrides."""
    config_path = request.config_path
    if config_path is None and not request.sources and Path(DEFAULT_CONFIG_FILENAME).exists():
        config_path = DEFAULT_CONFIG_FILENAME
    try:
        if config_path is None:
            if not request.output_path:
                raise ConfigurationError("Provide --config, or both --source and --output.")
            return build_default_configuration(request.sources, request.output_path)
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise GenerationRunError(str(exc)) from exc

    overrides: dict[str, object] = {}
    if request.sources:
        overrides["sources"] = tuple(Path(source) for source in request.sources)
    if request.output_path:
        overrides["output"] = Path(request.output_path)
    return replace(configuration, **overrides) if overrides else configuration


def _load_sources(configuration: GeneratorConfiguration) -> tuple[SourceText, ...]:
    try:
        files = collect_source_files(configuration.sources)
        return read_sources(files, workers=configuration.scan.workers)
    except SourceReadError as exc:
        raise GenerationRunError(str(exc), diagnostic=_io_diagnostic(str(exc))) from exc


def _write_or_check(output: Path, text: str, *, check: bool) -> WriteOutcome:
    try:
        if check:
            return detect_drift(output, text)
        return write_generated_file(output, text)
    except OutputWriteError as exc:
        raise GenerationRunError(str(exc), diagnostic=_io_diagnostic(str(exc))) from exc


def _io_diagnostic(message: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.IO_FAILURE,
        severity=default_severity(DiagnosticKind.IO_FAILURE),
        message=message,
    )
