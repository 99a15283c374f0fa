"""Diagnostics domain exports."""

from .diagnostic_collector import (
    DiagnosticCollector,
    build_generation_report,
    default_severity,
    format_diagnostic,
    format_diagnostics,
)
from .diagnostic_models import (
    Diagnostic,
    DiagnosticKind,
    GenerationReport,
    Severity,
    SourceLocation,
)

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "GenerationReport",
    "Severity",
    "SourceLocation",
    "DiagnosticCollector",
    "build_generation_report",
    "default_severity",
    "format_diagnostic",
    "format_diagnostics",
]
