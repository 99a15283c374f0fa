"""Diagnostic collector and report tests."""

from __future__ import annotations

import pytest
from synapse_codegen.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    Severity,
    SourceLocation,
    build_generation_report,
    default_severity,
    format_diagnostic,
    format_diagnostics,
)


@pytest.mark.parametrize(
    ("kind", "severity"),
    [
        (DiagnosticKind.MALFORMED_DECLARATION, Severity.WARNING),
        (DiagnosticKind.IGNORED_MARKER, Severity.WARNING),
        (DiagnosticKind.DUPLICATE_NAME, Severity.ERROR),
        (DiagnosticKind.UNRESOLVED_REFERENCE, Severity.ERROR),
        (DiagnosticKind.UNMAPPABLE_TYPE, Severity.ERROR),
        (DiagnosticKind.IO_FAILURE, Severity.ERROR),
    ],
)
def test_default_severity(kind: DiagnosticKind, severity: Severity) -> None:
    assert default_severity(kind) == severity


def test_collector_keeps_order_and_tracks_errors() -> None:
    collector = DiagnosticCollector()
    collector.report(DiagnosticKind.MALFORMED_DECLARATION, "first")
    assert not collector.has_errors

    reported = collector.report(
        DiagnosticKind.DUPLICATE_NAME,
        "second",
        location=SourceLocation("b.rs", 3, 1),
        related_locations=[SourceLocation("a.rs", 1, 1)],
    )

    assert collector.has_errors
    assert reported.related_locations == (SourceLocation("a.rs", 1, 1),)
    assert [item.message for item in collector.diagnostics] == ["first", "second"]


def test_report_with_errors_is_fatal_and_has_no_output() -> None:
    collector = DiagnosticCollector()
    collector.report(DiagnosticKind.UNMAPPABLE_TYPE, "bad type")

    report = build_generation_report(collector.diagnostics, "struct text", ["Reef"])

    assert report.is_fatal
    assert report.output_text == ""
    assert report.schema_names == ()
    assert len(report.errors) == 1


def test_warnings_are_fatal_only_when_requested() -> None:
    collector = DiagnosticCollector()
    collector.report(DiagnosticKind.IGNORED_MARKER, "enum marked")

    lenient = build_generation_report(collector.diagnostics, "text", ["Reef"])
    strict = build_generation_report(
        collector.diagnostics, "text", ["Reef"], fail_on_warnings=True
    )

    assert not lenient.is_fatal
    assert lenient.output_text == "text"
    assert lenient.schema_names == ("Reef",)
    assert len(lenient.warnings) == 1
    assert strict.is_fatal
    assert strict.output_text == ""


def test_formatting_includes_location_and_related_locations() -> None:
    duplicate = Diagnostic(
        kind=DiagnosticKind.DUPLICATE_NAME,
        severity=Severity.ERROR,
        message="Structure 'Reef' is marked 2 times.",
        location=SourceLocation("b.rs", 3, 1),
        related_locations=(SourceLocation("a.rs", 1, 1),),
    )
    unlocated = Diagnostic(
        kind=DiagnosticKind.IO_FAILURE, severity=Severity.ERROR, message="Cannot read."
    )

    assert format_diagnostic(duplicate) == (
        "b.rs:3:1: error[DuplicateName] Structure 'Reef' is marked 2 times.\n"
        "    also declared at a.rs:1:1"
    )
    assert format_diagnostics([duplicate, unlocated]).endswith("\nerror[IOFailure] Cannot read.")
