"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from synapse_codegen.diagnostics.diagnostic_models import Diagnostic
from synapse_codegen.output_writing.write_outcomes import WriteStatus


@dataclass(frozen=True)
class RunRequest:
    """Input contract for one generation run."""

    config_path: str | None = None
    sources: tuple[str, ...] = ()
    output_path: str | None = None
    check: bool = False


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed generation run."""

    output_path: Path
    status: WriteStatus
    schema_names: tuple[str, ...]
    warnings: tuple[Diagnostic, ...]
    diff: str = ""
