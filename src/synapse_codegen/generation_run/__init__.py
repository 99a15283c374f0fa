"""Generation run domain exports."""

from .binding_generation import generate_bindings, generate_from_configuration
from .generation_use_case import (
    GenerationFailedError,
    GenerationRunError,
    execute_generation_run,
    resolve_run_configuration,
)
from .run_contracts import RunOutcome, RunRequest
from .source_collection import SourceReadError, collect_source_files, read_sources

__all__ = [
    "RunRequest",
    "RunOutcome",
    "GenerationFailedError",
    "GenerationRunError",
    "SourceReadError",
    "collect_source_files",
    "execute_generation_run",
    "generate_bindings",
    "generate_from_configuration",
    "read_sources",
    "resolve_run_configuration",
]
