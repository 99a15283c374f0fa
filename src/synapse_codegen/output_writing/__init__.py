"""Output writing domain exports."""

from .generated_file_writer import (
    OutputWriteError,
    compute_unified_diff,
    detect_drift,
    write_generated_file,
)
from .write_outcomes import WriteOutcome, WriteStatus

__all__ = [
    "OutputWriteError",
    "WriteOutcome",
    "WriteStatus",
    "compute_unified_diff",
    "detect_drift",
    "write_generated_file",
]
