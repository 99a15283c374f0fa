"""Atomic writer and drift checker for the generated Swift file."""

from __future__ import annotations

import difflib
import logging
import os
import stat
import tempfile
from pathlib import Path

from .write_outcomes import WriteOutcome, WriteStatus

_LOGGER = logging.getLogger(__name__)


class OutputWriteError(Exception):
    """Raised when the generated file cannot be read or replaced."""


def write_generated_file(path: Path | str, content: str) -> WriteOutcome:
    """Replace the generated file atomically when its content changed.

    The new content is written to a temporary file in the destination
    directory and moved into place, so readers never see a partial file.
    """
    destination = Path(path)
    previous = _read_existing(destination)
    if previous == content:
        _LOGGER.debug("Generated file %s is up to date", destination)
        return WriteOutcome(path=destination.resolve(), status=WriteStatus.UNCHANGED)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
    except OSError as exc:
        raise OutputWriteError(f"Unable to prepare output file {destination}: {exc}") from exc

    temp_path = Path(temp_name)
    try:
        with os.fdopen(descriptor, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.chmod(temp_path, _target_mode(destination))
        os.replace(temp_path, destination)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise OutputWriteError(f"Unable to write output file {destination}: {exc}") from exc

    _LOGGER.debug("Wrote generated file %s", destination)
    return WriteOutcome(
        path=destination.resolve(),
        status=WriteStatus.WRITTEN,
        diff=compute_unified_diff(previous or "", content, destination),
    )


def detect_drift(path: Path | str, content: str) -> WriteOutcome:
    """Compare the generated file on disk with freshly generated content."""
    destination = Path(path)
    previous = _read_existing(destination)
    if previous == content:
        return WriteOutcome(path=destination.resolve(), status=WriteStatus.UNCHANGED)
    return WriteOutcome(
        path=destination.resolve(),
        status=WriteStatus.DRIFT,
        diff=compute_unified_diff(previous or "", content, destination),
    )


def compute_unified_diff(old_content: str, new_content: str, path: Path) -> str:
    diff_lines = difflib.unified_diff(
        old_content.replace("\r\n", "\n").splitlines(),
        new_content.splitlines(),
        fromfile=f"a/{path.name}",
        tofile=f"b/{path.name}",
        lineterm="",
    )
    return "\n".join(diff_lines)


def _target_mode(path: Path) -> int:
    """Return the existing file's mode, or the umask default for a new file."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _read_existing(path: Path) -> str | None:
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise OutputWriteError(f"Unable to read existing output file {path}: {exc}") from exc
