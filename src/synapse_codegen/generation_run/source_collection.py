"""Source file discovery and reading at the I/O boundary."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from synapse_codegen.source_scanning.declaration_models import SourceText

_LOGGER = logging.getLogger(__name__)

RUST_SUFFIX = ".rs"
_SKIPPED_DIRECTORIES = frozenset({"target", ".git"})


class SourceReadError(Exception):
    """Raised when a source path cannot be listed or read."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


def collect_source_files(paths: Sequence[Path]) -> tuple[Path, ...]:
    """Expand files and directories into an ordered, de-duplicated file list.

    Files keep the order they were given in; each directory contributes its
    `*.rs` files sorted by path, skipping build output and VCS directories.
    """
    collected: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = sorted(
                (
                    candidate
                    for candidate in path.rglob(f"*{RUST_SUFFIX}")
                    if candidate.is_file()
                    and not _SKIPPED_DIRECTORIES.intersection(candidate.relative_to(path).parts)
                ),
                key=lambda candidate: candidate.as_posix(),
            )
        elif path.exists():
            candidates = [path]
        else:
            raise SourceReadError(f"Source path not found: {path}", path)
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                collected.append(candidate)
    _LOGGER.debug("Collected %d source file(s)", len(collected))
    return tuple(collected)


def read_sources(files: Sequence[Path], *, workers: int = 1) -> tuple[SourceText, ...]:
    """Read every file as UTF-8, preserving input order."""
    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return tuple(executor.map(_read_source, files))
    return tuple(_read_source(path) for path in files)


def display_path(path: Path) -> str:
    """Return a stable, cwd-relative path for diagnostics when possible."""
    try:
        return path.resolve().relative_to(Path.cwd().resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _read_source(path: Path) -> SourceText:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Unable to read source file {path}: {exc}", path) from exc
    return SourceText(path=display_path(path), text=text)
