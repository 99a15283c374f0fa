"""Output writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class WriteStatus(str, Enum):
    """What happened to the generated file."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"
    DRIFT = "drift"


@dataclass(frozen=True)
class WriteOutcome:
    """Result of writing or checking one generated file."""

    path: Path
    status: WriteStatus
    diff: str = ""
