"""Swift emission domain exports."""

from .constants import GENERATED_HEADER
from .swift_emitter import emit_swift, find_property_collisions, swift_property_name

__all__ = [
    "GENERATED_HEADER",
    "emit_swift",
    "find_property_collisions",
    "swift_property_name",
]
