"""Marker filtering domain exports."""

from .marker_filter import DEFAULT_MARKER, carries_marker, derived_names, filter_marked, is_marked

__all__ = [
    "DEFAULT_MARKER",
    "carries_marker",
    "derived_names",
    "filter_marked",
    "is_marked",
]
