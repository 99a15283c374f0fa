"""Source scanning domain exports."""

from .declaration_models import (
    Attribute,
    Declaration,
    DeclarationKind,
    DeclarationShape,
    RawField,
    ScanResult,
    SourceText,
)
from .rust_scanner import scan_source

__all__ = [
    "Attribute",
    "Declaration",
    "DeclarationKind",
    "DeclarationShape",
    "RawField",
    "ScanResult",
    "SourceText",
    "scan_source",
]
