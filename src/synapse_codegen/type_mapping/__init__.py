"""Type mapping domain exports."""

from .mapping_models import MappedField, MappedSchema, MappingResult
from .mapping_table import SWIFT_PRIMITIVE_TYPES, SWIFT_STRING_TYPE
from .type_mapper import map_schemas, map_type

__all__ = [
    "MappedField",
    "MappedSchema",
    "MappingResult",
    "SWIFT_PRIMITIVE_TYPES",
    "SWIFT_STRING_TYPE",
    "map_schemas",
    "map_type",
]
