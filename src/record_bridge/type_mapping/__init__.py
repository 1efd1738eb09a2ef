"""Type mapping exports."""

from .mapping_models import (
    ConstructionProtocol,
    FieldDescriptor,
    GeneratedEnum,
    GeneratedType,
    HydrationAction,
    MapperOptions,
)
from .type_mapper import map_enums, map_schema

__all__ = [
    "ConstructionProtocol",
    "FieldDescriptor",
    "GeneratedEnum",
    "GeneratedType",
    "HydrationAction",
    "MapperOptions",
    "map_enums",
    "map_schema",
]
