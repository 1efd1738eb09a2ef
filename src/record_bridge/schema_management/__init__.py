"""Schema management exports."""

from .schema_loader import load_schema_document, load_schema_file
from .schema_models import (
    ArrayShape,
    EnumMember,
    EnumSchema,
    EnumShape,
    FieldSchema,
    MapShape,
    OptionalShape,
    RecordSchema,
    RecordShape,
    ScalarShape,
    SchemaDocument,
    Shape,
)
from .type_expressions import SchemaError, format_shape, parse_type_expression

__all__ = [
    "ArrayShape",
    "EnumMember",
    "EnumSchema",
    "EnumShape",
    "FieldSchema",
    "MapShape",
    "OptionalShape",
    "RecordSchema",
    "RecordShape",
    "ScalarShape",
    "SchemaDocument",
    "Shape",
    "SchemaError",
    "format_shape",
    "load_schema_document",
    "load_schema_file",
    "parse_type_expression",
]
