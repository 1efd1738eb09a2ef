"""Schema to client type mapping service."""

from __future__ import annotations

import keyword
import logging
import re
from collections.abc import Mapping, Sequence

from record_bridge.schema_management.schema_models import (
    ArrayShape,
    EnumSchema,
    EnumShape,
    FieldSchema,
    MapShape,
    OptionalShape,
    RecordSchema,
    RecordShape,
    ScalarShape,
    Shape,
)
from record_bridge.schema_management.type_expressions import SchemaError, format_shape

from .mapping_models import (
    ConstructionProtocol,
    FieldDescriptor,
    GeneratedEnum,
    GeneratedType,
    HydrationAction,
    MapperOptions,
)

logger = logging.getLogger(__name__)

# module-level names generated code relies on, plus locals of generated methods
_RESERVED_CLASS_NAMES = frozenset(
    {"runtime", "Any", "Enum", "annotations", "frozenset", "source", "self", "cls", "item"}
)
_LAMBDA_PARAMETER = re.compile(r"item_\d+")

_SCALAR_ANNOTATIONS = {
    "string": "str",
    "bool": "bool",
    "float32": "float",
    "float64": "float",
    "any": "Any",
}


def map_schema(
    schemas: Sequence[RecordSchema],
    *,
    enums: Sequence[EnumSchema] = (),
    options: MapperOptions | None = None,
) -> tuple[GeneratedType, ...]:
    """Map record schemas to generated types, preserving declaration order.

    Raises:
      SchemaError: If a field references a record or enum outside the schema
        set, or names collide.
    """
    options = options or MapperOptions()
    record_classes = _class_names([schema.name for schema in schemas], options, "record")
    enum_classes = _class_names([enum.name for enum in enums], options, "enum")
    clashes = set(record_classes.values()) & set(enum_classes.values())
    if clashes:
        raise SchemaError(f"Record and enum class names collide: {', '.join(sorted(clashes))}")

    unknown_overrides = set(options.protocol_overrides) - set(record_classes)
    if unknown_overrides:
        raise SchemaError(
            f"Protocol override for unknown record type: {', '.join(sorted(unknown_overrides))}"
        )

    generated: list[GeneratedType] = []
    for schema in schemas:
        protocol = ConstructionProtocol(
            options.protocol_overrides.get(schema.name, options.protocol)
        )
        fields = _map_fields(schema, record_classes, enum_classes)
        logger.debug(
            "Mapped %s to %s (%d fields, %s protocol)",
            schema.name,
            record_classes[schema.name],
            len(fields),
            protocol.value,
        )
        generated.append(
            GeneratedType(
                schema_name=schema.name,
                class_name=record_classes[schema.name],
                fields=fields,
                protocol=protocol,
            )
        )
    return tuple(generated)


def map_enums(
    enums: Sequence[EnumSchema], *, options: MapperOptions | None = None
) -> tuple[GeneratedEnum, ...]:
    """Map enum schemas to generated enum declarations."""
    options = options or MapperOptions()
    class_names = _class_names([enum.name for enum in enums], options, "enum")
    generated = []
    for enum in enums:
        invalid = [
            member.name
            for member in enum.members
            if not member.name.isidentifier() or member.name.startswith("_")
        ]
        if invalid:
            raise SchemaError(f"Enum {enum.name} has invalid member names: {', '.join(invalid)}")
        value_type = "int" if isinstance(enum.members[0].value, int) else "str"
        generated.append(
            GeneratedEnum(
                schema_name=enum.name,
                class_name=class_names[enum.name],
                members=tuple((member.name, member.value) for member in enum.members),
                value_type=value_type,
            )
        )
    return tuple(generated)


def _class_names(names: Sequence[str], options: MapperOptions, kind: str) -> dict[str, str]:
    class_names: dict[str, str] = {}
    for name in names:
        if name in class_names:
            raise SchemaError(f"Duplicate {kind} type: {name}")
        class_name = f"{options.prefix}{name}{options.suffix}"
        if not class_name.isidentifier() or keyword.iskeyword(class_name):
            raise SchemaError(f"'{class_name}' is not a valid class name.")
        if class_name in _RESERVED_CLASS_NAMES or _LAMBDA_PARAMETER.fullmatch(class_name):
            raise SchemaError(
                f"'{class_name}' is reserved by generated modules and cannot name a {kind} type."
            )
        class_names[name] = class_name
    return class_names


def _map_fields(
    schema: RecordSchema, record_classes: Mapping[str, str], enum_classes: Mapping[str, str]
) -> tuple[FieldDescriptor, ...]:
    seen_wire_names: set[str] = set()
    seen_attributes: set[str] = set()
    descriptors = []
    for field in schema.fields:
        if field.name in seen_wire_names:
            raise SchemaError(f"Duplicate field '{field.name}' in record {schema.name}.")
        if field.attribute in seen_attributes:
            raise SchemaError(f"Duplicate attribute '{field.attribute}' in record {schema.name}.")
        seen_wire_names.add(field.name)
        seen_attributes.add(field.attribute)
        descriptors.append(_map_field(schema.name, field, record_classes, enum_classes))
    return tuple(descriptors)


def _map_field(
    record_name: str,
    field: FieldSchema,
    record_classes: Mapping[str, str],
    enum_classes: Mapping[str, str],
) -> FieldDescriptor:
    try:
        target_shape = _target_shape(field.shape, record_classes, enum_classes)
    except SchemaError as exc:
        expression = format_shape(field.shape)
        raise SchemaError(f"{record_name}.{field.name} ({expression}): {exc}") from exc

    optional = isinstance(target_shape, OptionalShape)
    annotation = field.type_override or _annotation(target_shape, top_level=True)
    if field.transform:
        return FieldDescriptor(
            attribute=field.attribute,
            wire_name=field.name,
            annotation=annotation,
            target_shape=target_shape,
            action=HydrationAction.PASSTHROUGH,
            optional=optional,
            transform=field.transform,
        )

    record_class, map_depth = _record_path(target_shape)
    return FieldDescriptor(
        attribute=field.attribute,
        wire_name=field.name,
        annotation=annotation,
        target_shape=target_shape,
        action=_action(target_shape) if record_class else HydrationAction.PASSTHROUGH,
        optional=optional,
        record_class=record_class,
        map_depth=map_depth,
    )


def _target_shape(
    shape: Shape, record_classes: Mapping[str, str], enum_classes: Mapping[str, str]
) -> Shape:
    if isinstance(shape, ScalarShape):
        return shape
    if isinstance(shape, RecordShape):
        if shape.ref not in record_classes:
            raise SchemaError(f"unknown record type '{shape.ref}'")
        return RecordShape(record_classes[shape.ref])
    if isinstance(shape, EnumShape):
        if shape.ref not in enum_classes:
            raise SchemaError(f"unknown enum type '{shape.ref}'")
        return EnumShape(enum_classes[shape.ref])
    if isinstance(shape, ArrayShape):
        return ArrayShape(_target_shape(shape.item, record_classes, enum_classes))
    if isinstance(shape, MapShape):
        return MapShape(
            key=shape.key, value=_target_shape(shape.value, record_classes, enum_classes)
        )
    return OptionalShape(_target_shape(shape.inner, record_classes, enum_classes))


def _annotation(shape: Shape, *, top_level: bool = False) -> str:
    if isinstance(shape, ScalarShape):
        return _SCALAR_ANNOTATIONS.get(shape.type_name, "int")
    if isinstance(shape, EnumShape):
        return shape.ref
    if isinstance(shape, RecordShape):
        return f"{shape.ref} | None" if top_level else shape.ref
    if isinstance(shape, ArrayShape):
        return f"list[{_annotation(shape.item)}]"
    if isinstance(shape, MapShape):
        return f"dict[{_annotation(shape.key)}, {_annotation(shape.value)}]"
    inner = _annotation(shape.inner, top_level=top_level)
    return inner if inner.endswith(" | None") else f"{inner} | None"


def _record_path(shape: Shape) -> tuple[str | None, int]:
    """Return the record class reachable through `shape` and the maps crossed on the way."""
    map_depth = 0
    while True:
        if isinstance(shape, RecordShape):
            return shape.ref, map_depth
        if isinstance(shape, ArrayShape):
            shape = shape.item
        elif isinstance(shape, MapShape):
            map_depth += 1
            shape = shape.value
        elif isinstance(shape, OptionalShape):
            shape = shape.inner
        else:
            return None, 0


def _action(shape: Shape) -> HydrationAction:
    while isinstance(shape, OptionalShape):
        shape = shape.inner
    if isinstance(shape, ArrayShape):
        return HydrationAction.RECORD_SEQUENCE
    if isinstance(shape, MapShape):
        return HydrationAction.RECORD_MAPPING
    return HydrationAction.RECORD
