"""Python module rendering for generated client types."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from record_bridge.schema_management.schema_models import (
    ArrayShape,
    MapShape,
    OptionalShape,
    RecordShape,
    Shape,
)
from record_bridge.type_mapping.mapping_models import (
    ConstructionProtocol,
    FieldDescriptor,
    GeneratedEnum,
    GeneratedType,
    HydrationAction,
)

from .constants import GENERATED_HEADER, REGION_END, REGION_START_TEMPLATE, RUNTIME_IMPORT
from .generation_models import RenderOptions


def render_module(
    generated_types: Sequence[GeneratedType],
    generated_enums: Sequence[GeneratedEnum] = (),
    *,
    options: RenderOptions | None = None,
    extension_code: Mapping[str, str] | None = None,
) -> str:
    """Render one module declaring every enum and record class in order."""
    options = options or RenderOptions()
    extension_code = extension_code or {}
    entry_points = {
        generated.class_name: _entry_point(generated) for generated in generated_types
    }

    lines = [GENERATED_HEADER, "", "from __future__ import annotations", ""]
    if generated_enums:
        lines.append("from enum import Enum")
    lines.append("from typing import Any")
    lines.append("")
    lines.append(RUNTIME_IMPORT)
    lines.extend(dict.fromkeys(options.imports))

    if options.export:
        exported = [enum.class_name for enum in generated_enums]
        exported += [generated.class_name for generated in generated_types]
        lines.append("")
        lines.append("__all__ = [")
        lines.extend(f"{options.indent}{json.dumps(name)}," for name in exported)
        lines.append("]")

    for enum in generated_enums:
        lines.extend(["", ""])
        lines.extend(_render_enum(enum, options.indent))

    for generated in generated_types:
        lines.extend(["", ""])
        lines.extend(
            _render_class(
                generated,
                options.indent,
                entry_points,
                extension_code.get(generated.class_name, ""),
            )
        )

    return "\n".join(lines) + "\n"


def _entry_point(generated: GeneratedType) -> str:
    if generated.protocol is ConstructionProtocol.FACTORY:
        return f"{generated.class_name}.from_source"
    return generated.class_name


def _enum_base(enum: GeneratedEnum) -> str:
    return "int, Enum" if enum.value_type == "int" else "str, Enum"


def _render_enum(enum: GeneratedEnum, indent: str) -> list[str]:
    lines = [f"class {enum.class_name}({_enum_base(enum)}):"]
    for name, value in enum.members:
        literal = json.dumps(value) if isinstance(value, str) else str(value)
        lines.append(f"{indent}{name} = {literal}")
    return lines


def _render_class(
    generated: GeneratedType,
    indent: str,
    entry_points: Mapping[str, str],
    extension: str,
) -> list[str]:
    fields = generated.fields
    record_fields = ", ".join(
        f"{json.dumps(field.attribute)}: {json.dumps(field.wire_name)}" for field in fields
    )
    optional_fields = ", ".join(json.dumps(field.attribute) for field in fields if field.optional)
    protocol = (
        "runtime.FACTORY_PROTOCOL"
        if generated.protocol is ConstructionProtocol.FACTORY
        else "runtime.MUTATING_PROTOCOL"
    )

    lines = [
        f"class {generated.class_name}(runtime.HydratedRecord):",
        f"{indent}__record_fields__ = {{{record_fields}}}",
        f"{indent}__optional_fields__ = frozenset({{{optional_fields}}})"
        if optional_fields
        else f"{indent}__optional_fields__ = frozenset()",
        f"{indent}__hydration_protocol__ = {protocol}",
        "",
    ]
    lines.extend(f"{indent}{field.attribute}: {field.annotation}" for field in fields)
    if fields:
        lines.append("")

    if generated.protocol is ConstructionProtocol.FACTORY:
        lines.extend(_render_factory(generated, indent, entry_points))
    else:
        lines.extend(_render_mutating(generated, indent, entry_points))

    lines.append("")
    lines.append(indent + REGION_START_TEMPLATE.format(name=generated.class_name))
    lines.extend(extension.splitlines())
    lines.append(indent + REGION_END)
    return lines


def _render_mutating(
    generated: GeneratedType, indent: str, entry_points: Mapping[str, str]
) -> list[str]:
    body = indent * 3
    lines = [
        f"{indent}def __init__(self, source: Any = None) -> None:",
        f"{indent * 2}source = runtime.source_fields(source)",
        f"{indent * 2}with runtime.descend():",
    ]
    for field in generated.fields:
        lines.append(f"{body}self.{field.attribute} = {_mutating_expression(field, entry_points)}")
    if not generated.fields:
        lines.append(f"{body}pass")
    return lines


def _render_factory(
    generated: GeneratedType, indent: str, entry_points: Mapping[str, str]
) -> list[str]:
    lines = []
    if generated.fields:
        lines.append(f"{indent}def __init__(")
        lines.append(f"{indent * 2}self,")
        lines.append(f"{indent * 2}*,")
        lines.extend(
            f"{indent * 2}{field.attribute}: {_nullable(field.annotation)} = None,"
            for field in generated.fields
        )
        lines.append(f"{indent}) -> None:")
        lines.extend(
            f"{indent * 2}self.{field.attribute} = {field.attribute}" for field in generated.fields
        )
    else:
        lines.append(f"{indent}def __init__(self) -> None:")
        lines.append(f"{indent * 2}pass")

    lines.extend(
        [
            "",
            f"{indent}@classmethod",
            f"{indent}def from_source(cls, source: Any = None) -> {generated.class_name}:",
            f"{indent * 2}source = runtime.source_fields(source)",
            f"{indent * 2}with runtime.descend():",
        ]
    )
    if not generated.fields:
        lines.append(f"{indent * 3}return cls()")
        return lines
    lines.append(f"{indent * 3}return cls(")
    for field in generated.fields:
        expression = _factory_field_expression(field, entry_points)
        lines.append(f"{indent * 4}{field.attribute}={expression},")
    lines.append(f"{indent * 3})")
    return lines


def _source_value(field: FieldDescriptor) -> str:
    return f"source.get({json.dumps(field.wire_name)})"


def _mutating_expression(field: FieldDescriptor, entry_points: Mapping[str, str]) -> str:
    value = _source_value(field)
    if field.transform:
        return field.transform.replace("__VALUE__", value)
    if field.action is HydrationAction.PASSTHROUGH or field.record_class is None:
        return value
    target = entry_points[field.record_class]
    if field.map_depth:
        return f"runtime.convert_values({value}, {target}, map_depth={field.map_depth})"
    return f"runtime.convert_values({value}, {target})"


def _factory_field_expression(field: FieldDescriptor, entry_points: Mapping[str, str]) -> str:
    value = _source_value(field)
    if field.transform:
        return field.transform.replace("__VALUE__", value)
    if field.action is HydrationAction.PASSTHROUGH:
        return value
    return _factory_expression(field.target_shape, value, entry_points, level=0)


def _factory_expression(
    shape: Shape, value: str, entry_points: Mapping[str, str], *, level: int
) -> str:
    if isinstance(shape, OptionalShape):
        return _factory_expression(shape.inner, value, entry_points, level=level)
    if isinstance(shape, RecordShape):
        return f"runtime.map_record({value}, {entry_points[shape.ref]})"
    if isinstance(shape, ArrayShape | MapShape) and _contains_record(shape):
        item = "item" if level == 0 else f"item_{level}"
        if isinstance(shape, ArrayShape):
            inner = _factory_expression(shape.item, item, entry_points, level=level + 1)
            return f"runtime.map_sequence({value}, lambda {item}: {inner})"
        inner = _factory_expression(shape.value, item, entry_points, level=level + 1)
        return f"runtime.map_mapping({value}, lambda {item}: {inner})"
    return value


def _contains_record(shape: Shape) -> bool:
    if isinstance(shape, RecordShape):
        return True
    if isinstance(shape, ArrayShape):
        return _contains_record(shape.item)
    if isinstance(shape, MapShape):
        return _contains_record(shape.value)
    if isinstance(shape, OptionalShape):
        return _contains_record(shape.inner)
    return False


def _nullable(annotation: str) -> str:
    if annotation.endswith("| None"):
        return annotation
    return f"{annotation} | None"
