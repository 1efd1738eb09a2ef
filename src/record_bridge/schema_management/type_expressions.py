"""Go-style type expression parsing."""

from __future__ import annotations

import keyword
import re
from collections.abc import Collection

from .schema_models import (
    SCALAR_TYPE_NAMES,
    ArrayShape,
    EnumShape,
    MapShape,
    OptionalShape,
    RecordShape,
    ScalarShape,
    Shape,
)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_FIXED_ARRAY = re.compile(r"\[(\d+)\]")
_SCALAR_ALIASES = {"interface{}": "any"}

# names used by generated classes and their base class
RESERVED_ATTRIBUTES: frozenset[str] = frozenset(
    {"self", "cls", "from_source", "to_dict", "to_json"}
)


class SchemaError(Exception):
    """Raised for schema parsing or resolution failures."""


def parse_type_expression(text: str, *, enum_names: Collection[str] = ()) -> Shape:
    """Parse `[]T`, `[N]T`, `map[K]V`, `*T` and named types into a shape tree.

    Names that are neither scalars nor listed in `enum_names` become record
    references; whether they resolve is checked by the type mapper.
    """
    if not isinstance(text, str):
        raise SchemaError(f"Type expression must be a string, got {type(text).__name__}.")
    expression = text.strip()
    if not expression:
        raise SchemaError("Type expression must not be empty.")
    return _parse(expression, expression, enum_names)


def _parse(expression: str, original: str, enum_names: Collection[str]) -> Shape:
    if expression.startswith("*"):
        inner = _parse(expression[1:].lstrip(), original, enum_names)
        return inner if isinstance(inner, OptionalShape) else OptionalShape(inner)

    if expression.startswith("[]"):
        return ArrayShape(_parse(expression[2:].lstrip(), original, enum_names))

    fixed = _FIXED_ARRAY.match(expression)
    if fixed:
        return ArrayShape(_parse(expression[fixed.end() :].lstrip(), original, enum_names))

    if expression.startswith("map["):
        close_index = _matching_bracket(expression, 3, original)
        key = _parse(expression[4:close_index].strip(), original, enum_names)
        if not isinstance(key, ScalarShape):
            raise SchemaError(f"Map key must be a scalar type in '{original}'.")
        value_text = expression[close_index + 1 :].strip()
        if not value_text:
            raise SchemaError(f"Map value type is missing in '{original}'.")
        return MapShape(key=key, value=_parse(value_text, original, enum_names))

    name = _SCALAR_ALIASES.get(expression, expression)
    if name in SCALAR_TYPE_NAMES:
        return ScalarShape(name)
    if not _IDENTIFIER.fullmatch(name):
        raise SchemaError(f"Unsupported type expression '{original}'.")
    if name in enum_names:
        return EnumShape(name)
    return RecordShape(name)


def _matching_bracket(expression: str, open_index: int, original: str) -> int:
    depth = 0
    for index in range(open_index, len(expression)):
        char = expression[index]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
    raise SchemaError(f"Unbalanced brackets in type expression '{original}'.")


def to_attribute_name(wire_name: str) -> str:
    """Derive a Python attribute name from a JSON key."""
    candidate = re.sub(r"[^0-9A-Za-z_]", "_", wire_name.strip())
    if not candidate.strip("_"):
        raise SchemaError(f"Cannot derive an attribute name from '{wire_name}'.")
    if candidate.startswith("__"):
        # avoid private name mangling
        candidate = "_" + candidate.lstrip("_")
    if candidate[0].isdigit():
        candidate = f"_{candidate}"
    if keyword.iskeyword(candidate) or candidate in RESERVED_ATTRIBUTES:
        candidate = f"{candidate}_"
    return candidate


def is_valid_attribute(name: str) -> bool:
    return (
        name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith("__")
        and name not in RESERVED_ATTRIBUTES
    )


def format_shape(shape: Shape) -> str:
    """Render a shape back into type expression syntax."""
    if isinstance(shape, ScalarShape):
        return shape.type_name
    if isinstance(shape, RecordShape | EnumShape):
        return shape.ref
    if isinstance(shape, ArrayShape):
        return f"[]{format_shape(shape.item)}"
    if isinstance(shape, MapShape):
        return f"map[{format_shape(shape.key)}]{format_shape(shape.value)}"
    return f"*{format_shape(shape.inner)}"
