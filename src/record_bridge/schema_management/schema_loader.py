"""Schema loading service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .schema_models import (
    EnumMember,
    EnumSchema,
    FieldSchema,
    OptionalShape,
    RecordSchema,
    SchemaDocument,
)
from .type_expressions import (
    SchemaError,
    is_valid_attribute,
    parse_type_expression,
    to_attribute_name,
)


def load_schema_file(schema_path: Path | str) -> SchemaDocument:
    """Read a YAML or JSON schema file."""
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    return load_schema_document(path.read_text(encoding="utf-8"), source_path=path)


def load_schema_document(text: str, *, source_path: Path | None = None) -> SchemaDocument:
    """Parse schema text into a structured document."""
    try:
        root = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc

    if not isinstance(root, Mapping):
        raise SchemaError("Schema root must be a mapping with a 'records' list.")

    enums = tuple(
        _parse_enum(entry) for entry in _require_sequence(root.get("enums", []), "enums")
    )
    enum_names = {enum.name for enum in enums}
    records = tuple(
        _parse_record(entry, enum_names)
        for entry in _require_sequence(root.get("records"), "records")
    )
    if not records:
        raise SchemaError("Schema must declare at least one record.")
    return SchemaDocument(records=records, enums=enums, source_path=source_path)


def _parse_record(entry: Any, enum_names: set[str]) -> RecordSchema:
    if not isinstance(entry, Mapping):
        raise SchemaError("Record definitions must be mappings.")
    name = _require_name(entry.get("name"), "record")
    fields = tuple(
        _parse_field(field, name, enum_names)
        for field in _require_sequence(entry.get("fields", []), f"{name}.fields")
    )
    return RecordSchema(name=name, fields=fields)


def _parse_field(entry: Any, record_name: str, enum_names: set[str]) -> FieldSchema:
    if not isinstance(entry, Mapping):
        raise SchemaError(f"Field definitions of {record_name} must be mappings.")
    name = _require_name(entry.get("name"), f"{record_name} field")
    try:
        shape = parse_type_expression(entry.get("type"), enum_names=enum_names)
    except SchemaError as exc:
        raise SchemaError(f"{record_name}.{name}: {exc}") from exc
    if entry.get("optional", False) and not isinstance(shape, OptionalShape):
        shape = OptionalShape(shape)

    attribute = entry.get("attribute")
    if attribute is None:
        attribute = to_attribute_name(name)
    elif not isinstance(attribute, str) or not is_valid_attribute(attribute):
        raise SchemaError(f"{record_name}.{name}: '{attribute}' is not a usable attribute name.")

    return FieldSchema(
        name=name,
        shape=shape,
        attribute=attribute,
        type_override=_optional_text(entry.get("type_override"), f"{record_name}.{name}"),
        transform=_optional_text(entry.get("transform"), f"{record_name}.{name}"),
    )


def _parse_enum(entry: Any) -> EnumSchema:
    if not isinstance(entry, Mapping):
        raise SchemaError("Enum definitions must be mappings.")
    name = _require_name(entry.get("name"), "enum")
    members: list[EnumMember] = []
    for member in _require_sequence(entry.get("members"), f"{name}.members"):
        if not isinstance(member, Mapping):
            raise SchemaError(f"Members of enum {name} must be mappings.")
        member_name = _require_name(member.get("name"), f"{name} member")
        value = member.get("value")
        if isinstance(value, bool) or not isinstance(value, str | int):
            raise SchemaError(f"{name}.{member_name}: enum values must be strings or integers.")
        members.append(EnumMember(name=member_name, value=value))
    if not members:
        raise SchemaError(f"Enum {name} must declare at least one member.")
    if len({type(member.value) for member in members}) > 1:
        raise SchemaError(f"Enum {name} mixes string and integer values.")
    return EnumSchema(name=name, members=tuple(members))


def _require_sequence(value: Any, label: str) -> Sequence[Any]:
    if value is None:
        raise SchemaError(f"Schema section '{label}' is required.")
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise SchemaError(f"Schema section '{label}' must be a list.")
    return value


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SchemaError(f"Every {label} requires a non-empty name.")
    return value.strip()


def _optional_text(value: Any, label: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise SchemaError(f"{label}: type_override and transform must be non-empty strings.")
    return value.strip()
