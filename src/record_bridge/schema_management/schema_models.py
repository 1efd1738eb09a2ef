"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SCALAR_TYPE_NAMES: frozenset[str] = frozenset(
    {
        "string",
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "byte",
        "rune",
        "float32",
        "float64",
        "any",
    }
)


@dataclass(frozen=True)
class ScalarShape:
    """Leaf value passed through without conversion."""

    type_name: str


@dataclass(frozen=True)
class RecordShape:
    """Reference to a named record type."""

    ref: str


@dataclass(frozen=True)
class EnumShape:
    """Reference to a named enum type."""

    ref: str


@dataclass(frozen=True)
class ArrayShape:
    """Ordered sequence of items."""

    item: Shape


@dataclass(frozen=True)
class MapShape:
    """Dictionary keyed by a scalar."""

    key: ScalarShape
    value: Shape


@dataclass(frozen=True)
class OptionalShape:
    """Value that may be absent from the payload."""

    inner: Shape


Shape = ScalarShape | RecordShape | EnumShape | ArrayShape | MapShape | OptionalShape


@dataclass(frozen=True)
class FieldSchema:
    """One named, typed field of a record."""

    name: str
    shape: Shape
    attribute: str
    type_override: str | None = None
    transform: str | None = None


@dataclass(frozen=True)
class RecordSchema:
    """Named aggregate of fields, analogous to a backend struct."""

    name: str
    fields: tuple[FieldSchema, ...]


@dataclass(frozen=True)
class EnumMember:
    """One named enum value."""

    name: str
    value: str | int


@dataclass(frozen=True)
class EnumSchema:
    """Named set of constant values."""

    name: str
    members: tuple[EnumMember, ...]


@dataclass(frozen=True)
class SchemaDocument:
    """Structured representation of a schema definition."""

    records: tuple[RecordSchema, ...]
    enums: tuple[EnumSchema, ...] = ()
    source_path: Path | None = None
