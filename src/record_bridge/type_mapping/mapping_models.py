"""Type mapping entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from record_bridge.schema_management.schema_models import Shape


class ConstructionProtocol(str, Enum):
    """How a generated class builds instances from source data."""

    MUTATING = "mutating"
    FACTORY = "factory"


class HydrationAction(str, Enum):
    """Per-field conversion applied while hydrating."""

    PASSTHROUGH = "passthrough"
    RECORD = "record"
    RECORD_SEQUENCE = "record_sequence"
    RECORD_MAPPING = "record_mapping"


@dataclass(frozen=True)
class MapperOptions:
    """Settings that shape generated class names and construction."""

    protocol: ConstructionProtocol = ConstructionProtocol.MUTATING
    protocol_overrides: dict[str, ConstructionProtocol] = field(default_factory=dict)
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class FieldDescriptor:
    """Target-side declaration and hydration recipe for one field.

    `target_shape` mirrors the source shape with record and enum references
    renamed to their generated class names. `record_class` and `map_depth`
    describe the single record reachable through the shape, if any.
    """

    attribute: str
    wire_name: str
    annotation: str
    target_shape: Shape
    action: HydrationAction
    optional: bool
    record_class: str | None = None
    map_depth: int = 0
    transform: str | None = None


@dataclass(frozen=True)
class GeneratedType:
    """Client class produced for one record schema."""

    schema_name: str
    class_name: str
    fields: tuple[FieldDescriptor, ...]
    protocol: ConstructionProtocol


@dataclass(frozen=True)
class GeneratedEnum:
    """Client enum produced for one enum schema."""

    schema_name: str
    class_name: str
    members: tuple[tuple[str, str | int], ...]
    value_type: str
