"""Hydration runtime shared by generated client classes.

Generated modules import this module as ``runtime``. It holds the recursive
shape-sniffing helper used by mutating-prototype classes, the per-shape
mappers used by pure-factory classes, the recursion guard and the
``HydratedRecord`` base class.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, ClassVar, TypeVar

DEFAULT_MAX_DEPTH = 200

MUTATING_PROTOCOL = "mutating"
FACTORY_PROTOCOL = "factory"

_EMPTY_SOURCE: Mapping[str, Any] = {}

_current_depth: ContextVar[int] = ContextVar("record_bridge_hydration_depth", default=0)
_max_depth: ContextVar[int] = ContextVar("record_bridge_max_depth", default=DEFAULT_MAX_DEPTH)

RecordT = TypeVar("RecordT", bound="HydratedRecord")


class HydrationError(Exception):
    """Base class for errors surfaced by a hydration call."""


class HydrationParseError(HydrationError):
    """Raised when textual source data is not valid JSON."""


class DepthExceededError(HydrationError):
    """Raised when payload nesting exceeds the active depth limit."""


@contextmanager
def depth_limit(max_depth: int) -> Iterator[None]:
    """Override the maximum nesting depth for hydrations in the current context."""
    if max_depth < 1:
        raise ValueError("max_depth must be greater than zero.")
    token = _max_depth.set(max_depth)
    try:
        yield
    finally:
        _max_depth.reset(token)


@contextmanager
def descend() -> Iterator[int]:
    """Enter one composite level of the payload."""
    depth = _current_depth.get() + 1
    limit = _max_depth.get()
    if depth > limit:
        raise DepthExceededError(f"Payload nesting exceeds the maximum hydration depth of {limit}.")
    token = _current_depth.set(depth)
    try:
        yield depth
    except RecursionError as exc:
        # limit set above what the interpreter stack can hold
        raise DepthExceededError(
            f"Payload nesting at depth {depth} exceeds the interpreter recursion limit."
        ) from exc
    finally:
        _current_depth.reset(token)


def parse_source(source: Any) -> Any:
    """Parse JSON text; structured values are returned as they are."""
    if isinstance(source, str | bytes | bytearray):
        try:
            return json.loads(source)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise HydrationParseError(f"Source is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise DepthExceededError(
                "Source nesting exceeds the interpreter recursion limit while parsing."
            ) from exc
    return source


def source_fields(source: Any) -> Mapping[str, Any]:
    """Return the mapping a top-level record is read from.

    Absent or non-mapping sources yield an empty mapping so that the
    resulting instance has every field set to ``None``.
    """
    parsed = parse_source(source)
    if isinstance(parsed, Mapping):
        return parsed
    return _EMPTY_SOURCE


def convert_values(value: Any, target: Callable[[Any], Any], map_depth: int = 0) -> Any:
    """Hydrate `value` against `target`, sniffing the payload shape.

    `map_depth` counts the dictionary levels declared between the field and
    its record type; sequences at any level are detected from the payload.
    """
    if value is None:
        return value
    if isinstance(value, list | tuple):
        with descend():
            return [convert_values(item, target, map_depth) for item in value]
    if isinstance(value, Mapping):
        if map_depth > 0:
            with descend():
                return {
                    key: convert_values(item, target, map_depth - 1) for key, item in value.items()
                }
        return target(value)
    return value


def map_record(value: Any, factory: Callable[[Mapping[str, Any]], Any]) -> Any:
    if isinstance(value, Mapping):
        return factory(value)
    return value


def map_sequence(value: Any, convert: Callable[[Any], Any]) -> Any:
    if not isinstance(value, list | tuple):
        return value
    with descend():
        return [convert(item) for item in value]


def map_mapping(value: Any, convert: Callable[[Any], Any]) -> Any:
    if not isinstance(value, Mapping):
        return value
    with descend():
        return {key: convert(item) for key, item in value.items()}


def hydrate(record_cls: type[RecordT], source: Any) -> RecordT:
    """Hydrate `source` through the single entry point `record_cls` exposes."""
    if record_cls.__hydration_protocol__ == FACTORY_PROTOCOL:
        return record_cls.from_source(source)  # type: ignore[attr-defined, no-any-return]
    return record_cls(source)  # type: ignore[call-arg]


def dump_value(value: Any) -> Any:
    """Convert hydrated values back into JSON-compatible structures."""
    if isinstance(value, HydratedRecord):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list | tuple):
        return [dump_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: dump_value(item) for key, item in value.items()}
    return value


class HydratedRecord:
    """Base class of generated record classes.

    Subclasses declare ``__record_fields__`` (attribute to wire key) and
    ``__optional_fields__``; equality and serialization are structural over
    those fields.
    """

    __record_fields__: ClassVar[dict[str, str]] = {}
    __optional_fields__: ClassVar[frozenset[str]] = frozenset()
    __hydration_protocol__: ClassVar[str] = MUTATING_PROTOCOL

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for attribute, wire_name in self.__record_fields__.items():
            value = getattr(self, attribute, None)
            if value is None and attribute in self.__optional_fields__:
                continue
            payload[wire_name] = dump_value(value)
        return payload

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, attribute, None) == getattr(other, attribute, None)
            for attribute in self.__record_fields__
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(
            f"{attribute}={getattr(self, attribute, None)!r}"
            for attribute in self.__record_fields__
        )
        return f"{type(self).__name__}({values})"
