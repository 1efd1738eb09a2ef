"""Type expression parsing tests."""

from __future__ import annotations

import pytest
from record_bridge.schema_management.schema_models import (
    ArrayShape,
    EnumShape,
    MapShape,
    OptionalShape,
    RecordShape,
    ScalarShape,
)
from record_bridge.schema_management.type_expressions import (
    SchemaError,
    format_shape,
    parse_type_expression,
    to_attribute_name,
)


def test_parses_scalars_and_aliases() -> None:
    assert parse_type_expression("string") == ScalarShape("string")
    assert parse_type_expression(" uint64 ") == ScalarShape("uint64")
    assert parse_type_expression("interface{}") == ScalarShape("any")


def test_unknown_names_become_record_references_and_enums_are_recognized() -> None:
    assert parse_type_expression("Address") == RecordShape("Address")
    assert parse_type_expression("Status", enum_names={"Status"}) == EnumShape("Status")


def test_parses_nested_collections() -> None:
    shape = parse_type_expression("map[string][]*Address")

    assert shape == MapShape(
        key=ScalarShape("string"),
        value=ArrayShape(OptionalShape(RecordShape("Address"))),
    )
    assert format_shape(shape) == "map[string][]*Address"


def test_fixed_size_arrays_and_nested_map_keys() -> None:
    assert parse_type_expression("[3]int") == ArrayShape(ScalarShape("int"))
    assert parse_type_expression("map[int]map[string]Person") == MapShape(
        key=ScalarShape("int"),
        value=MapShape(key=ScalarShape("string"), value=RecordShape("Person")),
    )


def test_double_pointer_collapses_to_single_optional() -> None:
    assert parse_type_expression("**Address") == OptionalShape(RecordShape("Address"))


@pytest.mark.parametrize(
    ("expression", "message"),
    [
        ("", "must not be empty"),
        ("map[string", "Unbalanced brackets"),
        ("map[Address]string", "Map key must be a scalar"),
        ("map[string]", "Map value type is missing"),
        ("time.Time", "Unsupported type expression"),
    ],
)
def test_rejects_malformed_expressions(expression: str, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        parse_type_expression(expression)


def test_non_string_expression_is_rejected() -> None:
    with pytest.raises(SchemaError, match="must be a string"):
        parse_type_expression(None)  # type: ignore[arg-type]


def test_attribute_names_are_derived_from_wire_keys() -> None:
    assert to_attribute_name("pet_name") == "pet_name"
    assert to_attribute_name("pet-name") == "pet_name"
    assert to_attribute_name("2fa") == "_2fa"
    assert to_attribute_name("class") == "class_"
    assert to_attribute_name("to_dict") == "to_dict_"
    assert to_attribute_name("__v") == "_v"

    with pytest.raises(SchemaError):
        to_attribute_name("--")
