"""Generation and hydration use case tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from record_bridge.run_execution import (
    GenerationRequest,
    HydrationRequest,
    RunExecutionError,
    describe_generated_types,
    execute_generation_run,
    execute_hydration_run,
    load_generation_artifacts,
)

_SCHEMA = """
records:
  - name: Address
    fields:
      - {name: city, type: string}
  - name: Person
    fields:
      - {name: name, type: string}
      - {name: homes, type: "map[string]Address"}
"""


def _write_config(tmp_path: Path, generation: str = "", schema: str = _SCHEMA) -> Path:
    (tmp_path / "schema.yaml").write_text(schema, encoding="utf-8")
    path = tmp_path / "record-bridge.yaml"
    path.write_text(
        "schema:\n  path: schema.yaml\noutput:\n  path: out/models.py\n" + generation,
        encoding="utf-8",
    )
    return path


def test_load_generation_artifacts_maps_with_configured_options(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "generation:\n  prefix: Api\n  protocol: factory\n")

    artifacts = load_generation_artifacts(str(config_path))

    assert [item.class_name for item in artifacts.generated_types] == ["ApiAddress", "ApiPerson"]
    assert artifacts.output_path == (tmp_path / "out" / "models.py").resolve()
    assert artifacts.document.source_path == (tmp_path / "schema.yaml").resolve()


def test_output_override_takes_precedence(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    artifacts = load_generation_artifacts(str(config_path), str(tmp_path / "other.py"))

    assert artifacts.output_path == tmp_path / "other.py"


def test_schema_errors_become_run_errors(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path, schema="records:\n  - name: A\n    fields:\n      - {name: b, type: Missing}\n"
    )

    with pytest.raises(RunExecutionError, match="unknown record type 'Missing'"):
        load_generation_artifacts(str(config_path))


def test_describe_generated_types_lists_fields(tmp_path: Path) -> None:
    artifacts = load_generation_artifacts(str(_write_config(tmp_path)))

    assert describe_generated_types(artifacts) == [
        "Address (mutating)",
        "  city: string -> str [passthrough]",
        "Person (mutating)",
        "  name: string -> str [passthrough]",
        "  homes: map[string]Address -> dict[str, Address] [record_mapping]",
    ]


def test_generation_then_hydration(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    payload = tmp_path / "person.json"
    payload.write_text(
        json.dumps({"name": "Al", "homes": {"x": {"city": "NYC"}}}), encoding="utf-8"
    )

    outcome = execute_generation_run(GenerationRequest(config_path=str(config_path)))
    person = execute_hydration_run(
        HydrationRequest(config_path=str(config_path), type_name="Person", input_path=str(payload))
    )

    assert outcome.output_path.exists()
    assert type(person).__name__ == "Person"
    assert person.homes["x"].city == "NYC"


def test_hydration_of_unknown_type_fails(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    payload = tmp_path / "person.json"
    payload.write_text("{}", encoding="utf-8")
    execute_generation_run(GenerationRequest(config_path=str(config_path)))

    with pytest.raises(RunExecutionError, match="Ghost is not a generated record class"):
        execute_hydration_run(
            HydrationRequest(
                config_path=str(config_path), type_name="Ghost", input_path=str(payload)
            )
        )


def test_hydration_of_invalid_json_fails(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    payload = tmp_path / "person.json"
    payload.write_text("{oops", encoding="utf-8")
    execute_generation_run(GenerationRequest(config_path=str(config_path)))

    with pytest.raises(RunExecutionError, match="not valid JSON"):
        execute_hydration_run(
            HydrationRequest(
                config_path=str(config_path), type_name="Person", input_path=str(payload)
            )
        )


def test_corrupted_regions_become_run_errors(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    output = tmp_path / "out" / "models.py"
    output.parent.mkdir()
    output.write_text("# [end]\n", encoding="utf-8")

    with pytest.raises(RunExecutionError, match="End marker"):
        execute_generation_run(GenerationRequest(config_path=str(config_path)))


def test_broken_extension_code_becomes_a_run_error(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    payload = tmp_path / "person.json"
    payload.write_text("{}", encoding="utf-8")
    outcome = execute_generation_run(GenerationRequest(config_path=str(config_path)))
    marker = "    # [Person:]\n"
    content = outcome.output_path.read_text(encoding="utf-8")
    outcome.output_path.write_text(
        content.replace(marker, marker + "    def broken(self:\n"), encoding="utf-8"
    )

    with pytest.raises(RunExecutionError, match="Cannot import generated module"):
        execute_hydration_run(
            HydrationRequest(
                config_path=str(config_path), type_name="Person", input_path=str(payload)
            )
        )
