"""Generated module writer tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from record_bridge.code_generation import GenerationError, write_generated_module
from record_bridge.schema_management import load_schema_document
from record_bridge.type_mapping import map_schema

_SCHEMA = """
records:
  - name: Address
    fields:
      - {name: city, type: string}
  - name: Person
    fields:
      - {name: home, type: "*Address"}
"""

_EXTENSION = "    def describe(self) -> str:\n        return self.city\n"


def _types(text: str = _SCHEMA):
    return map_schema(load_schema_document(text).records)


def _add_extension(path: Path, class_name: str, body: str) -> None:
    marker = f"    # [{class_name}:]\n"
    content = path.read_text(encoding="utf-8")
    path.write_text(content.replace(marker, marker + body), encoding="utf-8")


def test_first_write_creates_directories_and_empty_regions(tmp_path: Path) -> None:
    output = tmp_path / "generated" / "models.py"

    outcome = write_generated_module(_types(), output)

    assert outcome.output_path == output.resolve()
    assert outcome.backup_path is None
    assert outcome.preserved_regions == ()
    content = output.read_text(encoding="utf-8")
    assert "    # [Address:]\n    # [end]\n" in content
    assert "    # [Person:]\n    # [end]\n" in content


def test_regeneration_preserves_hand_written_code(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    write_generated_module(_types(), output)
    _add_extension(output, "Address", _EXTENSION)

    changed_schema = _SCHEMA.replace(
        "{name: city, type: string}", "{name: city, type: string}\n      - {name: zip, type: int}"
    )
    outcome = write_generated_module(_types(changed_schema), output)

    content = output.read_text(encoding="utf-8")
    assert outcome.preserved_regions == ("Address",)
    assert "    # [Address:]\n" + _EXTENSION + "    # [end]\n" in content
    assert 'self.zip = source.get("zip")' in content


def test_regeneration_is_idempotent(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    write_generated_module(_types(), output)
    _add_extension(output, "Person", "\n    # keep the blank line above\n")
    first = output.read_text(encoding="utf-8")

    write_generated_module(_types(), output)

    assert output.read_text(encoding="utf-8") == first


def test_previous_module_is_backed_up_when_configured(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    backups = tmp_path / "backups"
    write_generated_module(_types(), output, backup_dir=backups)
    previous = output.read_text(encoding="utf-8")

    outcome = write_generated_module(_types(), output, backup_dir=backups)

    assert outcome.backup_path is not None
    assert outcome.backup_path.parent == backups
    assert outcome.backup_path.name.startswith("models.py-")
    assert outcome.backup_path.read_text(encoding="utf-8") == previous


def test_orphaned_hand_written_code_aborts_generation(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    write_generated_module(_types(), output)
    _add_extension(output, "Address", _EXTENSION)
    before = output.read_text(encoding="utf-8")
    person_only = """
records:
  - name: Person
    fields:
      - {name: name, type: string}
"""

    with pytest.raises(GenerationError, match="no longer generated: Address"):
        write_generated_module(_types(person_only), output)

    assert output.read_text(encoding="utf-8") == before


def test_empty_regions_of_removed_types_are_dropped(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    write_generated_module(_types(), output)
    person_only = """
records:
  - name: Person
    fields:
      - {name: name, type: string}
"""

    write_generated_module(_types(person_only), output)

    assert "# [Address:]" not in output.read_text(encoding="utf-8")


def test_corrupted_markers_leave_the_file_untouched(tmp_path: Path) -> None:
    output = tmp_path / "models.py"
    output.write_text("# [Address:]\nx = 1\n", encoding="utf-8")

    with pytest.raises(GenerationError):
        write_generated_module(_types(), output)

    assert output.read_text(encoding="utf-8") == "# [Address:]\nx = 1\n"
