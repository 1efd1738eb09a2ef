"""Extension region extraction tests."""

from __future__ import annotations

import pytest
from record_bridge.code_generation.extension_regions import (
    GenerationError,
    extract_extension_regions,
)


def test_extracts_region_bodies_verbatim() -> None:
    text = """class Address:
    # [Address:]
    def greeting(self) -> str:
        return f"{self.city} {self.number}"

    # [end]


class Empty:
    # [Empty:]
    # [end]
"""

    regions = extract_extension_regions(text)

    assert regions == {
        "Address": (
            "    def greeting(self) -> str:\n"
            '        return f"{self.city} {self.number}"\n'
            "\n"
        ),
        "Empty": "",
    }


def test_text_without_regions_yields_nothing() -> None:
    assert extract_extension_regions("x = 1\n") == {}


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("# [A:]\nx = 1\n", "never closed"),
        ("# [A:]\n# [B:]\n# [end]\n", "is not closed before line 2"),
        ("x = 1\n# [end]\n", "End marker without an open region at line 2"),
        ("# [A:]\n# [end]\n# [A:]\n# [end]\n", "Duplicate extension region 'A'"),
    ],
)
def test_corrupted_markers_raise_generation_error(text: str, message: str) -> None:
    with pytest.raises(GenerationError, match=message):
        extract_extension_regions(text)
