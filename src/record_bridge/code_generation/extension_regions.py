"""Hand-written extension regions kept across regeneration."""

from __future__ import annotations

import re

_REGION_START = re.compile(r"^#\s*\[(?P<name>[A-Za-z_][A-Za-z0-9_]*):\]$")
_REGION_END = re.compile(r"^#\s*\[end\]$")


class GenerationError(Exception):
    """Raised when a generated module cannot be regenerated safely."""


def extract_extension_regions(text: str) -> dict[str, str]:
    """Return the verbatim body of every extension region keyed by class name.

    A region body keeps its lines exactly, each terminated by a newline; an
    empty region maps to an empty string.

    Raises:
      GenerationError: For unterminated or nested regions, stray end markers
        and duplicate region names.
    """
    regions: dict[str, str] = {}
    current_name: str | None = None
    opened_at = 0
    body: list[str] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        start = _REGION_START.match(stripped)
        if start:
            if current_name is not None:
                raise GenerationError(
                    f"Extension region '{current_name}' opened at line {opened_at} "
                    f"is not closed before line {line_number}."
                )
            current_name = start.group("name")
            if current_name in regions:
                raise GenerationError(f"Duplicate extension region '{current_name}'.")
            opened_at = line_number
            body = []
        elif _REGION_END.match(stripped):
            if current_name is None:
                raise GenerationError(f"End marker without an open region at line {line_number}.")
            regions[current_name] = "".join(f"{body_line}\n" for body_line in body)
            current_name = None
        elif current_name is not None:
            body.append(line)

    if current_name is not None:
        raise GenerationError(
            f"Extension region '{current_name}' opened at line {opened_at} is never closed."
        )
    return regions
