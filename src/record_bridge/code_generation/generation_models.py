"""Code generation entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .constants import DEFAULT_INDENT


@dataclass(frozen=True)
class RenderOptions:
    """Formatting settings for one generated module."""

    indent: str = DEFAULT_INDENT
    imports: tuple[str, ...] = ()
    export: bool = True


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of writing one generated module."""

    output_path: Path
    backup_path: Path | None
    preserved_regions: tuple[str, ...]
