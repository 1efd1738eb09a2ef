"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from record_bridge.type_mapping.mapping_models import ConstructionProtocol


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized schema settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class OutputSettings:
    """Where the generated module goes."""

    path: Path
    backup_dir: Path | None


@dataclass(frozen=True)
class GenerationSettings:
    """Generator behaviour shared by every generated type."""

    protocol: ConstructionProtocol = ConstructionProtocol.MUTATING
    protocol_overrides: Mapping[str, ConstructionProtocol] = field(default_factory=dict)
    prefix: str = ""
    suffix: str = ""
    indent: str = "    "
    export: bool = True
    imports: tuple[str, ...] = ()


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaConfig
    output: OutputSettings
    generation: GenerationSettings
