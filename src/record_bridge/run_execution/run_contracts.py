"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from record_bridge.configuration.runtime_settings import Configuration
from record_bridge.schema_management.schema_models import SchemaDocument
from record_bridge.type_mapping.mapping_models import GeneratedEnum, GeneratedType


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for generating one module."""

    config_path: str
    output_path: str | None = None


@dataclass(frozen=True)
class HydrationRequest:
    """Input contract for hydrating one payload file through a generated module."""

    config_path: str
    type_name: str
    input_path: str
    module_path: str | None = None


@dataclass(frozen=True)
class GenerationArtifacts:
    """Loaded and mapped artifacts required to render a module."""

    configuration: Configuration
    document: SchemaDocument
    generated_types: tuple[GeneratedType, ...]
    generated_enums: tuple[GeneratedEnum, ...]
    output_path: Path
