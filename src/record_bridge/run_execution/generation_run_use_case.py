"""Generation and hydration use-case services."""

from __future__ import annotations

import logging
from pathlib import Path

from record_bridge.code_generation import (
    GenerationError,
    GenerationOutcome,
    RenderOptions,
    write_generated_module,
)
from record_bridge.configuration import ConfigurationError, load_configuration
from record_bridge.configuration.runtime_settings import GenerationSettings
from record_bridge.hydration import (
    HydratedRecord,
    HydrationError,
    hydrate,
    load_generated_module,
    record_class,
)
from record_bridge.schema_management import SchemaError, format_shape, load_schema_document
from record_bridge.type_mapping import MapperOptions, map_enums, map_schema

from .run_contracts import GenerationArtifacts, GenerationRequest, HydrationRequest

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def load_generation_artifacts(
    config_path: str, output_path: str | None = None
) -> GenerationArtifacts:
    """Load configuration and schema, then map every record and enum."""
    try:
        configuration = load_configuration(config_path)
        document = load_schema_document(
            configuration.schema.text, source_path=configuration.schema.source_path
        )
        options = _mapper_options(configuration.generation)
        generated_types = map_schema(document.records, enums=document.enums, options=options)
        generated_enums = map_enums(document.enums, options=options)
    except (ConfigurationError, SchemaError) as exc:
        raise RunExecutionError(str(exc)) from exc

    resolved_output = Path(output_path) if output_path else configuration.output.path
    logger.info(
        "Mapped %d records and %d enums from %s",
        len(generated_types),
        len(generated_enums),
        configuration.schema.source_path or "inline schema",
    )
    return GenerationArtifacts(
        configuration=configuration,
        document=document,
        generated_types=generated_types,
        generated_enums=generated_enums,
        output_path=resolved_output,
    )


def execute_generation_run(request: GenerationRequest) -> GenerationOutcome:
    """Generate the client module described by the configuration."""
    artifacts = load_generation_artifacts(request.config_path, request.output_path)
    generation = artifacts.configuration.generation
    try:
        return write_generated_module(
            artifacts.generated_types,
            artifacts.output_path,
            generated_enums=artifacts.generated_enums,
            options=RenderOptions(
                indent=generation.indent,
                imports=generation.imports,
                export=generation.export,
            ),
            backup_dir=artifacts.configuration.output.backup_dir,
        )
    except (GenerationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc


def describe_generated_types(artifacts: GenerationArtifacts) -> list[str]:
    """Return one readable line per generated type and per mapped field."""
    schemas = {schema.name: schema for schema in artifacts.document.records}
    lines: list[str] = []
    for generated in artifacts.generated_types:
        lines.append(f"{generated.class_name} ({generated.protocol.value})")
        source_fields = {field.name: field for field in schemas[generated.schema_name].fields}
        for descriptor in generated.fields:
            source_shape = format_shape(source_fields[descriptor.wire_name].shape)
            lines.append(
                f"  {descriptor.wire_name}: {source_shape} -> {descriptor.annotation} "
                f"[{descriptor.action.value}]"
            )
    return lines


def execute_hydration_run(request: HydrationRequest) -> HydratedRecord:
    """Hydrate a JSON payload file with a class of the generated module."""
    artifacts = load_generation_artifacts(request.config_path)
    class_names = {
        generated.schema_name: generated.class_name for generated in artifacts.generated_types
    }
    class_name = class_names.get(request.type_name, request.type_name)
    module_path = Path(request.module_path) if request.module_path else artifacts.output_path
    input_path = Path(request.input_path)
    try:
        payload = input_path.read_text(encoding="utf-8")
        module = load_generated_module(module_path)
        return hydrate(record_class(module, class_name), payload)
    except (HydrationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc


def _mapper_options(settings: GenerationSettings) -> MapperOptions:
    return MapperOptions(
        protocol=settings.protocol,
        protocol_overrides=dict(settings.protocol_overrides),
        prefix=settings.prefix,
        suffix=settings.suffix,
    )
