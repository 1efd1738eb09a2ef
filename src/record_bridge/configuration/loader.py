"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from record_bridge.type_mapping.mapping_models import ConstructionProtocol

from .runtime_settings import Configuration, GenerationSettings, OutputSettings, SchemaConfig

_PROTOCOL_CHOICES = ", ".join(protocol.value for protocol in ConstructionProtocol)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    return Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), base_path),
        output=_parse_output_section(parsed.get("output"), base_path),
        generation=_parse_generation_section(parsed.get("generation")),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return SchemaConfig(text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaConfig(text=text, source_path=schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output")
    output_path = _require_non_empty_string(section.get("path"), "output.path")
    backup_dir = _optional_string(section.get("backup_dir"), "output.backup_dir")
    return OutputSettings(
        path=_resolve_path(base_path, output_path),
        backup_dir=_resolve_path(base_path, backup_dir) if backup_dir else None,
    )


def _parse_generation_section(value: Any) -> GenerationSettings:
    if value is None:
        return GenerationSettings()
    section = _require_mapping(value, "generation")
    protocol = _parse_protocol(section.get("protocol", "mutating"), "generation.protocol")

    overrides_raw = section.get("protocol_overrides") or {}
    if not isinstance(overrides_raw, Mapping):
        raise ConfigurationError("generation.protocol_overrides must be a mapping.")
    overrides = {
        _require_non_empty_string(name, "generation.protocol_overrides key"): _parse_protocol(
            override, f"generation.protocol_overrides.{name}"
        )
        for name, override in overrides_raw.items()
    }

    return GenerationSettings(
        protocol=protocol,
        protocol_overrides=overrides,
        prefix=_optional_string(section.get("prefix"), "generation.prefix") or "",
        suffix=_optional_string(section.get("suffix"), "generation.suffix") or "",
        indent=_parse_indent(section.get("indent", 4)),
        export=_require_bool(section.get("export", True), "generation.export"),
        imports=_normalize_string_sequence(section.get("imports"), "generation.imports"),
    )


def _parse_protocol(value: Any, field_name: str) -> ConstructionProtocol:
    text = _require_non_empty_string(value, field_name).lower()
    try:
        return ConstructionProtocol(text)
    except ValueError as exc:
        raise ConfigurationError(f"{field_name} must be one of: {_PROTOCOL_CHOICES}.") from exc


def _parse_indent(value: Any) -> str:
    if value == "tab":
        return "\t"
    return " " * _require_positive_int(value, "generation.indent")


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
