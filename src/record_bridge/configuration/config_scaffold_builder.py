"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "record-bridge.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration template for record-bridge.
# Replace every <REQUIRED> placeholder before running generate.
# Relative paths are resolved against the directory of this file.

schema:
  # Provide either an inline schema document or a schema file path (YAML or JSON).
  path: "<REQUIRED>"
  # inline: |
  #   records:
  #     - name: Address
  #       fields:
  #         - {name: city, type: string}

output:
  # Generated Python module; hand-written extension regions inside it survive regeneration.
  path: "<REQUIRED>"
  # Directory receiving a timestamped copy of the previous module before it is overwritten.
  # backup_dir: ".backups"

generation:
  # mutating: instances are built by the class constructor, nested fields sniffed at runtime.
  # factory: instances are returned by <Class>.from_source with per-field mapping fixed here.
  protocol: mutating
  # Per-type choice, keyed by record name.
  protocol_overrides: {}
  prefix: ""
  suffix: ""
  # Number of spaces, or "tab".
  indent: 4
  # Emit __all__ listing every generated class.
  export: true
  # Extra import lines, e.g. for field transforms.
  imports: []
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder generator configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
