"""Generated module writer."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from record_bridge.type_mapping.mapping_models import GeneratedEnum, GeneratedType

from .constants import BACKUP_TIMESTAMP_FORMAT
from .extension_regions import GenerationError, extract_extension_regions
from .generation_models import GenerationOutcome, RenderOptions
from .module_renderer import render_module

logger = logging.getLogger(__name__)


def write_generated_module(
    generated_types: Sequence[GeneratedType],
    output_path: Path | str,
    *,
    generated_enums: Sequence[GeneratedEnum] = (),
    options: RenderOptions | None = None,
    backup_dir: Path | str | None = None,
) -> GenerationOutcome:
    """Render the module and write it, keeping hand-written extension regions.

    Args:
      generated_types: Mapped record types, in declaration order.
      output_path: Destination module path; overwritten except for its
        extension regions.
      generated_enums: Mapped enum types.
      options: Formatting settings.
      backup_dir: Directory receiving a timestamped copy of the previous
        module; no backup is made when omitted.

    Returns:
      The resolved output path, the backup path and the preserved region names.

    Raises:
      GenerationError: If the existing module has corrupted region markers or
        holds hand-written code for a type that is no longer generated.
      OSError: If reading or writing files fails.
    """
    destination = Path(output_path)
    existing_regions: dict[str, str] = {}
    backup_path = None
    if destination.exists():
        existing_regions = extract_extension_regions(destination.read_text(encoding="utf-8"))
        _check_orphaned_regions(existing_regions, generated_types)
        if backup_dir is not None:
            backup_path = _backup(destination, Path(backup_dir))

    content = render_module(
        generated_types,
        generated_enums,
        options=options,
        extension_code=existing_regions,
    )
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content, encoding="utf-8")

    preserved = tuple(
        generated.class_name
        for generated in generated_types
        if existing_regions.get(generated.class_name, "").strip()
    )
    logger.info(
        "Wrote %d generated types to %s (%d extension regions preserved)",
        len(generated_types),
        destination,
        len(preserved),
    )
    return GenerationOutcome(
        output_path=destination.resolve(),
        backup_path=backup_path,
        preserved_regions=preserved,
    )


def _check_orphaned_regions(
    regions: dict[str, str], generated_types: Sequence[GeneratedType]
) -> None:
    class_names = {generated.class_name for generated in generated_types}
    orphaned = sorted(
        name for name, body in regions.items() if name not in class_names and body.strip()
    )
    if orphaned:
        raise GenerationError(
            "Hand-written extension code exists for types that are no longer generated: "
            + ", ".join(orphaned)
        )
    for name in regions:
        if name not in class_names:
            logger.debug("Dropping empty extension region for removed type %s", name)


def _backup(source: Path, backup_dir: Path) -> Path:
    backup_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
    backup_path = backup_dir / f"{source.name}-{timestamp}.backup"
    shutil.copyfile(source, backup_path)
    logger.debug("Backed up %s to %s", source, backup_path)
    return backup_path
