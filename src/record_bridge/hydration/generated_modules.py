"""Loading generated modules and their record classes."""

from __future__ import annotations

import hashlib
import importlib.util
from pathlib import Path
from types import ModuleType

from .runtime import HydratedRecord, HydrationError


class GeneratedModuleError(HydrationError):
    """Raised when a generated module or one of its classes cannot be loaded."""


def load_generated_module(module_path: Path | str) -> ModuleType:
    """Import a generated module from its file path."""
    path = Path(module_path).resolve()
    if not path.exists():
        raise GeneratedModuleError(f"Generated module not found: {path}")
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"record_bridge_generated_{digest}", path)
    if spec is None or spec.loader is None:
        raise GeneratedModuleError(f"Cannot import generated module: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        # broken hand-written extension code surfaces here
        raise GeneratedModuleError(
            f"Cannot import generated module {path}: {type(exc).__name__}: {exc}"
        ) from exc
    return module


def record_class(module: ModuleType, class_name: str) -> type[HydratedRecord]:
    """Return the generated record class named `class_name`."""
    candidate = getattr(module, class_name, None)
    if not isinstance(candidate, type) or not issubclass(candidate, HydratedRecord):
        raise GeneratedModuleError(f"{class_name} is not a generated record class.")
    return candidate
