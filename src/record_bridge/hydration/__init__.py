"""Hydration runtime exports."""

from .generated_modules import GeneratedModuleError, load_generated_module, record_class
from .runtime import (
    DEFAULT_MAX_DEPTH,
    DepthExceededError,
    HydratedRecord,
    HydrationError,
    HydrationParseError,
    convert_values,
    depth_limit,
    dump_value,
    hydrate,
    parse_source,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DepthExceededError",
    "GeneratedModuleError",
    "HydratedRecord",
    "HydrationError",
    "HydrationParseError",
    "convert_values",
    "depth_limit",
    "dump_value",
    "hydrate",
    "load_generated_module",
    "parse_source",
    "record_class",
]
