"""Code generation exports."""

from .constants import GENERATED_HEADER, REGION_END, REGION_START_TEMPLATE
from .extension_regions import GenerationError, extract_extension_regions
from .generation_models import GenerationOutcome, RenderOptions
from .module_renderer import render_module
from .module_writer import write_generated_module

__all__ = [
    "GENERATED_HEADER",
    "REGION_END",
    "REGION_START_TEMPLATE",
    "GenerationError",
    "GenerationOutcome",
    "RenderOptions",
    "extract_extension_regions",
    "render_module",
    "write_generated_module",
]
