"""Run execution domain exports."""

from .generation_run_use_case import (
    RunExecutionError,
    describe_generated_types,
    execute_generation_run,
    execute_hydration_run,
    load_generation_artifacts,
)
from .run_contracts import GenerationArtifacts, GenerationRequest, HydrationRequest

__all__ = [
    "GenerationArtifacts",
    "GenerationRequest",
    "HydrationRequest",
    "RunExecutionError",
    "describe_generated_types",
    "execute_generation_run",
    "execute_hydration_run",
    "load_generation_artifacts",
]
