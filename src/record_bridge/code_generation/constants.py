"""Shared code generation constants."""

from __future__ import annotations

GENERATED_HEADER = "# Do not change, this code is generated from backend struct definitions."
RUNTIME_IMPORT = "from record_bridge.hydration import runtime"

REGION_START_TEMPLATE = "# [{name}:]"
REGION_END = "# [end]"

DEFAULT_INDENT = "    "
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%dT%H_%M_%S.%f"
