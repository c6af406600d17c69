"""Maintenance window definitions from YAML.

SECURITY: Uses yaml.safe_load() exclusively. Never use yaml.load().
Uses aiofiles for non-blocking file I/O.

A file holds either one window mapping or a top-level
``maintenance_windows`` list of mappings.
"""

from __future__ import annotations

import aiofiles
import structlog
import yaml

from mwsync.maintenance.models import AUTHORED_CONTEXT, MaintenanceConfig

logger = structlog.get_logger()

_LIST_KEY = "maintenance_windows"


async def _read_yaml(file_path: str) -> object:
    async with aiofiles.open(file_path, mode="r", encoding="utf-8") as f:
        raw_content = await f.read()

    data = yaml.safe_load(raw_content)
    if data is None:
        raise ValueError(f"Definition file is empty: {file_path}")
    return data


async def load_definitions(file_path: str) -> list[MaintenanceConfig]:
    """Load and validate every window definition in a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the file is empty or not a mapping.
        pydantic.ValidationError: If a definition fails schema validation or sets
            a server-computed field.
    """
    data = await _read_yaml(file_path)
    if not isinstance(data, dict):
        raise ValueError(f"Definition file must contain a mapping: {file_path}")

    if _LIST_KEY in data:
        entries = data[_LIST_KEY] or []
        if not isinstance(entries, list):
            raise ValueError(f"'{_LIST_KEY}' must be a list: {file_path}")
    else:
        entries = [data]

    configs = [
        MaintenanceConfig.model_validate(entry, context={AUTHORED_CONTEXT: True})
        for entry in entries
    ]

    await logger.ainfo(
        "definitions_loaded",
        file_path=file_path,
        count=len(configs),
    )
    return configs


async def load_definition(file_path: str) -> MaintenanceConfig:
    """Load a file that must hold exactly one window definition."""
    configs = await load_definitions(file_path)
    if len(configs) != 1:
        raise ValueError(f"Expected one maintenance window in {file_path}, found {len(configs)}")
    return configs[0]
