"""Lifecycle orchestration for maintenance windows.

Sequences validation, mapping, and calls to the monitoring server for
create, read, update, delete, and import. Holds no state beyond the
injected client; operations for one window are expected to run one at a
time.

Every server call honours the configured timeout. Nothing is mutated
locally before a call completes, so a timeout or cancellation leaves no
partial effect.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from mwsync.integrations.client import MaintenanceClient
from mwsync.maintenance.calls import DEFAULT_TIMEOUT_SECONDS, call_with_timeout
from mwsync.maintenance.errors import (
    ImportIdError,
    MaintenanceValidationError,
    NotFoundError,
)
from mwsync.maintenance.mapping import config_to_domain, domain_to_config
from mwsync.maintenance.models import MaintenanceConfig
from mwsync.maintenance.validator import ValidationFailure, validate_config

logger = structlog.get_logger()

T = TypeVar("T")

# Signed base-10 digits, ASCII only. Identifiers are signed 64-bit on the server.
_IMPORT_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_import_id(raw_id: str) -> int:
    """Parse an externally supplied identifier as a base-10 integer.

    Raises:
        ImportIdError: If the value is not a signed 64-bit integer written in
            ASCII digits, with no surrounding whitespace.
    """
    if not isinstance(raw_id, str) or not _IMPORT_ID_PATTERN.fullmatch(raw_id):
        raise ImportIdError(f"Import ID must be a valid integer, got: {raw_id}")
    value = int(raw_id, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ImportIdError(f"Import ID must be a valid integer, got: {raw_id}")
    return value


class MaintenanceLifecycle:
    """Create/read/update/delete/import for maintenance windows.

    Args:
        client: The monitoring server client. Shared, read-only.
        timeout: Per-call timeout in seconds, or None to wait indefinitely.
    """

    def __init__(
        self,
        client: MaintenanceClient,
        *,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._timeout = timeout

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        return await call_with_timeout(operation, awaitable, self._timeout)

    def validate(self, config: MaintenanceConfig) -> list[ValidationFailure]:
        """Check strategy-required fields. Hosts call this before mutations."""
        return validate_config(config)

    def _validate_or_raise(self, config: MaintenanceConfig) -> None:
        failures = validate_config(config)
        if failures:
            raise MaintenanceValidationError(failures)

    async def create(self, config: MaintenanceConfig) -> MaintenanceConfig:
        """Create a window and return its configuration with computed fields.

        Raises:
            MaintenanceValidationError, ParseError, ConversionError: Before any call.
            TransportError: The create call failed.
        """
        self._validate_or_raise(config)
        domain = config_to_domain(config)

        created = await self._call("create maintenance", self._client.create_maintenance(domain))

        state = domain_to_config(created, config.model_copy(update={"id": created.id}))
        await logger.ainfo(
            "maintenance_created",
            maintenance_id=created.id,
            strategy=created.strategy.value,
        )
        return state

    async def read(
        self, maintenance_id: int, prior: MaintenanceConfig | None = None
    ) -> MaintenanceConfig | None:
        """Refresh a window from the server.

        Returns:
            The current configuration, or None if the server no longer has
            the window and it should be removed locally.
        """
        try:
            m = await self._call("read maintenance", self._client.get_maintenance(maintenance_id))
        except NotFoundError:
            await logger.awarning("maintenance_not_found_removing", maintenance_id=maintenance_id)
            return None

        return domain_to_config(m, prior)

    async def update(self, config: MaintenanceConfig) -> MaintenanceConfig:
        """Send an updated configuration, then re-read the window.

        The re-read picks up computed fields the server derives from the
        mutation instead of trusting the update response.

        Raises:
            MaintenanceValidationError: Missing strategy fields or no identifier.
            ParseError, ConversionError: Before any call.
            NotFoundError: The window was deleted on the server.
            TransportError: A call failed.
        """
        self._validate_or_raise(config)
        if config.id is None:
            raise MaintenanceValidationError(
                [ValidationFailure("id", "Invalid Configuration", "id is required for update")]
            )
        domain = config_to_domain(config)

        await self._call("update maintenance", self._client.update_maintenance(domain))
        updated = await self._call(
            "read updated maintenance", self._client.get_maintenance(config.id)
        )

        state = domain_to_config(updated, config)
        await logger.ainfo(
            "maintenance_updated",
            maintenance_id=config.id,
            strategy=updated.strategy.value,
        )
        return state

    async def delete(self, maintenance_id: int) -> None:
        """Delete a window. Any failure, including not-found, propagates."""
        await self._call("delete maintenance", self._client.delete_maintenance(maintenance_id))
        await logger.ainfo("maintenance_deleted", maintenance_id=maintenance_id)

    def import_state(self, raw_id: str) -> int:
        """Seed only the identifier; the next read fills in the rest."""
        return parse_import_id(raw_id)
