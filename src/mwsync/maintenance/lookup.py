"""Read-only lookups across maintenance windows."""

from __future__ import annotations

from dataclasses import dataclass

from mwsync.integrations.client import MaintenanceClient
from mwsync.maintenance.calls import DEFAULT_TIMEOUT_SECONDS, call_with_timeout
from mwsync.maintenance.errors import AmbiguousMatchError, NotFoundError
from mwsync.maintenance.models import Maintenance
from mwsync.maintenance.primitives import MaintenanceStatus


@dataclass(frozen=True)
class MaintenanceSummary:
    """Listing view of a maintenance window."""

    id: int
    title: str
    description: str
    strategy: str
    active: bool
    status: str
    timezone_resolved: str
    timezone_offset: str

    @classmethod
    def from_domain(cls, m: Maintenance) -> MaintenanceSummary:
        return cls(
            id=m.id,
            title=m.title,
            description=m.description,
            strategy=m.strategy.value,
            active=m.active,
            status=m.status or MaintenanceStatus.UNKNOWN.value,
            timezone_resolved=m.timezone,
            timezone_offset=m.timezone_offset,
        )


async def list_maintenances(
    client: MaintenanceClient,
    *,
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> list[MaintenanceSummary]:
    """Summaries of every window, in server order."""
    items = await call_with_timeout("list maintenances", client.get_maintenances(), timeout)
    return [MaintenanceSummary.from_domain(m) for m in items]


async def find_maintenance(
    client: MaintenanceClient,
    *,
    maintenance_id: int | None = None,
    title: str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> MaintenanceSummary:
    """Find one window by identifier, or by exact title.

    Raises:
        ValueError: Neither identifier nor title given.
        NotFoundError: No window matches.
        AmbiguousMatchError: Several windows share the title.
        TransportError: A call failed or timed out.
    """
    if maintenance_id is not None:
        m = await call_with_timeout(
            "read maintenance", client.get_maintenance(maintenance_id), timeout
        )
        return MaintenanceSummary.from_domain(m)

    if title is None:
        raise ValueError("Either 'id' or 'name' must be specified.")

    items = await call_with_timeout("list maintenances", client.get_maintenances(), timeout)
    matches = [m for m in items if m.title == title]
    if not matches:
        raise NotFoundError(f"No maintenance window with title '{title}' found.")
    if len(matches) > 1:
        raise AmbiguousMatchError(
            f"Multiple maintenance windows with title '{title}' found. "
            "Please use 'id' to specify the maintenance uniquely."
        )
    return MaintenanceSummary.from_domain(matches[0])
