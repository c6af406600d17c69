"""Abstract client for the monitoring server's maintenance API.

The lifecycle orchestrators depend only on this interface; KumaClient is
the HTTP implementation and tests use an in-memory fake.
"""

from __future__ import annotations

import abc

from mwsync.maintenance.models import Maintenance


class MaintenanceClient(abc.ABC):
    """Operations consumed from the monitoring server."""

    @abc.abstractmethod
    async def create_maintenance(self, maintenance: Maintenance) -> Maintenance:
        """Create a window and return it with its generated identifier.

        Raises:
            TransportError: The call failed.
        """

    @abc.abstractmethod
    async def get_maintenance(self, maintenance_id: int) -> Maintenance:
        """Fetch a window by identifier.

        Raises:
            NotFoundError: No window with this identifier exists.
            TransportError: The call failed.
        """

    @abc.abstractmethod
    async def update_maintenance(self, maintenance: Maintenance) -> None:
        """Replace a window. ``maintenance.id`` selects the target."""

    @abc.abstractmethod
    async def delete_maintenance(self, maintenance_id: int) -> None:
        """Delete a window by identifier."""

    @abc.abstractmethod
    async def get_maintenances(self) -> list[Maintenance]:
        """List every window known to the server."""

    @abc.abstractmethod
    async def get_maintenance_monitors(self, maintenance_id: int) -> list[int]:
        """Monitor IDs associated with a window."""

    @abc.abstractmethod
    async def set_maintenance_monitors(self, maintenance_id: int, monitor_ids: list[int]) -> None:
        """Replace the monitors associated with a window."""

    @abc.abstractmethod
    async def get_maintenance_status_pages(self, maintenance_id: int) -> list[int]:
        """Status page IDs associated with a window."""

    @abc.abstractmethod
    async def set_maintenance_status_pages(
        self, maintenance_id: int, status_page_ids: list[int]
    ) -> None:
        """Replace the status pages associated with a window."""
