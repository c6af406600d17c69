"""Monitor and status page links for maintenance windows.

A link set is the full list of monitor (or status page) IDs attached to one
window. Create and update replace the whole set; delete clears it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import structlog

from mwsync.integrations.client import MaintenanceClient
from mwsync.maintenance.calls import DEFAULT_TIMEOUT_SECONDS, call_with_timeout
from mwsync.maintenance.errors import NotFoundError
from mwsync.maintenance.lifecycle import parse_import_id

logger = structlog.get_logger()


class LinkKind(str, enum.Enum):
    """What a link set attaches to a window."""

    MONITORS = "monitors"
    STATUS_PAGES = "status_pages"


@dataclass(frozen=True)
class LinkState:
    """Targets attached to a maintenance window."""

    maintenance_id: int
    target_ids: list[int] = field(default_factory=list)


class MaintenanceLinks:
    """Create/read/update/delete/import for one kind of link set.

    Args:
        client: The monitoring server client.
        kind: Monitors or status pages.
        timeout: Per-call timeout in seconds.
    """

    def __init__(
        self,
        client: MaintenanceClient,
        kind: LinkKind,
        *,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._kind = kind
        self._timeout = timeout

    @property
    def kind(self) -> LinkKind:
        return self._kind

    async def _get(self, maintenance_id: int) -> list[int]:
        if self._kind is LinkKind.MONITORS:
            call = self._client.get_maintenance_monitors(maintenance_id)
        else:
            call = self._client.get_maintenance_status_pages(maintenance_id)
        return await call_with_timeout(f"read maintenance {self._kind.value}", call, self._timeout)

    async def _set(self, maintenance_id: int, target_ids: list[int]) -> None:
        if self._kind is LinkKind.MONITORS:
            call = self._client.set_maintenance_monitors(maintenance_id, target_ids)
        else:
            call = self._client.set_maintenance_status_pages(maintenance_id, target_ids)
        await call_with_timeout(f"set maintenance {self._kind.value}", call, self._timeout)

    async def create(self, maintenance_id: int, target_ids: list[int]) -> LinkState:
        await self._set(maintenance_id, list(target_ids))
        await logger.ainfo(
            "maintenance_links_set",
            maintenance_id=maintenance_id,
            kind=self._kind.value,
            count=len(target_ids),
        )
        return LinkState(maintenance_id=maintenance_id, target_ids=list(target_ids))

    async def read(self, maintenance_id: int) -> LinkState | None:
        """Current link set, or None if the window no longer exists."""
        try:
            target_ids = await self._get(maintenance_id)
        except NotFoundError:
            await logger.awarning(
                "maintenance_links_not_found_removing",
                maintenance_id=maintenance_id,
                kind=self._kind.value,
            )
            return None
        return LinkState(maintenance_id=maintenance_id, target_ids=target_ids)

    async def update(self, maintenance_id: int, target_ids: list[int]) -> LinkState:
        return await self.create(maintenance_id, target_ids)

    async def delete(self, maintenance_id: int) -> None:
        await self._set(maintenance_id, [])
        await logger.ainfo(
            "maintenance_links_cleared",
            maintenance_id=maintenance_id,
            kind=self._kind.value,
        )

    def import_state(self, raw_id: str) -> int:
        return parse_import_id(raw_id)
