"""Shared test fixtures for the mwsync test suite.

Provides an in-memory MaintenanceClient that behaves like the monitoring
server (assigns IDs, computes status/duration/timeslots) and records every
call for call-count assertions.
"""

from __future__ import annotations

import asyncio
import copy

import pytest

from mwsync.integrations.client import MaintenanceClient
from mwsync.maintenance.errors import NotFoundError, TransportError
from mwsync.maintenance.models import Maintenance
from mwsync.maintenance.primitives import Strategy, Timeslot


def _seconds(t) -> int:
    return t.hours * 3600 + t.minutes * 60 + t.seconds


class FakeMaintenanceClient(MaintenanceClient):
    """In-memory monitoring server."""

    def __init__(self) -> None:
        self.maintenances: dict[int, Maintenance] = {}
        self.monitors: dict[int, list[int]] = {}
        self.status_pages: dict[int, list[int]] = {}
        self.calls: list[tuple[str, object]] = []
        self.fail_with: Exception | None = None
        self.delay: float = 0.0
        self._next_id = 1

    def call_count(self, name: str | None = None) -> int:
        if name is None:
            return len(self.calls)
        return sum(1 for call, _ in self.calls if call == name)

    async def _enter(self, name: str, arg: object) -> None:
        self.calls.append((name, arg))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

    def _compute(self, m: Maintenance) -> Maintenance:
        m = copy.deepcopy(m)
        m.status = "scheduled" if m.active else "inactive"
        option = m.timezone_option or "UTC"
        m.timezone = "UTC" if option in ("UTC", "SAME_AS_SERVER") else option
        m.timezone_offset = "+00:00"
        m.duration = 0
        m.timeslot_list = []
        if m.strategy is Strategy.SINGLE and m.date_range.is_complete:
            m.duration = int((m.date_range.end - m.date_range.start).total_seconds())
            m.timeslot_list = [Timeslot(m.date_range.start, m.date_range.end)]
        elif m.strategy is Strategy.CRON and m.duration_minutes > 0:
            m.duration = m.duration_minutes * 60
        elif m.time_range is not None:
            m.duration = _seconds(m.time_range.end) - _seconds(m.time_range.start)
        return m

    def _stored(self, maintenance_id: int) -> Maintenance:
        if maintenance_id not in self.maintenances:
            raise NotFoundError(f"maintenance {maintenance_id} not found")
        return copy.deepcopy(self.maintenances[maintenance_id])

    async def create_maintenance(self, maintenance: Maintenance) -> Maintenance:
        await self._enter("create", maintenance)
        m = self._compute(maintenance)
        m.id = self._next_id
        self._next_id += 1
        self.maintenances[m.id] = m
        return copy.deepcopy(m)

    async def get_maintenance(self, maintenance_id: int) -> Maintenance:
        await self._enter("get", maintenance_id)
        return self._stored(maintenance_id)

    async def update_maintenance(self, maintenance: Maintenance) -> None:
        await self._enter("update", maintenance)
        self._stored(maintenance.id)
        self.maintenances[maintenance.id] = self._compute(maintenance)

    async def delete_maintenance(self, maintenance_id: int) -> None:
        await self._enter("delete", maintenance_id)
        self._stored(maintenance_id)
        del self.maintenances[maintenance_id]

    async def get_maintenances(self) -> list[Maintenance]:
        await self._enter("list", None)
        return [copy.deepcopy(m) for m in self.maintenances.values()]

    async def get_maintenance_monitors(self, maintenance_id: int) -> list[int]:
        await self._enter("get_monitors", maintenance_id)
        self._stored(maintenance_id)
        return list(self.monitors.get(maintenance_id, []))

    async def set_maintenance_monitors(self, maintenance_id: int, monitor_ids: list[int]) -> None:
        await self._enter("set_monitors", (maintenance_id, monitor_ids))
        self._stored(maintenance_id)
        self.monitors[maintenance_id] = list(monitor_ids)

    async def get_maintenance_status_pages(self, maintenance_id: int) -> list[int]:
        await self._enter("get_status_pages", maintenance_id)
        self._stored(maintenance_id)
        return list(self.status_pages.get(maintenance_id, []))

    async def set_maintenance_status_pages(
        self, maintenance_id: int, status_page_ids: list[int]
    ) -> None:
        await self._enter("set_status_pages", (maintenance_id, status_page_ids))
        self._stored(maintenance_id)
        self.status_pages[maintenance_id] = list(status_page_ids)


@pytest.fixture
def fake_client() -> FakeMaintenanceClient:
    """Empty in-memory monitoring server."""
    return FakeMaintenanceClient()


@pytest.fixture
def transport_failure() -> TransportError:
    return TransportError("connection refused")
