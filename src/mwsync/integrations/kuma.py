"""Async HTTP client for an Uptime Kuma REST gateway.

Implements MaintenanceClient over httpx and owns the JSON codec between
the server's camelCase payloads and the Maintenance domain object.

No retries: transient failures surface as TransportError and the caller
owns retry policy.

SECURITY: The bearer token is never logged.
"""

from __future__ import annotations

import httpx
import structlog

from mwsync.integrations.client import MaintenanceClient
from mwsync.maintenance.errors import ConversionError, NotFoundError, TransportError
from mwsync.maintenance.models import Maintenance
from mwsync.maintenance.primitives import (
    DateRange,
    Strategy,
    TimeOfDay,
    TimeRange,
    Timeslot,
    format_day_of_month,
    format_rfc3339,
    parse_day_of_month,
    parse_rfc3339,
)

logger = structlog.get_logger()


# --- JSON codec ---


def encode_maintenance(m: Maintenance) -> dict:
    """Serialize the authored fields of a domain object for the server."""
    payload: dict = {
        "title": m.title,
        "description": m.description,
        "strategy": m.strategy.value,
        "active": m.active,
        "intervalDay": m.interval_day,
        "dateRange": [
            format_rfc3339(d) if d is not None else None
            for d in (m.date_range.start, m.date_range.end)
        ],
        "timeRange": (
            [m.time_range.start.as_dict(), m.time_range.end.as_dict()]
            if m.time_range is not None
            else []
        ),
        "weekdays": list(m.weekdays),
        "daysOfMonth": [_encode_day(d) for d in m.days_of_month],
        "cron": m.cron,
        "durationMinutes": m.duration_minutes,
        "timezoneOption": m.timezone_option,
    }
    if m.id:
        payload["id"] = m.id
    return payload


def _encode_day(day: object) -> int | str:
    text = format_day_of_month(day)
    return int(text) if text.isdigit() else text


def _decode_date_range(raw: object) -> DateRange:
    if not isinstance(raw, list) or len(raw) != 2:
        return DateRange.unset()
    start, end = (parse_rfc3339(v) if v else None for v in raw)
    return DateRange(start, end)


def _decode_time_range(raw: object) -> TimeRange | None:
    if not isinstance(raw, list) or len(raw) != 2:
        return None
    start, end = (
        TimeOfDay(hours=v["hours"], minutes=v["minutes"], seconds=v.get("seconds", 0))
        for v in raw
    )
    return TimeRange(start=start, end=end)


def decode_maintenance(data: dict) -> Maintenance:
    """Build a domain object from a server payload.

    Raises:
        ConversionError: The payload is malformed.
    """
    try:
        return Maintenance(
            id=int(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            strategy=Strategy(data["strategy"]),
            active=bool(data.get("active", True)),
            date_range=_decode_date_range(data.get("dateRange")),
            time_range=_decode_time_range(data.get("timeRange")),
            interval_day=int(data.get("intervalDay") or 0),
            weekdays=[int(w) for w in data.get("weekdays") or []],
            days_of_month=[parse_day_of_month(d) for d in data.get("daysOfMonth") or []],
            cron=data.get("cron") or "",
            duration_minutes=int(data.get("durationMinutes") or 0),
            timezone_option=data.get("timezoneOption") or "",
            status=data.get("status") or "",
            timezone=data.get("timezone") or "",
            timezone_offset=data.get("timezoneOffset") or "",
            duration=int(data.get("duration") or 0),
            timeslot_list=[
                Timeslot(start=parse_rfc3339(ts["startDate"]), end=parse_rfc3339(ts["endDate"]))
                for ts in data.get("timeslotList") or []
            ],
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConversionError(f"malformed maintenance payload: {exc}") from exc


# --- Client ---


class KumaClient(MaintenanceClient):
    """Async client for the maintenance endpoints of an Uptime Kuma gateway.

    Args:
        base_url: Gateway base URL (e.g. "https://kuma.example.com/api").
        token: Optional bearer token. Treated as a secret.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> KumaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(self, method: str, path: str, json: object = None) -> object:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.RequestError as exc:
            await logger.aerror("kuma_request_error", method=method, path=path, error=str(exc))
            raise TransportError(str(exc)) from exc

        if response.status_code == 404:
            raise NotFoundError(f"{method} {path}: not found")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            await logger.aerror(
                "kuma_http_error",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise TransportError(response.text or str(exc)) from exc

        if not response.content:
            return None
        return response.json()

    async def create_maintenance(self, maintenance: Maintenance) -> Maintenance:
        data = await self._request("POST", "/maintenance", json=encode_maintenance(maintenance))
        return decode_maintenance(data)

    async def get_maintenance(self, maintenance_id: int) -> Maintenance:
        data = await self._request("GET", f"/maintenance/{maintenance_id}")
        return decode_maintenance(data)

    async def update_maintenance(self, maintenance: Maintenance) -> None:
        await self._request(
            "PATCH", f"/maintenance/{maintenance.id}", json=encode_maintenance(maintenance)
        )

    async def delete_maintenance(self, maintenance_id: int) -> None:
        await self._request("DELETE", f"/maintenance/{maintenance_id}")

    async def get_maintenances(self) -> list[Maintenance]:
        data = await self._request("GET", "/maintenance")
        if not isinstance(data, list):
            raise ConversionError("expected a list of maintenances")
        return [decode_maintenance(item) for item in data]

    async def _get_ids(self, path: str) -> list[int]:
        data = await self._request("GET", path)
        try:
            return [int(item["id"]) if isinstance(item, dict) else int(item) for item in data or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise ConversionError(f"malformed id list from {path}: {exc}") from exc

    async def get_maintenance_monitors(self, maintenance_id: int) -> list[int]:
        return await self._get_ids(f"/maintenance/{maintenance_id}/monitors")

    async def set_maintenance_monitors(self, maintenance_id: int, monitor_ids: list[int]) -> None:
        await self._request(
            "POST",
            f"/maintenance/{maintenance_id}/monitors",
            json=[{"id": i} for i in monitor_ids],
        )

    async def get_maintenance_status_pages(self, maintenance_id: int) -> list[int]:
        return await self._get_ids(f"/maintenance/{maintenance_id}/status-pages")

    async def set_maintenance_status_pages(
        self, maintenance_id: int, status_page_ids: list[int]
    ) -> None:
        await self._request(
            "POST",
            f"/maintenance/{maintenance_id}/status-pages",
            json=[{"id": i} for i in status_page_ids],
        )
