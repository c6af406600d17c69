"""Immutable value types shared by the maintenance window models and mappers.

Covers the strategy discriminator, server status values, time-of-day pairs,
date ranges, computed timeslots, and the two-case day-of-month specifier.
RFC3339 parsing and formatting helpers live here as well.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import UTC, datetime

from dateutil.parser import isoparse


class Strategy(str, enum.Enum):
    """Recurrence strategy of a maintenance window."""

    SINGLE = "single"
    RECURRING_INTERVAL = "recurring-interval"
    RECURRING_WEEKDAY = "recurring-weekday"
    RECURRING_DAY_OF_MONTH = "recurring-day-of-month"
    CRON = "cron"
    MANUAL = "manual"


class MaintenanceStatus(str, enum.Enum):
    """Status values computed by the monitoring server."""

    INACTIVE = "inactive"
    SCHEDULED = "scheduled"
    UNDER_MAINTENANCE = "under-maintenance"
    ENDED = "ended"
    UNKNOWN = "unknown"


# --- RFC3339 ---


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp into an aware datetime.

    Raises:
        ValueError: If the value is not an ISO 8601 timestamp with a UTC
            offset ("Z" or "+hh:mm").
    """
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC3339 with second precision, 'Z' for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


# --- Time of day ---


@dataclass(frozen=True)
class TimeOfDay:
    """A wall-clock time without date. Ranges are enforced on construction."""

    hours: int
    minutes: int
    seconds: int = 0

    def __post_init__(self) -> None:
        for name, upper in (("hours", 23), ("minutes", 59), ("seconds", 59)):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if not 0 <= value <= upper:
                raise ValueError(f"{name} must be between 0 and {upper}, got {value}")

    def as_dict(self) -> dict[str, int]:
        return {"hours": self.hours, "minutes": self.minutes, "seconds": self.seconds}


@dataclass(frozen=True)
class TimeRange:
    """Start and end time of day, always supplied together."""

    start: TimeOfDay
    end: TimeOfDay


# --- Dates ---


@dataclass(frozen=True)
class DateRange:
    """A (start, end) datetime pair.

    Both slots empty is the "unset" sentinel used by recurring strategies to
    mean occurrences derive from the recurrence rule, not a fixed range.
    """

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def unset(cls) -> DateRange:
        return cls(None, None)

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class Timeslot:
    """One concrete occurrence computed by the server."""

    start: datetime
    end: datetime


# --- Day of month ---

LAST_DAY_PREFIX = "lastDay"


@dataclass(frozen=True)
class NumericDay:
    """A calendar day of the month. The range is not checked here."""

    day: int

    def __str__(self) -> str:
        return str(self.day)


@dataclass(frozen=True)
class LastDay:
    """The "last day minus N" sentinel, rendered as ``lastDay<N>``."""

    offset: int

    def __str__(self) -> str:
        return f"{LAST_DAY_PREFIX}{self.offset}"


DayOfMonth = NumericDay | LastDay


def parse_day_of_month(value: str | int) -> DayOfMonth:
    """Parse a day-of-month specifier.

    Numeric days and ``lastDayN`` sentinels pass through without range
    checks. Anything else cannot be represented and raises ValueError.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid day of month: {value!r}")
    if isinstance(value, int):
        return NumericDay(value)
    text = str(value).strip()
    if text.isdigit():
        return NumericDay(int(text))
    if text.startswith(LAST_DAY_PREFIX) and text[len(LAST_DAY_PREFIX):].isdigit():
        return LastDay(int(text[len(LAST_DAY_PREFIX):]))
    raise ValueError(f"invalid day of month: {value!r}")


def format_day_of_month(value: DayOfMonth) -> str:
    """Canonical string form used by the flat configuration."""
    return str(value)
