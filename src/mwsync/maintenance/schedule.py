"""Typed schedule variants, one per strategy.

The flat configuration carries every strategy's fields side by side.
schedule_from_config() picks out the fields that belong to the declared
strategy and converts them into exactly one variant, so nothing downstream
can read a field under the wrong strategy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from mwsync.maintenance.errors import ConversionError, ParseError
from mwsync.maintenance.models import MaintenanceConfig, TimeOfDayConfig
from mwsync.maintenance.primitives import (
    DayOfMonth,
    Strategy,
    TimeOfDay,
    TimeRange,
    parse_day_of_month,
    parse_rfc3339,
)


@dataclass(frozen=True)
class SingleSchedule:
    start: datetime | None
    end: datetime | None
    timezone: str | None = None


@dataclass(frozen=True)
class IntervalSchedule:
    interval_day: int | None
    time_range: TimeRange | None
    timezone: str | None = None


@dataclass(frozen=True)
class WeekdaySchedule:
    weekdays: tuple[int, ...] | None
    time_range: TimeRange | None
    timezone: str | None = None


@dataclass(frozen=True)
class DayOfMonthSchedule:
    days: tuple[DayOfMonth, ...] | None
    time_range: TimeRange | None
    timezone: str | None = None


@dataclass(frozen=True)
class CronSchedule:
    cron: str | None
    duration_minutes: int | None
    timezone: str | None = None


@dataclass(frozen=True)
class ManualSchedule:
    pass


Schedule = (
    SingleSchedule
    | IntervalSchedule
    | WeekdaySchedule
    | DayOfMonthSchedule
    | CronSchedule
    | ManualSchedule
)


def _time_of_day(value: TimeOfDayConfig, name: str) -> TimeOfDay:
    try:
        return TimeOfDay(hours=value.hours, minutes=value.minutes, seconds=value.seconds)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConversionError(f"invalid {name}: {exc}") from exc


def _time_range(config: MaintenanceConfig) -> TimeRange | None:
    """Build the time range only when both ends are present."""
    if config.start_time is None or config.end_time is None:
        return None
    return TimeRange(
        start=_time_of_day(config.start_time, "start_time"),
        end=_time_of_day(config.end_time, "end_time"),
    )


def _single(config: MaintenanceConfig) -> SingleSchedule:
    start = end = None
    if config.start_date is not None and config.end_date is not None:
        try:
            start = parse_rfc3339(config.start_date)
        except ValueError as exc:
            raise ParseError(f"invalid start_date: {exc}") from exc
        try:
            end = parse_rfc3339(config.end_date)
        except ValueError as exc:
            raise ParseError(f"invalid end_date: {exc}") from exc
    return SingleSchedule(start=start, end=end, timezone=config.timezone)


def _interval(config: MaintenanceConfig) -> IntervalSchedule:
    return IntervalSchedule(
        interval_day=config.interval_day,
        time_range=_time_range(config),
        timezone=config.timezone,
    )


def _weekday(config: MaintenanceConfig) -> WeekdaySchedule:
    weekdays = tuple(config.weekdays) if config.weekdays is not None else None
    return WeekdaySchedule(
        weekdays=weekdays,
        time_range=_time_range(config),
        timezone=config.timezone,
    )


def _day_of_month(config: MaintenanceConfig) -> DayOfMonthSchedule:
    days = None
    if config.days_of_month is not None:
        try:
            days = tuple(parse_day_of_month(d) for d in config.days_of_month)
        except ValueError as exc:
            raise ConversionError(f"invalid days_of_month: {exc}") from exc
    return DayOfMonthSchedule(
        days=days,
        time_range=_time_range(config),
        timezone=config.timezone,
    )


def _cron(config: MaintenanceConfig) -> CronSchedule:
    return CronSchedule(
        cron=config.cron,
        duration_minutes=config.duration_minutes,
        timezone=config.timezone,
    )


def _manual(config: MaintenanceConfig) -> ManualSchedule:
    return ManualSchedule()


_BUILDERS: dict[Strategy, Callable[[MaintenanceConfig], Schedule]] = {
    Strategy.SINGLE: _single,
    Strategy.RECURRING_INTERVAL: _interval,
    Strategy.RECURRING_WEEKDAY: _weekday,
    Strategy.RECURRING_DAY_OF_MONTH: _day_of_month,
    Strategy.CRON: _cron,
    Strategy.MANUAL: _manual,
}


def schedule_from_config(config: MaintenanceConfig) -> Schedule:
    """Convert the strategy-specific fields of a config into its variant.

    Raises:
        ParseError: A single-strategy timestamp is not RFC3339. The first
            bad field aborts the conversion.
        ConversionError: A time of day or day-of-month value is malformed.
    """
    return _BUILDERS[config.strategy](config)
