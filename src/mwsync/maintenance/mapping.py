"""Bidirectional mapping between MaintenanceConfig and the domain object.

config_to_domain() runs on the write path (create, update) after
validation. domain_to_config() runs on every response from the server and
is total: any domain object the server can return maps to a config.
"""

from __future__ import annotations

from collections.abc import Callable

from mwsync.maintenance.models import (
    DEFAULT_TIMEZONE,
    Maintenance,
    MaintenanceConfig,
    TimeOfDayConfig,
    TimeslotConfig,
)
from mwsync.maintenance.primitives import (
    DateRange,
    Strategy,
    TimeOfDay,
    TimeRange,
    format_day_of_month,
    format_rfc3339,
)
from mwsync.maintenance.schedule import (
    CronSchedule,
    DayOfMonthSchedule,
    IntervalSchedule,
    ManualSchedule,
    Schedule,
    SingleSchedule,
    WeekdaySchedule,
    schedule_from_config,
)

# Authored fields that belong to exactly one strategy (or to the recurring
# family). Cron is handled with the computed fields.
STRATEGY_FIELDS: tuple[str, ...] = (
    "start_date",
    "end_date",
    "interval_day",
    "weekdays",
    "days_of_month",
    "duration_minutes",
    "start_time",
    "end_time",
)


# --- Config -> domain ---


def _write_single(m: Maintenance, s: SingleSchedule) -> None:
    if s.start is not None and s.end is not None:
        m.date_range = DateRange(s.start, s.end)
    if s.timezone is not None:
        m.timezone_option = s.timezone


def _write_interval(m: Maintenance, s: IntervalSchedule) -> None:
    if s.interval_day is not None:
        m.interval_day = s.interval_day
    m.date_range = DateRange.unset()
    m.time_range = s.time_range
    if s.timezone is not None:
        m.timezone_option = s.timezone


def _write_weekday(m: Maintenance, s: WeekdaySchedule) -> None:
    if s.weekdays is not None:
        m.weekdays = list(s.weekdays)
    m.date_range = DateRange.unset()
    m.time_range = s.time_range
    if s.timezone is not None:
        m.timezone_option = s.timezone


def _write_day_of_month(m: Maintenance, s: DayOfMonthSchedule) -> None:
    if s.days is not None:
        m.days_of_month = list(s.days)
    m.date_range = DateRange.unset()
    m.time_range = s.time_range
    if s.timezone is not None:
        m.timezone_option = s.timezone


def _write_cron(m: Maintenance, s: CronSchedule) -> None:
    if s.cron is not None:
        m.cron = s.cron
    if s.duration_minutes is not None:
        m.duration_minutes = s.duration_minutes
    m.date_range = DateRange.unset()
    if s.timezone is not None:
        m.timezone_option = s.timezone


def _write_manual(m: Maintenance, s: ManualSchedule) -> None:
    m.date_range = DateRange.unset()


SCHEDULE_WRITERS: dict[type, Callable[[Maintenance, Schedule], None]] = {
    SingleSchedule: _write_single,
    IntervalSchedule: _write_interval,
    WeekdaySchedule: _write_weekday,
    DayOfMonthSchedule: _write_day_of_month,
    CronSchedule: _write_cron,
    ManualSchedule: _write_manual,
}


def config_to_domain(config: MaintenanceConfig) -> Maintenance:
    """Build the domain object for a validated configuration.

    The schedule is converted first, so a bad timestamp or time of day
    aborts before any domain field is populated.

    Raises:
        ParseError: Malformed single-strategy timestamp.
        ConversionError: Malformed time of day or day-of-month value.
    """
    schedule = schedule_from_config(config)

    m = Maintenance(
        id=config.id or 0,
        title=config.title,
        description=config.description,
        strategy=config.strategy,
        active=config.active,
    )
    SCHEDULE_WRITERS[type(schedule)](m, schedule)
    return m


# --- Domain -> config ---


def _time_of_day_config(t: TimeOfDay) -> TimeOfDayConfig:
    return TimeOfDayConfig(hours=t.hours, minutes=t.minutes, seconds=t.seconds)


def _read_time_range(time_range: TimeRange | None, values: dict[str, object]) -> None:
    if time_range is not None:
        values["start_time"] = _time_of_day_config(time_range.start)
        values["end_time"] = _time_of_day_config(time_range.end)


def _read_single(m: Maintenance, values: dict[str, object]) -> None:
    if m.date_range.is_complete:
        values["start_date"] = format_rfc3339(m.date_range.start)
        values["end_date"] = format_rfc3339(m.date_range.end)


def _read_interval(m: Maintenance, values: dict[str, object]) -> None:
    if m.interval_day > 0:
        values["interval_day"] = m.interval_day
    _read_time_range(m.time_range, values)


def _read_weekday(m: Maintenance, values: dict[str, object]) -> None:
    if m.weekdays:
        values["weekdays"] = list(m.weekdays)
    _read_time_range(m.time_range, values)


def _read_day_of_month(m: Maintenance, values: dict[str, object]) -> None:
    if m.days_of_month:
        values["days_of_month"] = [format_day_of_month(d) for d in m.days_of_month]
    _read_time_range(m.time_range, values)


def _read_cron(m: Maintenance, values: dict[str, object]) -> None:
    if m.duration_minutes > 0:
        values["duration_minutes"] = m.duration_minutes


def _read_manual(m: Maintenance, values: dict[str, object]) -> None:
    pass


STRATEGY_READERS: dict[Strategy, Callable[[Maintenance, dict[str, object]], None]] = {
    Strategy.SINGLE: _read_single,
    Strategy.RECURRING_INTERVAL: _read_interval,
    Strategy.RECURRING_WEEKDAY: _read_weekday,
    Strategy.RECURRING_DAY_OF_MONTH: _read_day_of_month,
    Strategy.CRON: _read_cron,
    Strategy.MANUAL: _read_manual,
}


def _or_none(value: str) -> str | None:
    return value if value else None


def domain_to_config(m: Maintenance, prior: MaintenanceConfig | None = None) -> MaintenanceConfig:
    """Build the configuration view of a domain object.

    Args:
        m: The object returned by a create, update, or read call.
        prior: The configuration the call was made with (plan or stored
            state). Supplies the identifier once assigned, the timezone
            option when the server omits it, and authored values of the
            same strategy that the server does not echo back.

    Returns:
        A config with computed fields populated. Fields of strategies other
        than ``m.strategy`` are None, and ``timeslot_list`` is always a list.
    """
    same_strategy = prior is not None and prior.strategy == m.strategy
    values: dict[str, object] = {
        name: getattr(prior, name) if same_strategy else None for name in STRATEGY_FIELDS
    }

    if prior is not None and prior.id is not None:
        values["id"] = prior.id
    else:
        values["id"] = m.id or None

    values["title"] = m.title
    values["description"] = m.description
    values["strategy"] = m.strategy
    values["active"] = m.active

    values["status"] = _or_none(m.status)
    values["timezone_resolved"] = _or_none(m.timezone)
    values["timezone_offset"] = _or_none(m.timezone_offset)
    if m.timezone_option:
        values["timezone"] = m.timezone_option
    else:
        values["timezone"] = prior.timezone if prior is not None else DEFAULT_TIMEZONE

    # Null rather than keep a stale value after a strategy change.
    values["duration"] = m.duration if m.duration > 0 else None
    values["cron"] = _or_none(m.cron)

    STRATEGY_READERS[m.strategy](m, values)

    values["timeslot_list"] = [
        TimeslotConfig(start_date=format_rfc3339(ts.start), end_date=format_rfc3339(ts.end))
        for ts in m.timeslot_list
    ]

    return MaintenanceConfig.model_construct(**values)
