"""Configuration and domain models for maintenance windows.

Two representations of the same window:
- MaintenanceConfig: the flat, human-authored configuration (Pydantic),
  also carrying server-computed fields after a read
- Maintenance: the monitoring server's structured object (dataclass)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from mwsync.maintenance.primitives import (
    DateRange,
    DayOfMonth,
    Strategy,
    TimeRange,
    Timeslot,
)

DEFAULT_TIMEZONE = "UTC"

# Validation context flag set by the definitions loader.
AUTHORED_CONTEXT = "authored"

# Server-derived fields. Only the domain-to-config mapper writes these.
COMPUTED_FIELDS: frozenset[str] = frozenset(
    {"status", "timezone_resolved", "timezone_offset", "duration", "timeslot_list"}
)


# --- Flat configuration ---


class TimeOfDayConfig(BaseModel):
    """Nested time-of-day object in a configuration."""

    model_config = ConfigDict(extra="forbid")

    hours: int
    minutes: int
    seconds: int


class TimeslotConfig(BaseModel):
    """Computed occurrence as exposed in a configuration."""

    model_config = ConfigDict(extra="forbid")

    start_date: str
    end_date: str


class MaintenanceConfig(BaseModel):
    """Flat maintenance window configuration.

    Strategy-specific fields are all optional here; which of them are
    required is decided by the strategy validator. Computed fields are
    only ever written by the domain-to-config mapper.
    """

    model_config = ConfigDict(extra="forbid")

    id: int | None = None
    title: str = Field(min_length=1)
    description: str = ""
    strategy: Strategy
    active: bool = True

    # single
    start_date: str | None = None
    end_date: str | None = None
    # recurring-interval
    interval_day: int | None = None
    # recurring-weekday (1=Monday...7=Sunday)
    weekdays: list[int] | None = None
    # recurring-day-of-month (1-31 or lastDay1-lastDay4)
    days_of_month: list[str] | None = None
    # cron
    cron: str | None = None
    duration_minutes: int | None = None
    # recurring strategies
    start_time: TimeOfDayConfig | None = None
    end_time: TimeOfDayConfig | None = None

    timezone: str | None = DEFAULT_TIMEZONE

    # Computed by the server
    status: str | None = None
    timezone_resolved: str | None = None
    timezone_offset: str | None = None
    duration: int | None = None
    timeslot_list: list[TimeslotConfig] | None = None

    @field_validator("days_of_month", mode="before")
    @classmethod
    def days_as_strings(cls, v: object) -> object:
        """Accept bare integers (common in YAML) as day specifiers."""
        if isinstance(v, list):
            return [str(d) if isinstance(d, int) and not isinstance(d, bool) else d for d in v]
        return v

    @model_validator(mode="before")
    @classmethod
    def computed_fields_not_authored(cls, data: object, info: ValidationInfo) -> object:
        """Reject server-derived fields in authored definitions."""
        if not (info.context or {}).get(AUTHORED_CONTEXT) or not isinstance(data, dict):
            return data
        authored = sorted(COMPUTED_FIELDS.intersection(data))
        if authored:
            raise ValueError(
                f"computed fields cannot be set in a definition: {', '.join(authored)}"
            )
        return data


# --- Domain object ---


@dataclass
class Maintenance:
    """Maintenance window as owned by the monitoring server.

    Empty strings and zeros mean "not set", matching the server's payloads.
    """

    id: int = 0
    title: str = ""
    description: str = ""
    strategy: Strategy = Strategy.MANUAL
    active: bool = True

    date_range: DateRange = field(default_factory=DateRange.unset)
    time_range: TimeRange | None = None
    interval_day: int = 0
    weekdays: list[int] = field(default_factory=list)
    days_of_month: list[DayOfMonth] = field(default_factory=list)
    cron: str = ""
    duration_minutes: int = 0
    timezone_option: str = ""

    # Computed by the server
    status: str = ""
    timezone: str = ""
    timezone_offset: str = ""
    duration: int = 0
    timeslot_list: list[Timeslot] = field(default_factory=list)
