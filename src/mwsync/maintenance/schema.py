"""Attribute schema for the maintenance window configuration.

Hosts use this table to know which attributes are authored (required or
optional) and which are computed by the monitoring server. It mirrors
MaintenanceConfig one-to-one.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mwsync.maintenance.models import DEFAULT_TIMEZONE
from mwsync.maintenance.primitives import MaintenanceStatus, Strategy


class AttributeKind(str, enum.Enum):
    """Value type of a schema attribute."""

    INT = "int"
    STRING = "string"
    BOOL = "bool"
    INT_LIST = "list[int]"
    STRING_LIST = "list[string]"
    TIME_OF_DAY = "time_of_day"
    TIMESLOT_LIST = "list[timeslot]"


@dataclass(frozen=True)
class Attribute:
    """A single schema attribute with its required/optional/computed markers."""

    kind: AttributeKind
    description: str
    required: bool = False
    optional: bool = False
    computed: bool = False
    default: object = None
    one_of: tuple[str, ...] = ()

    @property
    def authored(self) -> bool:
        """True if configuration may set this attribute."""
        return self.required or self.optional


_STATUS_VALUES = ", ".join(s.value for s in MaintenanceStatus)
_STRATEGY_VALUES = tuple(s.value for s in Strategy)

MAINTENANCE_SCHEMA: dict[str, Attribute] = {
    "id": Attribute(AttributeKind.INT, "Maintenance window ID", computed=True),
    "title": Attribute(AttributeKind.STRING, "Name of the maintenance window", required=True),
    "description": Attribute(
        AttributeKind.STRING,
        "Additional details about the maintenance",
        optional=True,
        computed=True,
        default="",
    ),
    "strategy": Attribute(
        AttributeKind.STRING,
        "Scheduling pattern: " + ", ".join(_STRATEGY_VALUES),
        required=True,
        one_of=_STRATEGY_VALUES,
    ),
    "active": Attribute(
        AttributeKind.BOOL,
        "Whether the maintenance window is active",
        optional=True,
        computed=True,
        default=True,
    ),
    "start_date": Attribute(
        AttributeKind.STRING, "Start date/time for single strategy (RFC3339 format)", optional=True
    ),
    "end_date": Attribute(
        AttributeKind.STRING, "End date/time for single strategy (RFC3339 format)", optional=True
    ),
    "interval_day": Attribute(
        AttributeKind.INT, "Interval in days for recurring-interval strategy", optional=True
    ),
    "weekdays": Attribute(
        AttributeKind.INT_LIST,
        "Days of week for recurring-weekday (1=Monday...7=Sunday)",
        optional=True,
    ),
    "days_of_month": Attribute(
        AttributeKind.STRING_LIST,
        "Days of month for recurring-day-of-month (1-31 or lastDay1-lastDay4)",
        optional=True,
    ),
    "cron": Attribute(
        AttributeKind.STRING, "Cron expression for cron strategy", optional=True, computed=True
    ),
    "duration_minutes": Attribute(
        AttributeKind.INT, "Duration in minutes for cron strategy", optional=True
    ),
    "start_time": Attribute(
        AttributeKind.TIME_OF_DAY, "Start time for recurring strategies", optional=True
    ),
    "end_time": Attribute(
        AttributeKind.TIME_OF_DAY, "End time for recurring strategies", optional=True
    ),
    "timezone": Attribute(
        AttributeKind.STRING,
        "Timezone option: UTC, SAME_AS_SERVER, or IANA timezone (e.g., America/New_York)",
        optional=True,
        computed=True,
        default=DEFAULT_TIMEZONE,
    ),
    "status": Attribute(
        AttributeKind.STRING, f"Current status: {_STATUS_VALUES}", computed=True
    ),
    "timezone_resolved": Attribute(AttributeKind.STRING, "Resolved IANA timezone", computed=True),
    "timezone_offset": Attribute(AttributeKind.STRING, "Timezone offset from UTC", computed=True),
    "duration": Attribute(AttributeKind.INT, "Duration in seconds (computed)", computed=True),
    "timeslot_list": Attribute(
        AttributeKind.TIMESLOT_LIST, "Scheduled maintenance windows", computed=True
    ),
}


def computed_only_attributes() -> list[str]:
    """Attributes that configuration can never author."""
    return [name for name, attr in MAINTENANCE_SCHEMA.items() if attr.computed and not attr.authored]
