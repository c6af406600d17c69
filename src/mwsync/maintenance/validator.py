"""Strategy-specific required-field validation.

Runs before every create and update, never before read or delete.
All checks for a strategy are evaluated; failures are accumulated and
reported together. No network access happens here.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from mwsync.maintenance.models import MaintenanceConfig
from mwsync.maintenance.primitives import Strategy

_SUMMARY = "Invalid Configuration"


@dataclass(frozen=True)
class ValidationFailure:
    """One missing-field failure, attached to an attribute path."""

    attribute: str
    summary: str
    detail: str


def _failure(detail: str) -> ValidationFailure:
    return ValidationFailure(attribute="strategy", summary=_SUMMARY, detail=detail)


def _time_pair_missing(config: MaintenanceConfig) -> bool:
    return config.start_time is None or config.end_time is None


def _validate_single(config: MaintenanceConfig) -> list[ValidationFailure]:
    failures = []
    if config.start_date is None:
        failures.append(_failure("start_date is required for single strategy"))
    if config.end_date is None:
        failures.append(_failure("end_date is required for single strategy"))
    return failures


def _validate_recurring_interval(config: MaintenanceConfig) -> list[ValidationFailure]:
    failures = []
    if config.interval_day is None:
        failures.append(_failure("interval_day is required for recurring-interval strategy"))
    if _time_pair_missing(config):
        failures.append(
            _failure("start_time and end_time are required for recurring-interval strategy")
        )
    return failures


def _validate_recurring_weekday(config: MaintenanceConfig) -> list[ValidationFailure]:
    failures = []
    if config.weekdays is None:
        failures.append(_failure("weekdays is required for recurring-weekday strategy"))
    if _time_pair_missing(config):
        failures.append(
            _failure("start_time and end_time are required for recurring-weekday strategy")
        )
    return failures


def _validate_recurring_day_of_month(config: MaintenanceConfig) -> list[ValidationFailure]:
    failures = []
    if config.days_of_month is None:
        failures.append(
            _failure("days_of_month is required for recurring-day-of-month strategy")
        )
    if _time_pair_missing(config):
        failures.append(
            _failure("start_time and end_time are required for recurring-day-of-month strategy")
        )
    return failures


def _validate_cron(config: MaintenanceConfig) -> list[ValidationFailure]:
    failures = []
    if config.cron is None:
        failures.append(_failure("cron is required for cron strategy"))
    if config.duration_minutes is None:
        failures.append(_failure("duration_minutes is required for cron strategy"))
    return failures


def _validate_manual(config: MaintenanceConfig) -> list[ValidationFailure]:
    return []


STRATEGY_VALIDATORS: dict[Strategy, Callable[[MaintenanceConfig], list[ValidationFailure]]] = {
    Strategy.SINGLE: _validate_single,
    Strategy.RECURRING_INTERVAL: _validate_recurring_interval,
    Strategy.RECURRING_WEEKDAY: _validate_recurring_weekday,
    Strategy.RECURRING_DAY_OF_MONTH: _validate_recurring_day_of_month,
    Strategy.CRON: _validate_cron,
    Strategy.MANUAL: _validate_manual,
}


def validate_config(config: MaintenanceConfig) -> list[ValidationFailure]:
    """Return every missing-field failure for the config's strategy.

    An empty list means the configuration may be mapped and sent.
    """
    return STRATEGY_VALIDATORS[config.strategy](config)
