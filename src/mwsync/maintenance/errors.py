"""Exception hierarchy for maintenance window operations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mwsync.maintenance.validator import ValidationFailure


class MaintenanceError(Exception):
    """Base exception for maintenance window errors."""


class MaintenanceValidationError(MaintenanceError):
    """A configuration is missing fields its strategy requires.

    Carries every failure found in one pass.
    """

    def __init__(self, failures: Sequence[ValidationFailure]) -> None:
        self.failures = list(failures)
        details = "; ".join(f.detail for f in self.failures)
        super().__init__(f"Invalid Configuration: {details}")


class ParseError(MaintenanceError):
    """A single-strategy timestamp is not valid RFC3339."""


class ConversionError(MaintenanceError):
    """A structured field could not be converted between representations."""


class NotFoundError(MaintenanceError):
    """The monitoring server has no object with the requested identifier."""


class TransportError(MaintenanceError):
    """A call to the monitoring server failed or timed out."""


class ImportIdError(MaintenanceError):
    """An import identifier is not a base-10 integer."""


class AmbiguousMatchError(MaintenanceError):
    """A title lookup matched more than one maintenance window."""
