"""Tests for the configuration attribute schema."""

from __future__ import annotations

from mwsync.maintenance.models import COMPUTED_FIELDS, MaintenanceConfig
from mwsync.maintenance.primitives import Strategy
from mwsync.maintenance.schema import MAINTENANCE_SCHEMA, computed_only_attributes


class TestSchema:
    def test_mirrors_config_model(self) -> None:
        assert set(MAINTENANCE_SCHEMA) == set(MaintenanceConfig.model_fields)

    def test_required_attributes(self) -> None:
        required = {name for name, attr in MAINTENANCE_SCHEMA.items() if attr.required}
        assert required == {"title", "strategy"}

    def test_computed_only(self) -> None:
        assert set(computed_only_attributes()) == {
            "id",
            "status",
            "timezone_resolved",
            "timezone_offset",
            "duration",
            "timeslot_list",
        }

    def test_optional_and_computed(self) -> None:
        for name in ("description", "active", "cron", "timezone"):
            attr = MAINTENANCE_SCHEMA[name]
            assert attr.optional and attr.computed and attr.authored

    def test_strategy_choices(self) -> None:
        assert MAINTENANCE_SCHEMA["strategy"].one_of == tuple(s.value for s in Strategy)

    def test_defaults(self) -> None:
        assert MAINTENANCE_SCHEMA["timezone"].default == "UTC"
        assert MAINTENANCE_SCHEMA["active"].default is True

    def test_loader_rejects_every_computed_only_field_except_id(self) -> None:
        """The id is server-assigned but selects the target of an update."""
        assert set(computed_only_attributes()) - {"id"} == COMPUTED_FIELDS
