"""Tests for structlog configuration."""

from __future__ import annotations

import pytest
import structlog

from mwsync.log_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", log_format="json")
        structlog.get_logger().info("maintenance_created", maintenance_id=3)
        err = capsys.readouterr().err
        assert '"event": "maintenance_created"' in err
        assert '"maintenance_id": 3' in err
        assert '"level": "info"' in err

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="warning", log_format="json")
        log = structlog.get_logger()
        log.info("hidden")
        log.warning("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="DEBUG", log_format="console")
        structlog.get_logger().debug("definitions_loaded", count=2)
        assert "definitions_loaded" in capsys.readouterr().err

    def test_stdout_untouched(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging()
        structlog.get_logger().info("quiet")
        assert capsys.readouterr().out == ""

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(log_level="LOUD")
