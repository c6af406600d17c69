"""Tests for CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from mwsync import cli
from mwsync.cli import app
from mwsync.integrations.kuma import KumaClient

runner = CliRunner()

WEEKDAY_YAML = """\
maintenance_windows:
  - title: Patch nights
    strategy: recurring-weekday
    weekdays: [1, 3, 5]
    start_time: {hours: 22, minutes: 0, seconds: 0}
    end_time: {hours: 23, minutes: 0, seconds: 0}
  - title: Quarterly
    strategy: manual
"""

BROKEN_YAML = """\
maintenance_windows:
  - title: Nightly
    strategy: cron
    cron: "0 2 * * *"
  - title: One-off
    strategy: single
    start_date: "tomorrow"
    end_date: "2025-01-02T00:00:00Z"
"""


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


def _write(tmp_path: Path, content: str) -> str:
    path = tmp_path / "windows.yaml"
    path.write_text(content)
    return str(path)


def _mock_server(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    def factory(settings) -> KumaClient:
        return KumaClient("https://kuma.example.com", transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "_client_from_settings", factory)


class TestCLI:
    """CLI command tests."""

    def test_cli_help(self) -> None:
        """CLI should display help text."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Maintenance Window Sync" in result.stdout

    @pytest.mark.parametrize("command", ["validate", "apply", "show", "delete", "list", "schema"])
    def test_command_help(self, command: str) -> None:
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0

    def test_schema_lists_markers(self) -> None:
        result = runner.invoke(app, ["schema"])
        assert result.exit_code == 0
        assert "title" in result.stdout
        assert "required" in result.stdout
        assert "timeslot_list" in result.stdout


class TestValidateCommand:
    def test_valid_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", _write(tmp_path, WEEKDAY_YAML)])
        assert result.exit_code == 0
        assert "OK    Patch nights (recurring-weekday)" in result.stdout
        assert "OK    Quarterly (manual)" in result.stdout

    def test_reports_every_problem(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", _write(tmp_path, BROKEN_YAML)])
        assert result.exit_code == 1
        assert "FAIL  Nightly: duration_minutes is required for cron strategy" in result.stdout
        assert "FAIL  One-off: invalid start_date" in result.stdout

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_unknown_strategy(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "title: x\nstrategy: weekly\n")
        result = runner.invoke(app, ["validate", path])
        assert result.exit_code == 1


class TestServerCommands:
    """Commands that talk to the server, over httpx.MockTransport."""

    def test_apply_creates(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        posted: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            posted.append(body)
            return httpx.Response(200, json={**body, "id": len(posted), "status": "scheduled"})

        _mock_server(monkeypatch, handler)
        result = runner.invoke(app, ["apply", _write(tmp_path, WEEKDAY_YAML)])

        assert result.exit_code == 0
        assert [p["strategy"] for p in posted] == ["recurring-weekday", "manual"]
        assert posted[0]["weekdays"] == [1, 3, 5]
        assert '"status": "scheduled"' in result.stdout

    def test_apply_rejects_invalid_before_calling(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        _mock_server(monkeypatch, handler)
        result = runner.invoke(app, ["apply", _write(tmp_path, BROKEN_YAML)])

        assert result.exit_code == 1
        assert calls == []

    def test_show_not_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _mock_server(monkeypatch, lambda request: httpx.Response(404))
        result = runner.invoke(app, ["show", "7"])
        assert result.exit_code == 1

    def test_show_bad_id(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _mock_server(monkeypatch, lambda request: httpx.Response(500))
        result = runner.invoke(app, ["show", "seven"])
        assert result.exit_code == 1

    def test_delete(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        _mock_server(monkeypatch, handler)
        result = runner.invoke(app, ["delete", "3"])

        assert result.exit_code == 0
        assert "Deleted maintenance 3" in result.stdout
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/maintenance/3"

    def test_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        payload = [
            {"id": 1, "title": "a", "strategy": "manual", "status": "under-maintenance"},
            {"id": 2, "title": "b", "strategy": "cron"},
        ]
        _mock_server(monkeypatch, lambda request: httpx.Response(200, json=payload))
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "under-maintenance" in result.stdout
        assert "unknown" in result.stdout


class TestSettingsErrors:
    def test_bad_environment_fails_cleanly(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0")
        result = runner.invoke(app, ["schema"])
        assert result.exit_code == 1
        assert "REQUEST_TIMEOUT_SECONDS must be positive" in result.output

    def test_bad_url_fails_cleanly(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUMA_URL", "kuma.example.com")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "invalid settings" in result.output
