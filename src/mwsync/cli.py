"""Typer command line for syncing maintenance windows.

Commands:
    mwsync validate FILE   Check definitions without contacting the server
    mwsync apply FILE      Create or update the windows in a definition file
    mwsync show ID         Read one window from the server
    mwsync delete ID       Delete one window
    mwsync list            List all windows
    mwsync schema          Print the configuration attribute schema
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, NoReturn

import typer
import yaml

from mwsync.maintenance.errors import MaintenanceError

if TYPE_CHECKING:
    from mwsync.config import Settings
    from mwsync.integrations.kuma import KumaClient

app = typer.Typer(
    name="mwsync",
    help="Maintenance Window Sync: declarative maintenance windows for Uptime Kuma",
)


def _client_from_settings(settings: Settings) -> KumaClient:
    from mwsync.integrations.kuma import KumaClient

    return KumaClient(
        str(settings.kuma_url),
        settings.kuma_token,
        timeout=settings.request_timeout_seconds,
    )


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main() -> None:
    """Configure logging from the environment before any command runs."""
    import pydantic

    from mwsync.config import get_settings
    from mwsync.log_config import configure_logging

    try:
        settings = get_settings()
    except pydantic.ValidationError as exc:
        _fail(f"invalid settings: {exc}")
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)


@app.command()
def validate(
    file_path: str = typer.Argument(help="YAML file with one or more window definitions"),
) -> None:
    """Check required fields and value formats without contacting the server."""
    from mwsync.maintenance.loader import load_definitions
    from mwsync.maintenance.mapping import config_to_domain
    from mwsync.maintenance.validator import validate_config

    try:
        configs = asyncio.run(load_definitions(file_path))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _fail(str(exc))

    failed = False
    for config in configs:
        problems = [f.detail for f in validate_config(config)]
        if not problems:
            try:
                config_to_domain(config)
            except MaintenanceError as exc:
                problems.append(str(exc))

        if problems:
            failed = True
            for problem in problems:
                typer.echo(f"FAIL  {config.title}: {problem}")
        else:
            typer.echo(f"OK    {config.title} ({config.strategy.value})")

    if failed:
        raise typer.Exit(code=1)


@app.command()
def apply(
    file_path: str = typer.Argument(help="YAML file with one or more window definitions"),
) -> None:
    """Create windows without an id, update windows with one."""
    from mwsync.maintenance.lifecycle import MaintenanceLifecycle
    from mwsync.maintenance.loader import load_definitions

    async def _run() -> None:
        from mwsync.config import get_settings

        settings = get_settings()
        configs = await load_definitions(file_path)
        client = _client_from_settings(settings)
        lifecycle = MaintenanceLifecycle(client, timeout=settings.request_timeout_seconds)
        try:
            for config in configs:
                if config.id is None:
                    state = await lifecycle.create(config)
                else:
                    state = await lifecycle.update(config)
                typer.echo(state.model_dump_json(indent=2))
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (MaintenanceError, OSError, ValueError, yaml.YAMLError) as exc:
        _fail(str(exc))


@app.command()
def show(maintenance_id: str = typer.Argument(help="Maintenance window ID")) -> None:
    """Read one window, including server-computed fields."""
    from mwsync.maintenance.lifecycle import MaintenanceLifecycle

    async def _run() -> None:
        from mwsync.config import get_settings

        settings = get_settings()
        client = _client_from_settings(settings)
        lifecycle = MaintenanceLifecycle(client, timeout=settings.request_timeout_seconds)
        try:
            state = await lifecycle.read(lifecycle.import_state(maintenance_id))
        finally:
            await client.close()
        if state is None:
            _fail(f"maintenance {maintenance_id} not found")
        typer.echo(state.model_dump_json(indent=2))

    try:
        asyncio.run(_run())
    except MaintenanceError as exc:
        _fail(str(exc))


@app.command()
def delete(maintenance_id: str = typer.Argument(help="Maintenance window ID")) -> None:
    """Delete one window."""
    from mwsync.maintenance.lifecycle import MaintenanceLifecycle

    async def _run() -> None:
        from mwsync.config import get_settings

        settings = get_settings()
        client = _client_from_settings(settings)
        lifecycle = MaintenanceLifecycle(client, timeout=settings.request_timeout_seconds)
        try:
            await lifecycle.delete(lifecycle.import_state(maintenance_id))
        finally:
            await client.close()
        typer.echo(f"Deleted maintenance {maintenance_id}")

    try:
        asyncio.run(_run())
    except MaintenanceError as exc:
        _fail(str(exc))


@app.command(name="list")
def list_windows() -> None:
    """List all windows with their current status."""
    from mwsync.maintenance.lookup import list_maintenances

    async def _run() -> None:
        from mwsync.config import get_settings

        settings = get_settings()
        client = _client_from_settings(settings)
        try:
            summaries = await list_maintenances(
                client, timeout=settings.request_timeout_seconds
            )
        finally:
            await client.close()
        for s in summaries:
            typer.echo(f"{s.id:>5}  {s.status:<18} {s.strategy:<23} {s.title}")

    try:
        asyncio.run(_run())
    except MaintenanceError as exc:
        _fail(str(exc))


@app.command()
def schema() -> None:
    """Print every configuration attribute with its markers."""
    from mwsync.maintenance.schema import MAINTENANCE_SCHEMA

    for name, attr in MAINTENANCE_SCHEMA.items():
        markers = [m for m, on in (
            ("required", attr.required),
            ("optional", attr.optional),
            ("computed", attr.computed),
        ) if on]
        typer.echo(f"{name:<18} {attr.kind.value:<15} {','.join(markers):<18} {attr.description}")


if __name__ == "__main__":
    app()
