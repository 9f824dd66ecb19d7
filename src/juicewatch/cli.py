"""Battery monitor CLI application.

This module provides the command-line interface for juicewatch,
including the monitor loop, one-shot status output, the power settings
shortcut and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from juicewatch.controller import BatteryMonitor
from juicewatch.monitor.engine import ErrorState
from juicewatch.notifications.keys import NotificationKey
from juicewatch.settings.user import UserSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery status monitor", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "juicewatch.cli"

# Options for the main commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")
ONCE_OPTION = typer.Option(False, "--once", "-1", help="Run one cycle then exit")
NOTIFY_OPTION = typer.Option(
    True, "--desktop-notify/--no-desktop-notify", help="Send desktop notifications (else log only)"
)


def _create_monitor(
    config: Path | None, debug: bool, desktop_notifications: bool = True
) -> BatteryMonitor:
    try:
        return BatteryMonitor(config, debug=debug, desktop_notifications=desktop_notifications)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    once: bool = ONCE_OPTION,
    desktop_notify: bool = NOTIFY_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Monitor the battery and send threshold notifications."""
    monitor = _create_monitor(config, debug, desktop_notifications=desktop_notify)
    monitor.run(once=once)


@app.command()
def status(
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Print the current battery status once."""
    monitor = _create_monitor(config, debug)
    state = monitor.refresh()
    if state is None:
        typer.secho("Battery data unavailable", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    if isinstance(state, ErrorState):
        raise typer.Exit(code=1)


@app.command("power-settings")
def power_settings(config: Path | None = CONFIG_OPTION) -> None:
    """Open the desktop's power settings."""
    monitor = _create_monitor(config, debug=False)
    if not monitor.open_power_settings():
        typer.secho("Could not open power settings", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        thresholds = typer.prompt("Notify at (comma-separated percentages)", default="10,100")
        data: dict[str, Any] = {
            "show_time": typer.confirm("Show time remaining instead of percentage?", default=False),
            "notifications": [int(p) for p in thresholds.split(",") if p.strip().isdigit()],
            "poll_seconds": typer.prompt("Seconds between checks", default=5.0, type=float),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            valid = ", ".join(str(int(k)) for k in NotificationKey)
            typer.echo(f"Thresholds must be among: {valid}")
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
