"""
Configuration CLI commands.

Inspect and edit stored settings through the same typed facade the
application uses, so defaults, encodings and change reactions apply.
"""

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from suconfig.core.config import (
    ConfigError,
    DirectoryContentSource,
    ImportStatus,
    get_config,
)
from .exit_codes import CliExit

console = Console()

app = typer.Typer(
    name="config",
    help="Inspect and edit stored settings",
    no_args_is_help=True,
)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return repr(value)
    return str(value)


@app.command("load")
def load_command(
    previous_package: Optional[str] = typer.Option(
        None, "--previous-package", "-p", help="Identifier of a previous installation"
    ),
    source_dir: Optional[Path] = typer.Option(
        None, "--source-dir", help="Directory serving previous installations' preferences"
    ),
):
    """Import a previous installation's settings or migrate stored settings."""
    config = get_config()
    if source_dir is not None:
        config.content_source = DirectoryContentSource(source_dir)

    result = config.load(previous_package)

    if result.import_result is not None:
        imported = result.import_result
        if imported.status is ImportStatus.IMPORTED:
            console.print(
                f"[green]Imported {imported.bytes_copied} bytes from {imported.identifier}[/green]"
            )
        elif imported.status is ImportStatus.FAILED:
            console.print(
                f"[yellow]Previous settings not imported; using defaults[/yellow] ({escape(imported.error or '')})"
            )
        else:
            console.print("No previous installation to import from")
        return

    report = result.migration
    if report is not None and report.changed:
        if report.legacy_key_found:
            console.print(
                f"Migrated legacy biometric flag (enabled: {report.biometric_enabled})"
            )
        if report.channel_repaired:
            console.print(
                f"Reset update channel {escape(repr(report.previous_channel))} "
                f"to {int(config.default_channel)}"
            )
    else:
        console.print("Settings already up to date")


@app.command("show")
def show_command():
    """Show every setting with its backend, value and default."""
    config = get_config()
    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Attribute")
    table.add_column("Backend")
    table.add_column("Value", style="bold")
    table.add_column("Default", style="dim")

    for key, meta in sorted(config.registry().items()):
        table.add_row(
            key,
            meta.attr,
            meta.backend.value,
            _format_value(config.get_value(key)),
            _format_value(config.default_of(key)),
        )
    console.print(table)


@app.command("get")
def get_command(key: str = typer.Argument(..., help="Setting key, e.g. update_channel")):
    """Print the current value of one setting."""
    try:
        value = get_config().get_value(key)
    except ConfigError as e:
        raise CliExit.config_error(str(e))
    typer.echo(_format_value(value))


@app.command("set")
def set_command(
    key: str = typer.Argument(..., help="Setting key, e.g. su_request_timeout"),
    value: str = typer.Argument(..., help="New value"),
):
    """Store a new value for one setting."""
    try:
        stored = get_config().set_value(key, value)
    except ConfigError as e:
        raise CliExit.config_error(str(e))
    typer.echo(f"{key} = {_format_value(stored)}")


@app.command("prefs-file")
def prefs_file_command():
    """Print the local preference file, ready for export."""
    typer.echo(str(get_config().get_prefs_file()))
