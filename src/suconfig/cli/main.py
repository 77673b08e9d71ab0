"""
Main CLI entry point for suconfig.

Global options select the data directory and logging level; they build the
process configuration before any subcommand touches a setting.
"""

from pathlib import Path
from typing import Optional

import typer

from suconfig.core.config import Config, PreferenceStore, set_config
from suconfig.core.utils.logger import setup_logging
from suconfig.core.utils.paths import get_default_database_url, get_prefs_path
from .config_commands import app as config_app

app = typer.Typer(
    name="suconfig",
    help="Typed settings for the su manager",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config", help="Inspect and edit stored settings")


def _build_config(data_dir: Path) -> Config:
    from suconfig.database import SettingsDatabase, SettingsStore

    prefs = PreferenceStore(get_prefs_path(data_dir))
    database = SettingsDatabase(get_default_database_url(data_dir))
    database.initialize()
    return Config(prefs=prefs, settings=SettingsStore(database))


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory holding the preference file and settings database",
    ),
):
    """suconfig - typed settings over local preferences and the settings database."""
    setup_logging(level=log_level)
    if data_dir is not None:
        set_config(_build_config(data_dir))


if __name__ == "__main__":
    app()
