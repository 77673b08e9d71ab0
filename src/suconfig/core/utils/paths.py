import os
from pathlib import Path

# Allow override for tests/containers: SUCONFIG_DATA_DIR=/data
_data_dir_env = os.getenv("SUCONFIG_DATA_DIR")
DATA_DIR = Path(_data_dir_env).expanduser().resolve() if _data_dir_env else (Path.home() / ".suconfig")

DEFAULT_PREFS_NAME = "suconfig_preferences"
PREFS_NAME = os.getenv("SUCONFIG_PREFS_NAME", DEFAULT_PREFS_NAME)


def get_prefs_dir(data_dir: Path | None = None) -> Path:
    """Directory holding preference files (``<data_dir>/shared_prefs``)."""
    return Path(data_dir or DATA_DIR) / "shared_prefs"


def get_prefs_path(data_dir: Path | None = None, name: str | None = None) -> Path:
    """Backing file of the local preference store."""
    return get_prefs_dir(data_dir) / f"{name or PREFS_NAME}.json"


def get_default_database_url(data_dir: Path | None = None) -> str:
    """SQLite URL of the structured settings store inside the data directory."""
    env_url = os.getenv("SUCONFIG_DATABASE_URL")
    if env_url:
        return env_url
    db_dir = Path(data_dir or DATA_DIR) / "databases"
    db_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_dir / 'settings.db'}"
