"""
SQL backend for the structured settings store.

Key Features:
- SQLAlchemy ORM over two scalar tables (integers and strings)
- SQLite by default, overridable database URL
- :class:`SettingsStore` adapter implementing the typed store contract
"""

from .database import SettingsDatabase, close_settings_database, get_settings_database
from .models import Base, IntSetting, StringSetting
from .settings_store import SettingsStore

__all__ = [
    "Base",
    "IntSetting",
    "SettingsDatabase",
    "SettingsStore",
    "StringSetting",
    "close_settings_database",
    "get_settings_database",
]
