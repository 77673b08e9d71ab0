"""Store adapter over the SQL settings database."""

from __future__ import annotations

from typing import List, Optional

from suconfig.core.config.stores import Store
from suconfig.core.utils.logger import log_debug
from .database import SettingsDatabase, get_settings_database
from .repositories import SettingsRepository


class SettingsStore(Store):
    """
    Structured settings backend.

    Integers and booleans are rows of the ``settings`` table (booleans as
    0/1), strings are rows of the ``strings`` table. Each call runs in its
    own session; writes are committed before the call returns.
    """

    def __init__(self, database: Optional[SettingsDatabase] = None):
        self._database = database

    @property
    def database(self) -> SettingsDatabase:
        if self._database is None:
            self._database = get_settings_database()
        return self._database

    def get_int(self, key: str, default: int) -> int:
        with self.database.get_session() as session:
            value = SettingsRepository(session).get_int(key)
        return default if value is None else value

    def get_bool(self, key: str, default: bool) -> bool:
        return self.get_int(key, int(default)) != 0

    def get_string(self, key: str, default: str) -> str:
        with self.database.get_session() as session:
            value = SettingsRepository(session).get_string(key)
        return default if value is None else value

    def set_int(self, key: str, value: int) -> None:
        with self.database.get_session() as session:
            SettingsRepository(session).put_int(key, value)
        log_debug("SETTINGS", f"Set {key}={value}")

    def set_bool(self, key: str, value: bool) -> None:
        self.set_int(key, 1 if value else 0)

    def set_string(self, key: str, value: str) -> None:
        with self.database.get_session() as session:
            SettingsRepository(session).put_string(key, value)
        log_debug("SETTINGS", f"Set {key}={value!r}")

    def contains(self, key: str) -> bool:
        return key in self.keys()

    def remove(self, key: str) -> None:
        with self.database.get_session() as session:
            SettingsRepository(session).delete(key)

    def keys(self) -> List[str]:
        with self.database.get_session() as session:
            return SettingsRepository(session).keys()
