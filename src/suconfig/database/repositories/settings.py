"""Repository for settings-store rows.

Integer and boolean keys are rows of ``settings``; string keys are rows of
``strings``. Writes commit immediately. Failures roll back, are logged
with the operation and key, and propagate to the caller.
"""

from __future__ import annotations

from typing import List, NoReturn, Optional

from sqlalchemy.orm import Session

from suconfig.core.utils.logger import log_error
from suconfig.database.models.settings import IntSetting, StringSetting


class SettingsRepository:
    def __init__(self, session: Session):
        self.session = session

    def _handle_error(self, operation: str, error: Exception, key: str = "") -> NoReturn:
        log_error("SETTINGS_DB", f"{operation} failed: {error}", key)
        raise error

    def get_int(self, key: str) -> Optional[int]:
        try:
            row = self.session.get(IntSetting, key)
            return None if row is None else row.value
        except Exception as e:
            self._handle_error("get_int", e, key)

    def put_int(self, key: str, value: int) -> None:
        try:
            self.session.merge(IntSetting(key=key, value=int(value)))
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            self._handle_error("put_int", e, key)

    def get_string(self, key: str) -> Optional[str]:
        try:
            row = self.session.get(StringSetting, key)
            return None if row is None else row.value
        except Exception as e:
            self._handle_error("get_string", e, key)

    def put_string(self, key: str, value: str) -> None:
        try:
            self.session.merge(StringSetting(key=key, value=str(value)))
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            self._handle_error("put_string", e, key)

    def delete(self, key: str) -> None:
        try:
            self.session.query(IntSetting).filter(IntSetting.key == key).delete()
            self.session.query(StringSetting).filter(StringSetting.key == key).delete()
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            self._handle_error("delete", e, key)

    def keys(self) -> List[str]:
        try:
            int_keys = [row.key for row in self.session.query(IntSetting.key)]
            str_keys = [row.key for row in self.session.query(StringSetting.key)]
            return sorted(set(int_keys) | set(str_keys))
        except Exception as e:
            self._handle_error("keys", e)
