"""
Backend contract and the local preference backends.

Every backend exposes typed get/set for strings, integers and booleans with
a default-value parameter. A missing key, or a stored value of the wrong
type, reads as the default; only storage faults (``OSError``) propagate.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Set

from suconfig.core.utils.logger import log_debug, log_file_operation, log_warning


class Store(ABC):
    """Typed scalar access to one physical store."""

    @abstractmethod
    def get_string(self, key: str, default: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_int(self, key: str, default: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_bool(self, key: str, default: bool) -> bool:
        raise NotImplementedError

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_int(self, key: str, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_bool(self, key: str, value: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def contains(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def remove(self, key: str) -> None:
        raise NotImplementedError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PreferenceEditor:
    """Stages changes against a :class:`KeyValueStore` and commits them at once."""

    def __init__(self, store: "KeyValueStore"):
        self._store = store
        self._puts: Dict[str, Any] = {}
        self._removals: Set[str] = set()

    def put_string(self, key: str, value: str) -> "PreferenceEditor":
        self._puts[key] = str(value)
        return self

    def put_int(self, key: str, value: int) -> "PreferenceEditor":
        self._puts[key] = int(value)
        return self

    def put_bool(self, key: str, value: bool) -> "PreferenceEditor":
        self._puts[key] = bool(value)
        return self

    def remove(self, key: str) -> "PreferenceEditor":
        self._removals.add(key)
        self._puts.pop(key, None)
        return self

    @property
    def pending(self) -> bool:
        return bool(self._puts or self._removals)

    def commit(self) -> None:
        if not self.pending:
            return
        data = self._store.all()
        for key in self._removals:
            data.pop(key, None)
        data.update(self._puts)
        self._store._commit(data)
        log_debug(
            "PREFS",
            f"Committed batch: {len(self._puts)} put(s), {len(self._removals)} removal(s)",
        )
        self._puts.clear()
        self._removals.clear()


class KeyValueStore(Store):
    """Store over a flat string-keyed mapping that is loaded and committed whole."""

    @abstractmethod
    def _load(self) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def _commit(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    def all(self) -> Dict[str, Any]:
        """Snapshot of every stored key and value."""
        return dict(self._load())

    def is_empty(self) -> bool:
        return not self._load()

    def contains(self, key: str) -> bool:
        return key in self._load()

    def _get(self, key: str) -> Any:
        return self._load().get(key)

    def get_string(self, key: str, default: str) -> str:
        value = self._get(key)
        return value if isinstance(value, str) else default

    def get_int(self, key: str, default: int) -> int:
        value = self._get(key)
        return value if _is_int(value) else default

    def get_bool(self, key: str, default: bool) -> bool:
        value = self._get(key)
        return value if isinstance(value, bool) else default

    def set_string(self, key: str, value: str) -> None:
        with self.edit() as editor:
            editor.put_string(key, value)

    def set_int(self, key: str, value: int) -> None:
        with self.edit() as editor:
            editor.put_int(key, value)

    def set_bool(self, key: str, value: bool) -> None:
        with self.edit() as editor:
            editor.put_bool(key, value)

    def remove(self, key: str) -> None:
        with self.edit() as editor:
            editor.remove(key)

    @contextmanager
    def edit(self) -> Iterator[PreferenceEditor]:
        """Batch edits; committed on clean exit, discarded on exception."""
        editor = PreferenceEditor(self)
        yield editor
        editor.commit()


class MemoryStore(KeyValueStore):
    """In-process store with the same typing rules as the file store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def _load(self) -> Dict[str, Any]:
        return self._data

    def _commit(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)


class PreferenceStore(KeyValueStore):
    """
    File-backed preference store.

    The backing file is a JSON object of scalar values. It is re-read on
    every access, so separate instances (or processes) sharing the file
    observe a single source of truth. Commits write a temp file and then
    replace the target, so readers never see a partial file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = self.path.read_bytes()
        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            log_warning("PREFS", "Preference file is not valid JSON, reading as empty", str(e))
            return {}
        if not isinstance(payload, dict):
            log_warning(
                "PREFS",
                "Preference file does not hold an object, reading as empty",
                type(payload).__name__,
            )
            return {}
        return payload

    def _commit(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        temp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(self.path)
        log_file_operation("write", str(self.path), True)
