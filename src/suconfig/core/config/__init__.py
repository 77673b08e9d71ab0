"""Typed configuration facade, key registry and process-wide instance.

Initialization order: create the instance (``get_config()`` or
``set_config(Config(...))``) and call ``load()`` on it before anything else
reads a setting.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .app_config import Config
from .errors import ConfigError, InvalidValueError, UnknownKeyError
from .migration import BuildInfo, LoadResult, MigrationReport, migrate
from .persistence import (
    ContentSource,
    DirectoryContentSource,
    ImportResult,
    ImportStatus,
    import_previous_preferences,
)
from .properties import (
    BoundProperty,
    GatedProperty,
    Property,
    ReactiveProperty,
    StrIntProperty,
    db_settings,
    db_strings,
    preference,
    preference_str_int,
)
from .registry import (
    MODE_NIGHT_FOLLOW_SYSTEM,
    TIMEOUT_LIST,
    Backend,
    Encoding,
    FieldMetadata,
    Key,
    MultiuserMode,
    NamespaceMode,
    RootAccess,
    SuAutoResponse,
    SuNotification,
    UpdateChannel,
    Value,
    build_registry,
    owning_backend,
)
from .stores import KeyValueStore, MemoryStore, PreferenceEditor, PreferenceStore, Store
from .validation import ValidationError, to_enum, validate, validate_config

_global_config: Optional[Config] = None
_config_lock = threading.RLock()


def get_config() -> Config:
    """Get the global configuration instance, creating a default one if needed."""
    global _global_config
    with _config_lock:
        if _global_config is None:
            _global_config = Config()
        return _global_config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _global_config
    with _config_lock:
        _global_config = config


def reset_config_for_tests() -> None:
    """Drop the global instance so the next ``get_config()`` builds a fresh one."""
    global _global_config
    with _config_lock:
        _global_config = None


@contextmanager
def config_lock() -> Iterator[Config]:
    """Serialize a read-compare-write sequence against other threads."""
    with _config_lock:
        yield get_config()


__all__ = [
    "Backend",
    "BoundProperty",
    "BuildInfo",
    "Config",
    "ConfigError",
    "ContentSource",
    "DirectoryContentSource",
    "Encoding",
    "FieldMetadata",
    "GatedProperty",
    "ImportResult",
    "ImportStatus",
    "InvalidValueError",
    "Key",
    "KeyValueStore",
    "LoadResult",
    "MODE_NIGHT_FOLLOW_SYSTEM",
    "MemoryStore",
    "MigrationReport",
    "MultiuserMode",
    "NamespaceMode",
    "PreferenceEditor",
    "PreferenceStore",
    "Property",
    "ReactiveProperty",
    "RootAccess",
    "Store",
    "StrIntProperty",
    "SuAutoResponse",
    "SuNotification",
    "TIMEOUT_LIST",
    "UnknownKeyError",
    "UpdateChannel",
    "ValidationError",
    "Value",
    "build_registry",
    "config_lock",
    "db_settings",
    "db_strings",
    "get_config",
    "import_previous_preferences",
    "migrate",
    "owning_backend",
    "preference",
    "preference_str_int",
    "reset_config_for_tests",
    "set_config",
    "to_enum",
    "validate",
    "validate_config",
]
