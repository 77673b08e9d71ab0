"""
Typed configuration facade.

:class:`Config` exposes every setting as a typed attribute backed by either
the local preference store or the structured settings store. Callers run
:meth:`Config.load` once at process start, before any other access, so
that legacy state is migrated before anything reads it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .coercion import coerce
from .errors import InvalidValueError, UnknownKeyError
from .migration import BuildInfo, LoadResult, migrate
from .persistence import ContentSource, import_previous_preferences
from .properties import (
    GatedProperty,
    ReactiveProperty,
    db_settings,
    db_strings,
    preference,
    preference_str_int,
)
from .registry import (
    MODE_NIGHT_FOLLOW_SYSTEM,
    TIMEOUT_LIST,
    Backend,
    FieldMetadata,
    Key,
    MultiuserMode,
    NamespaceMode,
    RootAccess,
    SuAutoResponse,
    SuNotification,
    UpdateChannel,
    build_registry,
)
from .stores import PreferenceStore, Store
from .validation import validate
from suconfig.core.utils.logger import log_info
from suconfig.core.utils.paths import get_prefs_path


def _noop() -> None:
    return None


class Config:
    """
    Process configuration over two backends.

    Args:
        prefs: Local preference store (defaults to the file in the data dir)
        settings: Structured settings store (defaults to the SQL store)
        build: Build variant, used for the default update channel
        device_secure_check: Live check gating ``su_auth``
        update_scheduler: Called after ``check_update`` changes
        locale_refresher: Called after ``locale`` changes
        content_source: Source of a previous installation's preferences
    """

    # Settings store
    bootloop = db_settings(Key.BOOTLOOP, 0)
    zygisk = db_settings(Key.ZYGISK, False)
    su_manager = db_strings(Key.SU_MANAGER, "")
    keystore_raw = db_strings(Key.KEYSTORE, "")
    root_mode = db_settings(Key.ROOT_ACCESS, RootAccess.APPS_AND_ADB, choices=RootAccess)
    su_mnt_namespace_mode = db_settings(
        Key.SU_MNT_NS, NamespaceMode.REQUESTER, choices=NamespaceMode
    )
    su_multiuser_mode = db_settings(
        Key.SU_MULTIUSER_MODE, MultiuserMode.OWNER_ONLY, choices=MultiuserMode
    )
    su_auth = GatedProperty(
        db_settings(Key.SU_BIOMETRIC, False, description="Require authentication for su"),
        gate=lambda cfg: cfg.device_secure_check(),
    )

    # Local preferences
    asked_home = preference(Key.ASKED_HOME, False)
    safety_notice = preference(Key.SAFETY, True)
    dark_theme = preference(Key.DARK_THEME, MODE_NIGHT_FOLLOW_SYSTEM)
    theme_ordinal = preference(Key.THEME_ORDINAL, 0)
    doh = preference(Key.DOH, False, description="DNS over HTTPS")
    update_channel = preference_str_int(
        Key.UPDATE_CHANNEL, lambda cfg: cfg.default_channel, choices=UpdateChannel
    )
    custom_channel_url = preference(Key.CUSTOM_CHANNEL, "")
    download_dir = preference(Key.DOWNLOAD_DIR, "")
    rand_name = preference(Key.RAND_NAME, True)
    check_update = ReactiveProperty(
        preference(Key.CHECK_UPDATES, True),
        reaction=lambda cfg: cfg.update_scheduler(),
    )
    locale = ReactiveProperty(
        preference(Key.LOCALE, ""),
        reaction=lambda cfg: cfg.locale_refresher(),
    )
    su_default_timeout = preference_str_int(Key.SU_REQUEST_TIMEOUT, 10, choices=TIMEOUT_LIST)
    su_auto_response = preference_str_int(
        Key.SU_AUTO_RESPONSE, SuAutoResponse.PROMPT, choices=SuAutoResponse
    )
    su_notification = preference_str_int(
        Key.SU_NOTIFICATION, SuNotification.TOAST, choices=SuNotification
    )
    su_reauth = preference(Key.SU_REAUTH, False)
    su_tapjack = preference(Key.SU_TAPJACK, True)

    def __init__(
        self,
        prefs: Optional[PreferenceStore] = None,
        settings: Optional[Store] = None,
        build: Optional[BuildInfo] = None,
        device_secure_check: Optional[Callable[[], bool]] = None,
        update_scheduler: Optional[Callable[[], None]] = None,
        locale_refresher: Optional[Callable[[], None]] = None,
        content_source: Optional[ContentSource] = None,
    ):
        self.prefs = prefs if prefs is not None else PreferenceStore(get_prefs_path())
        self._settings = settings
        self.build = build or BuildInfo.from_env()
        self.device_secure_check = device_secure_check or (lambda: False)
        self.update_scheduler = update_scheduler or _noop
        self.locale_refresher = locale_refresher or _noop
        self.content_source = content_source

        # Runtime-only flags, never persisted
        self.keep_verity = False
        self.keep_enc = False
        self.recovery = False
        self.deny_list = False

    @property
    def settings(self) -> Store:
        if self._settings is None:
            from suconfig.database.settings_store import SettingsStore

            self._settings = SettingsStore()
        return self._settings

    def store_for(self, backend: Backend) -> Store:
        if backend is Backend.PREFS:
            return self.prefs
        return self.settings

    @property
    def default_channel(self) -> UpdateChannel:
        return self.build.default_channel

    def load(self, previous_package: Optional[str] = None) -> LoadResult:
        """
        Prepare stored state for this release.

        With an empty preference store and a previous installation
        identifier, that installation's preference file is imported and
        nothing else happens. Otherwise legacy keys and out-of-range values
        are migrated in place. Import failures are reported, never raised.
        """
        if previous_package is not None and self.prefs.is_empty():
            result = import_previous_preferences(
                self.content_source, previous_package, self.prefs.path
            )
            return LoadResult(import_result=result)

        report = migrate(self.prefs, self.settings, self.default_channel)
        return LoadResult(migration=report)

    def get_prefs_file(self) -> Path:
        """Return the preference file for export, dropping per-install state first."""
        self.prefs.remove(Key.ASKED_HOME)
        return self.prefs.path

    @classmethod
    def registry(cls) -> Dict[str, FieldMetadata]:
        return build_registry(cls)

    def field(self, key: str) -> FieldMetadata:
        meta = self.registry().get(key)
        if meta is None:
            raise UnknownKeyError(key)
        return meta

    def default_of(self, key: str) -> Any:
        return getattr(type(self), self.field(key).attr).default_for(self)

    def get_value(self, key: str) -> Any:
        return getattr(self, self.field(key).attr)

    def set_value(self, key: str, raw: Any) -> Any:
        """Coerce, validate and store a value given by key; returns the stored value."""
        meta = self.field(key)
        value = coerce(raw, meta)
        errors = validate(value, meta)
        if errors:
            raise InvalidValueError(key, raw, errors[0].message)
        setattr(self, meta.attr, value)
        log_info("CONFIG", f"{key} set", meta.backend.value)
        return value

    def snapshot(self) -> Dict[str, Any]:
        """Current value of every declared property, keyed by key."""
        return {key: getattr(self, meta.attr) for key, meta in self.registry().items()}
