"""Configuration key registry and legal value sets.

Key names and enumeration numbers are a published contract: anything that
reads the stores directly depends on them, so renaming a key or renumbering
a value is a breaking change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, Optional, Tuple


class Backend(str, Enum):
    """Physical store that owns a key."""

    PREFS = "prefs"
    SETTINGS = "settings"


class Encoding(str, Enum):
    """How a logical value is represented inside its backend."""

    NATIVE = "native"
    STR_INT = "str_int"


class Key:
    # settings store
    ROOT_ACCESS = "root_access"
    SU_MULTIUSER_MODE = "multiuser_mode"
    SU_MNT_NS = "mnt_ns"
    SU_BIOMETRIC = "su_biometric"
    ZYGISK = "zygisk"
    BOOTLOOP = "bootloop"
    SU_MANAGER = "requester"
    KEYSTORE = "keystore"

    # local preferences
    SU_REQUEST_TIMEOUT = "su_request_timeout"
    SU_AUTO_RESPONSE = "su_auto_response"
    SU_NOTIFICATION = "su_notification"
    SU_REAUTH = "su_reauth"
    SU_TAPJACK = "su_tapjack"
    CHECK_UPDATES = "check_update"
    UPDATE_CHANNEL = "update_channel"
    CUSTOM_CHANNEL = "custom_channel"
    LOCALE = "locale"
    DARK_THEME = "dark_theme_extended"
    DOWNLOAD_DIR = "download_dir"
    SAFETY = "safety_notice"
    THEME_ORDINAL = "theme_ordinal"
    ASKED_HOME = "asked_home"
    DOH = "doh"
    RAND_NAME = "rand_name"

    # retired, only read by migration
    SU_FINGERPRINT = "su_fingerprint"


SETTINGS_KEYS = frozenset(
    {
        Key.ROOT_ACCESS,
        Key.SU_MULTIUSER_MODE,
        Key.SU_MNT_NS,
        Key.SU_BIOMETRIC,
        Key.ZYGISK,
        Key.BOOTLOOP,
        Key.SU_MANAGER,
        Key.KEYSTORE,
    }
)

PREFS_KEYS = frozenset(
    {
        Key.SU_REQUEST_TIMEOUT,
        Key.SU_AUTO_RESPONSE,
        Key.SU_NOTIFICATION,
        Key.SU_REAUTH,
        Key.SU_TAPJACK,
        Key.CHECK_UPDATES,
        Key.UPDATE_CHANNEL,
        Key.CUSTOM_CHANNEL,
        Key.LOCALE,
        Key.DARK_THEME,
        Key.DOWNLOAD_DIR,
        Key.SAFETY,
        Key.THEME_ORDINAL,
        Key.ASKED_HOME,
        Key.DOH,
        Key.RAND_NAME,
    }
)

LEGACY_KEYS = frozenset({Key.SU_FINGERPRINT})


def owning_backend(key: str) -> Backend:
    """Return the backend that owns ``key``; legacy keys live in prefs."""
    if key in SETTINGS_KEYS:
        return Backend.SETTINGS
    if key in PREFS_KEYS or key in LEGACY_KEYS:
        return Backend.PREFS
    raise KeyError(key)


class UpdateChannel(IntEnum):
    DEFAULT = -1
    STABLE = 0
    BETA = 1
    CUSTOM = 2
    CANARY = 3
    DEBUG = 4


class RootAccess(IntEnum):
    DISABLED = 0
    APPS_ONLY = 1
    ADB_ONLY = 2
    APPS_AND_ADB = 3


class MultiuserMode(IntEnum):
    OWNER_ONLY = 0
    OWNER_MANAGED = 1
    USER = 2


class NamespaceMode(IntEnum):
    GLOBAL = 0
    REQUESTER = 1
    ISOLATE = 2


class SuNotification(IntEnum):
    NONE = 0
    TOAST = 1


class SuAutoResponse(IntEnum):
    PROMPT = 0
    DENY = 1
    ALLOW = 2


# Request timeouts in seconds; 0 and -1 are "never" and "forever"
TIMEOUT_LIST: Tuple[int, ...] = (0, -1, 10, 20, 30, 60)

# Mirrors the platform's night-mode constant
MODE_NIGHT_FOLLOW_SYSTEM = -1


class Value:
    """Flat aliases of the legal values, for readers of the raw stores."""

    DEFAULT_CHANNEL = UpdateChannel.DEFAULT
    STABLE_CHANNEL = UpdateChannel.STABLE
    BETA_CHANNEL = UpdateChannel.BETA
    CUSTOM_CHANNEL = UpdateChannel.CUSTOM
    CANARY_CHANNEL = UpdateChannel.CANARY
    DEBUG_CHANNEL = UpdateChannel.DEBUG

    ROOT_ACCESS_DISABLED = RootAccess.DISABLED
    ROOT_ACCESS_APPS_ONLY = RootAccess.APPS_ONLY
    ROOT_ACCESS_ADB_ONLY = RootAccess.ADB_ONLY
    ROOT_ACCESS_APPS_AND_ADB = RootAccess.APPS_AND_ADB

    MULTIUSER_MODE_OWNER_ONLY = MultiuserMode.OWNER_ONLY
    MULTIUSER_MODE_OWNER_MANAGED = MultiuserMode.OWNER_MANAGED
    MULTIUSER_MODE_USER = MultiuserMode.USER

    NAMESPACE_MODE_GLOBAL = NamespaceMode.GLOBAL
    NAMESPACE_MODE_REQUESTER = NamespaceMode.REQUESTER
    NAMESPACE_MODE_ISOLATE = NamespaceMode.ISOLATE

    NO_NOTIFICATION = SuNotification.NONE
    NOTIFICATION_TOAST = SuNotification.TOAST

    SU_PROMPT = SuAutoResponse.PROMPT
    SU_AUTO_DENY = SuAutoResponse.DENY
    SU_AUTO_ALLOW = SuAutoResponse.ALLOW

    TIMEOUT_LIST = TIMEOUT_LIST


@dataclass(frozen=True)
class FieldMetadata:
    """Metadata describing a declared configuration property."""

    key: str
    attr: str
    type: type
    default: Any
    backend: Backend
    encoding: Encoding = Encoding.NATIVE
    choices: Optional[Iterable[Any]] = None
    description: str = ""


def build_registry(config_cls: type) -> Dict[str, FieldMetadata]:
    """Build a key -> metadata map from the property delegates of ``config_cls``."""
    registry: Dict[str, FieldMetadata] = {}
    for klass in reversed(config_cls.__mro__):
        for value in vars(klass).values():
            meta = getattr(value, "metadata", None)
            if isinstance(meta, FieldMetadata):
                registry[meta.key] = meta
    return registry
