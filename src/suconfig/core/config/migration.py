"""Startup migration of legacy keys and out-of-range stored values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from .persistence import ImportResult
from .registry import Key, UpdateChannel
from .stores import KeyValueStore, Store
from .validation import to_enum
from suconfig.core.utils.logger import log_debug, log_info


@dataclass(frozen=True)
class BuildInfo:
    """Build variant of the running application."""

    debug: bool = False
    canary: bool = False

    @property
    def default_channel(self) -> UpdateChannel:
        if self.debug:
            return UpdateChannel.DEBUG
        if self.canary:
            return UpdateChannel.CANARY
        return UpdateChannel.DEFAULT

    @classmethod
    def from_env(cls) -> "BuildInfo":
        """Read ``SUCONFIG_BUILD_TYPE`` (``release``, ``canary`` or ``debug``)."""
        build_type = os.getenv("SUCONFIG_BUILD_TYPE", "release").strip().lower()
        return cls(debug=build_type == "debug", canary=build_type == "canary")


@dataclass(frozen=True)
class MigrationReport:
    legacy_key_found: bool = False
    biometric_enabled: bool = False
    channel_repaired: bool = False
    previous_channel: Any = None

    @property
    def changed(self) -> bool:
        return self.legacy_key_found or self.channel_repaired


@dataclass(frozen=True)
class LoadResult:
    """Outcome of :meth:`Config.load`: exactly one of the two fields is set."""

    import_result: Optional[ImportResult] = None
    migration: Optional[MigrationReport] = None


def migrate(prefs: KeyValueStore, settings: Store, default_channel: int) -> MigrationReport:
    """
    Rewrite legacy preference state into the current schema.

    All preference changes are committed as one batch. Running this again
    after it completed changes nothing.

    Args:
        prefs: Local preference store
        settings: Settings store that owns the biometric flag
        default_channel: Channel written when the stored one is unusable
    """
    legacy_found = False
    biometric_enabled = False
    channel_repaired = False

    with prefs.edit() as editor:
        # A true fingerprint flag carries over; a false one leaves the new key alone
        if prefs.contains(Key.SU_FINGERPRINT):
            legacy_found = True
            if prefs.get_bool(Key.SU_FINGERPRINT, False):
                settings.set_bool(Key.SU_BIOMETRIC, True)
                biometric_enabled = True
            editor.remove(Key.SU_FINGERPRINT)

        # The channel is string-encoded; anything else reads as absent
        stored_channel = prefs.get_string(Key.UPDATE_CHANNEL, "") or None
        if to_enum(UpdateChannel, stored_channel) is None:
            editor.put_string(Key.UPDATE_CHANNEL, str(int(default_channel)))
            channel_repaired = True

    report = MigrationReport(
        legacy_key_found=legacy_found,
        biometric_enabled=biometric_enabled,
        channel_repaired=channel_repaired,
        previous_channel=stored_channel,
    )
    if report.changed:
        log_info("MIGRATION", "Preferences migrated", str(report))
    else:
        log_debug("MIGRATION", "Nothing to migrate")
    return report
