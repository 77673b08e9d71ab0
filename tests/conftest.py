"""
Shared pytest fixtures for suconfig tests.

Provides preference stores on temporary files, a temporary SQLite settings
database, and a Config wired to recording reaction callbacks.
"""

import sys
from pathlib import Path
from typing import Callable, Iterator, List, Optional

import pytest

_REPO_ROOT = Path(__file__).resolve().parent.parent
# Put `src/` first so `import suconfig` uses workspace code.
sys.path.insert(0, str(_REPO_ROOT / "src"))

from suconfig.core.config import (  # noqa: E402
    BuildInfo,
    Config,
    MemoryStore,
    PreferenceStore,
    reset_config_for_tests,
)
from suconfig.database import SettingsDatabase, SettingsStore  # noqa: E402


# ============================================================================
# Backend Fixtures
# ============================================================================

@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    """Location of the preference file (not created)."""
    return tmp_path / "data" / "shared_prefs" / "suconfig_preferences.json"


@pytest.fixture
def prefs(prefs_path: Path) -> PreferenceStore:
    return PreferenceStore(prefs_path)


@pytest.fixture
def memory_settings() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def settings_db(tmp_path: Path) -> Iterator[SettingsDatabase]:
    """Initialized SQLite settings database in a temporary file."""
    database = SettingsDatabase(f"sqlite:///{tmp_path / 'settings.db'}")
    database.initialize()
    yield database
    database.close()


@pytest.fixture
def settings_store(settings_db: SettingsDatabase) -> SettingsStore:
    return SettingsStore(settings_db)


# ============================================================================
# Config Fixtures
# ============================================================================

class CallRecorder:
    """Callable that records how often it ran."""

    def __init__(self) -> None:
        self.calls = 0
        self.observed: List[object] = []
        self.probe: Optional[Callable[[], object]] = None

    def __call__(self) -> None:
        self.calls += 1
        if self.probe is not None:
            self.observed.append(self.probe())


class DeviceState:
    def __init__(self, secure: bool = True) -> None:
        self.secure = secure

    def __call__(self) -> bool:
        return self.secure


@pytest.fixture
def scheduler() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def locale_refresher() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def device() -> DeviceState:
    return DeviceState(secure=True)


@pytest.fixture
def config(prefs, memory_settings, scheduler, locale_refresher, device) -> Config:
    """Release-build Config over a temporary preference file and in-memory settings."""
    return Config(
        prefs=prefs,
        settings=memory_settings,
        build=BuildInfo(),
        device_secure_check=device,
        update_scheduler=scheduler,
        locale_refresher=locale_refresher,
    )


@pytest.fixture(autouse=True)
def isolated_global_config() -> Iterator[None]:
    """Keep the process-wide config from leaking between tests."""
    reset_config_for_tests()
    yield
    reset_config_for_tests()


@pytest.fixture
def typer_test_client():
    """Typer test client for CLI testing."""
    from typer.testing import CliRunner

    return CliRunner()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual functions/classes")
    config.addinivalue_line("markers", "database: Tests that require database setup")
