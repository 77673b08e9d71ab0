"""
Tests for the ``suconfig config`` commands.

Each test points the CLI at a temporary data directory, so the preference
file and the SQLite settings database are real files.
"""

import json

import pytest

from suconfig.cli.exit_codes import EXIT_CONFIG_ERROR
from suconfig.cli.main import app
from suconfig.core.config import Key, PreferenceStore
from suconfig.core.utils.paths import PREFS_NAME, get_default_database_url, get_prefs_path
from suconfig.database import SettingsDatabase, SettingsStore


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("SUCONFIG_DATABASE_URL", raising=False)
    monkeypatch.delenv("SUCONFIG_BUILD_TYPE", raising=False)
    return tmp_path / "data"


@pytest.fixture
def invoke(typer_test_client, data_dir):
    def _invoke(*args):
        return typer_test_client.invoke(app, ["--data-dir", str(data_dir), "config", *args])

    return _invoke


def _prefs(data_dir) -> PreferenceStore:
    return PreferenceStore(get_prefs_path(data_dir))


class TestGetSet:
    def test_get_prints_default(self, invoke):
        result = invoke("get", Key.UPDATE_CHANNEL)

        assert result.exit_code == 0
        assert result.stdout.strip() == "-1"

    def test_set_string_encoded_int(self, invoke, data_dir):
        result = invoke("set", Key.SU_REQUEST_TIMEOUT, "30")

        assert result.exit_code == 0
        assert "su_request_timeout = 30" in result.stdout
        assert _prefs(data_dir).get_string(Key.SU_REQUEST_TIMEOUT, "") == "30"
        assert invoke("get", Key.SU_REQUEST_TIMEOUT).stdout.strip() == "30"

    def test_set_bool(self, invoke, data_dir):
        result = invoke("set", Key.DOH, "yes")

        assert result.exit_code == 0
        assert _prefs(data_dir).get_bool(Key.DOH, False) is True
        assert invoke("get", Key.DOH).stdout.strip() == "true"

    def test_set_settings_store_key(self, invoke, data_dir):
        assert invoke("set", Key.ROOT_ACCESS, "2").exit_code == 0

        assert invoke("get", Key.ROOT_ACCESS).stdout.strip() == "2"
        assert (data_dir / "databases" / "settings.db").exists()
        assert _prefs(data_dir).is_empty()

    def test_unknown_key(self, invoke):
        result = invoke("get", "not_a_key")

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "not_a_key" in result.stdout

    def test_invalid_value(self, invoke, data_dir):
        result = invoke("set", Key.UPDATE_CHANNEL, "9")

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "update_channel" in result.stdout
        assert not _prefs(data_dir).contains(Key.UPDATE_CHANNEL)

    def test_invalid_type(self, invoke):
        result = invoke("set", Key.BOOTLOOP, "often")

        assert result.exit_code == EXIT_CONFIG_ERROR


def test_show_lists_settings(invoke):
    result = invoke("show")

    assert result.exit_code == 0
    assert "doh" in result.stdout
    assert "locale" in result.stdout


class TestLoad:
    def test_load_migrates_legacy_state(self, invoke, data_dir):
        prefs = _prefs(data_dir)
        prefs.set_bool(Key.SU_FINGERPRINT, True)
        prefs.set_string(Key.UPDATE_CHANNEL, "12")

        result = invoke("load")

        assert result.exit_code == 0
        assert "biometric" in result.stdout
        assert not prefs.contains(Key.SU_FINGERPRINT)
        assert prefs.get_string(Key.UPDATE_CHANNEL, "") == "-1"
        database = SettingsDatabase(get_default_database_url(data_dir))
        database.initialize()
        try:
            assert SettingsStore(database).get_bool(Key.SU_BIOMETRIC, False) is True
        finally:
            database.close()
        # Gated: no secure lock screen by default
        assert invoke("get", Key.SU_BIOMETRIC).stdout.strip() == "false"

    def test_second_load_reports_nothing_to_do(self, invoke):
        invoke("load")

        result = invoke("load")

        assert result.exit_code == 0
        assert "up to date" in result.stdout

    def test_load_imports_previous_installation(self, invoke, data_dir, tmp_path):
        payload = json.dumps({Key.LOCALE: "fr", Key.SU_REQUEST_TIMEOUT: "60"}).encode()
        source = tmp_path / "previous"
        (source / "com.example.old").mkdir(parents=True)
        (source / "com.example.old" / f"{PREFS_NAME}.json").write_bytes(payload)

        result = invoke("load", "-p", "com.example.old", "--source-dir", str(source))

        assert result.exit_code == 0
        assert "Imported" in result.stdout
        assert get_prefs_path(data_dir).read_bytes() == payload
        assert invoke("get", Key.LOCALE).stdout.strip() == "'fr'"

    def test_failed_import_still_succeeds(self, invoke, data_dir, tmp_path):
        result = invoke("load", "-p", "com.example.gone", "--source-dir", str(tmp_path))

        assert result.exit_code == 0
        assert "not imported" in result.stdout
        assert _prefs(data_dir).is_empty()


def test_prefs_file_prints_path_and_drops_asked_home(invoke, data_dir):
    prefs = _prefs(data_dir)
    prefs.set_bool(Key.ASKED_HOME, True)
    prefs.set_bool(Key.DOH, True)

    result = invoke("prefs-file")

    assert result.exit_code == 0
    assert result.stdout.strip() == str(get_prefs_path(data_dir))
    assert not prefs.contains(Key.ASKED_HOME)
    assert prefs.contains(Key.DOH)
