"""Tests for the Config facade and the process-wide instance."""

import threading

import pytest

from suconfig.core.config import (
    BuildInfo,
    Config,
    InvalidValueError,
    Key,
    MemoryStore,
    UnknownKeyError,
    config_lock,
    get_config,
    reset_config_for_tests,
    set_config,
)


class TestKeyedAccess:
    def test_set_value_coerces_text(self, config, memory_settings, prefs):
        assert config.set_value(Key.SU_REQUEST_TIMEOUT, "30") == 30
        assert config.set_value(Key.ZYGISK, "true") is True
        assert config.set_value(Key.CUSTOM_CHANNEL, "https://x") == "https://x"

        assert prefs.get_string(Key.SU_REQUEST_TIMEOUT, "") == "30"
        assert memory_settings.get_bool(Key.ZYGISK, False) is True
        assert config.get_value(Key.CUSTOM_CHANNEL) == "https://x"

    def test_set_value_goes_through_reactions(self, config, scheduler):
        config.set_value(Key.CHECK_UPDATES, "false")
        assert scheduler.calls == 1

    def test_unknown_key(self, config):
        with pytest.raises(UnknownKeyError):
            config.get_value("no_such_key")
        with pytest.raises(KeyError):
            config.set_value(Key.SU_FINGERPRINT, "true")

    def test_out_of_range_value_is_rejected_before_writing(self, config, memory_settings):
        with pytest.raises(InvalidValueError):
            config.set_value(Key.ROOT_ACCESS, "7")
        assert not memory_settings.contains(Key.ROOT_ACCESS)

    def test_timeout_outside_whitelist_is_rejected(self, config):
        with pytest.raises(InvalidValueError):
            config.set_value(Key.SU_REQUEST_TIMEOUT, "15")

    def test_snapshot_lists_every_key(self, config):
        snapshot = config.snapshot()
        assert set(snapshot) == set(Config.registry())
        assert snapshot[Key.RAND_NAME] is True


def test_get_prefs_file_drops_asked_home(config, prefs, prefs_path):
    config.asked_home = True
    config.doh = True

    path = config.get_prefs_file()

    assert path == prefs_path
    assert not prefs.contains(Key.ASKED_HOME)
    assert prefs.get_bool(Key.DOH, False) is True


def test_runtime_flags_are_not_persisted(config, prefs, memory_settings):
    config.keep_verity = True
    config.recovery = True

    assert prefs.is_empty()
    assert memory_settings.all() == {}
    assert config.keep_enc is False
    assert config.deny_list is False


def test_store_for_each_backend(config, prefs, memory_settings):
    from suconfig.core.config import Backend

    assert config.store_for(Backend.PREFS) is prefs
    assert config.store_for(Backend.SETTINGS) is memory_settings


def test_build_info_from_env(monkeypatch):
    monkeypatch.setenv("SUCONFIG_BUILD_TYPE", "Canary")
    assert BuildInfo.from_env() == BuildInfo(canary=True)
    monkeypatch.setenv("SUCONFIG_BUILD_TYPE", "debug")
    assert BuildInfo.from_env() == BuildInfo(debug=True)
    monkeypatch.delenv("SUCONFIG_BUILD_TYPE")
    assert BuildInfo.from_env() == BuildInfo()


class TestGlobalConfig:
    def test_set_config_then_get_config_returns_that_instance(self, config):
        set_config(config)
        assert get_config() is config

    def test_reset_isolates_state(self, prefs, monkeypatch):
        created = []

        class Recording(Config):
            def __init__(self):
                super().__init__(prefs=prefs, settings=MemoryStore(), build=BuildInfo())
                created.append(self)

        monkeypatch.setattr("suconfig.core.config.Config", Recording)
        a = get_config()
        reset_config_for_tests()
        b = get_config()

        assert a is not b
        assert created == [a, b]

    def test_config_lock_serializes_read_compare_write(self, config):
        set_config(config)
        config.theme_ordinal = 0

        def bump():
            for _ in range(50):
                with config_lock() as cfg:
                    cfg.theme_ordinal = cfg.theme_ordinal + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert config.theme_ordinal == 200
