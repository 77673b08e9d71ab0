"""
Tests for logging utilities.

This module tests logger setup and the standardized logging helpers.
"""

import logging

import pytest

from suconfig.core.config import Config, Key, MemoryStore, BuildInfo
from suconfig.core.utils.logger import (
    get_logger,
    log_configuration_change,
    log_file_operation,
    log_warning,
    reset_logging,
    setup_logging,
)


@pytest.fixture(autouse=True)
def fresh_logger():
    reset_logging()
    yield
    reset_logging()


class TestSetupLogging:
    def test_defaults(self):
        logger = setup_logging()

        assert logger.name == "suconfig"
        assert logger.level == logging.INFO

    def test_custom_level_and_format(self):
        logger = setup_logging(level="debug", format_string="%(levelname)s %(message)s")

        assert logger.level == logging.DEBUG
        assert logger.handlers[0].formatter._fmt == "%(levelname)s %(message)s"

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "suconfig.log"
        logger = setup_logging(log_file=str(log_file))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_get_logger_initializes_once(self):
        assert get_logger() is get_logger()


def test_standard_message_format(caplog):
    setup_logging(level="DEBUG")
    with caplog.at_level(logging.WARNING, logger="suconfig"):
        log_warning("prefs", "Preference file unreadable", "settings.json")

    assert "[PREFS] Preference file unreadable | Context: settings.json" in caplog.text


def test_file_operation_levels(caplog):
    setup_logging(level="DEBUG")
    with caplog.at_level(logging.DEBUG, logger="suconfig"):
        log_file_operation("write", "/tmp/a.json", True)
        log_file_operation("import", "/tmp/b.json", False, "denied")

    levels = {record.levelno for record in caplog.records}
    assert levels == {logging.DEBUG, logging.WARNING}
    assert "denied" in caplog.text


def test_reactive_change_is_logged(caplog, prefs):
    setup_logging(level="INFO")
    config = Config(prefs=prefs, settings=MemoryStore(), build=BuildInfo())

    with caplog.at_level(logging.INFO, logger="suconfig"):
        config.locale = "it"

    assert f"Configuration changed: {Key.LOCALE} = '' -> 'it'" in caplog.text


def test_configuration_change_message(caplog):
    setup_logging()
    with caplog.at_level(logging.INFO, logger="suconfig"):
        log_configuration_change("check_update", True, False)

    assert "check_update = True -> False" in caplog.text
