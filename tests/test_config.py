"""Tests for settings and logging setup."""

import io
import logging

import pytest

from ledgerkit.config import Settings, SettingsError, load_settings
from ledgerkit.logging_config import setup_logging


def test_defaults(monkeypatch):
    for name in ("LEDGERKIT_DB_PATH", "LEDGERKIT_HOST", "LEDGERKIT_PORT", "LEDGERKIT_LOG_LEVEL", "LEDGERKIT_ENABLE_TEST_RESET"):
        monkeypatch.delenv(name, raising=False)

    assert load_settings() == Settings()


def test_from_environment(monkeypatch):
    monkeypatch.setenv("LEDGERKIT_DB_PATH", "/tmp/ledger.db")
    monkeypatch.setenv("LEDGERKIT_PORT", "8080")
    monkeypatch.setenv("LEDGERKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("LEDGERKIT_ENABLE_TEST_RESET", "false")

    settings = load_settings()

    assert settings.db_path == "/tmp/ledger.db"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.enable_test_reset is False


def test_bad_port(monkeypatch):
    monkeypatch.setenv("LEDGERKIT_PORT", "eighty")
    with pytest.raises(SettingsError):
        load_settings()


def test_setup_logging_writes_to_stream():
    stream = io.StringIO()
    setup_logging("test", level="INFO", stream=stream)

    logging.getLogger("ledgerkit.test").info("hello")

    assert "hello" in stream.getvalue()
    assert "ledgerkit.test" in stream.getvalue()
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
