"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

import pytest

from pageshift.core.observability.logging_config import (
    ENV_LEVEL,
    _parse_level,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "ERROR")
        assert resolve_level(debug=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "INFO")
        assert resolve_level() == "INFO"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level() == "WARNING"


class TestParseLevel:
    def test_known(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back(self):
        assert _parse_level("LOUD") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "pageshift.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("pageshift.test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()

        assert "written to file only" in log_file.read_text()
