"""Tests for the API logging setup."""

import logging

import pytest

from backend.logging_config import LOG_LEVEL_ENV, configure_logging

NAMES = ("visual_dna", "visual_dna.backend", "uvicorn", "uvicorn.access", "backend")


@pytest.fixture(autouse=True)
def restore_levels():
    saved = {name: logging.getLogger(name).level for name in NAMES}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
        logger = configure_logging(level="debug")
        assert logger.name == "visual_dna.backend"
        assert logging.getLogger("visual_dna").level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.DEBUG

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
        configure_logging(extra_loggers=("backend",))
        assert logging.getLogger("visual_dna").level == logging.WARNING
        assert logging.getLogger("backend").level == logging.WARNING

    def test_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        configure_logging()
        assert logging.getLogger("uvicorn").level == logging.INFO
