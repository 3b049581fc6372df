"""Tests for momentum/logging_config.py"""

import logging

import pytest
import structlog

from momentum.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    quiet_levels = {name: logging.getLogger(name).level for name in ("httpx", "anthropic")}

    yield

    root.handlers[:] = handlers
    root.setLevel(level)
    for name, saved in quiet_levels.items():
        logging.getLogger(name).setLevel(saved)


class TestSetupLogging:
    def test_explicit_level(self):
        setup_logging(level="DEBUG", json_output=False)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("MOMENTUM_LOG_LEVEL", "error")

        setup_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_quiets_third_party_loggers(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("anthropic").level == logging.WARNING

    def test_json_lines(self, capsys):
        setup_logging(level="INFO", json_output=True)

        logging.getLogger("momentum.test").info("Void recorded")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert '"event": "Void recorded"' in line
        assert '"logger": "momentum.test"' in line
