# tests/unit/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging
from collections.abc import Iterator

import pytest

from sinkwatch.core.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestLoggingConfig:
    def test_get_logger_returns_bindable_logger(self) -> None:
        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert logger.bind(sink_path="/tmp/x") is not logger

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)
        get_logger("test").info("Published sink update", version=3)

        log_line = capsys.readouterr().out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "Published sink update"
        assert data["version"] == 3
        assert data["level"] == "info"
        assert "_record" not in data

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=False)
        get_logger("test").info("Published sink update", version=3)

        captured = capsys.readouterr().out
        assert "Published sink update" in captured
        assert not captured.strip().startswith("{")

    def test_stdlib_loggers_share_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)
        logging.getLogger("some.test.suite").warning("plain stdlib record")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["event"] == "plain stdlib record"

    def test_level_applied_to_root(self) -> None:
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_dynaconf_silenced_below_warning(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("dynaconf").level == logging.WARNING
