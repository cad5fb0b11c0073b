"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

import shapecheck as sc
from shapecheck.config.logging import configure_logging
from shapecheck.config.settings import ShapecheckSettings


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    engine = logging.getLogger("shapecheck")
    engine_level = engine.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    engine.setLevel(engine_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("shapecheck").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("shapecheck").level == logging.WARNING

    def test_settings_supply_defaults(self) -> None:
        configure_logging(settings=ShapecheckSettings(verbose=True))
        assert logging.getLogger("shapecheck").level == logging.DEBUG

    def test_explicit_flag_beats_settings(self) -> None:
        configure_logging(verbose=False, settings=ShapecheckSettings(verbose=True))
        assert logging.getLogger("shapecheck").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("shapecheck.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("shapecheck.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "shapecheck.test"
        assert "timestamp" in parsed

    def test_engine_debug_lines_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        sc.string().safe_parse(42)

        lines = [line for line in capfd.readouterr().err.splitlines() if line.strip()]
        assert lines
        parsed = json.loads(lines[-1])
        assert parsed["level"] == "debug"
        assert parsed["logger"].startswith("shapecheck")
        assert "timestamp" in parsed

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        sc.string().safe_parse(42)

        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
