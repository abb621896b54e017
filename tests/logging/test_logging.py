"""Tests for centralized logging behavior and configuration."""

import logging
from io import StringIO

import pytest

from spellnet.logging import (
    LEVEL_ENV_VAR,
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    log_duration,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _reset_logging_each_test(monkeypatch):
    """Reset logging state before and after each test to avoid cross-test bleed."""
    monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    reset_logging()
    yield
    reset_logging()


def _capture(logger):
    capture = StringIO()
    handler = logging.StreamHandler(capture)
    handler.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(handler)
    return capture


def test_effective_levels_enable_disable():
    logger = get_logger("spellnet.test")
    capture = _capture(logger)

    logger.info("info-1")
    assert "info-1" in capture.getvalue()

    logger.debug("debug-1")
    assert "debug-1" not in capture.getvalue()

    enable_debug_logging()
    logger.debug("debug-2")
    assert "debug-2" in capture.getvalue()

    disable_debug_logging()
    logger.debug("debug-3")
    assert "debug-3" not in capture.getvalue()


def test_global_level_propagates_to_children_and_new_loggers():
    logger1 = get_logger("spellnet.module1")
    assert logger1.getEffectiveLevel() == logging.INFO

    set_global_log_level(logging.WARNING)
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert get_logger("spellnet.module2").getEffectiveLevel() == logging.WARNING


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, "debug")
    assert get_logger("spellnet.env").getEffectiveLevel() == logging.DEBUG


def test_unknown_environment_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, "chatty")
    assert get_logger("spellnet.env").getEffectiveLevel() == logging.INFO


def test_setup_root_logger_idempotent_no_duplicate_handlers():
    handler = logging.StreamHandler(StringIO())
    setup_root_logger(level=logging.INFO, handler=handler)

    root_logger = logging.getLogger("spellnet")
    assert root_logger.handlers == [handler]

    setup_root_logger(level=logging.DEBUG)
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO

    set_global_log_level(logging.ERROR)
    assert root_logger.level == logging.ERROR
    assert handler.level == logging.ERROR


def test_custom_format_string_applied():
    capture = StringIO()
    fmt = "LEVEL:%(levelname)s|NAME:%(name)s|MSG:%(message)s"
    setup_root_logger(
        level=logging.INFO, format_string=fmt, handler=logging.StreamHandler(capture)
    )

    get_logger("spellnet.test.format").info("hello")
    out = capture.getvalue()
    assert "LEVEL:INFO" in out
    assert "NAME:spellnet.test.format" in out
    assert "MSG:hello" in out


def test_log_duration_only_at_debug():
    capture = StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(capture))
    logger = get_logger("spellnet.timing")

    with log_duration(logger, "quiet block"):
        pass
    assert "quiet block" not in capture.getvalue()

    enable_debug_logging()
    with log_duration(logger, "timed block"):
        pass
    assert "timed block took" in capture.getvalue()


def test_log_duration_logs_when_block_raises():
    capture = StringIO()
    setup_root_logger(level=logging.DEBUG, handler=logging.StreamHandler(capture))
    logger = get_logger("spellnet.timing")

    with pytest.raises(RuntimeError):
        with log_duration(logger, "failing block"):
            raise RuntimeError("boom")
    assert "failing block took" in capture.getvalue()
