import logging

from spisu.logging_setup import _parse_level, get_logger


def test_parse_level_names_and_numbers():
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("10") == 10
    assert _parse_level(logging.ERROR) == logging.ERROR
    assert _parse_level("bogus") == logging.WARNING


def test_parse_level_from_environment(monkeypatch):
    monkeypatch.setenv("SPISU_LOG_LEVEL", "INFO")
    assert _parse_level(None) == logging.INFO
    monkeypatch.delenv("SPISU_LOG_LEVEL")
    assert _parse_level(None) == logging.WARNING


def test_get_logger_returns_named_logger():
    logger = get_logger("spisu.record")
    assert logger.name == "spisu.record"
    assert logging.getLogger("spisu").handlers
