"""Tests for the logging setup helper."""

import logging

import pytest

from learnshelf.utils import debug


@pytest.fixture
def fresh_logger(monkeypatch: pytest.MonkeyPatch):
    """Run setup_logger against a clean ``learnshelf`` logger."""
    logger = logging.getLogger("learnshelf")
    handlers = list(logger.handlers)
    level = logger.level
    monkeypatch.setattr(debug, "_logger", None)
    monkeypatch.setattr(debug, "DEBUG_ON", False)
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_setup_logger_installs_one_handler(fresh_logger: logging.Logger) -> None:
    before = len(fresh_logger.handlers)

    first = debug.setup_logger()
    second = debug.setup_logger(verbose=True)

    assert first is second is fresh_logger
    assert len(fresh_logger.handlers) == before + 1
    assert fresh_logger.level == logging.DEBUG


def test_setup_logger_defaults_to_warning(fresh_logger: logging.Logger) -> None:
    assert debug.setup_logger().level == logging.WARNING


def test_debug_env_forces_debug(
    fresh_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(debug, "DEBUG_ON", True)

    assert debug.setup_logger().level == logging.DEBUG


def test_package_is_silent_by_default() -> None:
    import learnshelf

    handlers = logging.getLogger(learnshelf.__name__).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
