from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration
and that foreign handlers survive reconfiguration.
"""

import logging
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from testreader.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from testreader.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach our handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def test_logging_idempotency() -> None:
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    count = len(root.handlers)
    configure_logging(cfg)

    assert len(root.handlers) == count
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_file_logging(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "testreader.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    logging.getLogger("testreader.test").info("compiled 3 tests")
    shutdown_logging()

    assert "compiled 3 tests" in log_file.read_text(encoding="utf-8")


def test_foreign_handlers_survive(tmp_path: Path) -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(console=True))
        configure_logging(LoggingConfig(level="DEBUG", console=True), force=True)
        shutdown_logging()
        assert foreign in root.handlers
        assert getattr(root, _CONFIGURED_FLAG_ATTR) is False
    finally:
        root.removeHandler(foreign)
