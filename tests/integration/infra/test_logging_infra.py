from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
silent mode, and file output.
"""

import logging
from pathlib import Path

import pytest

from json_env.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from json_env.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from json_env.infra.logging.handlers import _is_our_handler


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up our handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if _is_our_handler(h)]


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert len(_our_handlers()) == initial == 1


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR) is not first
    assert logging.getLogger().level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_unknown_level_defaults_to_warning() -> None:
    configure_logging(LoggingConfig(level="chatty"))
    assert logging.getLogger().level == logging.WARNING


def test_silent_mode_attaches_null_handler(capsys) -> None:
    configure_logging(LoggingConfig(level="DEBUG", console=False))
    logging.getLogger("json_env.test").error("should not be printed")

    handlers = _our_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.NullHandler)
    assert capsys.readouterr().err == ""


def test_file_output_is_flushed_on_shutdown(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "json_env.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("json_env.test").info("resolved 3 variables")
    shutdown_logging()

    assert "resolved 3 variables" in log_file.read_text(encoding="utf-8")


def test_shutdown_resets_state() -> None:
    configure_logging(LoggingConfig())
    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers() == []
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is False
    assert getattr(root, _QUEUE_LISTENER_ATTR, None) is None
