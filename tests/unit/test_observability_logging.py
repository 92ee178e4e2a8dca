"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from storygraph.observability import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_configure_logging_sets_level_warning() -> None:
    """Default verbosity (0) sets WARNING level."""
    configure_logging(verbosity=0)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING


def test_configure_logging_verbose_sets_info() -> None:
    """verbosity=1 sets INFO on the console handler."""
    configure_logging(verbosity=1)

    root_logger = logging.getLogger()
    # Root stays at DEBUG so a file handler can see everything
    assert root_logger.level == logging.DEBUG
    assert root_logger.handlers[0].level == logging.INFO


def test_configure_logging_very_verbose_sets_debug() -> None:
    """verbosity=2 sets DEBUG level."""
    configure_logging(verbosity=2)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert root_logger.handlers[0].level == logging.DEBUG


def test_get_logger_returns_bound_logger() -> None:
    """get_logger returns a structlog logger with expected methods."""
    logger = get_logger(__name__)

    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "error")
    assert hasattr(logger, "warning")


def test_get_logger_auto_configures() -> None:
    """get_logger configures logging if not already done."""
    import storygraph.observability.logging as log_module

    log_module._configured = False

    logger = get_logger("test")

    assert log_module._configured is True
    assert logger is not None


def test_configure_logging_with_file_logging(tmp_path: Path) -> None:
    """File logging creates the logs directory under log_dir."""
    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)

    logs_dir = tmp_path / "logs"
    assert logs_dir.exists()
    assert get_logs_dir() == logs_dir
    close_file_logging()


def test_configure_logging_without_file_logging(tmp_path: Path) -> None:
    """Without file logging flag, logs directory is not created."""
    configure_logging(verbosity=0, log_to_file=False, log_dir=tmp_path)

    assert not (tmp_path / "logs").exists()
    assert get_logs_dir() is None


def test_configure_logging_requires_log_dir_for_file_logging() -> None:
    """log_to_file=True without log_dir raises ValueError."""
    with pytest.raises(ValueError, match="log_dir is required"):
        configure_logging(verbosity=0, log_to_file=True, log_dir=None)


def test_configure_logging_reconfiguration_closes_handler(tmp_path: Path) -> None:
    """Reconfiguring logging closes previous file handler."""
    import storygraph.observability.logging as log_module

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    first_handler = log_module._file_handler
    assert first_handler is not None

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    second_handler = log_module._file_handler

    assert first_handler.stream is None or first_handler.stream.closed
    assert second_handler is not None
    close_file_logging()


def test_close_file_logging_clears_handler(tmp_path: Path) -> None:
    """close_file_logging closes handler and clears reference."""
    import storygraph.observability.logging as log_module

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    assert log_module._file_handler is not None

    close_file_logging()

    assert log_module._file_handler is None


def test_jsonl_file_handler_writes_structlog_context(tmp_path: Path) -> None:
    """JSONLFileHandler extracts structlog context into JSONL fields."""
    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)

    logger = get_logger("test.jsonl.context")
    logger.info("graph_validated", nodes=4, failures=0)

    close_file_logging()

    log_file = tmp_path / "logs" / "debug.jsonl"
    assert log_file.exists()

    found = False
    with log_file.open() as f:
        for line in f:
            entry = json.loads(line)
            if entry.get("message") == "graph_validated":
                found = True
                assert entry["nodes"] == 4
                assert entry["failures"] == 0
                assert entry["level"] == "INFO"
                break

    assert found, "Log entry with structlog context not found in JSONL"


def test_cached_logger_follows_reconfiguration(tmp_path: Path) -> None:
    """A logger first used at WARNING still reaches the file after -vv."""
    configure_logging(verbosity=0)
    logger = get_logger("test.jsonl.cached")
    logger.debug("before_file_logging")

    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)
    logger.debug("after_file_logging", step=2)
    close_file_logging()

    log_file = tmp_path / "logs" / "debug.jsonl"
    messages = [json.loads(line)["message"] for line in log_file.read_text().splitlines()]
    assert messages == ["after_file_logging"]


def test_console_renders_event_text(capsys: pytest.CaptureFixture[str]) -> None:
    """Console output shows the event and its keys, not a raw dict."""
    configure_logging(verbosity=1)
    get_logger("test.console.render").info("graph_validated", nodes=3)

    err = capsys.readouterr().err
    assert "graph_validated" in err
    assert "nodes=3" in err
    assert "{'event'" not in err
