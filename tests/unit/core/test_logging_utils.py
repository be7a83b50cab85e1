from __future__ import annotations

import logging
from pathlib import Path

import structlog
from project_terminal.core.common.logging_utils import (
    EnvironmentTaggingFilter,
    LogFormat,
    configure_logging,
    get_logger,
    truncate_command,
)
from project_terminal.core.config.app_config import LoggingConfig, LogLevel


def test_truncate_command() -> None:
    assert truncate_command("/help") == "/help"
    assert truncate_command("x" * 150) == "x" * 100 + "..."
    assert truncate_command("abcdef", limit=3) == "abc..."


def test_environment_filter_tags_records_under_pytest() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    assert EnvironmentTaggingFilter().filter(record)
    assert record.env_tag == "test"  # type: ignore[attr-defined]


def test_configure_logging_writes_structured_events(tmp_path: Path) -> None:
    log_file = tmp_path / "terminal.log"
    root = logging.getLogger()
    previous_handlers = root.handlers[:]
    previous_level = root.level
    try:
        configure_logging(
            LoggingConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, log_file=str(log_file))
        )
        get_logger("terminal.test").info("command_executed", command_type="help")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = previous_handlers
        root.setLevel(previous_level)
        structlog.reset_defaults()

    content = log_file.read_text(encoding="utf-8")
    assert '"event": "command_executed"' in content
    assert '"command_type": "help"' in content
    assert "[test]" in content
