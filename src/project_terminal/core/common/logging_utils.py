"""
Logging utilities for the application.

This module provides utilities for logging, including:
- structlog configuration on top of the standard library logging
- Test/production environment tagging
- Truncation of raw command text before it reaches a log line
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

import structlog

from project_terminal.constants import LOGGED_COMMAND_CHARS

if TYPE_CHECKING:
    from project_terminal.core.config.app_config import LoggingConfig


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


def _is_running_under_pytest() -> bool:
    """Detect if we're running under pytest."""
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


class EnvironmentTaggingFormatter(logging.Formatter):
    """Logging formatter that includes environment tags."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
    ) -> None:
        if fmt is None:
            fmt = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"
        super().__init__(fmt, datefmt, style=style)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def truncate_command(raw: str, limit: int = LOGGED_COMMAND_CHARS) -> str:
    """Shorten a raw command before logging it."""
    if len(raw) <= limit:
        return raw
    return raw[:limit] + "..."


def configure_logging(config: LoggingConfig) -> None:
    """Configure stdlib logging and structlog from the logging config.

    Args:
        config: Logging section of the application config
    """
    level = logging.getLevelName(config.level.value)

    formatter = EnvironmentTaggingFormatter()
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    env_filter = EnvironmentTaggingFilter()
    for handler in handlers:
        handler.addFilter(env_filter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    renderer: Any
    if config.format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    elif config.format == LogFormat.CONSOLE:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["event"], sort_keys=True
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

