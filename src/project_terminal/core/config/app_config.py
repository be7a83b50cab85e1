from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from project_terminal.constants import (
    DEFAULT_MAX_COMMAND_LENGTH,
    DEFAULT_NOTE_LOCK_TTL_SECONDS,
    DEFAULT_SUGGESTION_LIMIT,
)
from project_terminal.core.common.exceptions import ConfigurationError
from project_terminal.core.common.logging_utils import LogFormat
from project_terminal.core.config.config_loader import load_dotenv_once, read_yaml_file
from project_terminal.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)


def _env_to_int(name: str, default: int, env: Mapping[str, str]) -> int:
    """Return an environment variable parsed as an integer."""
    value = env.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer value for %s: %r", name, value)
        return default


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.PLAIN
    log_file: str | None = None


class TerminalConfig(DomainModel):
    """Settings of the command terminal itself."""

    max_command_length: int = DEFAULT_MAX_COMMAND_LENGTH
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT
    frontend_url: str = "http://localhost:3000"
    note_lock_ttl_seconds: int = DEFAULT_NOTE_LOCK_TTL_SECONDS

    @field_validator("max_command_length", "suggestion_limit", "note_lock_ttl_seconds")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


class AppConfig(DomainModel):
    """Top-level application configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from defaults and environment variables only."""
        return cls(**_apply_env(cls().model_dump(mode="json"), environ or os.environ))


def _merge_dicts(d1: dict[str, Any], d2: dict[str, Any]) -> dict[str, Any]:
    for key, value in d2.items():
        if isinstance(value, dict) and isinstance(d1.get(key), dict):
            _merge_dicts(d1[key], value)
        else:
            d1[key] = value
    return d1


def _apply_env(config_data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    if "APP_HOST" in env:
        config_data["host"] = env["APP_HOST"]
    config_data["port"] = _env_to_int("APP_PORT", config_data["port"], env)

    logging_data = config_data["logging"]
    if "LOG_LEVEL" in env:
        logging_data["level"] = env["LOG_LEVEL"].strip().upper()
    if "LOG_FORMAT" in env:
        logging_data["format"] = env["LOG_FORMAT"].strip().lower()
    if "LOG_FILE" in env:
        logging_data["log_file"] = env["LOG_FILE"] or None

    terminal_data = config_data["terminal"]
    terminal_data["max_command_length"] = _env_to_int(
        "TERMINAL_MAX_COMMAND_LENGTH", terminal_data["max_command_length"], env
    )
    terminal_data["suggestion_limit"] = _env_to_int(
        "TERMINAL_SUGGESTION_LIMIT", terminal_data["suggestion_limit"], env
    )
    terminal_data["note_lock_ttl_seconds"] = _env_to_int(
        "NOTE_LOCK_TTL_SECONDS", terminal_data["note_lock_ttl_seconds"], env
    )
    if "FRONTEND_URL" in env:
        terminal_data["frontend_url"] = env["FRONTEND_URL"]
    return config_data


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from file and environment.

    Precedence, lowest first: defaults, YAML file, environment variables.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Environment mapping; defaults to ``os.environ`` after ``.env``
            has been loaded

    Returns:
        AppConfig instance
    """
    if environ is None:
        load_dotenv_once()
        environ = os.environ

    config_data: dict[str, Any] = AppConfig().model_dump(mode="json")

    if config_path:
        file_config = read_yaml_file(Path(config_path))
        _merge_dicts(config_data, file_config)

    config_data = _apply_env(config_data, environ)

    try:
        return AppConfig(**config_data)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {exc}", details={"path": str(config_path)}
        ) from exc
