from project_terminal.core.config.app_config import (
    AppConfig,
    LoggingConfig,
    LogLevel,
    TerminalConfig,
    load_config,
)

__all__ = ["AppConfig", "LogLevel", "LoggingConfig", "TerminalConfig", "load_config"]
