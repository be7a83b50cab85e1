"""
Application factory for creating the FastAPI application.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from project_terminal import __version__
from project_terminal.core.app.controllers.terminal_controller import router as terminal_router
from project_terminal.core.app.error_handlers import register_exception_handlers
from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.config.app_config import AppConfig
from project_terminal.core.interfaces.repositories_interface import (
    INoteLockService,
    IProjectRepository,
)
from project_terminal.core.repositories.in_memory_note_lock_repository import (
    InMemoryNoteLockService,
)
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)
from project_terminal.core.services.command_executor import CommandExecutor
from project_terminal.core.services.command_sanitizer import CommandSanitizer

logger = logging.getLogger(__name__)


def build_app(
    config: AppConfig | dict[str, Any] | None = None,
    repository: IProjectRepository | None = None,
    lock_service: INoteLockService | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: The application configuration (AppConfig object or dict)
        repository: Project store; an empty in-memory store by default
        lock_service: Note lock service; an in-memory service by default

    Returns:
        The FastAPI ASGI application instance.
    """
    if config is None:
        config = AppConfig.from_env()
    elif isinstance(config, dict):
        config = AppConfig(**config)

    terminal_config = config.terminal
    if repository is None:
        repository = InMemoryProjectRepository()
    if lock_service is None:
        lock_service = InMemoryNoteLockService(
            ttl_seconds=terminal_config.note_lock_ttl_seconds
        )

    parser = CommandParser(suggestion_limit=terminal_config.suggestion_limit)
    app = FastAPI(title="Project Terminal", version=__version__)
    app.state.app_config = config
    app.state.command_executor = CommandExecutor(
        repository, lock_service, parser=parser, config=terminal_config
    )
    app.state.command_sanitizer = CommandSanitizer(terminal_config.max_command_length)

    register_exception_handlers(app)
    app.include_router(terminal_router)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "version": __version__}

    logger.info(
        "Terminal application built (max command length %d)",
        terminal_config.max_command_length,
    )
    return app
