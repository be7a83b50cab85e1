"""
Dispatcher of parsed commands.

A command moves through parse, project resolution, the edit-permission check
and exactly one handler. Every failure along the way is turned into an error
response here, so callers always receive a ``CommandResponse``.
"""

from __future__ import annotations

from collections.abc import Iterable

from project_terminal.constants import DEMO_MODE_MESSAGE, HELP_SUGGESTION
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers import (
    BaseCommandHandler,
    default_handler_groups,
)
from project_terminal.core.commands.parsed_command import ParsedCommand
from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.common.exceptions import EditPermissionError, TerminalError
from project_terminal.core.common.logging_utils import get_logger, truncate_command
from project_terminal.core.config.app_config import TerminalConfig
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.identity import UserIdentity
from project_terminal.core.domain.project import Project, Role
from project_terminal.core.domain.responses import CommandResponse, error_response
from project_terminal.core.interfaces.repositories_interface import (
    INoteLockService,
    IProjectRepository,
)
from project_terminal.core.services.project_resolver import ProjectResolver

logger = get_logger(__name__)

INVALID_COMMAND_MESSAGE = "Invalid command"
UNEXPECTED_ERROR_MESSAGE = "An error occurred while executing the command"


class CommandExecutor:
    """Runs one command line for one caller."""

    def __init__(
        self,
        repository: IProjectRepository,
        lock_service: INoteLockService | None = None,
        parser: CommandParser | None = None,
        config: TerminalConfig | None = None,
        handlers: Iterable[BaseCommandHandler] | None = None,
    ) -> None:
        self._config = config or TerminalConfig()
        self._parser = parser or CommandParser(
            suggestion_limit=self._config.suggestion_limit
        )
        self._resolver = ProjectResolver(repository)
        if handlers is None:
            handlers = default_handler_groups(
                repository, lock_service, self._config, parser=self._parser
            )
        self._routes = self._build_routes(handlers)

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def resolver(self) -> ProjectResolver:
        return self._resolver

    @staticmethod
    def _build_routes(
        handlers: Iterable[BaseCommandHandler],
    ) -> dict[CommandType, BaseCommandHandler]:
        routes: dict[CommandType, BaseCommandHandler] = {}
        for handler in handlers:
            for command_type in handler.handled_types():
                if command_type in routes:
                    raise ValueError(
                        f"Command type {command_type.value} is handled by both "
                        f"{type(routes[command_type]).__name__} and {type(handler).__name__}"
                    )
                routes[command_type] = handler
        return routes

    async def execute(
        self,
        raw: str,
        identity: UserIdentity,
        current_project_id: str | None = None,
    ) -> CommandResponse:
        """
        Execute a raw command line.

        Args:
            raw: Command text as typed, including the prefix
            identity: The caller
            current_project_id: Project selected in the caller's session, if any

        Returns:
            The handler's response, or an error response.
        """
        log = logger.bind(user_id=identity.user_id, command=truncate_command(raw))

        parsed = self._parser.parse(raw)
        if not parsed.is_valid:
            log.info("command_rejected", errors=list(parsed.errors))
            return error_response(
                INVALID_COMMAND_MESSAGE,
                data={"errors": list(parsed.errors)},
                suggestions=[HELP_SUGGESTION],
            )

        try:
            context = await self._build_context(parsed, identity, current_project_id)
            handler = self._routes.get(parsed.type)
            if handler is None:
                log.warning("command_unrouted", command_type=parsed.type.value)
                return error_response(
                    f"Command type {parsed.type.value} not yet implemented",
                    suggestions=[HELP_SUGGESTION],
                )
            response = await handler.handle(context)
        except TerminalError as exc:
            log.info(
                "command_failed",
                command_type=parsed.type.value,
                error=exc.message,
                error_type=type(exc).__name__,
            )
            return error_response(
                exc.message,
                data=exc.details or None,
                suggestions=exc.suggestions,
            )
        except Exception as exc:
            log.exception("command_crashed", command_type=parsed.type.value)
            return error_response(
                UNEXPECTED_ERROR_MESSAGE,
                data={"error": str(exc)},
            )

        log.info(
            "command_executed",
            command_type=parsed.type.value,
            response_type=response.type.value,
        )
        return response

    async def _build_context(
        self,
        parsed: ParsedCommand,
        identity: UserIdentity,
        current_project_id: str | None,
    ) -> CommandContext:
        metadata = self._parser.get_metadata(parsed.type)

        project: Project | None = None
        if metadata.requires_project or parsed.project_mention:
            project = await self._resolver.resolve(
                identity, parsed.project_mention, current_project_id
            )
        role = ProjectResolver.role_for(project, identity.user_id) if project else None

        if metadata.mutates:
            self._check_edit_permission(identity, role)

        return CommandContext(
            parsed=parsed,
            identity=identity,
            project=project,
            role=role,
            current_project_id=current_project_id,
        )

    @staticmethod
    def _check_edit_permission(identity: UserIdentity, role: Role | None) -> None:
        if identity.is_demo:
            raise EditPermissionError(DEMO_MODE_MESSAGE, details={"demo": True})
        if role is None:
            raise EditPermissionError("You do not have access to this project")
        if not role.can_edit:
            raise EditPermissionError(
                f"You are a {role.value} and do not have edit permissions for this project"
            )
