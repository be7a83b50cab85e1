"""
Base class for command handler groups.

A handler group is a class whose coroutine methods are tagged with
``@handles(...)``. The tags are collected into a dispatch table when the
subclass is created, and ``handle`` routes a context to exactly one method.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, ClassVar, TypeVar

from project_terminal.constants import HELP_SUGGESTION
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.flags import Flags
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.config.app_config import TerminalConfig
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import Project
from project_terminal.core.domain.responses import (
    CommandResponse,
    ResponseType,
    response_metadata,
)
from project_terminal.core.interfaces.repositories_interface import (
    INoteLockService,
    IProjectRepository,
)

logger = logging.getLogger(__name__)

HandlerMethod = Callable[[Any, CommandContext], Awaitable[CommandResponse]]
_F = TypeVar("_F", bound=HandlerMethod)

_HANDLES_ATTR = "__handles_command_types__"

CONFIRM_FLAGS = ("confirm", "yes", "y")
FLAG_SYNTAX_ERROR = "Please use flag-based syntax or no arguments for wizard."
EMPTY_FLAG_PATTERN = re.compile(r"--?(\w+)=")

T = TypeVar("T")


def handles(*command_types: CommandType) -> Callable[[_F], _F]:
    """
    A decorator registering a handler method for one or more command tags.

    Args:
        command_types: The tags routed to the decorated method.
    """
    if not command_types:
        raise ValueError("handles() needs at least one command type.")

    def decorator(func: _F) -> _F:
        setattr(func, _HANDLES_ATTR, command_types)
        return func

    return decorator


def find_item(items: Sequence[T], identifier: str, text_of: Callable[[T], str]) -> T | None:
    """Find an element by exact id, then 1-based index, then text substring."""
    for item in items:
        if getattr(item, "id", None) == identifier:
            return item

    if identifier.isdigit():
        index = int(identifier)
        if 0 < index <= len(items):
            return items[index - 1]

    needle = identifier.lower()
    for item in items:
        if needle and needle in text_of(item).lower():
            return item
    return None


def flag_values(flags: Flags, names: Sequence[str]) -> dict[str, str]:
    """Valued flags among ``names``; bare flags carry no value and are skipped."""
    values: dict[str, str] = {}
    for name in names:
        value = flags.value(name)
        if value is not None:
            values[name] = value
    return values


def check_choice(value: str, choices: Sequence[str], label: str) -> str:
    normalized = value.strip().lower()
    if normalized not in choices:
        raise HandlerError(
            f"Invalid {label} \"{value}\". Must be one of: {', '.join(choices)}"
        )
    return normalized


class BaseCommandHandler:
    """Common functionality for all command handler groups."""

    _dispatch: ClassVar[dict[CommandType, str]] = {}

    def __init__(
        self,
        repository: IProjectRepository,
        lock_service: INoteLockService | None = None,
        config: TerminalConfig | None = None,
    ) -> None:
        self._repository = repository
        self._lock_service = lock_service
        self._config = config or TerminalConfig()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        dispatch = dict(cls._dispatch)
        for attr_name, attr in cls.__dict__.items():
            for command_type in getattr(attr, _HANDLES_ATTR, ()):
                dispatch[command_type] = attr_name
        cls._dispatch = dispatch

    @classmethod
    def handled_types(cls) -> tuple[CommandType, ...]:
        return tuple(cls._dispatch)

    async def handle(self, context: CommandContext) -> CommandResponse:
        """Run the method registered for the context's command tag."""
        method_name = self._dispatch.get(context.parsed.type)
        if method_name is None:
            raise HandlerError(
                f"Command type {context.parsed.type.value} not yet implemented",
                suggestions=[HELP_SUGGESTION],
            )
        self.reject_empty_flags(context)
        method = getattr(self, method_name)
        return await method(context)

    # Helpers

    @staticmethod
    def require_project(context: CommandContext) -> Project:
        if context.project is None:
            raise HandlerError("Project not found")
        return context.project

    @staticmethod
    def is_confirmed(flags: Flags) -> bool:
        return any(flags.has(name) for name in CONFIRM_FLAGS)

    @staticmethod
    def reject_empty_flags(context: CommandContext) -> None:
        """Reject ``--name=`` style arguments, which the parser leaves as text."""
        for arg in context.parsed.args:
            match = EMPTY_FLAG_PATTERN.fullmatch(arg)
            if match is not None:
                raise HandlerError(
                    f"--{match.group(1)} needs a value",
                    suggestions=[f'--{match.group(1)}="..."', HELP_SUGGESTION],
                )

    @staticmethod
    def reject_positional_args(context: CommandContext, examples: Sequence[str]) -> None:
        """Free text without flags is the old syntax for add commands."""
        if context.parsed.args and not context.parsed.flags:
            raise HandlerError(FLAG_SYNTAX_ERROR, suggestions=list(examples))

    async def save(self, project: Project) -> Project:
        return await self._repository.save(project)

    @staticmethod
    def success_response(
        message: str,
        project: Project,
        action: str,
        data: dict[str, Any] | None = None,
    ) -> CommandResponse:
        return CommandResponse(
            type=ResponseType.SUCCESS,
            message=message,
            data=data,
            metadata=response_metadata(project.id, project.name, action, timestamp=True),
        )

    @staticmethod
    def data_response(
        message: str,
        project: Project | None,
        action: str,
        data: dict[str, Any],
    ) -> CommandResponse:
        return CommandResponse(
            type=ResponseType.DATA,
            message=message,
            data=data,
            metadata=response_metadata(
                project.id if project else None,
                project.name if project else None,
                action,
            ),
        )

    @staticmethod
    def project_metadata(project: Project, action: str) -> dict[str, Any]:
        return response_metadata(project.id, project.name, action)
