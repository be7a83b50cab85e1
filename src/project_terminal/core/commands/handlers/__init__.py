"""
Command handler groups.

Each group handles a disjoint set of command tags; together they cover
every tag except ``unknown``.
"""

from __future__ import annotations

from project_terminal.core.commands.handlers.base_handler import BaseCommandHandler, handles
from project_terminal.core.commands.handlers.component_handlers import ComponentHandlers
from project_terminal.core.commands.handlers.devlog_handlers import DevLogHandlers
from project_terminal.core.commands.handlers.note_handlers import NoteHandlers
from project_terminal.core.commands.handlers.relationship_handlers import RelationshipHandlers
from project_terminal.core.commands.handlers.search_handlers import SearchHandlers
from project_terminal.core.commands.handlers.settings_handlers import SettingsHandlers
from project_terminal.core.commands.handlers.stack_handlers import StackHandlers
from project_terminal.core.commands.handlers.subtask_handlers import SubtaskHandlers
from project_terminal.core.commands.handlers.team_handlers import TeamHandlers
from project_terminal.core.commands.handlers.todo_handlers import TodoHandlers
from project_terminal.core.commands.handlers.utility_handlers import UtilityHandlers
from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.config.app_config import TerminalConfig
from project_terminal.core.interfaces.repositories_interface import (
    INoteLockService,
    IProjectRepository,
)

__all__ = [
    "BaseCommandHandler",
    "ComponentHandlers",
    "DevLogHandlers",
    "NoteHandlers",
    "RelationshipHandlers",
    "SearchHandlers",
    "SettingsHandlers",
    "StackHandlers",
    "SubtaskHandlers",
    "TeamHandlers",
    "TodoHandlers",
    "UtilityHandlers",
    "default_handler_groups",
    "handles",
]


def default_handler_groups(
    repository: IProjectRepository,
    lock_service: INoteLockService | None = None,
    config: TerminalConfig | None = None,
    parser: CommandParser | None = None,
) -> list[BaseCommandHandler]:
    """Instantiate every built-in handler group."""
    return [
        TodoHandlers(repository, lock_service, config),
        SubtaskHandlers(repository, lock_service, config),
        NoteHandlers(repository, lock_service, config),
        DevLogHandlers(repository, lock_service, config),
        ComponentHandlers(repository, lock_service, config),
        RelationshipHandlers(repository, lock_service, config),
        StackHandlers(repository, lock_service, config),
        TeamHandlers(repository, lock_service, config),
        SettingsHandlers(repository, lock_service, config),
        SearchHandlers(repository, lock_service, config),
        UtilityHandlers(repository, lock_service, config, parser=parser),
    ]
