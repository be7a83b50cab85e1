from __future__ import annotations

from dataclasses import dataclass

from project_terminal.core.commands.parsed_command import ParsedCommand
from project_terminal.core.domain.identity import UserIdentity
from project_terminal.core.domain.project import Project, Role


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Typed context passed to a handler for one invocation.

    ``project`` is None only for commands that do not need a project and
    were given no mention.
    """

    parsed: ParsedCommand
    identity: UserIdentity
    project: Project | None = None
    role: Role | None = None
    current_project_id: str | None = None
