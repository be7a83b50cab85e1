"""
Core data structure produced by the command parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.flags import Flags


@dataclass(frozen=True)
class ParsedCommand:
    """
    A single parsed command line.

    Attributes:
        type: The resolved command tag
        raw: The input exactly as received
        command: The alias phrase that matched
        subcommand: Second word of a two-word alias
        args: Leftover tokens with escapes decoded
        project_mention: Text of the ``@project`` mention
        flags: Extracted flags
        is_valid: True when ``errors`` is empty
        errors: Human-readable parse and validation errors
    """

    type: CommandType
    raw: str
    command: str = ""
    subcommand: str | None = None
    args: tuple[str, ...] = ()
    project_mention: str | None = None
    flags: Flags = field(default_factory=Flags)
    is_valid: bool = False
    errors: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """The arguments joined back into free text."""
        return " ".join(self.args)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "raw": self.raw,
            "command": self.command,
            "subcommand": self.subcommand,
            "args": list(self.args),
            "projectMention": self.project_mention,
            "flags": self.flags.to_dict(),
            "isValid": self.is_valid,
            "errors": list(self.errors),
        }
