"""
Resolution of the leading tokens to a command tag.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from project_terminal.core.commands.command_types import CommandType

UNKNOWN_COMMAND_TEMPLATE = "Unknown command: {word}. Type /help for available commands."


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching leading tokens against the alias table.

    Attributes:
        type: Matched tag, ``UNKNOWN`` when nothing matched
        consumed: Number of leading tokens that formed the phrase
        phrase: The lowercased phrase that matched
        subcommand: Second word of a two-word match, as typed
        error: Human-readable error when nothing matched
    """

    type: CommandType
    consumed: int = 0
    phrase: str = ""
    subcommand: str | None = None
    error: str | None = None

    @property
    def matched(self) -> bool:
        return self.error is None


def _has_space(word: str) -> bool:
    return any(ch.isspace() for ch in word)


def match_command(
    tokens: Sequence[str], aliases: Mapping[str, CommandType]
) -> MatchResult:
    """Match the leading one or two tokens against ``aliases``.

    Two-word phrases are always tried first, so ``add todo`` wins over a
    one-word ``add`` alias when both exist.
    """
    if len(tokens) >= 2:
        two_words = f"{tokens[0]} {tokens[1]}".lower()
        command_type = aliases.get(two_words)
        if command_type is not None:
            return MatchResult(
                type=command_type,
                consumed=2,
                phrase=two_words,
                subcommand=str(tokens[1]),
            )

    if tokens:
        one_word = str(tokens[0]).lower()
        # A quoted "add todo" is one argument, never a two-word phrase.
        command_type = None if _has_space(one_word) else aliases.get(one_word)
        if command_type is not None:
            return MatchResult(type=command_type, consumed=1, phrase=one_word)
        return MatchResult(
            type=CommandType.UNKNOWN,
            error=UNKNOWN_COMMAND_TEMPLATE.format(word=tokens[0]),
        )

    return MatchResult(type=CommandType.UNKNOWN, error="No command specified")
