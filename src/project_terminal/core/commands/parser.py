"""
Parses slash commands into ``ParsedCommand`` objects.
"""

from __future__ import annotations

import logging

from project_terminal.constants import DEFAULT_COMMAND_PREFIX, DEFAULT_SUGGESTION_LIMIT
from project_terminal.core.commands.aliases import DEFAULT_ALIAS_TABLE, AliasTable
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.flags import decode_escapes, extract_flags
from project_terminal.core.commands.matcher import match_command
from project_terminal.core.commands.mentions import extract_mention
from project_terminal.core.commands.metadata import (
    DEFAULT_METADATA_REGISTRY,
    CommandMetadata,
    MetadataRegistry,
)
from project_terminal.core.commands.parsed_command import ParsedCommand
from project_terminal.core.commands.tokenizer import tokenize

logger = logging.getLogger(__name__)

MISSING_PREFIX_ERROR = "Commands must start with /"
NO_COMMAND_ERROR = "No command specified"
USAGE_ERROR_TEMPLATE = "Command requires arguments. Usage: {syntax}"


class CommandParser:
    """Parses command lines against an alias table and a metadata registry.

    The parser holds no per-request state; one instance can serve any number
    of concurrent callers.
    """

    def __init__(
        self,
        aliases: AliasTable | None = None,
        metadata: MetadataRegistry | None = None,
        command_prefix: str = DEFAULT_COMMAND_PREFIX,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        if not command_prefix:
            raise ValueError("Command prefix must not be empty.")
        self._aliases = aliases if aliases is not None else DEFAULT_ALIAS_TABLE
        self._metadata = metadata if metadata is not None else DEFAULT_METADATA_REGISTRY
        self._prefix = command_prefix
        self._suggestion_limit = suggestion_limit

    @property
    def aliases(self) -> AliasTable:
        return self._aliases

    @property
    def command_prefix(self) -> str:
        return self._prefix

    def parse(self, raw: str) -> ParsedCommand:
        """
        Parses a command line.

        Args:
            raw: The command text as typed, including the prefix.

        Returns:
            A ParsedCommand; ``is_valid`` is False when ``errors`` is not empty.
        """
        trimmed = raw.strip()
        if not trimmed.startswith(self._prefix):
            return self._invalid(raw, MISSING_PREFIX_ERROR)

        tokens = tokenize(trimmed[len(self._prefix) :])
        if not tokens:
            return self._invalid(raw, NO_COMMAND_ERROR)

        mention, tokens = extract_mention(tokens)
        flags, tokens = extract_flags(tokens)
        if not tokens:
            return self._invalid(raw, NO_COMMAND_ERROR, project_mention=mention)

        match = match_command(tokens, self._aliases)
        if not match.matched:
            assert match.error is not None
            return self._invalid(raw, match.error, project_mention=mention)

        args = tuple(decode_escapes(token) for token in tokens[match.consumed :])

        errors: list[str] = []
        metadata = self._metadata[match.type]
        if metadata.requires_args and not args and not flags:
            errors.append(USAGE_ERROR_TEMPLATE.format(syntax=metadata.syntax))

        parsed = ParsedCommand(
            type=match.type,
            raw=raw,
            command=match.phrase,
            subcommand=match.subcommand,
            args=args,
            project_mention=mention,
            flags=flags,
            is_valid=not errors,
            errors=tuple(errors),
        )
        logger.debug(
            "Command parsed: type=%s command=%s valid=%s",
            parsed.type.value,
            parsed.command,
            parsed.is_valid,
        )
        return parsed

    def validate(self, raw: str) -> tuple[bool, list[str]]:
        """Parse ``raw`` and return only its validity and errors."""
        parsed = self.parse(raw)
        return parsed.is_valid, list(parsed.errors)

    def get_suggestions(self, partial: str) -> list[str]:
        """Return ``/alias - description`` strings for aliases starting with ``partial``."""
        if not partial.startswith(self._prefix):
            return []

        needle = partial[len(self._prefix) :].lower()
        suggestions: list[str] = []
        for phrase, command_type in self._aliases.items():
            if not phrase.startswith(needle):
                continue
            description = self._metadata[command_type].description
            suggestions.append(f"{self._prefix}{phrase} - {description}")
            if len(suggestions) >= self._suggestion_limit:
                break
        return suggestions

    def get_all_commands(self) -> list[CommandMetadata]:
        return self._metadata.commands()

    def get_metadata(self, command_type: CommandType) -> CommandMetadata:
        return self._metadata[command_type]

    def get_all_aliases(self) -> dict[str, str]:
        return {phrase: command_type.value for phrase, command_type in self._aliases.items()}

    def get_aliases_for_type(self, command_type: CommandType) -> list[str]:
        return list(self._aliases.aliases_for(command_type))

    def find_command(self, phrase: str) -> CommandMetadata | None:
        """Look up metadata by alias phrase, e.g. ``add todo``."""
        command_type = self._aliases.lookup(phrase)
        if command_type is None:
            return None
        return self._metadata[command_type]

    @staticmethod
    def _invalid(
        raw: str, error: str, project_mention: str | None = None
    ) -> ParsedCommand:
        logger.debug("Command rejected: %s", error)
        return ParsedCommand(
            type=CommandType.UNKNOWN,
            raw=raw,
            project_mention=project_mention,
            is_valid=False,
            errors=(error,),
        )
