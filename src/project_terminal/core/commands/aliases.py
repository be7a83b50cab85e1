"""
The fixed alias table mapping typed phrases to command tags.

The table is built once at import time and is read-only afterwards, so it can
be shared by every request without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from project_terminal.core.commands.command_types import CommandType

MAX_ALIAS_WORDS = 2


def normalize_phrase(phrase: str) -> str:
    """Lowercase ``phrase`` and collapse its whitespace to single spaces."""
    return " ".join(phrase.lower().split())


class AliasTable(Mapping[str, CommandType]):
    """Read-only mapping of one- or two-word phrases to command tags."""

    def __init__(self, entries: Iterable[tuple[str, CommandType]]) -> None:
        aliases: dict[str, CommandType] = {}
        by_type: dict[CommandType, list[str]] = {}

        for phrase, command_type in entries:
            key = normalize_phrase(phrase)
            if not key:
                raise ValueError("Alias phrase must not be empty.")
            if len(key.split(" ")) > MAX_ALIAS_WORDS:
                raise ValueError(
                    f"Alias '{phrase}' has more than {MAX_ALIAS_WORDS} words."
                )
            if key in aliases:
                raise ValueError(
                    f"Alias '{key}' is already mapped to '{aliases[key].value}'."
                )
            aliases[key] = command_type
            by_type.setdefault(command_type, []).append(key)

        self._aliases: Mapping[str, CommandType] = MappingProxyType(aliases)
        self._by_type: Mapping[CommandType, tuple[str, ...]] = MappingProxyType(
            {command_type: tuple(phrases) for command_type, phrases in by_type.items()}
        )

    def __getitem__(self, phrase: str) -> CommandType:
        return self._aliases[phrase]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def lookup(self, phrase: str) -> CommandType | None:
        """Return the tag for ``phrase`` compared case-insensitively."""
        return self._aliases.get(normalize_phrase(phrase))

    def aliases_for(self, command_type: CommandType) -> tuple[str, ...]:
        """Return every phrase mapped to ``command_type`` in declaration order."""
        return self._by_type.get(command_type, ())


COMMAND_ALIASES: tuple[tuple[str, CommandType], ...] = (
    # Add commands
    ("add todo", CommandType.ADD_TODO),
    ("add-todo", CommandType.ADD_TODO),
    ("todo", CommandType.ADD_TODO),
    ("add subtask", CommandType.ADD_SUBTASK),
    ("add-subtask", CommandType.ADD_SUBTASK),
    ("subtask", CommandType.ADD_SUBTASK),
    ("add note", CommandType.ADD_NOTE),
    ("add-note", CommandType.ADD_NOTE),
    ("note", CommandType.ADD_NOTE),
    ("add devlog", CommandType.ADD_DEVLOG),
    ("add-devlog", CommandType.ADD_DEVLOG),
    ("devlog", CommandType.ADD_DEVLOG),
    ("add component", CommandType.ADD_COMPONENT),
    ("add-component", CommandType.ADD_COMPONENT),
    ("add feature", CommandType.ADD_COMPONENT),
    ("component", CommandType.ADD_COMPONENT),
    ("add relationship", CommandType.ADD_RELATIONSHIP),
    ("add-relationship", CommandType.ADD_RELATIONSHIP),
    ("relate", CommandType.ADD_RELATIONSHIP),
    ("add stack", CommandType.ADD_STACK),
    ("add-stack", CommandType.ADD_STACK),
    ("add tech", CommandType.ADD_STACK),
    ("add package", CommandType.ADD_STACK),
    ("add tag", CommandType.ADD_TAG),
    ("add-tag", CommandType.ADD_TAG),
    ("tag", CommandType.ADD_TAG),
    # View commands
    ("view todos", CommandType.VIEW_TODOS),
    ("view-todos", CommandType.VIEW_TODOS),
    ("list todos", CommandType.VIEW_TODOS),
    ("todos", CommandType.VIEW_TODOS),
    ("view subtasks", CommandType.VIEW_SUBTASKS),
    ("view-subtasks", CommandType.VIEW_SUBTASKS),
    ("subtasks", CommandType.VIEW_SUBTASKS),
    ("view notes", CommandType.VIEW_NOTES),
    ("view-notes", CommandType.VIEW_NOTES),
    ("list notes", CommandType.VIEW_NOTES),
    ("notes", CommandType.VIEW_NOTES),
    ("view devlog", CommandType.VIEW_DEVLOG),
    ("view-devlog", CommandType.VIEW_DEVLOG),
    ("list devlog", CommandType.VIEW_DEVLOG),
    ("devlogs", CommandType.VIEW_DEVLOG),
    ("view components", CommandType.VIEW_COMPONENTS),
    ("view-components", CommandType.VIEW_COMPONENTS),
    ("view features", CommandType.VIEW_COMPONENTS),
    ("list components", CommandType.VIEW_COMPONENTS),
    ("components", CommandType.VIEW_COMPONENTS),
    ("view relationships", CommandType.VIEW_RELATIONSHIPS),
    ("view-relationships", CommandType.VIEW_RELATIONSHIPS),
    ("relationships", CommandType.VIEW_RELATIONSHIPS),
    ("view stack", CommandType.VIEW_STACK),
    ("view-stack", CommandType.VIEW_STACK),
    ("stack", CommandType.VIEW_STACK),
    ("view team", CommandType.VIEW_TEAM),
    ("view-team", CommandType.VIEW_TEAM),
    ("team", CommandType.VIEW_TEAM),
    ("view settings", CommandType.VIEW_SETTINGS),
    ("view-settings", CommandType.VIEW_SETTINGS),
    ("settings", CommandType.VIEW_SETTINGS),
    ("view deployment", CommandType.VIEW_DEPLOYMENT),
    ("view-deployment", CommandType.VIEW_DEPLOYMENT),
    ("deployment", CommandType.VIEW_DEPLOYMENT),
    ("view public", CommandType.VIEW_PUBLIC),
    ("view-public", CommandType.VIEW_PUBLIC),
    # Edit commands
    ("edit todo", CommandType.EDIT_TODO),
    ("edit-todo", CommandType.EDIT_TODO),
    ("edit subtask", CommandType.EDIT_SUBTASK),
    ("edit-subtask", CommandType.EDIT_SUBTASK),
    ("edit note", CommandType.EDIT_NOTE),
    ("edit-note", CommandType.EDIT_NOTE),
    ("edit devlog", CommandType.EDIT_DEVLOG),
    ("edit-devlog", CommandType.EDIT_DEVLOG),
    ("edit component", CommandType.EDIT_COMPONENT),
    ("edit-component", CommandType.EDIT_COMPONENT),
    ("edit relationship", CommandType.EDIT_RELATIONSHIP),
    ("edit-relationship", CommandType.EDIT_RELATIONSHIP),
    # Delete commands
    ("delete todo", CommandType.DELETE_TODO),
    ("delete-todo", CommandType.DELETE_TODO),
    ("delete subtask", CommandType.DELETE_SUBTASK),
    ("delete-subtask", CommandType.DELETE_SUBTASK),
    ("delete note", CommandType.DELETE_NOTE),
    ("delete-note", CommandType.DELETE_NOTE),
    ("delete devlog", CommandType.DELETE_DEVLOG),
    ("delete-devlog", CommandType.DELETE_DEVLOG),
    ("delete component", CommandType.DELETE_COMPONENT),
    ("delete-component", CommandType.DELETE_COMPONENT),
    ("delete relationship", CommandType.DELETE_RELATIONSHIP),
    ("delete-relationship", CommandType.DELETE_RELATIONSHIP),
    # Task management
    ("complete todo", CommandType.COMPLETE_TODO),
    ("complete-todo", CommandType.COMPLETE_TODO),
    ("complete", CommandType.COMPLETE_TODO),
    ("done", CommandType.COMPLETE_TODO),
    ("assign todo", CommandType.ASSIGN_TODO),
    ("assign-todo", CommandType.ASSIGN_TODO),
    ("assign", CommandType.ASSIGN_TODO),
    ("push todo", CommandType.PUSH_TODO),
    ("push-todo", CommandType.PUSH_TODO),
    ("push", CommandType.PUSH_TODO),
    ("set priority", CommandType.SET_PRIORITY),
    ("set-priority", CommandType.SET_PRIORITY),
    ("priority", CommandType.SET_PRIORITY),
    ("set due", CommandType.SET_DUE_DATE),
    ("set-due", CommandType.SET_DUE_DATE),
    ("due", CommandType.SET_DUE_DATE),
    # Remove commands
    ("remove stack", CommandType.REMOVE_STACK),
    ("remove-stack", CommandType.REMOVE_STACK),
    ("remove tech", CommandType.REMOVE_STACK),
    ("remove package", CommandType.REMOVE_STACK),
    ("remove tag", CommandType.REMOVE_TAG),
    ("remove-tag", CommandType.REMOVE_TAG),
    # Team commands
    ("invite member", CommandType.INVITE_MEMBER),
    ("invite-member", CommandType.INVITE_MEMBER),
    ("invite", CommandType.INVITE_MEMBER),
    ("remove member", CommandType.REMOVE_MEMBER),
    ("remove-member", CommandType.REMOVE_MEMBER),
    # Settings commands
    ("set name", CommandType.SET_NAME),
    ("set-name", CommandType.SET_NAME),
    ("rename", CommandType.SET_NAME),
    ("set description", CommandType.SET_DESCRIPTION),
    ("set-description", CommandType.SET_DESCRIPTION),
    ("set deployment", CommandType.SET_DEPLOYMENT),
    ("set-deployment", CommandType.SET_DEPLOYMENT),
    ("set public", CommandType.SET_PUBLIC),
    ("set-public", CommandType.SET_PUBLIC),
    ("make public", CommandType.SET_PUBLIC),
    ("make private", CommandType.SET_PUBLIC),
    # Utility commands
    ("search", CommandType.SEARCH),
    ("find", CommandType.SEARCH),
    ("summary", CommandType.SUMMARY),
    ("export", CommandType.EXPORT),
    ("download", CommandType.EXPORT),
    ("swap project", CommandType.SWAP_PROJECT),
    ("swap-project", CommandType.SWAP_PROJECT),
    ("switch-project", CommandType.SWAP_PROJECT),
    ("swap", CommandType.SWAP_PROJECT),
    ("switch", CommandType.SWAP_PROJECT),
    ("project", CommandType.SWAP_PROJECT),
    # Wizard commands
    ("wizard new", CommandType.WIZARD_NEW),
    ("wizard-new", CommandType.WIZARD_NEW),
    ("new", CommandType.WIZARD_NEW),
    ("create", CommandType.WIZARD_NEW),
    ("wizard setup", CommandType.WIZARD_SETUP),
    ("wizard-setup", CommandType.WIZARD_SETUP),
    ("setup", CommandType.WIZARD_SETUP),
    ("wizard deploy", CommandType.WIZARD_DEPLOY),
    ("wizard-deploy", CommandType.WIZARD_DEPLOY),
    ("deploy-wizard", CommandType.WIZARD_DEPLOY),
    # Help
    ("help", CommandType.HELP),
    ("?", CommandType.HELP),
    ("commands", CommandType.HELP),
)

DEFAULT_ALIAS_TABLE = AliasTable(COMMAND_ALIASES)
