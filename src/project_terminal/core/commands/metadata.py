"""
Per-command contracts used for validation, help and autocomplete.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from project_terminal.core.commands.command_types import CommandType


@dataclass(frozen=True)
class CommandMetadata:
    """Static contract of a single command tag.

    Attributes:
        type: The tag this entry describes
        syntax: Usage string shown in help and usage errors
        description: One-line description
        examples: Example invocations
        requires_project: The command operates on a project
        requires_args: At least one argument or flag must be given
        mutates: The command changes project data and needs edit rights
        category: Group used by the command listing
    """

    type: CommandType
    syntax: str
    description: str
    examples: tuple[str, ...] = field(default_factory=tuple)
    requires_project: bool = True
    requires_args: bool = False
    mutates: bool = False
    category: str = "General"

    @property
    def value(self) -> str:
        """The canonical invocation, e.g. ``/add todo``."""
        return self.syntax.split("[")[0].split("<")[0].split("--")[0].strip()


class MetadataRegistry(Mapping[CommandType, CommandMetadata]):
    """Read-only registry holding exactly one entry per command tag."""

    def __init__(self, entries: Iterable[CommandMetadata]) -> None:
        registry: dict[CommandType, CommandMetadata] = {}
        for entry in entries:
            if entry.type in registry:
                raise ValueError(f"Duplicate metadata for '{entry.type.value}'.")
            registry[entry.type] = entry

        missing = [t.value for t in CommandType if t not in registry]
        if missing:
            raise ValueError(f"Missing command metadata for: {', '.join(missing)}")

        self._entries: Mapping[CommandType, CommandMetadata] = MappingProxyType(registry)

    def __getitem__(self, command_type: CommandType) -> CommandMetadata:
        return self._entries[command_type]

    def __iter__(self) -> Iterator[CommandType]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def commands(self) -> list[CommandMetadata]:
        """All entries except ``unknown``, in declaration order."""
        return [m for m in self._entries.values() if m.type is not CommandType.UNKNOWN]


COMMAND_METADATA: tuple[CommandMetadata, ...] = (
    # Todos
    CommandMetadata(
        type=CommandType.ADD_TODO,
        syntax='/add todo [--title="..."] [--content="..."] [--priority=low|medium|high] [--status=...] [--due="MM-DD-YYYY"] [@project]',
        description="Create a new todo item",
        examples=(
            "/add todo",
            '/add todo --title="fix authentication bug" @myproject',
            '/todo --title="implement dashboard" --priority=high',
        ),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.VIEW_TODOS,
        syntax="/view todos [@project]",
        description="List all todos in a project",
        examples=("/view todos @myproject", "/todos", "/list todos @backend"),
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.EDIT_TODO,
        syntax='/edit todo [id|index|title] [--title="..."] [--content="..."] [--priority=...] [--status=...] [--due="..."] [@project]',
        description="Edit an existing todo",
        examples=("/edit todo", '/edit todo 1 --title="new title"', "/edit todo 2 --status=in_progress"),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.DELETE_TODO,
        syntax="/delete todo [id|index|title] [--confirm] [@project]",
        description="Delete a todo",
        examples=("/delete todo", "/delete todo 1", "/delete todo 1 --confirm"),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.COMPLETE_TODO,
        syntax="/complete todo <id|index|title> [@project]",
        description="Mark a todo as completed",
        examples=("/complete todo 1", "/done 2 @backend", '/complete "fix auth"'),
        requires_args=True,
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.ASSIGN_TODO,
        syntax="/assign todo <id|index|title> --to=<email> [@project]",
        description="Assign a todo to a team member",
        examples=("/assign todo 1 --to=dev@example.com", "/assign 2 --to=lead@example.com @backend"),
        requires_args=True,
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.PUSH_TODO,
        syntax="/push todo <id|index|title> [@project]",
        description="Move a todo and its subtasks into the dev log",
        examples=("/push todo 1", '/push "fix auth" @backend'),
        requires_args=True,
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.SET_PRIORITY,
        syntax="/set priority <id|index|title> <low|medium|high> [@project]",
        description="Change the priority of a todo",
        examples=("/set priority 1 high", '/priority "write docs" low'),
        requires_args=True,
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.SET_DUE_DATE,
        syntax="/set due <id|index|title> <date|today|tomorrow> [@project]",
        description="Set the due date of a todo",
        examples=("/set due 1 tomorrow", '/due 2 "12-24 8:00PM"', "/due 1 2025-06-30"),
        requires_args=True,
        mutates=True,
        category="Notes",
    ),
    # Subtasks
    CommandMetadata(
        type=CommandType.ADD_SUBTASK,
        syntax='/add subtask [--parent="..."] [--title="..."] [--content="..."] [--priority=...] [--status=...] [--due="..."] [@project]',
        description="Add a subtask to a todo",
        examples=(
            "/add subtask",
            '/add subtask --parent=1 --title="write tests"',
            '/subtask --parent="fix auth" --title="add regression test" --priority=high',
        ),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.VIEW_SUBTASKS,
        syntax="/view subtasks [id|index|title] [@project]",
        description="List the subtasks of a todo",
        examples=("/view subtasks", "/subtasks 1", '/view subtasks "fix auth" @backend'),
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.EDIT_SUBTASK,
        syntax='/edit subtask [subtask id | <todo> <subtask index>] [--title="..."] [--content="..."] [--priority=...] [--status=...] [--due="..."] [@project]',
        description="Edit a subtask",
        examples=("/edit subtask", "/edit subtask 1 2", '/edit subtask 1 2 --title="updated"'),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.DELETE_SUBTASK,
        syntax="/delete subtask [subtask id | <todo> <subtask index>] [--confirm] [@project]",
        description="Delete a subtask",
        examples=("/delete subtask", "/delete subtask 1 2", "/delete subtask 1 2 --confirm"),
        mutates=True,
        category="Notes",
    ),
    # Notes
    CommandMetadata(
        type=CommandType.ADD_NOTE,
        syntax='/add note [--title="..."] [--content="..."] [@project]',
        description="Create a new note",
        examples=(
            "/add note",
            '/add note --title="API design" --content="REST first" @backend',
            '/note --title="standup" --content="notes from standup"',
        ),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.VIEW_NOTES,
        syntax="/view notes [@project]",
        description="List all notes in a project",
        examples=("/view notes @myproject", "/notes", "/list notes @frontend"),
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.EDIT_NOTE,
        syntax='/edit note [id|index|title] [--title="..."] [--content="..."] [@project]',
        description="Edit an existing note",
        examples=("/edit note", '/edit note 1 --content="updated"'),
        mutates=True,
        category="Notes",
    ),
    CommandMetadata(
        type=CommandType.DELETE_NOTE,
        syntax="/delete note [id|index|title] [--confirm] [@project]",
        description="Delete a note",
        examples=("/delete note", "/delete note 1 --confirm"),
        mutates=True,
        category="Notes",
    ),
    # Dev log
    CommandMetadata(
        type=CommandType.ADD_DEVLOG,
        syntax='/add devlog [--title="..."] [--entry="..."] [@project]',
        description="Create a new dev log entry",
        examples=(
            "/add devlog",
            '/add devlog --entry="fixed memory leak in user service" @backend',
            '/devlog --title="perf" --entry="optimized database queries"',
        ),
        mutates=True,
        category="Dev Log",
    ),
    CommandMetadata(
        type=CommandType.VIEW_DEVLOG,
        syntax="/view devlog [@project]",
        description="List dev log entries",
        examples=("/view devlog @myproject", "/devlogs", "/list devlog @backend"),
        category="Dev Log",
    ),
    CommandMetadata(
        type=CommandType.EDIT_DEVLOG,
        syntax='/edit devlog [id|index] [--title="..."] [--entry="..."] [@project]',
        description="Edit a dev log entry",
        examples=("/edit devlog", '/edit devlog 1 --entry="corrected entry"'),
        mutates=True,
        category="Dev Log",
    ),
    CommandMetadata(
        type=CommandType.DELETE_DEVLOG,
        syntax="/delete devlog [id|index] [--confirm] [@project]",
        description="Delete a dev log entry",
        examples=("/delete devlog", "/delete devlog 1 --confirm"),
        mutates=True,
        category="Dev Log",
    ),
    # Components
    CommandMetadata(
        type=CommandType.ADD_COMPONENT,
        syntax='/add component [--feature="..."] [--category=...] [--type=...] [--title="..."] [--content="..."] [@project]',
        description="Add a component to a feature",
        examples=(
            "/add component",
            '/add component --feature="Auth" --category=backend --type=service --title="Login API"',
        ),
        mutates=True,
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.VIEW_COMPONENTS,
        syntax='/view components [--feature="..."] [--category=...] [@project]',
        description="List components grouped by feature",
        examples=("/view components", '/view components --feature="Auth"', "/components --category=frontend"),
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.EDIT_COMPONENT,
        syntax='/edit component [id|index|title] [--title="..."] [--content="..."] [--feature="..."] [--category=...] [--type=...] [@project]',
        description="Edit a component",
        examples=("/edit component", '/edit component 1 --title="Session API"'),
        mutates=True,
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.DELETE_COMPONENT,
        syntax="/delete component [id|index|title] [--confirm] [@project]",
        description="Delete a component and its relationships",
        examples=("/delete component", "/delete component 1 --confirm"),
        mutates=True,
        category="Features",
    ),
    # Relationships
    CommandMetadata(
        type=CommandType.ADD_RELATIONSHIP,
        syntax='/add relationship [--source="..."] [--target="..."] [--type=uses|depends_on] [--description="..."] [@project]',
        description="Link two components",
        examples=(
            "/add relationship",
            '/add relationship --source="Login API" --target="User DB" --type=uses',
        ),
        mutates=True,
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.VIEW_RELATIONSHIPS,
        syntax="/view relationships [component] [@project]",
        description="Show the relationships of a component",
        examples=("/view relationships", '/view relationships "Login API"'),
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.EDIT_RELATIONSHIP,
        syntax="/edit relationship <component> <relationship id|index> --type=uses|depends_on [@project]",
        description="Change the type of a relationship",
        examples=('/edit relationship "Login API" 1 --type=depends_on',),
        requires_args=True,
        mutates=True,
        category="Features",
    ),
    CommandMetadata(
        type=CommandType.DELETE_RELATIONSHIP,
        syntax="/delete relationship <component> <relationship id|index> [--confirm] [@project]",
        description="Remove a relationship between components",
        examples=('/delete relationship "Login API" 1', '/delete relationship "Login API" 1 --confirm'),
        requires_args=True,
        mutates=True,
        category="Features",
    ),
    # Stack
    CommandMetadata(
        type=CommandType.ADD_STACK,
        syntax='/add stack [--name="..."] [--category=...] [--version=...] [--description="..."] [@project]',
        description="Add a technology or package to the stack",
        examples=("/add stack", "/add stack --name=React --category=framework --version=18.2.0"),
        mutates=True,
        category="Stack",
    ),
    CommandMetadata(
        type=CommandType.VIEW_STACK,
        syntax="/view stack [@project]",
        description="Show the project's technology stack",
        examples=("/view stack", "/stack @frontend"),
        category="Stack",
    ),
    CommandMetadata(
        type=CommandType.REMOVE_STACK,
        syntax="/remove stack <name> [@project]",
        description="Remove a technology or package from the stack",
        examples=("/remove stack React", "/remove tech Redux @frontend"),
        requires_args=True,
        mutates=True,
        category="Stack",
    ),
    # Team
    CommandMetadata(
        type=CommandType.VIEW_TEAM,
        syntax="/view team [@project]",
        description="List project members",
        examples=("/view team", "/team @backend"),
        category="Team",
    ),
    CommandMetadata(
        type=CommandType.INVITE_MEMBER,
        syntax="/invite member <email> [--role=editor|viewer] [@project]",
        description="Invite a user to the project",
        examples=("/invite member dev@example.com", "/invite dev@example.com --role=viewer @backend"),
        requires_args=True,
        mutates=True,
        category="Team",
    ),
    CommandMetadata(
        type=CommandType.REMOVE_MEMBER,
        syntax="/remove member <email> [@project]",
        description="Remove a member from the project",
        examples=("/remove member dev@example.com",),
        requires_args=True,
        mutates=True,
        category="Team",
    ),
    # Settings
    CommandMetadata(
        type=CommandType.VIEW_SETTINGS,
        syntax="/view settings [@project]",
        description="Show project settings",
        examples=("/view settings", "/settings @backend"),
        category="Settings",
    ),
    CommandMetadata(
        type=CommandType.SET_NAME,
        syntax="/set name <new name> [@project]",
        description="Rename the project",
        examples=('/set name "Backend API"', "/rename Frontend @web"),
        requires_args=True,
        mutates=True,
        category="Settings",
    ),
    CommandMetadata(
        type=CommandType.SET_DESCRIPTION,
        syntax="/set description <text> [@project]",
        description="Change the project description",
        examples=('/set description "REST API for the mobile app"',),
        requires_args=True,
        mutates=True,
        category="Settings",
    ),
    CommandMetadata(
        type=CommandType.ADD_TAG,
        syntax="/add tag <name> [@project]",
        description="Add a tag to the project",
        examples=("/add tag react", "/add tag --name=typescript @frontend"),
        requires_args=True,
        mutates=True,
        category="Settings",
    ),
    CommandMetadata(
        type=CommandType.REMOVE_TAG,
        syntax="/remove tag <name> [@project]",
        description="Remove a tag from the project",
        examples=("/remove tag react",),
        requires_args=True,
        mutates=True,
        category="Settings",
    ),
    # Deployment
    CommandMetadata(
        type=CommandType.VIEW_DEPLOYMENT,
        syntax="/view deployment [@project]",
        description="Show deployment information",
        examples=("/view deployment", "/deployment @backend"),
        category="Deployment",
    ),
    CommandMetadata(
        type=CommandType.SET_DEPLOYMENT,
        syntax="/set deployment [--url=...] [--platform=...] [--status=active|inactive|error] [--branch=...] [@project]",
        description="Update deployment information",
        examples=("/set deployment --url=https://app.example.com --platform=vercel", "/set deployment --status=active"),
        requires_args=True,
        mutates=True,
        category="Deployment",
    ),
    # Public
    CommandMetadata(
        type=CommandType.VIEW_PUBLIC,
        syntax="/view public [@project]",
        description="Show public sharing settings",
        examples=("/view public",),
        category="Public",
    ),
    CommandMetadata(
        type=CommandType.SET_PUBLIC,
        syntax="/set public --enabled=true|false [--slug=...] [@project]",
        description="Make the project public or private",
        examples=("/set public --enabled=true --slug=my-project", "/make public", "/make private"),
        mutates=True,
        category="Public",
    ),
    # Utility
    CommandMetadata(
        type=CommandType.SEARCH,
        syntax="/search <query> [@project]",
        description="Search todos, notes, dev log and components",
        examples=("/search authentication", "/find login @backend"),
        requires_project=False,
        requires_args=True,
        category="General",
    ),
    CommandMetadata(
        type=CommandType.SUMMARY,
        syntax="/summary [@project]",
        description="Show a summary of the project",
        examples=("/summary", "/summary @backend"),
        category="General",
    ),
    CommandMetadata(
        type=CommandType.EXPORT,
        syntax="/export [@project]",
        description="Export project data",
        examples=("/export @myproject", "/export", "/download @frontend"),
        category="Export",
    ),
    CommandMetadata(
        type=CommandType.SWAP_PROJECT,
        syntax="/swap project [@project]",
        description="Switch to a different project",
        examples=("/swap @myproject", "/swap-project @frontend", "/switch @backend"),
        requires_project=False,
        category="Project",
    ),
    CommandMetadata(
        type=CommandType.WIZARD_NEW,
        syntax="/wizard new",
        description="Start interactive wizard to create new project",
        examples=("/wizard new", "/new", "/create"),
        requires_project=False,
        category="Wizards",
    ),
    CommandMetadata(
        type=CommandType.WIZARD_SETUP,
        syntax="/wizard setup [@project]",
        description="Start interactive wizard to setup project",
        examples=("/wizard setup @myproject", "/setup", "/wizard-setup @frontend"),
        mutates=True,
        category="Wizards",
    ),
    CommandMetadata(
        type=CommandType.WIZARD_DEPLOY,
        syntax="/wizard deploy [@project]",
        description="Start interactive deployment wizard",
        examples=("/wizard deploy @myproject", "/deploy-wizard", "/wizard-deploy @backend"),
        mutates=True,
        category="Wizards",
    ),
    CommandMetadata(
        type=CommandType.HELP,
        syntax="/help [command]",
        description="Show help for all commands or a specific command",
        examples=("/help", "/help add todo", "/?"),
        requires_project=False,
        category="Help",
    ),
    CommandMetadata(
        type=CommandType.UNKNOWN,
        syntax="",
        description="Unknown command",
        requires_project=False,
    ),
)

DEFAULT_METADATA_REGISTRY = MetadataRegistry(COMMAND_METADATA)
