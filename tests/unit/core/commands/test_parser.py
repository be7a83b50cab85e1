from __future__ import annotations

import pytest
from project_terminal.core.commands.aliases import AliasTable
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.flags import Flags, Present
from project_terminal.core.commands.parser import (
    MISSING_PREFIX_ERROR,
    NO_COMMAND_ERROR,
    CommandParser,
)


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser()


@pytest.mark.parametrize("raw", ["help", "add todo", "", "   ", "@Backend /help", "\\/help"])
def test_input_without_prefix_is_rejected(parser: CommandParser, raw: str) -> None:
    parsed = parser.parse(raw)

    assert parsed.is_valid is False
    assert parsed.type is CommandType.UNKNOWN
    assert parsed.errors == (MISSING_PREFIX_ERROR,)


@pytest.mark.parametrize("raw", ["/", "/   ", "/ @Backend", "/ --confirm"])
def test_empty_command_is_rejected(parser: CommandParser, raw: str) -> None:
    parsed = parser.parse(raw)

    assert parsed.is_valid is False
    assert parsed.type is CommandType.UNKNOWN
    assert parsed.errors == (NO_COMMAND_ERROR,)


def test_mention_is_kept_on_empty_command(parser: CommandParser) -> None:
    assert parser.parse("/ @Backend").project_mention == "Backend"


def test_full_command_with_mention_and_flags(parser: CommandParser) -> None:
    parsed = parser.parse('/add todo --title="fix auth bug" @My Project --priority=high')

    assert parsed.is_valid
    assert parsed.type is CommandType.ADD_TODO
    assert parsed.project_mention == "My Project"
    assert parsed.flags == Flags(
        {"title": Present("fix auth bug"), "priority": Present("high")}
    )
    assert parsed.args == ()
    assert parsed.command == "add todo"
    assert parsed.subcommand == "todo"


def test_view_todos_with_mention(parser: CommandParser) -> None:
    parsed = parser.parse("/view todos @Backend")

    assert parsed.to_dict() == {
        "type": "view_todos",
        "raw": "/view todos @Backend",
        "command": "view todos",
        "subcommand": "todos",
        "args": [],
        "projectMention": "Backend",
        "flags": {},
        "isValid": True,
        "errors": [],
    }


def test_help_without_arguments(parser: CommandParser) -> None:
    parsed = parser.parse("/help")

    assert parsed.type is CommandType.HELP
    assert parsed.is_valid
    assert parsed.args == ()
    assert not parsed.flags


def test_unknown_command(parser: CommandParser) -> None:
    parsed = parser.parse("/unknown-command")

    assert parsed.type is CommandType.UNKNOWN
    assert parsed.is_valid is False
    assert parsed.errors == (
        "Unknown command: unknown-command. Type /help for available commands.",
    )


def test_surrounding_whitespace_is_ignored(parser: CommandParser) -> None:
    parsed = parser.parse("   /todos   ")

    assert parsed.type is CommandType.VIEW_TODOS
    assert parsed.raw == "   /todos   "


def test_args_are_escape_decoded(parser: CommandParser) -> None:
    parsed = parser.parse(r'/search "tab\there" plain')

    assert parsed.args == ("tab\there", "plain")
    assert parsed.text == "tab\there plain"


def test_flag_only_invocation_satisfies_required_args(parser: CommandParser) -> None:
    parsed = parser.parse("/add tag --name=x")

    assert parsed.is_valid
    assert parsed.args == ()
    assert parsed.flags.value("name") == "x"


def test_missing_required_args_is_a_usage_error(parser: CommandParser) -> None:
    parsed = parser.parse("/add tag")

    assert parsed.is_valid is False
    assert parsed.type is CommandType.ADD_TAG
    assert parsed.errors == (
        "Command requires arguments. Usage: /add tag <name> [@project]",
    )


def test_missing_project_mention_is_not_a_parse_error(parser: CommandParser) -> None:
    assert parser.parse("/view todos").is_valid


def test_validate_returns_validity_and_errors(parser: CommandParser) -> None:
    assert parser.validate("/help") == (True, [])
    assert parser.validate("help") == (False, [MISSING_PREFIX_ERROR])


def test_suggestions_share_the_prefix_and_are_capped(parser: CommandParser) -> None:
    suggestions = parser.get_suggestions("/ad")

    assert 0 < len(suggestions) <= 10
    for suggestion in suggestions:
        alias, _, description = suggestion.partition(" - ")
        assert alias.startswith("/ad")
        assert description


def test_suggestions_format(parser: CommandParser) -> None:
    assert parser.get_suggestions("/summ") == ["/summary - Show a summary of the project"]


def test_suggestions_are_case_insensitive(parser: CommandParser) -> None:
    assert parser.get_suggestions("/HEL") == parser.get_suggestions("/hel")


def test_suggestions_need_the_prefix(parser: CommandParser) -> None:
    assert parser.get_suggestions("ad") == []


def test_suggestion_limit_is_configurable() -> None:
    assert len(CommandParser(suggestion_limit=3).get_suggestions("/")) == 3


def test_custom_prefix() -> None:
    parser = CommandParser(command_prefix="!")

    assert parser.parse("!help").type is CommandType.HELP
    assert parser.parse("/help").errors == (MISSING_PREFIX_ERROR,)


def test_empty_prefix_is_not_allowed() -> None:
    with pytest.raises(ValueError):
        CommandParser(command_prefix="")


def test_custom_alias_table() -> None:
    parser = CommandParser(aliases=AliasTable([("t", CommandType.VIEW_TODOS)]))

    assert parser.parse("/t").type is CommandType.VIEW_TODOS
    assert parser.parse("/todos").type is CommandType.UNKNOWN


def test_find_command_and_aliases(parser: CommandParser) -> None:
    metadata = parser.find_command("Add Todo")

    assert metadata is not None
    assert metadata.type is CommandType.ADD_TODO
    assert parser.find_command("nothing here") is None
    assert "todo" in parser.get_aliases_for_type(CommandType.ADD_TODO)
    assert parser.get_all_aliases()["?"] == "help"
