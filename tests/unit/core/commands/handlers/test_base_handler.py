from __future__ import annotations

from dataclasses import dataclass

import pytest
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers import default_handler_groups
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    find_item,
    handles,
)
from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.responses import CommandResponse, info_response
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)

from tests.conftest import OWNER


@dataclass
class Item:
    id: str
    title: str


ITEMS = [Item("a1", "Alpha task"), Item("b2", "Beta task"), Item("3", "Gamma")]


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("b2", "b2"),
        ("1", "a1"),
        ("3", "3"),
        ("beta", "b2"),
        ("TASK", "a1"),
    ],
)
def test_find_item_prefers_id_then_index_then_text(identifier: str, expected: str) -> None:
    item = find_item(ITEMS, identifier, lambda i: i.title)

    assert item is not None
    assert item.id == expected


@pytest.mark.parametrize("identifier", ["0", "9", "delta", ""])
def test_find_item_misses(identifier: str) -> None:
    assert find_item(ITEMS, identifier, lambda i: i.title) is None


def test_check_choice_normalizes() -> None:
    assert check_choice(" High ", ("low", "high"), "priority") == "high"

    with pytest.raises(HandlerError) as exc_info:
        check_choice("urgent", ("low", "high"), "priority")
    assert exc_info.value.message == 'Invalid priority "urgent". Must be one of: low, high'
    assert exc_info.value.status_code == 400


class EchoHandlers(BaseCommandHandler):
    @handles(CommandType.HELP, CommandType.SUMMARY)
    async def echo(self, context: CommandContext) -> CommandResponse:
        return info_response(context.parsed.type.value)


class LoudEchoHandlers(EchoHandlers):
    @handles(CommandType.EXPORT)
    async def shout(self, context: CommandContext) -> CommandResponse:
        return info_response("EXPORT")


def test_handles_needs_a_command_type() -> None:
    with pytest.raises(ValueError):
        handles()


def test_dispatch_table_is_collected_per_subclass() -> None:
    assert set(EchoHandlers.handled_types()) == {CommandType.HELP, CommandType.SUMMARY}
    assert set(LoudEchoHandlers.handled_types()) == {
        CommandType.HELP,
        CommandType.SUMMARY,
        CommandType.EXPORT,
    }
    assert BaseCommandHandler.handled_types() == ()


@pytest.mark.asyncio
async def test_handle_routes_to_the_tagged_method() -> None:
    handler = LoudEchoHandlers(InMemoryProjectRepository())
    parser = CommandParser()

    summary = await handler.handle(
        CommandContext(parsed=parser.parse("/summary"), identity=OWNER)
    )
    export = await handler.handle(CommandContext(parsed=parser.parse("/export"), identity=OWNER))

    assert summary.message == "summary"
    assert export.message == "EXPORT"


@pytest.mark.asyncio
async def test_handle_rejects_untagged_commands() -> None:
    handler = EchoHandlers(InMemoryProjectRepository())
    context = CommandContext(parsed=CommandParser().parse("/todos"), identity=OWNER)

    with pytest.raises(HandlerError, match="not yet implemented"):
        await handler.handle(context)


def test_default_groups_cover_every_tag_once() -> None:
    seen: list[CommandType] = []
    for group in default_handler_groups(InMemoryProjectRepository()):
        seen.extend(group.handled_types())

    assert len(seen) == len(set(seen))
    assert set(seen) == set(CommandType) - {CommandType.UNKNOWN}


@pytest.mark.asyncio
async def test_handle_rejects_flags_without_a_value() -> None:
    handler = EchoHandlers(InMemoryProjectRepository())
    context = CommandContext(parsed=CommandParser().parse("/summary --title="), identity=OWNER)

    with pytest.raises(HandlerError, match="--title needs a value"):
        await handler.handle(context)
