from __future__ import annotations

import pytest
from project_terminal.constants import DEMO_MODE_MESSAGE
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers import TodoHandlers
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    handles,
)
from project_terminal.core.commands.parser import MISSING_PREFIX_ERROR
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import Role
from project_terminal.core.domain.responses import CommandResponse, ResponseType
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)
from project_terminal.core.services.command_executor import (
    INVALID_COMMAND_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    CommandExecutor,
)

from tests.conftest import (
    BACKEND_ID,
    DEMO,
    EDITOR,
    OUTSIDER,
    OWNER,
    VIEWER,
    RunCommand,
)


class RecordingHandlers(BaseCommandHandler):
    def __init__(self, repository: InMemoryProjectRepository) -> None:
        super().__init__(repository)
        self.contexts: list[CommandContext] = []

    @handles(CommandType.VIEW_TODOS, CommandType.ADD_TODO, CommandType.HELP)
    async def record(self, context: CommandContext) -> CommandResponse:
        self.contexts.append(context)
        return CommandResponse(type=ResponseType.INFO, message="recorded")


class CrashingHandlers(BaseCommandHandler):
    @handles(CommandType.SUMMARY)
    async def crash(self, context: CommandContext) -> CommandResponse:
        raise RuntimeError("disk on fire")


@pytest.mark.asyncio
async def test_invalid_command_is_rejected_before_dispatch(run: RunCommand) -> None:
    response = await run("help")

    assert response.type is ResponseType.ERROR
    assert response.message == INVALID_COMMAND_MESSAGE
    assert response.data == {"errors": [MISSING_PREFIX_ERROR]}
    assert response.suggestions == ["/help"]


@pytest.mark.asyncio
async def test_usage_errors_are_reported(run: RunCommand) -> None:
    response = await run("/add tag")

    assert response.type is ResponseType.ERROR
    assert response.data == {
        "errors": ["Command requires arguments. Usage: /add tag <name> [@project]"]
    }


@pytest.mark.asyncio
async def test_context_carries_project_and_role(repository: InMemoryProjectRepository) -> None:
    recorder = RecordingHandlers(repository)
    executor = CommandExecutor(repository, handlers=[recorder])

    await executor.execute("/todos", EDITOR, BACKEND_ID)

    [context] = recorder.contexts
    assert context.project is not None
    assert context.project.id == BACKEND_ID
    assert context.role is Role.EDITOR
    assert context.current_project_id == BACKEND_ID
    assert context.parsed.type is CommandType.VIEW_TODOS


@pytest.mark.asyncio
async def test_project_free_command_without_mention_gets_no_project(
    repository: InMemoryProjectRepository,
) -> None:
    recorder = RecordingHandlers(repository)
    executor = CommandExecutor(repository, handlers=[recorder])

    await executor.execute("/help", OUTSIDER, BACKEND_ID)

    [context] = recorder.contexts
    assert context.project is None
    assert context.role is None


@pytest.mark.asyncio
async def test_resolution_failure_becomes_error_response(run: RunCommand) -> None:
    response = await run("/todos", identity=OUTSIDER, project_id=None)

    assert response.type is ResponseType.ERROR
    assert response.message == "No projects found. Create a project first with /wizard new"
    assert response.suggestions == ["/wizard new"]


@pytest.mark.asyncio
async def test_unknown_mention_becomes_error_response(run: RunCommand) -> None:
    response = await run("/todos @Nope")

    assert response.type is ResponseType.ERROR
    assert response.message == 'Project "@Nope" not found'
    assert response.data == {"mention": "Nope"}


@pytest.mark.asyncio
async def test_viewer_may_read_but_not_write(
    run: RunCommand, repository: InMemoryProjectRepository
) -> None:
    read = await run("/todos", identity=VIEWER)
    assert read.type is ResponseType.DATA

    write = await run("/add todo --title=Nope", identity=VIEWER)
    assert write.type is ResponseType.ERROR
    assert write.message == (
        "You are a viewer and do not have edit permissions for this project"
    )
    project = await repository.get_by_id(BACKEND_ID)
    assert project is not None
    assert len(project.todos) == 2


@pytest.mark.asyncio
async def test_demo_user_cannot_write(run: RunCommand) -> None:
    read = await run("/todos", identity=DEMO)
    assert read.type is ResponseType.DATA

    write = await run("/add todo --title=Nope", identity=DEMO)
    assert write.type is ResponseType.ERROR
    assert write.message == DEMO_MODE_MESSAGE
    assert write.data == {"demo": True}


@pytest.mark.asyncio
async def test_wizard_prompt_also_needs_edit_rights(run: RunCommand) -> None:
    response = await run("/add todo", identity=VIEWER)

    assert response.type is ResponseType.ERROR


@pytest.mark.asyncio
async def test_unrouted_command_type(repository: InMemoryProjectRepository) -> None:
    executor = CommandExecutor(repository, handlers=[TodoHandlers(repository)])

    response = await executor.execute("/notes", OWNER, BACKEND_ID)

    assert response.type is ResponseType.ERROR
    assert response.message == "Command type view_notes not yet implemented"


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_generic_error(
    repository: InMemoryProjectRepository,
) -> None:
    executor = CommandExecutor(repository, handlers=[CrashingHandlers(repository)])

    response = await executor.execute("/summary", OWNER, BACKEND_ID)

    assert response.type is ResponseType.ERROR
    assert response.message == UNEXPECTED_ERROR_MESSAGE
    assert response.data == {"error": "disk on fire"}


def test_duplicate_routes_are_rejected(repository: InMemoryProjectRepository) -> None:
    with pytest.raises(ValueError, match="view_todos"):
        CommandExecutor(
            repository,
            handlers=[TodoHandlers(repository), RecordingHandlers(repository)],
        )


def test_parser_uses_configured_suggestion_limit(executor: CommandExecutor) -> None:
    assert len(executor.parser.get_suggestions("/")) == 10
