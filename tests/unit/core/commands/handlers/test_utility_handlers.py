from __future__ import annotations

import pytest
from project_terminal.constants import DEMO_MODE_MESSAGE
from project_terminal.core.domain.responses import ResponseType
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)

from tests.conftest import (
    BACKEND_ID,
    DEMO,
    FRONTEND_ID,
    OUTSIDER,
    OWNER,
    VIEWER,
    RunCommand,
)


@pytest.mark.asyncio
async def test_help_lists_commands_by_category(run: RunCommand) -> None:
    response = await run("/help", project_id=None)

    assert response.type is ResponseType.DATA
    assert response.message == "Available commands"
    assert response.data is not None
    values = [
        command["value"]
        for category in response.data["categories"]
        for command in category["commands"]
    ]
    assert "/add todo" in values
    assert "/help" in values
    assert response.suggestions == ["/help add todo"]


@pytest.mark.asyncio
async def test_help_for_one_command(run: RunCommand) -> None:
    response = await run("/help /add todo")

    assert response.type is ResponseType.DATA
    assert response.message == "Help: /add todo"
    assert response.data is not None
    assert response.data["command"]["aliases"] == ["add todo", "add-todo", "todo"]
    assert response.data["command"]["requiresProject"] is True


@pytest.mark.asyncio
async def test_help_for_unknown_topic(run: RunCommand) -> None:
    response = await run("/? teleport")

    assert response.type is ResponseType.ERROR
    assert response.message == 'No help found for "teleport"'


@pytest.mark.asyncio
async def test_swap_to_mentioned_project(run: RunCommand) -> None:
    response = await run("/swap @My Frontend")

    assert response.type is ResponseType.SUCCESS
    assert response.message == "Switched to My Frontend"
    assert response.data is not None
    assert response.data["project"]["id"] == FRONTEND_ID


@pytest.mark.asyncio
async def test_swap_without_mention_offers_projects(run: RunCommand) -> None:
    response = await run("/swap")

    assert response.wizard_type == "select_project"
    assert response.data is not None
    assert [p["name"] for p in response.data["projects"]] == ["Backend", "My Frontend"]


@pytest.mark.asyncio
async def test_swap_without_any_project(run: RunCommand) -> None:
    response = await run("/swap", identity=OUTSIDER, project_id=None)

    assert response.type is ResponseType.ERROR
    assert response.suggestions == ["/wizard new"]


@pytest.mark.asyncio
async def test_export(run: RunCommand) -> None:
    response = await run("/export")

    assert response.type is ResponseType.SUCCESS
    assert response.data is not None
    assert (
        response.data["exportUrl"]
        == f"https://app.example.com/api/projects/{BACKEND_ID}/export"
    )


@pytest.mark.asyncio
async def test_summary_counts(run: RunCommand) -> None:
    await run("/complete todo 1")
    await run('/relate --source=comp-1 --target=comp-2 --type=depends_on')

    response = await run("/summary", identity=VIEWER)

    assert response.type is ResponseType.DATA
    assert response.data is not None
    assert response.data["counts"] == {
        "todos": 2,
        "completedTodos": 1,
        "notes": 1,
        "devlog": 0,
        "components": 2,
        "features": 1,
        "relationships": 1,
        "stack": 0,
        "members": 2,
    }


@pytest.mark.asyncio
async def test_wizard_new_prompt_then_create(
    run: RunCommand, repository: InMemoryProjectRepository
) -> None:
    prompt = await run("/wizard new", project_id=None)
    assert prompt.type is ResponseType.PROMPT
    assert prompt.wizard_type == "wizard_new"

    response = await run(
        '/wizard new --name=Mobile --tags="ios, swift, iOS" --description="Phone app"',
        project_id=None,
    )

    assert response.type is ResponseType.SUCCESS
    assert response.message == "Created project Mobile"
    project = await repository.find_by_name(OWNER.user_id, "mobile")
    assert project is not None
    assert project.tags == ["ios", "swift"]
    assert project.category == "general"
    assert project.owner_id == OWNER.user_id


@pytest.mark.asyncio
async def test_wizard_new_rejects_duplicate_name(run: RunCommand) -> None:
    response = await run("/new --name=backend")

    assert response.type is ResponseType.ERROR
    assert response.message == 'You already have a project named "backend"'


@pytest.mark.asyncio
async def test_wizard_new_in_demo_mode(run: RunCommand) -> None:
    prompt = await run("/wizard new", identity=DEMO)
    assert prompt.type is ResponseType.PROMPT

    response = await run("/wizard new --name=Demo", identity=DEMO)
    assert response.type is ResponseType.ERROR
    assert response.message == DEMO_MODE_MESSAGE
    assert response.data == {"demo": True}


@pytest.mark.asyncio
async def test_wizard_setup(run: RunCommand, repository: InMemoryProjectRepository) -> None:
    prompt = await run("/wizard setup")
    assert prompt.wizard_type == "wizard_setup"
    assert prompt.data is not None
    assert prompt.data["projectId"] == BACKEND_ID
    assert prompt.data["steps"][2]["value"] == "python"

    response = await run('/wizard setup --category=api --tags="python,fastapi"')
    assert response.type is ResponseType.SUCCESS
    project = await repository.get_by_id(BACKEND_ID)
    assert project is not None
    assert project.category == "api"
    assert project.tags == ["python", "fastapi"]


@pytest.mark.asyncio
async def test_wizard_setup_needs_edit_rights(run: RunCommand) -> None:
    response = await run("/wizard setup", identity=VIEWER)

    assert response.type is ResponseType.ERROR
    assert response.message == (
        "You are a viewer and do not have edit permissions for this project"
    )


@pytest.mark.asyncio
async def test_wizard_deploy(run: RunCommand) -> None:
    prompt = await run("/wizard deploy")
    assert prompt.wizard_type == "wizard_deploy"

    response = await run("/wizard deploy --url=https://api.example.com --status=active")
    assert response.type is ResponseType.SUCCESS
    assert response.data is not None
    assert response.data["deployment"]["url"] == "https://api.example.com"
