from __future__ import annotations

import pytest
from project_terminal.core.commands.handlers.search_handlers import (
    SNIPPET_LENGTH,
    search_project,
)
from project_terminal.core.domain.project import Note
from project_terminal.core.domain.responses import ResponseType

from tests.conftest import BACKEND_ID, OUTSIDER, RunCommand, make_backend_project


@pytest.mark.asyncio
async def test_search_without_mention_covers_all_projects(run: RunCommand) -> None:
    response = await run("/search login", project_id=None)

    assert response.type is ResponseType.DATA
    assert response.message == 'Found 2 results for "login" in all projects'
    assert response.data is not None
    assert [(r["type"], r["id"]) for r in response.data["results"]] == [
        ("todo", "todo-1"),
        ("component", "comp-1"),
    ]
    assert response.data["truncated"] is False


@pytest.mark.asyncio
async def test_search_in_mentioned_project(run: RunCommand) -> None:
    response = await run("/find rest @Backend")

    assert response.type is ResponseType.DATA
    assert response.message == 'Found 1 results for "rest" in Backend'
    assert response.metadata is not None
    assert response.metadata["projectId"] == BACKEND_ID


@pytest.mark.asyncio
async def test_search_with_query_flag(run: RunCommand) -> None:
    response = await run('/search --query="user table"')

    assert response.data is not None
    assert response.data["results"][0]["id"] == "comp-2"


@pytest.mark.asyncio
async def test_search_without_results(run: RunCommand) -> None:
    response = await run("/search kubernetes @My Frontend")

    assert response.type is ResponseType.INFO
    assert response.message == 'No results for "kubernetes" in My Frontend'


@pytest.mark.asyncio
async def test_search_sees_only_accessible_projects(run: RunCommand) -> None:
    response = await run("/search login", identity=OUTSIDER, project_id=None)

    assert response.type is ResponseType.INFO


@pytest.mark.asyncio
async def test_search_query_too_short(run: RunCommand) -> None:
    response = await run("/search a")

    assert response.type is ResponseType.ERROR
    assert response.message == "Search query must be at least 2 characters"


def test_search_project_snippets_are_shortened() -> None:
    project = make_backend_project()
    project.notes.append(Note(title="Long", content="word " * 100))

    [result] = search_project(project, "long")

    assert result["snippet"].endswith("...")
    assert len(result["snippet"]) == SNIPPET_LENGTH + 3
