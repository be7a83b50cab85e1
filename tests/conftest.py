from __future__ import annotations

from collections.abc import Awaitable, Callable

import pytest
from project_terminal.core.config.app_config import TerminalConfig
from project_terminal.core.domain.identity import UserIdentity
from project_terminal.core.domain.project import (
    Component,
    Note,
    Project,
    Role,
    TeamMember,
    Todo,
)
from project_terminal.core.domain.responses import CommandResponse
from project_terminal.core.repositories.in_memory_note_lock_repository import (
    InMemoryNoteLockService,
)
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)
from project_terminal.core.services.command_executor import CommandExecutor

OWNER = UserIdentity(user_id="owner-1", email="owner@example.com", name="Olivia")
EDITOR = UserIdentity(user_id="editor-1", email="editor@example.com", name="Eddie")
VIEWER = UserIdentity(user_id="viewer-1", email="viewer@example.com", name="Vera")
OUTSIDER = UserIdentity(user_id="outsider-1", email="outsider@example.com")
DEMO = UserIdentity(user_id="owner-1", email="owner@example.com", is_demo=True)

BACKEND_ID = "backend-project"
FRONTEND_ID = "frontend-project"

RunCommand = Callable[..., Awaitable[CommandResponse]]


def make_backend_project() -> Project:
    return Project(
        id=BACKEND_ID,
        name="Backend",
        description="API and workers",
        owner_id=OWNER.user_id,
        tags=["python"],
        members=[
            TeamMember(user_id=EDITOR.user_id, email=EDITOR.email or "", role=Role.EDITOR),
            TeamMember(user_id=VIEWER.user_id, email=VIEWER.email or "", role=Role.VIEWER),
        ],
        todos=[
            Todo(id="todo-1", title="Fix login bug", priority="high"),
            Todo(id="todo-2", title="Write docs"),
        ],
        notes=[Note(id="note-1", title="API design", content="REST first")],
        components=[
            Component(
                id="comp-1",
                feature="Auth",
                category="backend",
                type="service",
                title="Login API",
            ),
            Component(
                id="comp-2",
                feature="Auth",
                category="database",
                type="schema",
                title="User table",
            ),
        ],
    )


def make_frontend_project() -> Project:
    return Project(
        id=FRONTEND_ID,
        name="My Frontend",
        description="Web client",
        owner_id=OWNER.user_id,
    )


@pytest.fixture
def terminal_config() -> TerminalConfig:
    return TerminalConfig(frontend_url="https://app.example.com")


@pytest.fixture
def repository() -> InMemoryProjectRepository:
    return InMemoryProjectRepository([make_backend_project(), make_frontend_project()])


@pytest.fixture
def lock_service() -> InMemoryNoteLockService:
    return InMemoryNoteLockService()


@pytest.fixture
def executor(
    repository: InMemoryProjectRepository,
    lock_service: InMemoryNoteLockService,
    terminal_config: TerminalConfig,
) -> CommandExecutor:
    return CommandExecutor(repository, lock_service, config=terminal_config)


@pytest.fixture
def run(executor: CommandExecutor) -> RunCommand:
    """Execute a command as the owner inside the Backend project by default."""

    async def _run(
        command: str,
        identity: UserIdentity = OWNER,
        project_id: str | None = BACKEND_ID,
    ) -> CommandResponse:
        return await executor.execute(command, identity, project_id)

    return _run
