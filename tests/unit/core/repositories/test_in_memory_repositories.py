from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from project_terminal.core.common.exceptions import NoteLockedError
from project_terminal.core.domain.project import Project, Role, TeamMember
from project_terminal.core.repositories.in_memory_note_lock_repository import (
    InMemoryNoteLockService,
)
from project_terminal.core.repositories.in_memory_project_repository import (
    InMemoryProjectRepository,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def repo() -> InMemoryProjectRepository:
    return InMemoryProjectRepository(
        [
            Project(id="p1", name="Alpha", owner_id="u1"),
            Project(
                id="p2",
                name="Beta",
                owner_id="u2",
                members=[TeamMember(user_id="u1", email="u1@example.com", role=Role.VIEWER)],
            ),
            Project(id="p3", name="Gamma", owner_id="u3"),
        ]
    )


@pytest.mark.asyncio
async def test_find_accessible_lists_owned_then_shared(repo: InMemoryProjectRepository) -> None:
    projects = await repo.find_accessible("u1")

    assert [p.name for p in projects] == ["Alpha", "Beta"]


@pytest.mark.asyncio
async def test_find_by_name_ignores_case_and_access(repo: InMemoryProjectRepository) -> None:
    assert (await repo.find_by_name("u1", "  beta ")).id == "p2"  # type: ignore[union-attr]
    assert await repo.find_by_name("u1", "Gamma") is None


@pytest.mark.asyncio
async def test_loaded_projects_are_copies(repo: InMemoryProjectRepository) -> None:
    project = await repo.get_by_id("p1")
    assert project is not None
    project.name = "Changed"

    reloaded = await repo.get_by_id("p1")
    assert reloaded is not None
    assert reloaded.name == "Alpha"

    await repo.save(project)
    saved = await repo.get_by_id("p1")
    assert saved is not None
    assert saved.name == "Changed"


@pytest.mark.asyncio
async def test_get_unknown_project(repo: InMemoryProjectRepository) -> None:
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_lock_blocks_other_users_until_expiry() -> None:
    clock = FakeClock()
    locks = InMemoryNoteLockService(ttl_seconds=60, clock=clock)

    await locks.acquire("n1", "p1", "u1", "u1@example.com")
    with pytest.raises(NoteLockedError) as exc_info:
        await locks.acquire("n1", "p1", "u2")
    assert exc_info.value.status_code == 423
    assert "u1@example.com" in exc_info.value.message

    clock.advance(61)
    assert await locks.get_active_lock("n1") is None
    lock = await locks.acquire("n1", "p1", "u2")
    assert lock.user_id == "u2"


@pytest.mark.asyncio
async def test_heartbeat_extends_only_own_lock() -> None:
    clock = FakeClock()
    locks = InMemoryNoteLockService(ttl_seconds=60, clock=clock)
    first = await locks.acquire("n1", "p1", "u1")

    clock.advance(30)
    assert await locks.heartbeat("n1", "u2") is None
    renewed = await locks.heartbeat("n1", "u1")

    assert renewed is not None
    assert renewed.expires_at == first.expires_at + timedelta(seconds=30)


@pytest.mark.asyncio
async def test_release_requires_the_holder() -> None:
    locks = InMemoryNoteLockService()
    await locks.acquire("n1", "p1", "u1")

    assert await locks.release("n1", "u2") is False
    assert await locks.release("n1", "u1") is True
    assert await locks.get_active_lock("n1") is None
