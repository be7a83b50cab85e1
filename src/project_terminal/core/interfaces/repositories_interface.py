from __future__ import annotations

from abc import ABC, abstractmethod

from project_terminal.core.domain.note_lock import NoteLock
from project_terminal.core.domain.project import Project


class IProjectRepository(ABC):
    @abstractmethod
    async def get_by_id(self, id: str) -> Project | None:
        pass

    @abstractmethod
    async def find_accessible(self, user_id: str) -> list[Project]:
        """Projects owned by ``user_id`` followed by those it is a member of."""

    @abstractmethod
    async def find_by_name(self, user_id: str, name: str) -> Project | None:
        """Accessible project whose name equals ``name`` ignoring case."""

    @abstractmethod
    async def save(self, project: Project) -> Project:
        pass


class INoteLockService(ABC):
    @abstractmethod
    async def acquire(
        self, note_id: str, project_id: str, user_id: str, user_email: str | None = None
    ) -> NoteLock:
        """Take or renew the lock; raises NoteLockedError if another user holds it."""

    @abstractmethod
    async def heartbeat(self, note_id: str, user_id: str) -> NoteLock | None:
        pass

    @abstractmethod
    async def release(self, note_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    async def get_active_lock(self, note_id: str) -> NoteLock | None:
        pass
