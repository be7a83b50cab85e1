from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from project_terminal.constants import DEFAULT_NOTE_LOCK_TTL_SECONDS
from project_terminal.core.common.exceptions import NoteLockedError
from project_terminal.core.domain.note_lock import NoteLock
from project_terminal.core.domain.project import utcnow
from project_terminal.core.interfaces.repositories_interface import INoteLockService

logger = logging.getLogger(__name__)


class InMemoryNoteLockService(INoteLockService):
    """Note locks kept in memory; an expired lock counts as released."""

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_NOTE_LOCK_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._locks: dict[str, NoteLock] = {}

    async def acquire(
        self, note_id: str, project_id: str, user_id: str, user_email: str | None = None
    ) -> NoteLock:
        now = self._clock()
        current = await self.get_active_lock(note_id)
        if current is not None and current.user_id != user_id:
            raise NoteLockedError(
                f"Note is being edited by {current.user_email or current.user_id}",
                details={"note_id": note_id, "locked_by": current.user_id},
            )
        if current is not None:
            lock = current.renewed(self._ttl, now)
        else:
            lock = NoteLock(
                note_id=note_id,
                project_id=project_id,
                user_id=user_id,
                user_email=user_email,
                locked_at=now,
                last_heartbeat=now,
                expires_at=now + self._ttl,
            )
        self._locks[note_id] = lock
        return lock

    async def heartbeat(self, note_id: str, user_id: str) -> NoteLock | None:
        current = await self.get_active_lock(note_id)
        if current is None or current.user_id != user_id:
            return None
        lock = current.renewed(self._ttl, self._clock())
        self._locks[note_id] = lock
        return lock

    async def release(self, note_id: str, user_id: str) -> bool:
        current = self._locks.get(note_id)
        if current is None or current.user_id != user_id:
            return False
        del self._locks[note_id]
        return True

    async def get_active_lock(self, note_id: str) -> NoteLock | None:
        lock = self._locks.get(note_id)
        if lock is None:
            return None
        if lock.is_expired(self._clock()):
            logger.debug("Dropping expired lock on note %s", note_id)
            del self._locks[note_id]
            return None
        return lock
