from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import ConfigDict

from project_terminal.core.domain.project import utcnow
from project_terminal.core.interfaces.model_bases import DomainModel


class NoteLock(DomainModel):
    """Advisory edit lock held by one user on one note."""

    model_config = ConfigDict(frozen=True)

    note_id: str
    project_id: str
    user_id: str
    user_email: str | None = None
    locked_at: datetime
    last_heartbeat: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def renewed(self, ttl: timedelta, now: datetime | None = None) -> NoteLock:
        now = now or utcnow()
        return self.model_copy(update={"last_heartbeat": now, "expires_at": now + ttl})
