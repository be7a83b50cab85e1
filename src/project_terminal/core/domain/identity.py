from __future__ import annotations

from pydantic import ConfigDict

from project_terminal.core.interfaces.model_bases import DomainModel


class UserIdentity(DomainModel):
    """The caller of a command. Authentication happens upstream."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str | None = None
    name: str | None = None
    is_demo: bool = False

    @property
    def id(self) -> str:
        return self.user_id
