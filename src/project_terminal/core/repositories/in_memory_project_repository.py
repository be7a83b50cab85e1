from __future__ import annotations

import logging

from project_terminal.core.domain.project import Project
from project_terminal.core.interfaces.repositories_interface import IProjectRepository

logger = logging.getLogger(__name__)


class InMemoryProjectRepository(IProjectRepository):
    """In-memory implementation of the project repository.

    Projects are copied on the way in and on the way out, so changes a
    handler makes to a loaded project are only visible after ``save``.
    It is suitable for development and testing.
    """

    def __init__(self, projects: list[Project] | None = None) -> None:
        self._projects: dict[str, Project] = {}
        for project in projects or []:
            self._projects[project.id] = project.model_copy(deep=True)

    async def get_by_id(self, id: str) -> Project | None:
        project = self._projects.get(id)
        return project.model_copy(deep=True) if project is not None else None

    async def find_accessible(self, user_id: str) -> list[Project]:
        owned = [p for p in self._projects.values() if p.owner_id == user_id]
        shared = [
            p
            for p in self._projects.values()
            if p.owner_id != user_id and p.member(user_id) is not None
        ]
        return [p.model_copy(deep=True) for p in owned + shared]

    async def find_by_name(self, user_id: str, name: str) -> Project | None:
        wanted = name.strip().lower()
        for project in await self.find_accessible(user_id):
            if project.name.lower() == wanted:
                return project
        return None

    async def save(self, project: Project) -> Project:
        project.touch()
        self._projects[project.id] = project.model_copy(deep=True)
        logger.debug("Saved project %s", project.id)
        return project
