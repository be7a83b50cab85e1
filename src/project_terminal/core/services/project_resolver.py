"""
Resolution of the project a command targets.
"""

from __future__ import annotations

import logging
from typing import Any

from project_terminal.core.common.exceptions import ProjectContextError
from project_terminal.core.domain.identity import UserIdentity
from project_terminal.core.domain.project import Project, Role
from project_terminal.core.interfaces.repositories_interface import IProjectRepository

logger = logging.getLogger(__name__)

MAX_NAME_SUGGESTIONS = 5
NO_PROJECT_CONTEXT = "No project context"
NO_PROJECTS_FOUND = "No projects found. Create a project first with /wizard new"


def project_summary(project: Project) -> dict[str, Any]:
    return {"id": project.id, "name": project.name, "description": project.description}


class ProjectResolver:
    """Finds the target project of a command.

    Priority: the ``@mention`` in the command, then the caller's current
    project. Without either, resolution fails and lists the projects the
    caller could pick from.
    """

    def __init__(self, repository: IProjectRepository) -> None:
        self._repository = repository

    async def resolve(
        self,
        identity: UserIdentity,
        mention: str | None,
        current_project_id: str | None = None,
    ) -> Project:
        """
        Resolve the project for a command.

        Raises:
            ProjectContextError: If the mention matches nothing accessible, or
                if there is neither a mention nor an accessible current project.
        """
        if mention:
            project = await self._repository.find_by_name(identity.user_id, mention)
            if project is not None:
                return project
            raise ProjectContextError(
                f'Project "@{mention}" not found',
                details={"mention": mention},
                suggestions=await self._did_you_mean(identity, mention),
            )

        if current_project_id:
            project = await self._repository.get_by_id(current_project_id)
            if project is not None and project.role_of(identity.user_id) is not None:
                return project
            logger.debug(
                "Current project %s is not accessible for %s",
                current_project_id,
                identity.user_id,
            )

        accessible = await self._repository.find_accessible(identity.user_id)
        if not accessible:
            raise ProjectContextError(NO_PROJECTS_FOUND, suggestions=["/wizard new"])
        raise ProjectContextError(
            f"{NO_PROJECT_CONTEXT}. Specify a project using @projectname or select one.",
            details={"projects": [project_summary(p) for p in accessible]},
            suggestions=[f"/swap @{p.name}" for p in accessible[:MAX_NAME_SUGGESTIONS]],
        )

    async def accessible_projects(self, identity: UserIdentity) -> list[Project]:
        return await self._repository.find_accessible(identity.user_id)

    @staticmethod
    def role_for(project: Project, user_id: str) -> Role | None:
        return project.role_of(user_id)

    async def _did_you_mean(self, identity: UserIdentity, mention: str) -> list[str]:
        needle = mention.lower()
        names = [
            p.name
            for p in await self._repository.find_accessible(identity.user_id)
            if needle in p.name.lower()
        ][:MAX_NAME_SUGGESTIONS]
        if not names:
            return []
        return [f"Did you mean: {', '.join(names)}?"]
