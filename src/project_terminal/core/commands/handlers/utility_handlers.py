"""
Handlers for help, project switching, export, summaries and the wizards.

Wizards are stateless: each one answers with a prompt describing the fields
it needs, and the client resubmits the same command with those fields as
flags. A resubmission carrying the required flags completes the wizard.
"""

from __future__ import annotations

import logging
from typing import Any

from project_terminal.constants import DEMO_MODE_MESSAGE, HELP_SUGGESTION
from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    flag_values,
    handles,
)
from project_terminal.core.commands.handlers.settings_handlers import (
    DEPLOYMENT_FLAGS,
    SettingsHandlers,
    deployment_dict,
)
from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.config.app_config import TerminalConfig
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import DEPLOYMENT_STATUSES, Project
from project_terminal.core.domain.responses import (
    CommandResponse,
    ResponseType,
    prompt_response,
    response_metadata,
)
from project_terminal.core.interfaces.repositories_interface import (
    INoteLockService,
    IProjectRepository,
)
from project_terminal.core.services.project_resolver import (
    NO_PROJECTS_FOUND,
    project_summary,
)

logger = logging.getLogger(__name__)

NEW_PROJECT_FLAGS = ("name", "description", "category", "tags")
SETUP_FLAGS = ("description", "category", "tags")


def _split_tags(raw: str) -> list[str]:
    tags: list[str] = []
    for tag in raw.split(","):
        tag = tag.strip()
        if tag and tag.lower() not in (t.lower() for t in tags):
            tags.append(tag)
    return tags


class UtilityHandlers(BaseCommandHandler):
    """Help, swap, export, summary and wizard commands."""

    def __init__(
        self,
        repository: IProjectRepository,
        lock_service: INoteLockService | None = None,
        config: TerminalConfig | None = None,
        parser: CommandParser | None = None,
    ) -> None:
        super().__init__(repository, lock_service, config)
        self._parser = parser or CommandParser()

    @handles(CommandType.HELP)
    async def help(self, context: CommandContext) -> CommandResponse:
        topic = context.parsed.text.strip()
        if topic:
            metadata = self._parser.find_command(topic.lstrip(self._parser.command_prefix))
            if metadata is None:
                raise HandlerError(
                    f'No help found for "{topic}"', suggestions=[HELP_SUGGESTION]
                )
            return CommandResponse(
                type=ResponseType.DATA,
                message=f"Help: {metadata.value}",
                data={
                    "command": {
                        "syntax": metadata.syntax,
                        "description": metadata.description,
                        "examples": list(metadata.examples),
                        "aliases": self._parser.get_aliases_for_type(metadata.type),
                        "requiresProject": metadata.requires_project,
                    }
                },
            )

        categories: dict[str, list[dict[str, Any]]] = {}
        for metadata in self._parser.get_all_commands():
            categories.setdefault(metadata.category, []).append(
                {
                    "value": metadata.value,
                    "syntax": metadata.syntax,
                    "description": metadata.description,
                }
            )
        return CommandResponse(
            type=ResponseType.DATA,
            message="Available commands",
            data={
                "categories": [
                    {"name": name, "commands": commands}
                    for name, commands in categories.items()
                ]
            },
            suggestions=["/help add todo"],
        )

    @handles(CommandType.SWAP_PROJECT)
    async def swap_project(self, context: CommandContext) -> CommandResponse:
        if context.project is not None:
            project = context.project
            return CommandResponse(
                type=ResponseType.SUCCESS,
                message=f"Switched to {project.name}",
                data={"project": project_summary(project)},
                metadata=response_metadata(project.id, project.name, "swap_project"),
            )

        projects = await self._repository.find_accessible(context.identity.user_id)
        if not projects:
            raise HandlerError(NO_PROJECTS_FOUND, suggestions=["/wizard new"])
        return prompt_response(
            "Select a project",
            "select_project",
            extra={"projects": [project_summary(p) for p in projects]},
            suggestions=[f"/swap @{p.name}" for p in projects[:5]],
        )

    @handles(CommandType.EXPORT)
    async def export(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        base_url = self._config.frontend_url.rstrip("/")
        return self.success_response(
            f"Export ready for {project.name}",
            project,
            "export",
            {
                "exportUrl": f"{base_url}/api/projects/{project.id}/export",
                "formats": ["json", "markdown"],
                "project": project_summary(project),
            },
        )

    @handles(CommandType.SUMMARY)
    async def summary(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        completed = sum(1 for t in project.todos if t.completed)
        relationships = sum(len(c.relationships) for c in project.components) // 2
        return self.data_response(
            f"Summary of {project.name}",
            project,
            "summary",
            {
                "project": project_summary(project),
                "counts": {
                    "todos": len(project.todos),
                    "completedTodos": completed,
                    "notes": len(project.notes),
                    "devlog": len(project.devlog),
                    "components": len(project.components),
                    "features": len({c.feature for c in project.components}),
                    "relationships": relationships,
                    "stack": len(project.stack),
                    "members": len(project.members),
                },
                "tags": list(project.tags),
                "deployment": deployment_dict(project),
                "isPublic": project.is_public,
            },
        )

    @handles(CommandType.WIZARD_NEW)
    async def wizard_new(self, context: CommandContext) -> CommandResponse:
        values = flag_values(context.parsed.flags, NEW_PROJECT_FLAGS)
        name = values.get("name", "").strip()
        if not name:
            return prompt_response(
                "Create New Project",
                "wizard_new",
                steps=[
                    {"id": "name", "label": "Project name", "type": "text", "required": True},
                    {"id": "description", "label": "Description", "type": "textarea", "required": False},
                    {"id": "category", "label": "Category", "type": "text", "required": False, "value": "general"},
                    {"id": "tags", "label": "Tags (comma separated)", "type": "text", "required": False},
                ],
                values=values,
            )

        if context.identity.is_demo:
            raise HandlerError(DEMO_MODE_MESSAGE, details={"demo": True})
        user_id = context.identity.user_id
        if await self._repository.find_by_name(user_id, name) is not None:
            raise HandlerError(f'You already have a project named "{name}"')

        project = Project(
            name=name,
            description=values.get("description", "").strip(),
            category=values.get("category", "general").strip() or "general",
            tags=_split_tags(values.get("tags", "")),
            owner_id=user_id,
        )
        await self.save(project)
        logger.info("Created project %s for %s", project.id, user_id)
        return self.success_response(
            f"Created project {project.name}",
            project,
            "wizard_new",
            {"project": project_summary(project)},
        )

    @handles(CommandType.WIZARD_SETUP)
    async def wizard_setup(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        values = flag_values(context.parsed.flags, SETUP_FLAGS)
        if not values:
            return prompt_response(
                f"Set up {project.name}",
                "wizard_setup",
                steps=[
                    {"id": "description", "label": "Description", "type": "textarea", "required": False, "value": project.description},
                    {"id": "category", "label": "Category", "type": "text", "required": False, "value": project.category},
                    {"id": "tags", "label": "Tags (comma separated)", "type": "text", "required": False, "value": ", ".join(project.tags)},
                ],
                extra={"projectId": project.id},
                metadata=self.project_metadata(project, "wizard_setup"),
            )

        if "description" in values:
            project.description = values["description"].strip()
        if "category" in values:
            project.category = values["category"].strip() or project.category
        if "tags" in values:
            project.tags = _split_tags(values["tags"])
        await self.save(project)
        return self.success_response(
            f"Updated setup of {project.name}", project, "wizard_setup"
        )

    @handles(CommandType.WIZARD_DEPLOY)
    async def wizard_deploy(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        values = flag_values(context.parsed.flags, DEPLOYMENT_FLAGS)
        if not values:
            current = deployment_dict(project)
            return prompt_response(
                f"Deploy {project.name}",
                "wizard_deploy",
                steps=[
                    {"id": "url", "label": "Live URL", "type": "text", "required": False, "value": current["url"]},
                    {"id": "platform", "label": "Platform", "type": "text", "required": False, "value": current["platform"]},
                    {
                        "id": "status",
                        "label": "Status",
                        "type": "select",
                        "options": list(DEPLOYMENT_STATUSES),
                        "required": False,
                        "value": current["status"],
                    },
                    {"id": "branch", "label": "Branch", "type": "text", "required": False, "value": current["branch"]},
                ],
                extra={"projectId": project.id},
                metadata=self.project_metadata(project, "wizard_deploy"),
            )

        SettingsHandlers.apply_deployment(project, values)
        await self.save(project)
        return self.success_response(
            f"Updated deployment of {project.name}",
            project,
            "wizard_deploy",
            {"deployment": deployment_dict(project)},
        )
