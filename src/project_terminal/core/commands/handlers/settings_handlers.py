"""
Handlers for project settings, tags, deployment data and public sharing.
"""

from __future__ import annotations

import re
from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    flag_values,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.config.config_loader import str_to_bool
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import DEPLOYMENT_STATUSES, Project
from project_terminal.core.domain.responses import CommandResponse, info_response

DEPLOYMENT_FLAGS = ("url", "platform", "status", "branch")
BOOLEAN_WORDS = ("true", "false", "yes", "no", "on", "off", "1", "0")
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000
MAX_TAG_LENGTH = 30
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


def deployment_dict(project: Project) -> dict[str, Any]:
    deployment = project.deployment
    return {
        "url": deployment.live_url,
        "platform": deployment.platform,
        "status": deployment.status,
        "branch": deployment.branch,
    }


class SettingsHandlers(BaseCommandHandler):
    """Project settings commands."""

    @handles(CommandType.VIEW_SETTINGS)
    async def view_settings(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        return self.data_response(
            f"Settings for {project.name}",
            project,
            "view_settings",
            {
                "settings": {
                    "name": project.name,
                    "description": project.description,
                    "category": project.category,
                    "tags": list(project.tags),
                    "isPublic": project.is_public,
                    "publicSlug": project.public_slug,
                    "createdAt": project.created_at.isoformat(),
                    "updatedAt": project.updated_at.isoformat(),
                }
            },
        )

    @handles(CommandType.SET_NAME)
    async def set_name(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        name = (context.parsed.flags.value("name") or context.parsed.text).strip()
        if not name:
            raise HandlerError("Project name cannot be empty", suggestions=['/set name "New name"'])
        if len(name) > MAX_NAME_LENGTH:
            raise HandlerError(f"Project name must be at most {MAX_NAME_LENGTH} characters")

        existing = await self._repository.find_by_name(context.identity.user_id, name)
        if existing is not None and existing.id != project.id:
            raise HandlerError(f'You already have a project named "{name}"')

        old_name = project.name
        project.name = name
        await self.save(project)
        return self.success_response(
            f'Renamed project "{old_name}" to "{name}"', project, "set_name"
        )

    @handles(CommandType.SET_DESCRIPTION)
    async def set_description(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        description = (context.parsed.flags.value("description") or context.parsed.text).strip()
        if not description:
            raise HandlerError("Description cannot be empty")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise HandlerError(
                f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )

        project.description = description
        await self.save(project)
        return self.success_response(
            f"Updated description of {project.name}", project, "set_description"
        )

    @handles(CommandType.ADD_TAG)
    async def add_tag(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        tag = self._tag_from(context)
        if len(tag) > MAX_TAG_LENGTH:
            raise HandlerError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
        if any(existing.lower() == tag.lower() for existing in project.tags):
            raise HandlerError(f'Tag "{tag}" already exists on {project.name}')

        project.tags.append(tag)
        await self.save(project)
        return self.success_response(
            f'Added tag "{tag}" to {project.name}', project, "add_tag", {"tags": list(project.tags)}
        )

    @handles(CommandType.REMOVE_TAG)
    async def remove_tag(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        tag = self._tag_from(context)
        remaining = [existing for existing in project.tags if existing.lower() != tag.lower()]
        if len(remaining) == len(project.tags):
            raise HandlerError(
                f'Tag "{tag}" not found on {project.name}', suggestions=["/view settings"]
            )

        project.tags = remaining
        await self.save(project)
        return self.success_response(
            f'Removed tag "{tag}" from {project.name}',
            project,
            "remove_tag",
            {"tags": list(project.tags)},
        )

    @handles(CommandType.VIEW_DEPLOYMENT)
    async def view_deployment(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        deployment = deployment_dict(project)
        if not any(deployment.values()):
            return info_response(
                f"No deployment information for {project.name}",
                suggestions=["/set deployment --url=https://example.com --platform=vercel"],
                metadata=self.project_metadata(project, "view_deployment"),
            )
        return self.data_response(
            f"Deployment of {project.name}",
            project,
            "view_deployment",
            {"deployment": deployment},
        )

    @handles(CommandType.SET_DEPLOYMENT)
    async def set_deployment(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        values = flag_values(context.parsed.flags, DEPLOYMENT_FLAGS)
        if not values:
            raise HandlerError(
                "Specify at least one of --url, --platform, --status or --branch",
                suggestions=["/set deployment --url=https://example.com --status=active"],
            )
        self.apply_deployment(project, values)
        await self.save(project)
        return self.success_response(
            f"Updated deployment of {project.name}",
            project,
            "set_deployment",
            {"deployment": deployment_dict(project)},
        )

    @handles(CommandType.VIEW_PUBLIC)
    async def view_public(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        return self.data_response(
            f"{project.name} is {'public' if project.is_public else 'private'}",
            project,
            "view_public",
            {
                "isPublic": project.is_public,
                "slug": project.public_slug,
                "url": self._public_url(project) if project.is_public else None,
            },
        )

    @handles(CommandType.SET_PUBLIC)
    async def set_public(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if parsed.command == "make public":
            enabled = True
        elif parsed.command == "make private":
            enabled = False
        elif parsed.flags.has("enabled"):
            raw = parsed.flags.value("enabled")
            if raw is None:
                enabled = True
            else:
                enabled = str_to_bool(check_choice(raw, BOOLEAN_WORDS, "value for --enabled"))
        else:
            raise HandlerError(
                "Specify --enabled=true or --enabled=false",
                suggestions=["/set public --enabled=true --slug=my-project", "/make private"],
            )

        slug = parsed.flags.value("slug")
        if slug is not None:
            slug = slug.strip().lower()
            if not SLUG_PATTERN.match(slug):
                raise HandlerError(
                    f'Invalid slug "{slug}". Use lowercase letters, numbers and hyphens'
                )
            project.public_slug = slug
        elif enabled and not project.public_slug:
            project.public_slug = slugify(project.name) or project.id

        project.is_public = enabled
        await self.save(project)
        if enabled:
            message = f"{project.name} is now public at {self._public_url(project)}"
        else:
            message = f"{project.name} is now private"
        return self.success_response(
            message,
            project,
            "set_public",
            {"isPublic": project.is_public, "slug": project.public_slug},
        )

    # Internals

    @staticmethod
    def apply_deployment(project: Project, values: dict[str, str]) -> None:
        deployment = project.deployment
        if "status" in values:
            deployment.status = check_choice(values["status"], DEPLOYMENT_STATUSES, "status")
        if "url" in values:
            url = values["url"].strip()
            if url and not url.startswith(("http://", "https://")):
                raise HandlerError("Deployment URL must start with http:// or https://")
            deployment.live_url = url or None
        if "platform" in values:
            deployment.platform = values["platform"].strip() or None
        if "branch" in values:
            deployment.branch = values["branch"].strip() or None

    @staticmethod
    def _tag_from(context: CommandContext) -> str:
        tag = (context.parsed.flags.value("name") or context.parsed.text).strip()
        if not tag:
            raise HandlerError("A tag name is required", suggestions=["/add tag react"])
        return tag

    def _public_url(self, project: Project) -> str:
        return f"{self._config.frontend_url.rstrip('/')}/discover/{project.public_slug}"
