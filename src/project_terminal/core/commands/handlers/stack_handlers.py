from __future__ import annotations

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    flag_values,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import STACK_CATEGORIES, StackItem
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

STACK_FLAGS = ("name", "category", "version", "description")


class StackHandlers(BaseCommandHandler):
    """Manage the technologies and packages a project uses."""

    @handles(CommandType.ADD_STACK)
    async def add_stack(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add stack - Interactive wizard",
                "/add stack --name=React --category=framework --version=18.2.0",
            ],
        )

        values = flag_values(context.parsed.flags, STACK_FLAGS)
        if not values.get("name", "").strip() or not values.get("category", "").strip():
            return prompt_response(
                "Add to Stack",
                "add_stack",
                steps=[
                    {"id": "name", "label": "Name", "type": "text", "required": True},
                    {
                        "id": "category",
                        "label": "Category",
                        "type": "select",
                        "options": list(STACK_CATEGORIES),
                        "required": True,
                    },
                    {"id": "version", "label": "Version", "type": "text", "required": False},
                    {"id": "description", "label": "Description", "type": "text", "required": False},
                ],
                values=values,
                metadata=self.project_metadata(project, "add_stack"),
            )

        name = values["name"].strip()
        category = check_choice(values["category"], STACK_CATEGORIES, "category")
        if any(item.name.lower() == name.lower() for item in project.stack):
            raise HandlerError(
                f'"{name}" is already in the stack', suggestions=["/view stack"]
            )

        item = StackItem(
            name=name,
            category=category,
            version=values.get("version", "").strip(),
            description=values.get("description", "").strip(),
        )
        project.stack.append(item)
        await self.save(project)
        version = f" {item.version}" if item.version else ""
        return self.success_response(
            f"Added {item.name}{version} ({category}) to {project.name}",
            project,
            "add_stack",
            {"stackItemId": item.id},
        )

    @handles(CommandType.VIEW_STACK)
    async def view_stack(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        if not project.stack:
            return info_response(
                f"No technologies in the stack of {project.name}",
                suggestions=["/add stack"],
                metadata=self.project_metadata(project, "view_stack"),
            )

        categories: dict[str, list[dict[str, str]]] = {}
        for item in project.stack:
            categories.setdefault(item.category, []).append(
                {
                    "id": item.id,
                    "name": item.name,
                    "version": item.version,
                    "description": item.description,
                }
            )
        return self.data_response(
            f"Stack of {project.name} ({len(project.stack)} items)",
            project,
            "view_stack",
            {"categories": categories},
        )

    @handles(CommandType.REMOVE_STACK)
    async def remove_stack(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        name = (context.parsed.flags.value("name") or context.parsed.text).strip()
        if not name:
            raise HandlerError("Usage: /remove stack <name>", suggestions=["/view stack"])

        remaining = [item for item in project.stack if item.name.lower() != name.lower()]
        if len(remaining) == len(project.stack):
            raise HandlerError(f'"{name}" is not in the stack', suggestions=["/view stack"])

        project.stack = remaining
        await self.save(project)
        return self.success_response(
            f"Removed {name} from {project.name}", project, "remove_stack"
        )
