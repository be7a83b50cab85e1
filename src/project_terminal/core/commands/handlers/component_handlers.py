"""
Handlers for component commands.

Components are grouped by feature and classified by a category and a
category-specific type.
"""

from __future__ import annotations

from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    find_item,
    flag_values,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import (
    COMPONENT_TYPES_BY_CATEGORY,
    Component,
    Project,
    utcnow,
)
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

COMPONENT_FLAGS = ("feature", "category", "type", "title", "content")
REQUIRED_COMPONENT_FLAGS = ("feature", "category", "type", "title")
CATEGORIES = tuple(COMPONENT_TYPES_BY_CATEGORY)


def validate_category_and_type(category: str, component_type: str) -> tuple[str, str]:
    category = check_choice(category, CATEGORIES, "category")
    component_type = check_choice(
        component_type, COMPONENT_TYPES_BY_CATEGORY[category], f"type for {category}"
    )
    return category, component_type


def find_component(project: Project, identifier: str) -> Component:
    component = find_item(project.components, identifier, lambda c: c.title)
    if component is None:
        raise HandlerError(
            f'Component not found: "{identifier}"', suggestions=["/view components"]
        )
    return component


def component_summary(index: int, component: Component) -> dict[str, Any]:
    return {
        "index": index,
        "id": component.id,
        "feature": component.feature,
        "category": component.category,
        "type": component.type,
        "title": component.title,
        "content": component.content,
        "relationshipCount": len(component.relationships),
    }


def _component_steps(component: Component | None = None) -> list[dict[str, Any]]:
    category = component.category if component else "frontend"
    return [
        {
            "id": "feature",
            "label": "Feature",
            "type": "text",
            "required": True,
            "placeholder": "Enter feature name",
            "value": component.feature if component else None,
        },
        {
            "id": "category",
            "label": "Category",
            "type": "select",
            "options": list(CATEGORIES),
            "required": True,
            "value": category,
        },
        {
            "id": "type",
            "label": "Type",
            "type": "select",
            "options": list(COMPONENT_TYPES_BY_CATEGORY[category]),
            "required": True,
            "value": component.type if component else "component",
            "dependsOn": "category",
        },
        {
            "id": "title",
            "label": "Title",
            "type": "text",
            "required": True,
            "placeholder": "Component title",
            "value": component.title if component else None,
        },
        {
            "id": "content",
            "label": "Content",
            "type": "textarea",
            "required": False,
            "placeholder": "Describe the component",
            "value": component.content if component else None,
        },
    ]


def _types_by_category() -> dict[str, list[str]]:
    return {category: list(types) for category, types in COMPONENT_TYPES_BY_CATEGORY.items()}


class ComponentHandlers(BaseCommandHandler):
    """Add, view, edit and delete components."""

    @handles(CommandType.ADD_COMPONENT)
    async def add_component(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add component - Interactive wizard",
                '/add component --feature="Auth" --category=backend --type=service --title="Login API"',
                "/help add component",
            ],
        )

        values = flag_values(context.parsed.flags, COMPONENT_FLAGS)
        if any(not values.get(name, "").strip() for name in REQUIRED_COMPONENT_FLAGS):
            return prompt_response(
                "Add New Component",
                "add_component",
                steps=_component_steps(),
                values=values,
                extra={"typesByCategory": _types_by_category()},
                metadata=self.project_metadata(project, "add_component"),
            )

        category, component_type = validate_category_and_type(values["category"], values["type"])
        title = values["title"].strip()
        if any(c.title.lower() == title.lower() for c in project.components):
            raise HandlerError(f'A component named "{title}" already exists')

        component = Component(
            feature=values["feature"].strip(),
            category=category,
            type=component_type,
            title=title,
            content=values.get("content", "").strip(),
        )
        project.components.append(component)
        await self.save(project)
        return self.success_response(
            f'Added {category}/{component_type} component "{title}" to feature "{component.feature}"',
            project,
            "add_component",
            {"componentId": component.id},
        )

    @handles(CommandType.VIEW_COMPONENTS)
    async def view_components(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        flags = context.parsed.flags
        feature = flags.value("feature")
        category = flags.value("category")

        indexed = list(enumerate(project.components, start=1))
        if feature:
            indexed = [(i, c) for i, c in indexed if c.feature.lower() == feature.lower()]
        if category:
            indexed = [(i, c) for i, c in indexed if c.category == category.lower()]

        if not indexed:
            return info_response(
                f"No components found in {project.name}",
                suggestions=["/add component"],
                metadata=self.project_metadata(project, "view_components"),
            )

        features: dict[str, list[dict[str, Any]]] = {}
        for index, component in indexed:
            features.setdefault(component.feature, []).append(component_summary(index, component))
        return self.data_response(
            f"Components in {project.name} ({len(indexed)})",
            project,
            "view_components",
            {"features": features, "filters": {"feature": feature, "category": category}},
        )

    @handles(CommandType.EDIT_COMPONENT)
    async def edit_component(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "edit_component_selector", "Select a component to edit")

        component = find_component(project, parsed.args[0])
        values = flag_values(parsed.flags, COMPONENT_FLAGS)
        if not values:
            return prompt_response(
                f'Edit Component: "{component.title}"',
                "edit_component",
                steps=_component_steps(component),
                extra={"componentId": component.id, "typesByCategory": _types_by_category()},
                metadata=self.project_metadata(project, "edit_component"),
            )

        category, component_type = validate_category_and_type(
            values.get("category", component.category),
            values.get("type", component.type),
        )
        if "title" in values:
            title = values["title"].strip()
            if not title:
                raise HandlerError("Component title cannot be empty")
            component.title = title
        if "feature" in values:
            component.feature = values["feature"].strip() or component.feature
        if "content" in values:
            component.content = values["content"].strip()
        component.category = category
        component.type = component_type
        component.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Updated component: "{component.title}"',
            project,
            "edit_component",
            {"componentId": component.id},
        )

    @handles(CommandType.DELETE_COMPONENT)
    async def delete_component(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(
                project, "delete_component_selector", "Select a component to delete"
            )

        component = find_component(project, parsed.args[0])
        if not self.is_confirmed(parsed.flags):
            return prompt_response(
                f'Delete component "{component.title}" and its relationships?',
                "delete_component_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": component.title,
                        "itemType": "component",
                        "relationshipCount": len(component.relationships),
                        "command": f"/delete component {component.id} --confirm",
                    }
                },
                suggestions=[f"/delete component {component.id} --confirm"],
                metadata=self.project_metadata(project, "delete_component_confirm"),
            )

        project.components = [c for c in project.components if c.id != component.id]
        for other in project.components:
            other.relationships = [
                r for r in other.relationships if r.target_id != component.id
            ]
        await self.save(project)
        return self.success_response(
            f'Deleted component: "{component.title}"', project, "delete_component"
        )

    def _selector(self, project: Project, wizard_type: str, message: str) -> CommandResponse:
        if not project.components:
            raise HandlerError(
                f"No components in {project.name}", suggestions=["/add component"]
            )
        return prompt_response(
            message,
            wizard_type,
            extra={
                "components": [
                    component_summary(i, c) for i, c in enumerate(project.components, start=1)
                ]
            },
            metadata=self.project_metadata(project, wizard_type),
        )
