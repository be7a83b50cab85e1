"""
Handlers for relationships between components.

A relationship is stored twice: on the source component pointing at the
target, and on the target pointing back at the source. Both entries share
one id so that edits and deletes keep them in step.
"""

from __future__ import annotations

from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    flag_values,
    handles,
)
from project_terminal.core.commands.handlers.component_handlers import (
    component_summary,
    find_component,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import (
    RELATIONSHIP_TYPES,
    Component,
    Project,
    Relationship,
    new_id,
)
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

RELATIONSHIP_FLAGS = ("source", "target", "type", "description")


def _find_relationship(
    project: Project, component: Component, identifier: str
) -> Relationship:
    for relationship in component.relationships:
        if relationship.id == identifier:
            return relationship

    if identifier.isdigit():
        index = int(identifier)
        if 0 < index <= len(component.relationships):
            return component.relationships[index - 1]

    wanted = identifier.lower()
    for relationship in component.relationships:
        target = project.component_by_id(relationship.target_id)
        if target is not None and target.title.lower() == wanted:
            return relationship

    raise HandlerError(
        f'Relationship not found: "{identifier}"',
        suggestions=[f'/view relationships "{component.title}"'],
    )


def _inverse_of(project: Project, relationship: Relationship, source: Component) -> Relationship | None:
    target = project.component_by_id(relationship.target_id)
    if target is None:
        return None
    for candidate in target.relationships:
        if candidate.id == relationship.id and candidate.target_id == source.id:
            return candidate
    return None


def _relationship_summary(
    project: Project, index: int, relationship: Relationship
) -> dict[str, Any]:
    target = project.component_by_id(relationship.target_id)
    return {
        "index": index,
        "id": relationship.id,
        "type": relationship.relation_type,
        "description": relationship.description,
        "targetId": relationship.target_id,
        "targetTitle": target.title if target else None,
    }


class RelationshipHandlers(BaseCommandHandler):
    """Add, view, edit and delete component relationships."""

    @handles(CommandType.ADD_RELATIONSHIP)
    async def add_relationship(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add relationship - Interactive wizard",
                '/add relationship --source="Login API" --target="User DB" --type=uses',
            ],
        )

        values = flag_values(context.parsed.flags, RELATIONSHIP_FLAGS)
        if not all(values.get(name, "").strip() for name in ("source", "target", "type")):
            if len(project.components) < 2:
                raise HandlerError(
                    "You need at least two components to create a relationship",
                    suggestions=["/add component"],
                )
            return prompt_response(
                "Add Relationship",
                "add_relationship",
                steps=[
                    {"id": "source", "label": "Source component", "type": "select", "required": True},
                    {"id": "target", "label": "Target component", "type": "select", "required": True},
                    {
                        "id": "type",
                        "label": "Relationship type",
                        "type": "select",
                        "options": list(RELATIONSHIP_TYPES),
                        "required": True,
                        "value": "uses",
                    },
                    {"id": "description", "label": "Description", "type": "text", "required": False},
                ],
                values=values,
                extra={
                    "components": [
                        component_summary(i, c) for i, c in enumerate(project.components, start=1)
                    ]
                },
                metadata=self.project_metadata(project, "add_relationship"),
            )

        relation_type = check_choice(values["type"], RELATIONSHIP_TYPES, "relationship type")
        source = find_component(project, values["source"])
        target = find_component(project, values["target"])
        if source.id == target.id:
            raise HandlerError("A component cannot have a relationship with itself")
        if any(r.target_id == target.id for r in source.relationships):
            raise HandlerError(
                f'Relationship already exists between "{source.title}" and "{target.title}"',
                suggestions=[f'/view relationships "{source.title}"'],
            )

        relationship_id = new_id()
        description = values.get("description", "").strip()
        source.relationships.append(
            Relationship(
                id=relationship_id,
                target_id=target.id,
                relation_type=relation_type,
                description=description,
            )
        )
        target.relationships.append(
            Relationship(
                id=relationship_id,
                target_id=source.id,
                relation_type=relation_type,
                description=description,
            )
        )
        await self.save(project)
        return self.success_response(
            f'Linked "{source.title}" {relation_type} "{target.title}"',
            project,
            "add_relationship",
            {"relationshipId": relationship_id},
        )

    @handles(CommandType.VIEW_RELATIONSHIPS)
    async def view_relationships(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            linked = [c for c in project.components if c.relationships]
            if not linked:
                return info_response(
                    f"No relationships in {project.name}",
                    suggestions=["/add relationship"],
                    metadata=self.project_metadata(project, "view_relationships"),
                )
            return prompt_response(
                "Select a component to view its relationships",
                "view_relationships_selector",
                extra={
                    "components": [
                        component_summary(i, c)
                        for i, c in enumerate(project.components, start=1)
                        if c.relationships
                    ]
                },
                metadata=self.project_metadata(project, "view_relationships_selector"),
            )

        component = find_component(project, parsed.text)
        relationships = [
            _relationship_summary(project, i, r)
            for i, r in enumerate(component.relationships, start=1)
        ]
        if not relationships:
            return info_response(
                f'"{component.title}" has no relationships',
                suggestions=[f'/add relationship --source="{component.title}"'],
                metadata=self.project_metadata(project, "view_relationships"),
            )
        return self.data_response(
            f'Relationships of "{component.title}" ({len(relationships)})',
            project,
            "view_relationships",
            {"component": component_summary(0, component), "relationships": relationships},
        )

    @handles(CommandType.EDIT_RELATIONSHIP)
    async def edit_relationship(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        new_type = parsed.flags.value("type")
        if len(parsed.args) < 2 or not new_type:
            raise HandlerError(
                "Usage: /edit relationship <component> <relationship> --type=uses|depends_on",
                suggestions=['/edit relationship "Login API" 1 --type=depends_on'],
            )

        relation_type = check_choice(new_type, RELATIONSHIP_TYPES, "relationship type")
        component = find_component(project, parsed.args[0])
        relationship = _find_relationship(project, component, parsed.args[1])
        inverse = _inverse_of(project, relationship, component)

        description = parsed.flags.value("description")
        for entry in (relationship, inverse):
            if entry is None:
                continue
            entry.relation_type = relation_type
            if description is not None:
                entry.description = description.strip()
        await self.save(project)
        return self.success_response(
            f"Updated relationship to {relation_type}",
            project,
            "edit_relationship",
            {"relationshipId": relationship.id},
        )

    @handles(CommandType.DELETE_RELATIONSHIP)
    async def delete_relationship(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if len(parsed.args) < 2:
            raise HandlerError(
                "Usage: /delete relationship <component> <relationship>",
                suggestions=['/delete relationship "Login API" 1'],
            )

        component = find_component(project, parsed.args[0])
        relationship = _find_relationship(project, component, parsed.args[1])
        target = project.component_by_id(relationship.target_id)
        target_title = target.title if target else relationship.target_id

        if not self.is_confirmed(parsed.flags):
            command = f"/delete relationship {component.id} {relationship.id} --confirm"
            return prompt_response(
                f'Remove relationship "{component.title}" {relationship.relation_type} "{target_title}"?',
                "delete_relationship_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": f"{component.title} -> {target_title}",
                        "itemType": "relationship",
                        "command": command,
                    }
                },
                suggestions=[command],
                metadata=self.project_metadata(project, "delete_relationship_confirm"),
            )

        component.relationships = [r for r in component.relationships if r.id != relationship.id]
        if target is not None:
            target.relationships = [r for r in target.relationships if r.id != relationship.id]
        await self.save(project)
        return self.success_response(
            f'Removed relationship between "{component.title}" and "{target_title}"',
            project,
            "delete_relationship",
        )
