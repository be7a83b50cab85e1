"""
Handlers for subtasks.

A subtask is a todo whose ``parent_todo_id`` points at a top-level todo. It
is addressed either by its id or by ``<todo> <subtask index>``, where the
index counts only the subtasks of that todo.
"""

from __future__ import annotations

from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    find_item,
    flag_values,
    handles,
)
from project_terminal.core.commands.handlers.todo_handlers import (
    TODO_FLAGS,
    apply_todo_attributes,
    todo_steps,
    todo_summary,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import Project, Todo, utcnow
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

SUBTASK_FLAGS = ("parent", *TODO_FLAGS)


def _subtask_entry(project: Project, subtask: Todo) -> dict[str, Any]:
    siblings = project.subtasks_of(subtask.parent_todo_id or "")
    parent = next((t for t in project.todos if t.id == subtask.parent_todo_id), None)
    return {
        **todo_summary(siblings.index(subtask) + 1, subtask),
        "parentTodoId": subtask.parent_todo_id,
        "parentTitle": parent.title if parent else None,
    }


def _find_parent(project: Project, identifier: str) -> Todo:
    parent = find_item(project.top_level_todos(), identifier, lambda t: t.title)
    if parent is None:
        raise HandlerError(
            f'Parent todo not found: "{identifier}"', suggestions=["/view todos"]
        )
    return parent


class SubtaskHandlers(BaseCommandHandler):
    """Add, view, edit and delete subtasks."""

    @handles(CommandType.ADD_SUBTASK)
    async def add_subtask(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add subtask - Interactive wizard",
                '/add subtask --parent="parent todo" --title="subtask title"',
                "/help add subtask",
            ],
        )

        parents = project.top_level_todos()
        if not parents:
            raise HandlerError(
                "No parent todos found. Add a todo first.",
                suggestions=["/add todo", "/view todos"],
            )

        values = flag_values(context.parsed.flags, SUBTASK_FLAGS)
        if "parent" not in values or "title" not in values:
            parent_step = {
                "id": "parent",
                "label": "Parent Todo",
                "type": "select",
                "options": [{"value": t.id, "label": t.title} for t in parents],
                "required": True,
                "placeholder": "Select parent todo",
            }
            return prompt_response(
                "Add New Subtask",
                "add_subtask",
                steps=[parent_step, *todo_steps()],
                values=values,
                metadata=self.project_metadata(project, "add_subtask"),
            )

        parent = _find_parent(project, values["parent"])
        title = values["title"].strip()
        if not title:
            raise HandlerError("Subtask title cannot be empty", suggestions=["/help add subtask"])

        subtask = Todo(
            title=title,
            description=values.get("content", "").strip(),
            priority=parent.priority,
            parent_todo_id=parent.id,
            created_by=context.identity.user_id,
        )
        apply_todo_attributes(subtask, values)
        project.todos.append(subtask)
        await self.save(project)

        return self.success_response(
            f'Added subtask "{subtask.title}" to "{parent.title}"',
            project,
            "add_subtask",
            {"parentTodoId": parent.id, "subtask": _subtask_entry(project, subtask)},
        )

    @handles(CommandType.VIEW_SUBTASKS)
    async def view_subtasks(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        if not context.parsed.args:
            parents = project.top_level_todos()
            if not parents:
                raise HandlerError(f"No todos in {project.name}", suggestions=["/add todo"])
            return prompt_response(
                "Select a todo to view its subtasks",
                "view_subtasks_selector",
                extra={"todos": [todo_summary(i, t) for i, t in enumerate(parents, start=1)]},
                metadata=self.project_metadata(project, "view_subtasks_selector"),
            )

        parent = _find_parent(project, context.parsed.text)
        subtasks = project.subtasks_of(parent.id)
        if not subtasks:
            return info_response(
                f'No subtasks for "{parent.title}"',
                suggestions=[f'/add subtask --parent={parent.id} --title="subtask title"'],
                metadata=self.project_metadata(project, "view_subtasks"),
            )

        completed = sum(1 for s in subtasks if s.completed)
        return self.data_response(
            f'Subtasks of "{parent.title}" ({len(subtasks) - completed} pending, {completed} completed)',
            project,
            "view_subtasks",
            {
                "parentTodo": {"id": parent.id, "title": parent.title},
                "subtasks": [todo_summary(i, s) for i, s in enumerate(subtasks, start=1)],
            },
        )

    @handles(CommandType.EDIT_SUBTASK)
    async def edit_subtask(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "edit_subtask_selector", "edit")

        subtask = self._locate(project, parsed.args, "edit")
        values = flag_values(parsed.flags, TODO_FLAGS)
        if not values:
            return prompt_response(
                f'Edit Subtask: "{subtask.title}"',
                "edit_subtask",
                steps=todo_steps(subtask),
                extra={"subtaskId": subtask.id, "parentTodoId": subtask.parent_todo_id},
                metadata=self.project_metadata(project, "edit_subtask"),
            )

        if "title" in values:
            title = values["title"].strip()
            if not title:
                raise HandlerError("Subtask title cannot be empty")
            subtask.title = title
        if "content" in values:
            subtask.description = values["content"].strip()
        apply_todo_attributes(subtask, values)
        subtask.updated_at = utcnow()
        await self.save(project)

        return self.success_response(
            f'Updated subtask: "{subtask.title}"',
            project,
            "edit_subtask",
            {"subtaskId": subtask.id},
        )

    @handles(CommandType.DELETE_SUBTASK)
    async def delete_subtask(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "delete_subtask_selector", "delete")

        subtask = self._locate(project, parsed.args, "delete")
        if not self.is_confirmed(parsed.flags):
            return prompt_response(
                f'Delete subtask "{subtask.title}"?',
                "delete_subtask_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": subtask.title,
                        "itemType": "subtask",
                        "command": f"/delete subtask {subtask.id} --confirm",
                    }
                },
                suggestions=[f"/delete subtask {subtask.id} --confirm"],
                metadata=self.project_metadata(project, "delete_subtask_confirm"),
            )

        project.todos = [t for t in project.todos if t.id != subtask.id]
        await self.save(project)
        return self.success_response(
            f'Deleted subtask: "{subtask.title}"', project, "delete_subtask"
        )

    # Internals

    @staticmethod
    def _locate(project: Project, args: tuple[str, ...], verb: str) -> Todo:
        if len(args) == 1:
            for todo in project.todos:
                if todo.is_subtask and todo.id == args[0]:
                    return todo
            raise HandlerError(
                f'Subtask not found: "{args[0]}"',
                suggestions=[
                    f"/{verb} subtask <todo> <subtask index>",
                    f"/{verb} subtask 1 2",
                    "/view subtasks",
                ],
            )

        parent = _find_parent(project, args[0])
        identifier = " ".join(args[1:])
        subtask = find_item(project.subtasks_of(parent.id), identifier, lambda t: t.title)
        if subtask is None:
            raise HandlerError(
                f'Subtask not found: "{identifier}" in "{parent.title}"',
                suggestions=[f"/view subtasks {parent.id}"],
            )
        return subtask

    def _selector(self, project: Project, wizard_type: str, verb: str) -> CommandResponse:
        subtasks = [t for t in project.todos if t.is_subtask]
        if not subtasks:
            return info_response(
                f"No subtasks to {verb}",
                suggestions=["/add subtask"],
                metadata=self.project_metadata(project, wizard_type),
            )
        return prompt_response(
            f"Select a subtask to {verb}",
            wizard_type,
            extra={"subtasks": [_subtask_entry(project, s) for s in subtasks]},
            metadata=self.project_metadata(project, wizard_type),
        )
