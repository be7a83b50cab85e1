"""
Handlers for todo commands.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
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
    TODO_PRIORITIES,
    TODO_STATUSES,
    DevLogEntry,
    Project,
    Todo,
    utcnow,
)
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

logger = logging.getLogger(__name__)

TODO_FLAGS = ("title", "content", "priority", "status", "due")

_DATE_FORMATS = ("%Y-%m-%d", "%m-%d-%Y", "%m/%d/%Y")
_SHORT_DATE_FORMATS = ("%m-%d-%Y", "%m/%d/%Y")
_TIME_FORMATS = ("%I:%M%p", "%I%p", "%H:%M")

RELATIVE_DAYS = {"today": 0, "tomorrow": 1}


def parse_due_date(value: str, now: datetime | None = None) -> datetime:
    """Parse ``MM-DD-YYYY``, ``MM-DD`` or ``YYYY-MM-DD`` with an optional time.

    A date without a year falls in the current year. Times may be 12-hour
    (``8:00PM``) or 24-hour (``21:00``).
    """
    now = now or utcnow()
    parts = value.strip().split()
    if not parts or len(parts) > 2:
        raise HandlerError(
            f'Invalid due date "{value}". Use MM-DD-YYYY, optionally followed by a time'
        )

    date_part = parts[0]
    parsed_date: datetime | None = None
    for fmt in _DATE_FORMATS:
        try:
            parsed_date = datetime.strptime(date_part, fmt)
            break
        except ValueError:
            continue
    if parsed_date is None:
        separator = "/" if "/" in date_part else "-"
        for fmt in _SHORT_DATE_FORMATS:
            try:
                parsed_date = datetime.strptime(f"{date_part}{separator}{now.year}", fmt)
                break
            except ValueError:
                continue
    if parsed_date is None:
        raise HandlerError(
            f'Invalid due date "{value}". Use MM-DD-YYYY, optionally followed by a time'
        )

    if len(parts) == 2:
        time_part = parts[1].upper()
        parsed_time: datetime | None = None
        for fmt in _TIME_FORMATS:
            try:
                parsed_time = datetime.strptime(time_part, fmt)
                break
            except ValueError:
                continue
        if parsed_time is None:
            raise HandlerError(f'Invalid time "{parts[1]}". Use 8:00PM or 21:00')
        parsed_date = parsed_date.replace(hour=parsed_time.hour, minute=parsed_time.minute)

    return parsed_date.replace(tzinfo=now.tzinfo)


def format_due_date(value: datetime) -> str:
    if value.hour == 0 and value.minute == 0:
        return value.strftime("%m-%d-%Y")
    return value.strftime("%m-%d-%Y %I:%M%p")


def todo_steps(todo: Todo | None = None) -> list[dict[str, Any]]:
    return [
        {
            "id": "title",
            "label": "Title",
            "type": "text",
            "required": True,
            "placeholder": "Enter todo title",
            "value": todo.title if todo else None,
        },
        {
            "id": "content",
            "label": "Description",
            "type": "textarea",
            "required": False,
            "placeholder": "Optional description",
            "value": todo.description if todo else None,
        },
        {
            "id": "priority",
            "label": "Priority",
            "type": "select",
            "options": list(TODO_PRIORITIES),
            "required": True,
            "value": todo.priority if todo else "medium",
        },
        {
            "id": "status",
            "label": "Status",
            "type": "select",
            "options": list(TODO_STATUSES),
            "required": True,
            "value": todo.status if todo else "not_started",
        },
        {
            "id": "due",
            "label": "Due Date",
            "type": "text",
            "required": False,
            "placeholder": "MM-DD-YYYY 8:00PM or MM-DD 21:00 (optional)",
            "value": format_due_date(todo.due_date) if todo and todo.due_date else None,
        },
    ]



def parse_relative_due_date(value: str, now: datetime | None = None) -> datetime:
    """``today`` and ``tomorrow`` mean the end of that day; anything else is a date."""
    now = now or utcnow()
    word = value.strip().lower()
    if word in RELATIVE_DAYS:
        day = now + timedelta(days=RELATIVE_DAYS[word])
        return day.replace(hour=23, minute=59, second=0, microsecond=0)
    return parse_due_date(value, now)


def todo_summary(index: int, todo: Todo) -> dict[str, Any]:
    return {
        "index": index,
        "id": todo.id,
        "title": todo.title,
        "description": todo.description,
        "priority": todo.priority,
        "status": todo.status,
        "completed": todo.completed,
        "dueDate": format_due_date(todo.due_date) if todo.due_date else None,
        "assignedTo": todo.assigned_to,
    }


def apply_todo_attributes(todo: Todo, values: dict[str, str]) -> None:
    if "priority" in values:
        todo.priority = check_choice(values["priority"], TODO_PRIORITIES, "priority")
    if "status" in values:
        todo.status = check_choice(values["status"], TODO_STATUSES, "status")
        todo.completed = todo.status == "completed"
    if "due" in values:
        todo.due_date = parse_due_date(values["due"])


def find_todo(project: Project, identifier: str) -> Todo:
    """Any todo by id, otherwise a top-level todo by index or title."""
    for todo in project.todos:
        if todo.id == identifier:
            return todo
    todo = find_item(project.top_level_todos(), identifier, lambda t: t.title)
    if todo is None:
        raise HandlerError(f'Todo not found: "{identifier}"', suggestions=["/view todos"])
    return todo


class TodoHandlers(BaseCommandHandler):
    """Todo lifecycle: add, view, edit, delete, complete, assign and push."""

    @handles(CommandType.ADD_TODO)
    async def add_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        self.reject_positional_args(
            context,
            [
                "/add todo - Interactive wizard",
                '/add todo --title="your todo title"',
                '/add todo --title="fix bug" --content="detailed description" --priority=high',
                "/help add todo",
            ],
        )

        values = flag_values(parsed.flags, TODO_FLAGS)
        if "title" not in values:
            return prompt_response(
                "Add New Todo",
                "add_todo",
                steps=todo_steps(),
                values=values,
                metadata=self.project_metadata(project, "add_todo"),
            )

        title = values["title"].strip()
        if not title:
            raise HandlerError("Todo title cannot be empty", suggestions=["/help add todo"])

        todo = Todo(
            title=title,
            description=values.get("content", "").strip(),
            created_by=context.identity.user_id,
        )
        apply_todo_attributes(todo, values)
        project.todos.append(todo)
        await self.save(project)

        due_message = f" (due: {format_due_date(todo.due_date)})" if todo.due_date else ""
        return self.success_response(
            f'Added todo: "{todo.title}"{due_message} to {project.name}',
            project,
            "add_todo",
            {"todo": todo_summary(len(project.top_level_todos()), todo)},
        )

    @handles(CommandType.VIEW_TODOS)
    async def view_todos(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parents = project.top_level_todos()
        if not parents:
            return info_response(
                f"No todos in {project.name}",
                suggestions=['/add todo --title="your first todo"'],
                metadata=self.project_metadata(project, "view_todos"),
            )

        todos = []
        subtask_count = 0
        for index, todo in enumerate(parents, start=1):
            subtasks = project.subtasks_of(todo.id)
            subtask_count += len(subtasks)
            todos.append(
                {
                    **todo_summary(index, todo),
                    "subtasks": [
                        todo_summary(i, s) for i, s in enumerate(subtasks, start=1)
                    ],
                }
            )
        completed = sum(1 for t in parents if t.completed)
        counts = f"{completed}/{len(parents)} completed"
        if subtask_count:
            counts += f", {subtask_count} subtasks"
        return self.data_response(
            f"Todos in {project.name} ({counts})",
            project,
            "view_todos",
            {"todos": todos},
        )

    @handles(CommandType.EDIT_TODO)
    async def edit_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "edit_todo_selector", "Select a todo to edit")

        todo = find_todo(project, parsed.args[0])
        values = flag_values(parsed.flags, TODO_FLAGS)
        if not values:
            return prompt_response(
                f'Edit Todo: "{todo.title}"',
                "edit_todo",
                steps=todo_steps(todo),
                extra={"todoId": todo.id},
                metadata=self.project_metadata(project, "edit_todo"),
            )

        if "title" in values:
            title = values["title"].strip()
            if not title:
                raise HandlerError("Todo title cannot be empty")
            todo.title = title
        if "content" in values:
            todo.description = values["content"].strip()
        apply_todo_attributes(todo, values)
        todo.updated_at = utcnow()
        await self.save(project)

        return self.success_response(
            f'Updated todo: "{todo.title}"', project, "edit_todo", {"todoId": todo.id}
        )

    @handles(CommandType.DELETE_TODO)
    async def delete_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "delete_todo_selector", "Select a todo to delete")

        todo = find_todo(project, parsed.args[0])
        subtasks = project.subtasks_of(todo.id)
        if not self.is_confirmed(parsed.flags):
            return prompt_response(
                f'Delete todo "{todo.title}"?',
                "delete_todo_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": todo.title,
                        "itemType": "todo",
                        "subtaskCount": len(subtasks),
                        "command": f"/delete todo {todo.id} --confirm",
                    }
                },
                suggestions=[f"/delete todo {todo.id} --confirm"],
                metadata=self.project_metadata(project, "delete_todo_confirm"),
            )

        project.todos = [
            t for t in project.todos if t.id != todo.id and t.parent_todo_id != todo.id
        ]
        await self.save(project)
        return self.success_response(f'Deleted todo: "{todo.title}"', project, "delete_todo")

    @handles(CommandType.COMPLETE_TODO)
    async def complete_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        todo = find_todo(project, context.parsed.text)
        if todo.completed:
            return info_response(
                f'Todo "{todo.title}" is already completed',
                metadata=self.project_metadata(project, "complete_todo"),
            )

        todo.completed = True
        todo.status = "completed"
        todo.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Completed todo: "{todo.title}"', project, "complete_todo", {"todoId": todo.id}
        )

    @handles(CommandType.ASSIGN_TODO)
    async def assign_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        email = parsed.flags.value("to")
        if not parsed.args or not email:
            raise HandlerError(
                "Usage: /assign todo <id|index|title> --to=<email>",
                suggestions=["/assign todo 1 --to=teammate@example.com", "/view team"],
            )

        todo = find_todo(project, parsed.text)
        member = project.member_by_email(email)
        if member is not None:
            assignee = member.user_id
        elif context.identity.email and context.identity.email.lower() == email.lower():
            assignee = context.identity.user_id
        else:
            raise HandlerError(
                f"{email} is not a member of {project.name}",
                suggestions=["/view team", f"/invite member {email}"],
            )

        todo.assigned_to = assignee
        todo.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Assigned todo "{todo.title}" to {email}',
            project,
            "assign_todo",
            {"todoId": todo.id, "assignedTo": assignee},
        )

    @handles(CommandType.SET_PRIORITY)
    async def set_priority(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        args = context.parsed.args
        if len(args) < 2:
            raise HandlerError(
                "Usage: /set priority <id|index|title> <low|medium|high>",
                suggestions=["/set priority 1 high", "/view todos"],
            )

        priority = check_choice(args[-1], TODO_PRIORITIES, "priority")
        todo = find_todo(project, " ".join(args[:-1]))
        todo.priority = priority
        todo.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Set priority to {priority} for todo: "{todo.title}"',
            project,
            "set_priority",
            {"todoId": todo.id, "priority": priority},
        )

    @handles(CommandType.SET_DUE_DATE)
    async def set_due_date(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        args = context.parsed.args
        if len(args) < 2:
            raise HandlerError(
                "Usage: /set due <id|index|title> <date|today|tomorrow>",
                suggestions=["/set due 1 tomorrow", '/set due 1 "12-24 8:00PM"'],
            )

        identifier, due_date = self._split_due_args(args)
        todo = find_todo(project, identifier)
        todo.due_date = due_date
        todo.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Set due date to {format_due_date(due_date)} for todo: "{todo.title}"',
            project,
            "set_due_date",
            {"todoId": todo.id, "dueDate": format_due_date(due_date)},
        )

    @handles(CommandType.PUSH_TODO)
    async def push_todo(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        todo = find_todo(project, context.parsed.text)
        if todo.is_subtask:
            raise HandlerError(
                f'"{todo.title}" is a subtask; push its parent todo instead',
                suggestions=["/view todos"],
            )

        subtasks = project.subtasks_of(todo.id)
        entry = todo.description
        if subtasks:
            lines = "\n".join(
                f"- {s.title}: {s.description}" if s.description else f"- {s.title}"
                for s in subtasks
            )
            entry = f"{entry}\n\nSubtasks:\n{lines}" if entry else f"Subtasks:\n{lines}"

        devlog_entry = DevLogEntry(
            title=todo.title,
            entry=entry or todo.title,
            created_by=context.identity.user_id,
        )
        project.devlog.append(devlog_entry)
        project.todos = [
            t for t in project.todos if t.id != todo.id and t.parent_todo_id != todo.id
        ]
        await self.save(project)
        logger.info("Pushed todo %s of project %s to the dev log", todo.id, project.id)
        return self.success_response(
            f'Pushed todo to dev log and removed: "{todo.title}"',
            project,
            "push_todo",
            {
                "devlogEntry": {
                    "id": devlog_entry.id,
                    "title": devlog_entry.title,
                    "entry": devlog_entry.entry,
                    "date": devlog_entry.date.isoformat(),
                }
            },
        )

    # Internals

    @staticmethod
    def _split_due_args(args: tuple[str, ...]) -> tuple[str, datetime]:
        """Split ``<todo> <date> [time]`` into the todo identifier and due date."""
        if len(args) >= 3:
            try:
                return " ".join(args[:-2]), parse_relative_due_date(" ".join(args[-2:]))
            except HandlerError:
                pass  # the last two words are not a date and time
        return " ".join(args[:-1]), parse_relative_due_date(args[-1])

    def _selector(self, project: Project, wizard_type: str, message: str) -> CommandResponse:
        parents = project.top_level_todos()
        if not parents:
            raise HandlerError(f"No todos in {project.name}", suggestions=["/add todo"])
        return prompt_response(
            message,
            wizard_type,
            extra={"todos": [todo_summary(i, t) for i, t in enumerate(parents, start=1)]},
            metadata=self.project_metadata(project, wizard_type),
        )
