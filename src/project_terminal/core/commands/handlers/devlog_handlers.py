from __future__ import annotations

from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    find_item,
    flag_values,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import DevLogEntry, Project, utcnow
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

DEVLOG_FLAGS = ("title", "entry")


def _devlog_steps(entry: DevLogEntry | None = None) -> list[dict[str, Any]]:
    return [
        {
            "id": "title",
            "label": "Title",
            "type": "text",
            "required": False,
            "placeholder": "Optional title",
            "value": entry.title if entry else None,
        },
        {
            "id": "entry",
            "label": "Entry",
            "type": "textarea",
            "required": True,
            "placeholder": "What did you work on?",
            "value": entry.entry if entry else None,
        },
    ]


def _entry_summary(index: int, entry: DevLogEntry) -> dict[str, Any]:
    return {
        "index": index,
        "id": entry.id,
        "title": entry.title,
        "entry": entry.entry,
        "date": entry.date.isoformat(),
    }


class DevLogHandlers(BaseCommandHandler):
    """Add, view, edit and delete dev log entries."""

    @handles(CommandType.ADD_DEVLOG)
    async def add_devlog(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add devlog - Interactive wizard",
                '/add devlog --entry="fixed memory leak"',
                "/help add devlog",
            ],
        )

        values = flag_values(context.parsed.flags, DEVLOG_FLAGS)
        text = values.get("entry", "").strip()
        if not text:
            return prompt_response(
                "Add Dev Log Entry",
                "add_devlog",
                steps=_devlog_steps(),
                values=values,
                metadata=self.project_metadata(project, "add_devlog"),
            )

        entry = DevLogEntry(
            title=values.get("title", "").strip(),
            entry=text,
            created_by=context.identity.user_id,
        )
        project.devlog.append(entry)
        await self.save(project)
        return self.success_response(
            f"Added dev log entry to {project.name}",
            project,
            "add_devlog",
            {"entryId": entry.id},
        )

    @handles(CommandType.VIEW_DEVLOG)
    async def view_devlog(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        if not project.devlog:
            return info_response(
                f"No dev log entries in {project.name}",
                suggestions=["/add devlog"],
                metadata=self.project_metadata(project, "view_devlog"),
            )
        entries = [_entry_summary(i, e) for i, e in enumerate(project.devlog, start=1)]
        return self.data_response(
            f"Dev log for {project.name} ({len(entries)} entries)",
            project,
            "view_devlog",
            {"entries": entries},
        )

    @handles(CommandType.EDIT_DEVLOG)
    async def edit_devlog(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "edit_devlog_selector", "Select an entry to edit")

        entry = self._find(project, parsed.args[0])
        values = flag_values(parsed.flags, DEVLOG_FLAGS)
        if not values:
            return prompt_response(
                "Edit Dev Log Entry",
                "edit_devlog",
                steps=_devlog_steps(entry),
                extra={"entryId": entry.id},
                metadata=self.project_metadata(project, "edit_devlog"),
            )

        if "entry" in values:
            if not values["entry"].strip():
                raise HandlerError("Dev log entry cannot be empty")
            entry.entry = values["entry"].strip()
        if "title" in values:
            entry.title = values["title"].strip()
        entry.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            "Updated dev log entry", project, "edit_devlog", {"entryId": entry.id}
        )

    @handles(CommandType.DELETE_DEVLOG)
    async def delete_devlog(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "delete_devlog_selector", "Select an entry to delete")

        entry = self._find(project, parsed.args[0])
        if not self.is_confirmed(parsed.flags):
            label = entry.title or entry.entry[:50]
            return prompt_response(
                f'Delete dev log entry "{label}"?',
                "delete_devlog_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": label,
                        "itemType": "devlog",
                        "command": f"/delete devlog {entry.id} --confirm",
                    }
                },
                suggestions=[f"/delete devlog {entry.id} --confirm"],
                metadata=self.project_metadata(project, "delete_devlog_confirm"),
            )

        project.devlog = [e for e in project.devlog if e.id != entry.id]
        await self.save(project)
        return self.success_response("Deleted dev log entry", project, "delete_devlog")

    @staticmethod
    def _find(project: Project, identifier: str) -> DevLogEntry:
        entry = find_item(project.devlog, identifier, lambda e: f"{e.title} {e.entry}")
        if entry is None:
            raise HandlerError(
                f'Dev log entry not found: "{identifier}"', suggestions=["/view devlog"]
            )
        return entry

    def _selector(self, project: Project, wizard_type: str, message: str) -> CommandResponse:
        if not project.devlog:
            raise HandlerError(f"No dev log entries in {project.name}", suggestions=["/add devlog"])
        return prompt_response(
            message,
            wizard_type,
            extra={"entries": [_entry_summary(i, e) for i, e in enumerate(project.devlog, start=1)]},
            metadata=self.project_metadata(project, wizard_type),
        )
