"""
Handlers for note commands.

Notes can be held open by an editor session through an advisory lock. The
handlers never take the lock themselves; they only refuse to change a note
while somebody else holds it and show who does.
"""

from __future__ import annotations

import logging
from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    find_item,
    flag_values,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError, NoteLockedError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.note_lock import NoteLock
from project_terminal.core.domain.project import Note, Project, utcnow
from project_terminal.core.domain.responses import (
    CommandResponse,
    info_response,
    prompt_response,
)

logger = logging.getLogger(__name__)

NOTE_FLAGS = ("title", "content")


def _note_steps(note: Note | None = None) -> list[dict[str, Any]]:
    return [
        {
            "id": "title",
            "label": "Title",
            "type": "text",
            "required": True,
            "placeholder": "Enter note title",
            "value": note.title if note else None,
        },
        {
            "id": "content",
            "label": "Content",
            "type": "textarea",
            "required": True,
            "placeholder": "Write your note",
            "value": note.content if note else None,
        },
    ]


def _lock_summary(lock: NoteLock | None) -> dict[str, Any] | None:
    if lock is None:
        return None
    return {
        "userId": lock.user_id,
        "email": lock.user_email,
        "expiresAt": lock.expires_at.isoformat(),
    }


class NoteHandlers(BaseCommandHandler):
    """Add, view, edit and delete notes."""

    @handles(CommandType.ADD_NOTE)
    async def add_note(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        self.reject_positional_args(
            context,
            [
                "/add note - Interactive wizard",
                '/add note --title="API design" --content="REST first"',
                "/help add note",
            ],
        )

        values = flag_values(context.parsed.flags, NOTE_FLAGS)
        title = values.get("title", "").strip()
        content = values.get("content", "").strip()
        if not title or not content:
            return prompt_response(
                "Add New Note",
                "add_note",
                steps=_note_steps(),
                values=values,
                metadata=self.project_metadata(project, "add_note"),
            )

        note = Note(title=title, content=content, created_by=context.identity.user_id)
        project.notes.append(note)
        await self.save(project)
        return self.success_response(
            f'Added note: "{note.title}" to {project.name}',
            project,
            "add_note",
            {"noteId": note.id},
        )

    @handles(CommandType.VIEW_NOTES)
    async def view_notes(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        if not project.notes:
            return info_response(
                f"No notes in {project.name}",
                suggestions=["/add note"],
                metadata=self.project_metadata(project, "view_notes"),
            )

        notes = []
        for index, note in enumerate(project.notes, start=1):
            notes.append(
                {
                    "index": index,
                    "id": note.id,
                    "title": note.title,
                    "content": note.content,
                    "createdAt": note.created_at.isoformat(),
                    "lock": _lock_summary(await self._active_lock(note)),
                }
            )
        return self.data_response(
            f"Notes in {project.name} ({len(notes)})", project, "view_notes", {"notes": notes}
        )

    @handles(CommandType.EDIT_NOTE)
    async def edit_note(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "edit_note_selector", "Select a note to edit")

        note = self._find(project, parsed.args[0])
        await self._ensure_unlocked(note, context)

        values = flag_values(parsed.flags, NOTE_FLAGS)
        if not values:
            return prompt_response(
                f'Edit Note: "{note.title}"',
                "edit_note",
                steps=_note_steps(note),
                extra={"noteId": note.id},
                metadata=self.project_metadata(project, "edit_note"),
            )

        if "title" in values:
            if not values["title"].strip():
                raise HandlerError("Note title cannot be empty")
            note.title = values["title"].strip()
        if "content" in values:
            note.content = values["content"].strip()
        note.updated_at = utcnow()
        await self.save(project)
        return self.success_response(
            f'Updated note: "{note.title}"', project, "edit_note", {"noteId": note.id}
        )

    @handles(CommandType.DELETE_NOTE)
    async def delete_note(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        if not parsed.args:
            return self._selector(project, "delete_note_selector", "Select a note to delete")

        note = self._find(project, parsed.args[0])
        await self._ensure_unlocked(note, context)

        if not self.is_confirmed(parsed.flags):
            return prompt_response(
                f'Delete note "{note.title}"?',
                "delete_note_confirm",
                extra={
                    "confirmationData": {
                        "itemTitle": note.title,
                        "itemType": "note",
                        "command": f"/delete note {note.id} --confirm",
                    }
                },
                suggestions=[f"/delete note {note.id} --confirm"],
                metadata=self.project_metadata(project, "delete_note_confirm"),
            )

        project.notes = [n for n in project.notes if n.id != note.id]
        await self.save(project)
        return self.success_response(f'Deleted note: "{note.title}"', project, "delete_note")

    # Internals

    async def _active_lock(self, note: Note) -> NoteLock | None:
        if self._lock_service is None:
            return None
        return await self._lock_service.get_active_lock(note.id)

    async def _ensure_unlocked(self, note: Note, context: CommandContext) -> None:
        lock = await self._active_lock(note)
        if lock is not None and lock.user_id != context.identity.user_id:
            holder = lock.user_email or lock.user_id
            raise NoteLockedError(
                f'Note "{note.title}" is being edited by {holder}',
                details={"noteId": note.id, "lock": _lock_summary(lock)},
                suggestions=["Try again once the other editor is done"],
            )

    @staticmethod
    def _find(project: Project, identifier: str) -> Note:
        note = find_item(project.notes, identifier, lambda n: n.title)
        if note is None:
            raise HandlerError(f'Note not found: "{identifier}"', suggestions=["/view notes"])
        return note

    def _selector(self, project: Project, wizard_type: str, message: str) -> CommandResponse:
        if not project.notes:
            raise HandlerError(f"No notes in {project.name}", suggestions=["/add note"])
        return prompt_response(
            message,
            wizard_type,
            extra={
                "notes": [
                    {"index": i, "id": n.id, "title": n.title}
                    for i, n in enumerate(project.notes, start=1)
                ]
            },
            metadata=self.project_metadata(project, wizard_type),
        )
