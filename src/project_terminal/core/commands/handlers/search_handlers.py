from __future__ import annotations

from typing import Any

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import BaseCommandHandler, handles
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import Project
from project_terminal.core.domain.responses import CommandResponse, info_response

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 50
SNIPPET_LENGTH = 120


def _snippet(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= SNIPPET_LENGTH:
        return text
    return text[:SNIPPET_LENGTH] + "..."


def search_project(project: Project, query: str) -> list[dict[str, Any]]:
    """Case-insensitive substring search over a project's content."""
    needle = query.lower()
    results: list[dict[str, Any]] = []

    def add(kind: str, item_id: str, title: str, body: str) -> None:
        if needle in title.lower() or needle in body.lower():
            results.append(
                {
                    "projectId": project.id,
                    "projectName": project.name,
                    "type": kind,
                    "id": item_id,
                    "title": title,
                    "snippet": _snippet(body),
                }
            )

    for todo in project.todos:
        add("todo", todo.id, todo.title, todo.description)
    for note in project.notes:
        add("note", note.id, note.title, note.content)
    for entry in project.devlog:
        add("devlog", entry.id, entry.title, entry.entry)
    for component in project.components:
        add("component", component.id, component.title, f"{component.feature} {component.content}")
    return results


class SearchHandlers(BaseCommandHandler):
    """Full-text search in one project or across all accessible projects."""

    @handles(CommandType.SEARCH)
    async def search(self, context: CommandContext) -> CommandResponse:
        query = (context.parsed.flags.value("query") or context.parsed.text).strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise HandlerError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters",
                suggestions=["/search authentication"],
            )

        if context.project is not None:
            projects = [context.project]
        else:
            projects = await self._repository.find_accessible(context.identity.user_id)

        results: list[dict[str, Any]] = []
        for project in projects:
            results.extend(search_project(project, query))

        scope = context.project.name if context.project else "all projects"
        if not results:
            return info_response(f'No results for "{query}" in {scope}')

        truncated = len(results) > MAX_RESULTS
        return self.data_response(
            f'Found {len(results)} results for "{query}" in {scope}',
            context.project,
            "search",
            {"query": query, "results": results[:MAX_RESULTS], "truncated": truncated},
        )
