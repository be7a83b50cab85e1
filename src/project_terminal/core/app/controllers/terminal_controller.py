"""
Terminal Controller

HTTP endpoints of the command terminal. Authentication happens upstream; the
caller's identity arrives in ``X-User-*`` headers.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import ConfigDict, Field

from project_terminal.core.commands.parser import CommandParser
from project_terminal.core.common.exceptions import InvalidRequestError
from project_terminal.core.config.config_loader import str_to_bool
from project_terminal.core.domain.identity import UserIdentity
from project_terminal.core.interfaces.model_bases import DomainModel
from project_terminal.core.services.command_executor import CommandExecutor
from project_terminal.core.services.command_sanitizer import CommandSanitizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/terminal", tags=["terminal"])

COMMAND_REQUIRED_MESSAGE = "Command is required and must be a string"


class ExecuteRequest(DomainModel):
    model_config = ConfigDict(populate_by_name=True)

    command: str | None = None
    current_project_id: str | None = Field(default=None, alias="currentProjectId")


class ValidateRequest(DomainModel):
    command: str | None = None


def get_identity(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_demo_user: str | None = Header(default=None),
) -> UserIdentity:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return UserIdentity(
        user_id=x_user_id,
        email=x_user_email,
        name=x_user_name,
        is_demo=str_to_bool(x_demo_user),
    )


def get_executor(request: Request) -> CommandExecutor:
    return request.app.state.command_executor  # type: ignore[no-any-return]


def get_sanitizer(request: Request) -> CommandSanitizer:
    return request.app.state.command_sanitizer  # type: ignore[no-any-return]


class TerminalController:
    """Controller for terminal endpoints."""

    def __init__(self, executor: CommandExecutor, sanitizer: CommandSanitizer) -> None:
        self._executor = executor
        self._sanitizer = sanitizer

    @property
    def parser(self) -> CommandParser:
        return self._executor.parser

    async def execute(
        self, body: ExecuteRequest, identity: UserIdentity
    ) -> dict[str, Any]:
        if not body.command:
            raise InvalidRequestError(COMMAND_REQUIRED_MESSAGE)
        command = self._sanitizer.sanitize(body.command)
        response = await self._executor.execute(
            command, identity, body.current_project_id
        )
        return response.to_dict()

    def list_commands(self) -> dict[str, Any]:
        commands = [
            {
                "value": metadata.value,
                "label": metadata.syntax,
                "description": metadata.description,
                "examples": list(metadata.examples),
                "category": metadata.category,
                "aliases": self.parser.get_aliases_for_type(metadata.type),
            }
            for metadata in self.parser.get_all_commands()
        ]
        return {"commands": commands, "aliases": self.parser.get_all_aliases()}

    def validate(self, body: ValidateRequest) -> dict[str, Any]:
        if not body.command:
            return {"isValid": False, "errors": [COMMAND_REQUIRED_MESSAGE]}
        is_valid, errors = self.parser.validate(body.command)
        return {"isValid": is_valid, "errors": errors}

    def suggestions(self, partial: str | None) -> dict[str, Any]:
        if not partial:
            return {"suggestions": []}
        return {"suggestions": self.parser.get_suggestions(partial)}

    async def list_projects(self, identity: UserIdentity) -> dict[str, Any]:
        projects = await self._executor.resolver.accessible_projects(identity)
        return {
            "projects": [
                {
                    "value": f"@{project.name}",
                    "label": project.name,
                    "description": project.description,
                    "category": project.category,
                    "isOwner": project.owner_id == identity.user_id,
                }
                for project in projects
            ]
        }


def get_terminal_controller(
    executor: CommandExecutor = Depends(get_executor),
    sanitizer: CommandSanitizer = Depends(get_sanitizer),
) -> TerminalController:
    return TerminalController(executor, sanitizer)


@router.post("/execute")
async def execute_command(
    body: ExecuteRequest,
    identity: UserIdentity = Depends(get_identity),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    return await controller.execute(body, identity)


@router.get("/commands")
async def list_commands(
    identity: UserIdentity = Depends(get_identity),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    return controller.list_commands()


@router.post("/validate")
async def validate_command(
    body: ValidateRequest,
    identity: UserIdentity = Depends(get_identity),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    return controller.validate(body)


@router.get("/suggestions")
async def command_suggestions(
    partial: str | None = None,
    identity: UserIdentity = Depends(get_identity),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    return controller.suggestions(partial)


@router.get("/projects")
async def list_projects(
    identity: UserIdentity = Depends(get_identity),
    controller: TerminalController = Depends(get_terminal_controller),
) -> dict[str, Any]:
    return await controller.list_projects(identity)


@router.get("/history")
async def command_history(
    identity: UserIdentity = Depends(get_identity),
) -> dict[str, Any]:
    # No history store exists yet
    return {"history": []}
