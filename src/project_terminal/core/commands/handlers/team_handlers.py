"""
Handlers for team membership.

Invitations are only recorded on the project; delivering them is the job of
an external mail service.
"""

from __future__ import annotations

import logging
import re

from project_terminal.core.commands.command_types import CommandType
from project_terminal.core.commands.handlers.base_handler import (
    BaseCommandHandler,
    check_choice,
    handles,
)
from project_terminal.core.common.exceptions import HandlerError
from project_terminal.core.domain.command_context import CommandContext
from project_terminal.core.domain.project import Invitation, Role
from project_terminal.core.domain.responses import CommandResponse

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
INVITABLE_ROLES = (Role.EDITOR.value, Role.VIEWER.value)


class TeamHandlers(BaseCommandHandler):
    """View, invite and remove project members."""

    @handles(CommandType.VIEW_TEAM)
    async def view_team(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        members = [
            {
                "userId": member.user_id,
                "email": member.email,
                "name": member.name,
                "role": member.role.value,
                "isOwner": member.user_id == project.owner_id,
            }
            for member in project.members
        ]
        if project.member(project.owner_id) is None:
            members.insert(
                0,
                {
                    "userId": project.owner_id,
                    "email": None,
                    "name": None,
                    "role": Role.OWNER.value,
                    "isOwner": True,
                },
            )
        invitations = [
            {"email": i.email, "role": i.role.value, "invitedAt": i.created_at.isoformat()}
            for i in project.invitations
        ]
        return self.data_response(
            f"Team of {project.name} ({len(members)} members)",
            project,
            "view_team",
            {"members": members, "invitations": invitations},
        )

    @handles(CommandType.INVITE_MEMBER)
    async def invite_member(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        parsed = context.parsed
        email = (parsed.flags.value("email") or (parsed.args[0] if parsed.args else "")).strip()
        if not EMAIL_PATTERN.match(email):
            raise HandlerError(
                f'Invalid email address: "{email}"' if email else "An email address is required",
                suggestions=["/invite member teammate@example.com --role=editor"],
            )

        role_value = parsed.flags.value("role") or Role.EDITOR.value
        role = Role(check_choice(role_value, INVITABLE_ROLES, "role"))

        if project.member_by_email(email) is not None:
            raise HandlerError(f"{email} is already a member of {project.name}")
        if any(i.email.lower() == email.lower() for i in project.invitations):
            raise HandlerError(f"{email} has already been invited to {project.name}")

        invitation = Invitation(email=email, role=role, invited_by=context.identity.user_id)
        project.invitations.append(invitation)
        await self.save(project)
        logger.info("Recorded invitation for project %s", project.id)
        return self.success_response(
            f"Invited {email} to {project.name} as {role.value}",
            project,
            "invite_member",
            {"invitationId": invitation.id, "email": email, "role": role.value},
        )

    @handles(CommandType.REMOVE_MEMBER)
    async def remove_member(self, context: CommandContext) -> CommandResponse:
        project = self.require_project(context)
        if context.role is not Role.OWNER:
            raise HandlerError("Only the project owner can remove members")

        identifier = context.parsed.text.strip()
        member = project.member_by_email(identifier) or project.member(identifier)
        if member is None:
            invitation = next(
                (i for i in project.invitations if i.email.lower() == identifier.lower()),
                None,
            )
            if invitation is None:
                raise HandlerError(
                    f'"{identifier}" is not a member of {project.name}',
                    suggestions=["/view team"],
                )
            project.invitations = [i for i in project.invitations if i.id != invitation.id]
            await self.save(project)
            return self.success_response(
                f"Cancelled invitation for {invitation.email}", project, "remove_member"
            )

        if member.user_id == project.owner_id:
            raise HandlerError("The project owner cannot be removed")

        project.members = [m for m in project.members if m.user_id != member.user_id]
        for todo in project.todos:
            if todo.assigned_to == member.user_id:
                todo.assigned_to = None
        await self.save(project)
        return self.success_response(
            f"Removed {member.email} from {project.name}", project, "remove_member"
        )
