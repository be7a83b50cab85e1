"""
Project aggregate and its embedded collections.

Components reference each other only by id. Relationships are stored on the
source component as ``(target_id, relation_type)`` pairs and looked up through
``Project.component_by_id``, so cyclic graphs need no object references.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from project_terminal.core.interfaces.model_bases import DomainModel


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"

    @property
    def can_edit(self) -> bool:
        return self is not Role.VIEWER


TODO_PRIORITIES = ("low", "medium", "high")
TODO_STATUSES = ("not_started", "in_progress", "completed", "blocked")

COMPONENT_TYPES_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "frontend": ("page", "component", "hook", "context", "layout", "util", "custom"),
    "backend": ("service", "route", "model", "controller", "middleware", "util", "custom"),
    "database": ("schema", "migration", "seed", "query", "index", "custom"),
    "infrastructure": ("deployment", "cicd", "env", "config", "monitoring", "docker", "custom"),
    "security": ("auth", "authz", "encryption", "validation", "sanitization", "custom"),
    "api": ("client", "integration", "webhook", "contract", "graphql", "custom"),
    "documentation": (
        "area", "section", "guide", "architecture", "api-doc", "readme", "changelog", "custom",
    ),
    "asset": ("image", "font", "video", "audio", "document", "dependency", "custom"),
}

RELATIONSHIP_TYPES = ("uses", "depends_on")

STACK_CATEGORIES = (
    "framework", "runtime", "database", "styling", "deployment", "testing", "tooling",
    "ui", "state", "routing", "forms", "animation", "api", "auth", "data", "utility",
)

DEPLOYMENT_STATUSES = ("active", "inactive", "error")


class TeamMember(DomainModel):
    user_id: str
    email: str
    name: str | None = None
    role: Role = Role.VIEWER
    joined_at: datetime = Field(default_factory=utcnow)


class Invitation(DomainModel):
    id: str = Field(default_factory=new_id)
    email: str
    role: Role = Role.EDITOR
    invited_by: str
    created_at: datetime = Field(default_factory=utcnow)


class Todo(DomainModel):
    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    priority: str = "medium"
    status: str = "not_started"
    completed: bool = False
    due_date: datetime | None = None
    assigned_to: str | None = None
    parent_todo_id: str | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None

    @property
    def is_subtask(self) -> bool:
        return self.parent_todo_id is not None


class Note(DomainModel):
    id: str = Field(default_factory=new_id)
    title: str
    content: str = ""
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None


class DevLogEntry(DomainModel):
    id: str = Field(default_factory=new_id)
    title: str = ""
    entry: str
    created_by: str | None = None
    date: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None


class Relationship(DomainModel):
    id: str = Field(default_factory=new_id)
    target_id: str
    relation_type: str
    description: str = ""
    created_at: datetime = Field(default_factory=utcnow)


class Component(DomainModel):
    id: str = Field(default_factory=new_id)
    feature: str
    category: str
    type: str
    title: str
    content: str = ""
    relationships: list[Relationship] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None


class StackItem(DomainModel):
    id: str = Field(default_factory=new_id)
    name: str
    category: str
    version: str = ""
    description: str = ""


class DeploymentData(DomainModel):
    live_url: str | None = None
    platform: str | None = None
    status: str | None = None
    branch: str | None = None


class Project(DomainModel):
    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    category: str = "general"
    tags: list[str] = Field(default_factory=list)
    owner_id: str
    members: list[TeamMember] = Field(default_factory=list)
    invitations: list[Invitation] = Field(default_factory=list)
    todos: list[Todo] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    devlog: list[DevLogEntry] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    stack: list[StackItem] = Field(default_factory=list)
    deployment: DeploymentData = Field(default_factory=DeploymentData)
    is_public: bool = False
    public_slug: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def member(self, user_id: str) -> TeamMember | None:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def member_by_email(self, email: str) -> TeamMember | None:
        email = email.lower()
        for member in self.members:
            if member.email.lower() == email:
                return member
        return None

    def role_of(self, user_id: str) -> Role | None:
        """Role of ``user_id`` in this project, or None without access."""
        if self.owner_id == user_id:
            return Role.OWNER
        member = self.member(user_id)
        return member.role if member is not None else None

    def top_level_todos(self) -> list[Todo]:
        """Todos that are not subtasks, in insertion order."""
        return [todo for todo in self.todos if todo.parent_todo_id is None]

    def subtasks_of(self, todo_id: str) -> list[Todo]:
        return [todo for todo in self.todos if todo.parent_todo_id == todo_id]

    def component_by_id(self, component_id: str) -> Component | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def touch(self) -> None:
        self.updated_at = utcnow()
