"""
Canonical command tags.

Every alias resolves to one of these values, and every value has a metadata
entry in ``project_terminal.core.commands.metadata``.
"""

from __future__ import annotations

from enum import Enum


class CommandType(str, Enum):
    """Closed set of command tags understood by the terminal."""

    # Add
    ADD_TODO = "add_todo"
    ADD_SUBTASK = "add_subtask"
    ADD_NOTE = "add_note"
    ADD_DEVLOG = "add_devlog"
    ADD_COMPONENT = "add_component"
    ADD_RELATIONSHIP = "add_relationship"
    ADD_STACK = "add_stack"
    ADD_TAG = "add_tag"

    # View
    VIEW_TODOS = "view_todos"
    VIEW_SUBTASKS = "view_subtasks"
    VIEW_NOTES = "view_notes"
    VIEW_DEVLOG = "view_devlog"
    VIEW_COMPONENTS = "view_components"
    VIEW_RELATIONSHIPS = "view_relationships"
    VIEW_STACK = "view_stack"
    VIEW_TEAM = "view_team"
    VIEW_SETTINGS = "view_settings"
    VIEW_DEPLOYMENT = "view_deployment"
    VIEW_PUBLIC = "view_public"

    # Edit
    EDIT_TODO = "edit_todo"
    EDIT_SUBTASK = "edit_subtask"
    EDIT_NOTE = "edit_note"
    EDIT_DEVLOG = "edit_devlog"
    EDIT_COMPONENT = "edit_component"
    EDIT_RELATIONSHIP = "edit_relationship"

    # Delete
    DELETE_TODO = "delete_todo"
    DELETE_SUBTASK = "delete_subtask"
    DELETE_NOTE = "delete_note"
    DELETE_DEVLOG = "delete_devlog"
    DELETE_COMPONENT = "delete_component"
    DELETE_RELATIONSHIP = "delete_relationship"

    # Task management
    COMPLETE_TODO = "complete_todo"
    ASSIGN_TODO = "assign_todo"
    PUSH_TODO = "push_todo"
    SET_PRIORITY = "set_priority"
    SET_DUE_DATE = "set_due_date"

    # Remove
    REMOVE_STACK = "remove_stack"
    REMOVE_TAG = "remove_tag"

    # Team
    INVITE_MEMBER = "invite_member"
    REMOVE_MEMBER = "remove_member"

    # Settings
    SET_NAME = "set_name"
    SET_DESCRIPTION = "set_description"
    SET_DEPLOYMENT = "set_deployment"
    SET_PUBLIC = "set_public"

    # Utility
    SEARCH = "search"
    SUMMARY = "summary"
    EXPORT = "export"
    SWAP_PROJECT = "swap_project"
    WIZARD_NEW = "wizard_new"
    WIZARD_SETUP = "wizard_setup"
    WIZARD_DEPLOY = "wizard_deploy"
    HELP = "help"

    UNKNOWN = "unknown"
