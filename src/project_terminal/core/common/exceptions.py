"""
Common exception classes for the project terminal.

The command pipeline reports most failures as error responses, but the
layers below it (resolution, permission checks, handlers, configuration)
raise these exceptions so that the dispatcher can translate them in one
place.
"""

from __future__ import annotations


class TerminalError(Exception):
    """Base exception class for all terminal errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        suggestions: list[str] | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
            suggestions: Optional follow-up commands shown to the caller
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 500
        self.suggestions = list(suggestions or [])
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)


class ProjectContextError(TerminalError):
    """Raised when no project can be resolved for a command."""

    def __init__(
        self, message: str = "No project context", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, status_code=404, **kwargs)


class EditPermissionError(TerminalError):
    """Raised when a mutation is requested without edit rights."""

    def __init__(
        self,
        message: str = "You do not have edit permissions for this project",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=403, **kwargs)


class HandlerError(TerminalError):
    """Raised inside a handler for domain-rule violations and missing entities."""

    def __init__(
        self, message: str = "Command failed", details: dict | None = None, **kwargs
    ):
        kwargs.setdefault("status_code", 400)
        super().__init__(message, details, **kwargs)


class NoteLockedError(HandlerError):
    """Raised when another user holds the advisory lock on a note."""

    def __init__(
        self,
        message: str = "Note is locked by another user",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=423, **kwargs)


class ConfigurationError(TerminalError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=400, **kwargs)


class InvalidRequestError(TerminalError):
    """Raised when an HTTP request is invalid."""

    def __init__(
        self, message: str = "Invalid request", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, status_code=400, **kwargs)
