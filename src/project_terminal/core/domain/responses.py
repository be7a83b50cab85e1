"""
Response envelope returned for every executed command.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from project_terminal.core.interfaces.model_bases import DomainModel

WIZARD_TYPE_KEY = "wizardType"


class ResponseType(str, Enum):
    """Kinds of command responses."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    DATA = "data"
    PROMPT = "prompt"


class CommandResponse(DomainModel):
    """Transport-agnostic result of one command.

    A ``prompt`` response asks the caller to resubmit the command with more
    input. It always names the wizard in ``data["wizardType"]``; no other
    response type carries that key.
    """

    type: ResponseType
    message: str
    data: dict[str, Any] | None = None
    suggestions: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_wizard_type(self) -> CommandResponse:
        has_wizard = bool(self.data) and WIZARD_TYPE_KEY in (self.data or {})
        if self.type is ResponseType.PROMPT and not has_wizard:
            raise ValueError("Prompt responses must carry data.wizardType")
        if self.type is not ResponseType.PROMPT and has_wizard:
            raise ValueError("Only prompt responses may carry data.wizardType")
        return self

    @property
    def wizard_type(self) -> str | None:
        if self.data is None:
            return None
        return self.data.get(WIZARD_TYPE_KEY)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation; empty optional members are omitted."""
        result: dict[str, Any] = {"type": self.type.value, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        if self.suggestions:
            result["suggestions"] = list(self.suggestions)
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result


def response_metadata(
    project_id: str | None = None,
    project_name: str | None = None,
    action: str | None = None,
    *,
    timestamp: bool = False,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    if project_id is not None:
        metadata["projectId"] = project_id
    if project_name is not None:
        metadata["projectName"] = project_name
    if action is not None:
        metadata["action"] = action
    if timestamp:
        metadata["timestamp"] = datetime.now(timezone.utc).isoformat()
    return metadata


def error_response(
    message: str,
    *,
    data: dict[str, Any] | None = None,
    suggestions: list[str] | None = None,
) -> CommandResponse:
    return CommandResponse(
        type=ResponseType.ERROR,
        message=message,
        data=data,
        suggestions=list(suggestions or []),
    )


def info_response(
    message: str,
    *,
    data: dict[str, Any] | None = None,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> CommandResponse:
    return CommandResponse(
        type=ResponseType.INFO,
        message=message,
        data=data,
        suggestions=list(suggestions or []),
        metadata=metadata,
    )


def prompt_response(
    message: str,
    wizard_type: str,
    *,
    steps: list[dict[str, Any]] | None = None,
    values: dict[str, Any] | None = None,
    extra: dict[str, Any] | None = None,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> CommandResponse:
    """Build a wizard prompt.

    Args:
        message: Text shown above the wizard
        wizard_type: Identifier of the wizard the client should render
        steps: Field descriptions of the wizard
        values: Input the caller already supplied; the client resends them
        extra: Additional payload merged into ``data``
    """
    data: dict[str, Any] = {WIZARD_TYPE_KEY: wizard_type}
    if steps is not None:
        data["steps"] = steps
    if values:
        data["values"] = values
    if extra:
        data.update(extra)
    return CommandResponse(
        type=ResponseType.PROMPT,
        message=message,
        data=data,
        suggestions=list(suggestions or []),
        metadata=metadata,
    )
