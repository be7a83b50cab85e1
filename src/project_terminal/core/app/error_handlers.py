from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException

from project_terminal.core.common.exceptions import TerminalError

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request"
INTERNAL_ERROR_MESSAGE = "An error occurred while executing the command"


def _error_body(message: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"type": "error", "message": message}
    if data:
        body["data"] = data
    return body


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Handle FastAPI validation errors.

    Args:
        request: The request that caused the exception
        exc: The validation exception

    Returns:
        JSON response with error details
    """
    if logger.isEnabledFor(logging.WARNING):
        logger.warning(f"Validation error: {exc.errors()}")

    error_details: list[dict[str, Any]] = []
    for error in exc.errors():
        error_details.append(
            {
                "loc": list(error.get("loc", [])),
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
        )

    return JSONResponse(
        status_code=400,
        content=_error_body(INVALID_REQUEST_MESSAGE, {"errors": error_details}),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Handle FastAPI HTTP exceptions."""
    if logger.isEnabledFor(logging.WARNING):
        logger.warning(f"HTTP error {exc.status_code}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def terminal_exception_handler(request: Request, exc: TerminalError) -> Response:
    """Handle TerminalError exceptions that escape a controller.

    The status code and details of the exception are preserved.
    """
    if logger.isEnabledFor(logging.WARNING):
        logger.warning(f"{exc.__class__.__name__} ({exc.status_code}): {exc.message}")

    body = _error_body(exc.message, exc.details or None)
    if exc.suggestions:
        body["suggestions"] = exc.suggestions
    return JSONResponse(status_code=exc.status_code, content=body)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("Unhandled exception", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(INTERNAL_ERROR_MESSAGE, {"error": str(exc)}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TerminalError, terminal_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)
