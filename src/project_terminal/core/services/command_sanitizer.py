from __future__ import annotations

import logging
import re

from project_terminal.constants import DEFAULT_MAX_COMMAND_LENGTH
from project_terminal.core.common.exceptions import InvalidRequestError
from project_terminal.core.common.logging_utils import truncate_command

logger = logging.getLogger(__name__)

SUSPICIOUS_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"<script",
        r"javascript:",
        # Event handler attributes; the word boundary keeps flags such as --content= legal
        r"\bon\w+\s*=",
        r"eval\(",
        r"exec\(",
        r"require\(",
        r"process\.",
        r"__proto__",
        r"constructor\[",
    )
)

INVALID_FORMAT_MESSAGE = "Invalid command format detected"


class CommandSanitizer:
    """Rejects command input that looks like an injection attempt or is too long.

    Rules:
    - Any suspicious pattern rejects the command outright
    - Commands longer than ``max_length`` characters are rejected
    - Accepted commands are returned with surrounding whitespace removed
    """

    def __init__(self, max_length: int = DEFAULT_MAX_COMMAND_LENGTH) -> None:
        self._max_length = max_length

    @property
    def max_length(self) -> int:
        return self._max_length

    def sanitize(self, command: str) -> str:
        for pattern in SUSPICIOUS_PATTERNS:
            if pattern.search(command):
                logger.warning(
                    "Suspicious command rejected: %s", truncate_command(command)
                )
                raise InvalidRequestError(
                    INVALID_FORMAT_MESSAGE, details={"pattern": pattern.pattern}
                )

        if len(command) > self._max_length:
            raise InvalidRequestError(
                f"Command too long (max {self._max_length} characters)"
            )
        return command.strip()
