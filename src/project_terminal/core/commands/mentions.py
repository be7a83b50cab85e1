"""
Extraction of the ``@project name`` mention from a token stream.
"""

from __future__ import annotations

from collections.abc import Sequence

from project_terminal.core.commands.tokenizer import Token

MENTION_MARKER = "@"


def _opens_mention(token: Token) -> bool:
    # Quoted text and embedded markers (user@example.com) stay plain arguments
    return not token.quoted and token.startswith(MENTION_MARKER) and len(token) > 1


def _ends_mention(token: Token) -> bool:
    return not token.quoted and token.startswith("-")


def extract_mention(tokens: Sequence[Token]) -> tuple[str | None, list[Token]]:
    """Pull a project mention out of ``tokens``.

    A mention starts at an unquoted token beginning with ``@`` and collects
    the following tokens until a flag-like token or the end of input. A later
    mention replaces an earlier one.

    Returns:
        The mention text without the marker (or ``None``) and the tokens that
        were not part of it, in their original order.
    """
    mention_parts: list[str] | None = None
    collecting = False
    remaining: list[Token] = []

    for token in tokens:
        if _opens_mention(token):
            mention_parts = [token[len(MENTION_MARKER) :]]
            collecting = True
            continue

        if collecting:
            if _ends_mention(token):
                collecting = False
                remaining.append(token)
            else:
                assert mention_parts is not None
                mention_parts.append(str(token))
            continue

        remaining.append(token)

    if mention_parts is None:
        return None, remaining
    return " ".join(mention_parts), remaining
