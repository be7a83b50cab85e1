"""
Splits command text into tokens.

Quoting and escaping are handled in two phases: the tokenizer only decides
token boundaries and keeps every backslash sequence verbatim, and the flag
and argument decoders turn those sequences into characters afterwards.
"""

from __future__ import annotations

_QUOTE_CHARS = ('"', "'")


class Token(str):
    """A token string that remembers whether it started inside quotes."""

    quoted: bool

    def __new__(cls, value: str, quoted: bool = False) -> "Token":
        token = super().__new__(cls, value)
        token.quoted = quoted
        return token

    def __repr__(self) -> str:
        if self.quoted:
            return f"Token({str.__repr__(self)}, quoted=True)"
        return f"Token({str.__repr__(self)})"


def tokenize(text: str) -> list[Token]:
    """Split ``text`` on unquoted, unescaped spaces.

    Args:
        text: Command text without the leading prefix

    Returns:
        Tokens in input order; never contains an empty token.
    """
    tokens: list[Token] = []
    current: list[str] = []
    current_quoted = False
    quote_char: str | None = None
    escaped = False

    def flush() -> None:
        nonlocal current, current_quoted
        if current:
            tokens.append(Token("".join(current), quoted=current_quoted))
        current = []
        current_quoted = False

    for char in text:
        if escaped:
            current.append("\\")
            current.append(char)
            escaped = False
            continue

        if char == "\\":
            if not current:
                current_quoted = quote_char is not None
            escaped = True
            continue

        if quote_char is not None:
            if char == quote_char:
                quote_char = None
            else:
                current.append(char)
            continue

        if char in _QUOTE_CHARS:
            quote_char = char
            if not current:
                current_quoted = True
            continue

        if char == " ":
            flush()
            continue

        current.append(char)

    # A trailing lone backslash has nothing to escape and is dropped
    flush()
    return tokens
