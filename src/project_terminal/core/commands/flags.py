"""
Flag extraction and escape decoding.

Flags are ``--name`` or ``--name=value`` tokens (a single dash is accepted as
well). Their values are modelled as a small tagged union so that a
presence-only flag can never be mistaken for a string value.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Union

from project_terminal.core.commands.tokenizer import Token

FLAG_PATTERN = re.compile(r"^--?(\w+)(=(.+))?$", re.DOTALL)

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


def decode_escapes(value: str) -> str:
    """Decode backslash escape sequences in a single left-to-right pass.

    Unknown sequences (and a trailing lone backslash) are kept verbatim.
    """
    if "\\" not in value:
        return value

    out: list[str] = []
    i = 0
    length = len(value)
    while i < length:
        char = value[i]
        if char == "\\" and i + 1 < length and value[i + 1] in _ESCAPES:
            out.append(_ESCAPES[value[i + 1]])
            i += 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class Present:
    """A flag given with a value."""

    value: str


@dataclass(frozen=True)
class PresentFlag:
    """A flag given without a value."""


@dataclass(frozen=True)
class Absent:
    """A flag that was not given."""


FlagValue = Union[Present, PresentFlag, Absent]

PRESENT_FLAG = PresentFlag()
ABSENT = Absent()


class Flags(Mapping[str, FlagValue]):
    """Immutable, insertion-ordered mapping of flag names to values."""

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, FlagValue] | None = None) -> None:
        self._items: Mapping[str, FlagValue] = MappingProxyType(dict(items or {}))

    def __getitem__(self, name: str) -> FlagValue:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Flags({self.to_dict()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Flags):
            return list(self._items.items()) == list(other._items.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def get(self, name: str, default: FlagValue = ABSENT) -> FlagValue:  # type: ignore[override]
        return self._items.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._items

    def count(self) -> int:
        return len(self._items)

    def value(self, name: str) -> str | None:
        """Return the string value of ``name``, or ``None`` for bare or absent flags."""
        flag = self._items.get(name)
        if isinstance(flag, Present):
            return flag.value
        return None

    def to_dict(self) -> dict[str, str | bool]:
        """Plain representation: strings for valued flags, ``True`` for bare ones."""
        result: dict[str, str | bool] = {}
        for name, flag in self._items.items():
            result[name] = flag.value if isinstance(flag, Present) else True
        return result


def extract_flags(tokens: Sequence[Token]) -> tuple[Flags, list[Token]]:
    """Split ``tokens`` into flags and the tokens that are not flags.

    Quoted tokens are never flags. A repeated flag keeps its first position
    and takes the last value given.
    """
    collected: dict[str, FlagValue] = {}
    remaining: list[Token] = []

    for token in tokens:
        match = None if token.quoted else FLAG_PATTERN.fullmatch(token)
        if match is None:
            remaining.append(token)
            continue

        name = match.group(1)
        raw_value = match.group(3)
        collected[name] = (
            Present(decode_escapes(raw_value)) if raw_value is not None else PRESENT_FLAG
        )

    return Flags(collected), remaining
