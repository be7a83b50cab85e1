from __future__ import annotations

import pytest
from project_terminal.core.commands.flags import (
    ABSENT,
    PRESENT_FLAG,
    Absent,
    Flags,
    Present,
    PresentFlag,
    decode_escapes,
    extract_flags,
)
from project_terminal.core.commands.tokenizer import tokenize


def test_valued_and_bare_flags_are_extracted_in_order() -> None:
    flags, remaining = extract_flags(tokenize("delete todo 1 --confirm --reason=dup"))

    assert list(flags) == ["confirm", "reason"]
    assert flags["confirm"] == PRESENT_FLAG
    assert flags["reason"] == Present("dup")
    assert remaining == ["delete", "todo", "1"]


def test_single_dash_flag_is_accepted() -> None:
    flags, _ = extract_flags(tokenize("delete todo 1 -y"))

    assert flags.has("y")
    assert isinstance(flags.get("y"), PresentFlag)


def test_quoted_token_is_never_a_flag() -> None:
    flags, remaining = extract_flags(tokenize('search "--not-a-flag"'))

    assert flags.count() == 0
    assert remaining == ["search", "--not-a-flag"]


@pytest.mark.parametrize("token", ["--", "---x", "--a-b", "--title="])
def test_tokens_not_matching_the_flag_grammar_pass_through(token: str) -> None:
    flags, remaining = extract_flags(tokenize(token))

    assert not flags
    assert remaining == [token]


def test_repeated_flag_keeps_position_and_last_value() -> None:
    flags, _ = extract_flags(tokenize("x --a=1 --b=2 --a=3"))

    assert list(flags) == ["a", "b"]
    assert flags.value("a") == "3"


def test_flag_values_are_escape_decoded() -> None:
    flags, _ = extract_flags(tokenize(r'x --content="a\nb\t\"c\" \\d"'))

    assert flags.value("content") == 'a\nb\t"c" \\d'


def test_missing_flag_reads_as_absent() -> None:
    flags = Flags({"title": Present("x")})

    assert flags.get("priority") is ABSENT
    assert isinstance(flags.get("priority"), Absent)
    assert flags.value("priority") is None
    assert not flags.has("priority")


def test_value_is_none_for_bare_flags() -> None:
    flags = Flags({"confirm": PRESENT_FLAG})

    assert flags.value("confirm") is None
    assert flags.has("confirm")


def test_to_dict_uses_true_for_bare_flags() -> None:
    flags = Flags({"title": Present("x"), "confirm": PRESENT_FLAG})

    assert flags.to_dict() == {"title": "x", "confirm": True}


def test_flags_compare_by_content_and_order() -> None:
    assert Flags({"a": Present("1")}) == Flags({"a": Present("1")})
    assert Flags({"a": PRESENT_FLAG, "b": PRESENT_FLAG}) != Flags(
        {"b": PRESENT_FLAG, "a": PRESENT_FLAG}
    )
    assert hash(Flags()) == hash(Flags())


def test_decode_escapes_known_sequences() -> None:
    assert decode_escapes(r"\n\t\r\"\'\\") == "\n\t\r\"'\\"


def test_decode_escapes_keeps_unknown_sequences() -> None:
    assert decode_escapes(r"C:\path\x") == r"C:\path\x"


def test_decode_escapes_is_single_pass() -> None:
    once = decode_escapes(r"a\\nb")

    assert once == r"a\nb"
    # A second decode of a literal backslash followed by n is a new sequence,
    # so decoding must only ever be applied once.
    assert decode_escapes(r"\\") == "\\"
    assert decode_escapes(decode_escapes(r"\\")) == "\\"
