from __future__ import annotations

import pytest
from project_terminal.core.commands.tokenizer import Token, tokenize


def test_splits_on_spaces_and_collapses_runs() -> None:
    assert tokenize("add   todo  now") == ["add", "todo", "now"]


def test_empty_and_blank_input_yield_no_tokens() -> None:
    assert tokenize("") == []
    assert tokenize("    ") == []


@pytest.mark.parametrize("quote", ['"', "'"])
def test_quoted_region_is_one_token_without_quotes(quote: str) -> None:
    tokens = tokenize(f"add todo {quote}fix auth bug{quote}")

    assert tokens == ["add", "todo", "fix auth bug"]
    assert tokens[2].quoted is True
    assert tokens[0].quoted is False


def test_other_quote_char_inside_region_is_literal() -> None:
    assert tokenize("""note "it's fine" """) == ["note", "it's fine"]


def test_quote_inside_flag_token_keeps_flag_unquoted() -> None:
    tokens = tokenize('--title="fix auth bug" --priority=high')

    assert tokens == ["--title=fix auth bug", "--priority=high"]
    assert tokens[0].quoted is False


def test_unterminated_quote_runs_to_end_of_input() -> None:
    assert tokenize('say "hello world') == ["say", "hello world"]


def test_escape_sequences_survive_verbatim() -> None:
    tokens = tokenize(r'--content="line\nnext \"quoted\""')

    assert tokens == [r'--content=line\nnext \"quoted\"']


def test_escaped_space_does_not_split() -> None:
    assert tokenize(r"a\ b c") == [r"a\ b", "c"]


def test_trailing_lone_backslash_is_dropped() -> None:
    assert tokenize("todo abc\\") == ["todo", "abc"]


def test_adjacent_quoted_and_plain_text_join() -> None:
    assert tokenize('pre"fix"post') == ["prefixpost"]


def test_token_repr_marks_quoted_tokens() -> None:
    assert repr(Token("x", quoted=True)) == "Token('x', quoted=True)"
    assert repr(Token("x")) == "Token('x')"
