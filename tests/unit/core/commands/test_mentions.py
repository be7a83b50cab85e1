from __future__ import annotations

from project_terminal.core.commands.mentions import extract_mention
from project_terminal.core.commands.tokenizer import tokenize


def test_no_mention_returns_tokens_untouched() -> None:
    mention, remaining = extract_mention(tokenize("view todos"))

    assert mention is None
    assert remaining == ["view", "todos"]


def test_multi_word_mention_ends_at_flag() -> None:
    tokens = tokenize('add todo --title="fix auth bug" @My Project --priority=high')

    mention, remaining = extract_mention(tokens)

    assert mention == "My Project"
    assert remaining == ["add", "todo", "--title=fix auth bug", "--priority=high"]


def test_mention_runs_to_end_of_input() -> None:
    mention, remaining = extract_mention(tokenize("view todos @Backend"))

    assert mention == "Backend"
    assert remaining == ["view", "todos"]


def test_later_mention_replaces_earlier_one() -> None:
    mention, remaining = extract_mention(tokenize("swap @First -x @Second"))

    assert mention == "Second"
    assert remaining == ["swap", "-x"]


def test_email_address_is_not_a_mention() -> None:
    mention, remaining = extract_mention(tokenize("invite member user@example.com"))

    assert mention is None
    assert remaining == ["invite", "member", "user@example.com"]


def test_quoted_at_token_is_not_a_mention() -> None:
    mention, remaining = extract_mention(tokenize('search "@home"'))

    assert mention is None
    assert remaining == ["search", "@home"]


def test_bare_marker_is_not_a_mention() -> None:
    mention, remaining = extract_mention(tokenize("search @"))

    assert mention is None
    assert remaining == ["search", "@"]
