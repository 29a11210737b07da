"""Unit tests for ContextAssembler and history policies."""

import pytest
import pytest_check as check

from quirra.conversation.assembler import DOCUMENT_CONTEXT_PREFIX, ContextAssembler
from quirra.conversation.history import (
    CharacterBudget,
    FullHistory,
    LastMessages,
    policy_from_limits,
)
from quirra.models.schemas import Message, Sender, Turn


def _history(*entries: tuple[Sender, str]) -> tuple[Message, ...]:
    return tuple(
        Message(id=i, sender=sender, text=text)
        for i, (sender, text) in enumerate(entries, start=1)
    )


class TestBuild:
    def test_empty_log_without_document(self) -> None:
        request = ContextAssembler().build((), None, "Hello")

        assert request.turns == (Turn(role="user", text="Hello"),)

    def test_document_history_and_new_input_in_order(self) -> None:
        history = _history((Sender.USER, "Hi"), (Sender.BOT, "Yo"))

        request = ContextAssembler().build(history, "Doc:X", "Q")

        assert request.turns == (
            Turn(role="user", text=f"{DOCUMENT_CONTEXT_PREFIX}Doc:X"),
            Turn(role="user", text="Hi"),
            Turn(role="model", text="Yo"),
            Turn(role="user", text="Q"),
        )

    def test_context_turn_carries_explanation_prefix(self) -> None:
        request = ContextAssembler().build((), "body", "q")

        assert request.turns[0].text == "Context from uploaded PDF:\nbody"

    @pytest.mark.parametrize("document", [None, "", "some text"])
    @pytest.mark.parametrize("length", [0, 1, 5])
    def test_turn_count(self, document: str | None, length: int) -> None:
        history = _history(*[(Sender.USER, f"m{i}") for i in range(length)])

        request = ContextAssembler().build(history, document, "new")

        expected = (1 if document is not None else 0) + length + 1
        assert len(request.turns) == expected
        assert request.turns[-1] == Turn(role="user", text="new")

    def test_empty_document_text_still_adds_context_turn(self) -> None:
        request = ContextAssembler().build((), "", "q")

        assert request.turns == (
            Turn(role="user", text=DOCUMENT_CONTEXT_PREFIX),
            Turn(role="user", text="q"),
        )

    def test_build_does_not_modify_history(self) -> None:
        history = _history((Sender.USER, "a"))

        ContextAssembler().build(history, "doc", "b")

        assert history == _history((Sender.USER, "a"))


class TestHistoryPolicies:
    def test_full_history_keeps_everything(self) -> None:
        history = _history((Sender.USER, "a"), (Sender.BOT, "b"))

        assert FullHistory().select(history) == history

    def test_last_messages_keeps_recent_suffix(self) -> None:
        history = _history(
            (Sender.USER, "a"), (Sender.BOT, "b"), (Sender.USER, "c")
        )

        selected = LastMessages(2).select(history)

        assert [m.text for m in selected] == ["b", "c"]

    def test_last_messages_zero_sends_no_history(self) -> None:
        history = _history((Sender.USER, "a"))

        assert list(LastMessages(0).select(history)) == []

    def test_character_budget_keeps_fitting_suffix(self) -> None:
        history = _history(
            (Sender.USER, "aaaa"), (Sender.BOT, "bbb"), (Sender.USER, "cc")
        )

        selected = CharacterBudget(5).select(history)

        assert [m.text for m in selected] == ["bbb", "cc"]

    def test_character_budget_drops_oversized_latest(self) -> None:
        history = _history((Sender.USER, "x" * 10))

        assert list(CharacterBudget(5).select(history)) == []

    def test_negative_limits_rejected(self) -> None:
        with pytest.raises(ValueError):
            LastMessages(-1)
        with pytest.raises(ValueError):
            CharacterBudget(-1)

    def test_policy_from_limits(self) -> None:
        check.is_instance(policy_from_limits(), FullHistory)
        check.is_instance(policy_from_limits(window=3), LastMessages)
        check.is_instance(policy_from_limits(max_chars=100), CharacterBudget)
        check.is_instance(policy_from_limits(window=3, max_chars=100), LastMessages)

    def test_assembler_applies_policy(self) -> None:
        history = _history(
            (Sender.USER, "old"), (Sender.BOT, "older reply"), (Sender.USER, "recent")
        )

        request = ContextAssembler(LastMessages(1)).build(history, "doc", "now")

        assert [t.text for t in request.turns] == [
            f"{DOCUMENT_CONTEXT_PREFIX}doc",
            "recent",
            "now",
        ]
