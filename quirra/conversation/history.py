"""History policies that bound how much of the log is sent to the model.

The reference behaviour sends the whole log every turn. Long sessions
eventually exceed the provider's context window, so the assembler accepts any
policy that picks a chronological suffix of the history.
"""

from collections.abc import Sequence
from typing import Protocol

from quirra.models.schemas import Message


class HistoryPolicy(Protocol):
    def select(self, history: Sequence[Message]) -> Sequence[Message]:  # pragma: no cover
        ...


class FullHistory:
    """Send every message."""

    def select(self, history: Sequence[Message]) -> Sequence[Message]:
        return history


class LastMessages:
    """Send only the most recent ``limit`` messages."""

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self.limit = limit

    def select(self, history: Sequence[Message]) -> Sequence[Message]:
        if self.limit == 0:
            return ()
        return history[-self.limit :]


class CharacterBudget:
    """Send the longest suffix of messages whose combined text fits the budget."""

    def __init__(self, max_chars: int) -> None:
        if max_chars < 0:
            raise ValueError("max_chars must be non-negative")
        self.max_chars = max_chars

    def select(self, history: Sequence[Message]) -> Sequence[Message]:
        used = 0
        start = len(history)
        for index in range(len(history) - 1, -1, -1):
            used += len(history[index].text)
            if used > self.max_chars:
                break
            start = index
        return history[start:]


def policy_from_limits(
    window: int | None = None, max_chars: int | None = None
) -> HistoryPolicy:
    """Pick a history policy from configured limits.

    A message window takes precedence over a character budget; with neither
    set the full history is sent.
    """
    if window is not None:
        return LastMessages(window)
    if max_chars is not None:
        return CharacterBudget(max_chars)
    return FullHistory()
