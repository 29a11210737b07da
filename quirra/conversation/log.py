"""Append-only conversation log."""

import itertools
import threading
from collections.abc import Iterator

from quirra.models.schemas import Message, Sender


class ConversationLog:
    """Ordered sequence of messages with strictly increasing identities.

    Identity allocation and the append happen under one lock, so concurrent
    appends never share an id and insertion order always matches id order.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def append(self, sender: Sender, text: str) -> Message:
        """Create a message with a fresh identity and append it.

        Args:
            sender: Author of the message.
            text: Message text.

        Returns:
            The appended message.
        """
        with self._lock:
            message = Message(id=next(self._ids), text=text, sender=sender)
            self._messages.append(message)
        return message

    def snapshot(self) -> tuple[Message, ...]:
        """Return a read-only view of the log in chronological order."""
        with self._lock:
            return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
