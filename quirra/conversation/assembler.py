"""Builds the provider request for one turn."""

from collections.abc import Sequence

from quirra.conversation.history import FullHistory, HistoryPolicy
from quirra.models.schemas import Message, ProviderRequest, Sender, Turn

DOCUMENT_CONTEXT_PREFIX = "Context from uploaded PDF:\n"

_ROLES = {Sender.USER: "user", Sender.BOT: "model"}


class ContextAssembler:
    """Turns (history, document context, new input) into provider turns.

    Order is fixed: the document context turn (if any), then the selected
    history in chronological order, then the new user text.
    """

    def __init__(self, policy: HistoryPolicy | None = None) -> None:
        self.policy = policy or FullHistory()

    def build(
        self,
        history: Sequence[Message],
        document_context: str | None,
        new_user_text: str,
    ) -> ProviderRequest:
        turns: list[Turn] = []

        if document_context is not None:
            turns.append(
                Turn(role="user", text=f"{DOCUMENT_CONTEXT_PREFIX}{document_context}")
            )

        for message in self.policy.select(history):
            turns.append(Turn(role=_ROLES[message.sender], text=message.text))

        turns.append(Turn(role="user", text=new_user_text))

        return ProviderRequest(turns=tuple(turns))
