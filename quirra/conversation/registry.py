"""Registry of independent chat sessions sharing one completion client."""

import logging
import uuid

from quirra.agent.config import AgentConfig, get_agent_config
from quirra.agent.gemini_client import CompletionClient, GeminiClient
from quirra.conversation.assembler import ContextAssembler
from quirra.conversation.controller import ConversationController
from quirra.conversation.history import policy_from_limits

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Creates, looks up, and tears down conversation sessions."""

    def __init__(
        self,
        client: CompletionClient,
        config: AgentConfig | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._sessions: dict[str, ConversationController] = {}

    def _new_controller(self) -> ConversationController:
        if self._config is None:
            return ConversationController(self._client)
        policy = policy_from_limits(
            self._config.history_window, self._config.history_max_chars
        )
        return ConversationController(
            self._client,
            assembler=ContextAssembler(policy),
            max_document_chars=self._config.max_document_chars,
        )

    def create(self) -> tuple[str, ConversationController]:
        session_id = str(uuid.uuid4())
        controller = self._new_controller()
        self._sessions[session_id] = controller
        logger.info(f"Created session {session_id}")
        return session_id, controller

    def get(self, session_id: str) -> ConversationController:
        """Return the session's controller.

        Raises:
            KeyError: If the session does not exist.
        """
        return self._sessions[session_id]

    def get_or_create(
        self, session_id: str | None
    ) -> tuple[str, ConversationController]:
        if session_id is None:
            return self.create()
        controller = self._sessions.get(session_id)
        if controller is None:
            controller = self._new_controller()
            self._sessions[session_id] = controller
            logger.info(f"Created session {session_id}")
        return session_id, controller

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    async def close(self, session_id: str) -> None:
        controller = self._sessions.pop(session_id, None)
        if controller is not None:
            await controller.aclose()
            logger.info(f"Closed session {session_id}")

    async def aclose(self) -> None:
        """Close every session, then the shared completion client."""
        for session_id in list(self._sessions):
            await self.close(session_id)
        aclose = getattr(self._client, "aclose", None)
        if aclose is not None:
            await aclose()


# Module-level singleton instance
_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get or create the process-wide session registry.

    Returns:
        The SessionRegistry backed by a GeminiClient configured from the
        environment.
    """
    global _registry
    if _registry is None:
        config = get_agent_config()
        _registry = SessionRegistry(GeminiClient(config), config)
    return _registry


async def shutdown_session_registry() -> None:
    global _registry
    if _registry is not None:
        await _registry.aclose()
        _registry = None
