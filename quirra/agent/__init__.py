"""Completion provider access.

Responsibilities:
    - Configuration from environment variables and .env
    - Serializing provider requests to the Gemini wire shape
    - Validating responses and classifying failures
"""

from quirra.agent.config import AgentConfig, get_agent_config
from quirra.agent.gemini_client import (
    FALLBACK_REPLY,
    CompletionClient,
    CompletionError,
    CompletionErrorKind,
    GeminiClient,
    MalformedProviderResponse,
)

__all__ = [
    "FALLBACK_REPLY",
    "AgentConfig",
    "CompletionClient",
    "CompletionError",
    "CompletionErrorKind",
    "GeminiClient",
    "MalformedProviderResponse",
    "get_agent_config",
]
