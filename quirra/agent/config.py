"""Completion client configuration with environment variable loading.

Pydantic-based configuration for the Gemini generateContent client and the
conversation limits applied around it.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _env_float(name: str, default: float | None = None) -> float | None:
    value = os.getenv(name)
    if value is None:
        return default
    return float(value) if value.strip() else None


def _env_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


class AgentConfig(BaseModel):
    """Configuration for the Gemini completion client.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL of the generateContent endpoint.
        model_name: Model identifier to use.
        temperature: Sampling temperature (None = provider default).
        max_tokens: Maximum output tokens (None = provider default).
        request_timeout: Seconds to wait for a reply (None = wait forever).
        history_window: Send only this many recent messages (None = all).
        history_max_chars: Character budget for history (None = unbounded).
        max_document_chars: Cap on stored document context (None = no cap).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("LLM_API_KEY", "")),
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        description="generateContent API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float | None = Field(
        default_factory=lambda: _env_float("LLM_TEMPERATURE"),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int | None = Field(
        default_factory=lambda: _env_int("LLM_MAX_TOKENS"),
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: _env_float("LLM_TIMEOUT", 120.0),
        gt=0.0,
        description="Per-request timeout in seconds",
    )
    history_window: int | None = Field(
        default_factory=lambda: _env_int("HISTORY_WINDOW"),
        ge=0,
        description="Number of recent messages sent as history",
    )
    history_max_chars: int | None = Field(
        default_factory=lambda: _env_int("HISTORY_MAX_CHARS"),
        ge=0,
        description="Character budget for history sent to the model",
    )
    max_document_chars: int | None = Field(
        default_factory=lambda: _env_int("MAX_DOCUMENT_CHARS"),
        ge=1,
        description="Maximum characters of document context kept",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set GEMINI_API_KEY or LLM_API_KEY in .env"
            )
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
