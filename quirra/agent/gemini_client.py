"""Gemini generateContent client.

Sends the assembled turns in one POST and maps the provider's response to a
plain reply string.

Failure classification:

1. **Transport failure** - the request never produced a usable body: network
   errors, timeouts, HTTP error statuses, or a body that is not JSON. Raised
   as ``CompletionError`` so the caller can record a visible error message.

2. **Malformed provider response** - the body is JSON but does not carry
   ``candidates[0].content.parts[0].text``. This is not an error for the
   caller: the client logs it and answers with ``FALLBACK_REPLY``.

Exactly one attempt is made per call; there is no retry.
"""

import logging
from enum import Enum
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from quirra.agent.config import AgentConfig, get_agent_config
from quirra.models.schemas import GenerateContentResponse, ProviderRequest

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I couldn't understand that."


class CompletionErrorKind(str, Enum):
    TRANSPORT_FAILURE = "transport_failure"


class CompletionError(Exception):
    """Raised when the provider call fails at the transport level."""

    def __init__(
        self,
        message: str,
        kind: CompletionErrorKind = CompletionErrorKind.TRANSPORT_FAILURE,
    ) -> None:
        super().__init__(message)
        self.kind = kind


class MalformedProviderResponse(Exception):
    """Raised when a response body lacks the expected reply text."""


class CompletionClient(Protocol):
    async def complete(self, request: ProviderRequest) -> str:  # pragma: no cover
        ...


def extract_reply(payload: Any) -> str:
    """Extract the first candidate's first text part.

    Args:
        payload: Decoded JSON body of a generateContent response.

    Returns:
        The reply text.

    Raises:
        MalformedProviderResponse: If the body does not match the schema or
            the reply text is missing.
    """
    try:
        response = GenerateContentResponse.model_validate(payload)
    except ValidationError as e:
        raise MalformedProviderResponse(f"Unexpected response shape: {e}") from e

    if not response.candidates:
        raise MalformedProviderResponse("Response has no candidates")

    content = response.candidates[0].content
    if content is None or not content.parts:
        raise MalformedProviderResponse("First candidate has no content parts")

    text = content.parts[0].text
    if text is None:
        raise MalformedProviderResponse("First content part has no text")

    return text


class GeminiClient:
    """Completion client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        config: AgentConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            http_client: Optional pre-built HTTP client. When given, the caller
                owns it and ``aclose`` leaves it open.
        """
        self._config = config or get_agent_config()
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=self._config.request_timeout)
        self._http = http_client

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/models/{self._config.model_name}:generateContent"

    def build_payload(self, request: ProviderRequest) -> dict[str, Any]:
        """Serialize turns into the generateContent wire shape."""
        generation_config: dict[str, Any] = {"responseMimeType": "text/plain"}
        if self._config.temperature is not None:
            generation_config["temperature"] = self._config.temperature
        if self._config.max_tokens is not None:
            generation_config["maxOutputTokens"] = self._config.max_tokens

        return {
            "contents": [
                {"role": turn.role, "parts": [{"text": turn.text}]}
                for turn in request.turns
            ],
            "generationConfig": generation_config,
        }

    async def complete(self, request: ProviderRequest) -> str:
        """Request a single reply for the given turns.

        Args:
            request: Assembled provider request.

        Returns:
            The reply text, or ``FALLBACK_REPLY`` if the provider answered
            without usable text.

        Raises:
            CompletionError: If the request fails at the transport level.
        """
        try:
            response = await self._http.post(
                self.endpoint,
                params={"key": self._config.api_key},
                json=self.build_payload(request),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Gemini API returned HTTP {e.response.status_code}")
            raise CompletionError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Gemini API request failed: {e!r}")
            raise CompletionError(f"Connection failed: {e}") from e
        except ValueError as e:
            logger.error(f"Gemini API returned a non-JSON body: {e}")
            raise CompletionError("Response body is not valid JSON") from e

        try:
            return extract_reply(payload)
        except MalformedProviderResponse as e:
            logger.warning(f"Falling back to default reply: {e}")
            return FALLBACK_REPLY

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()
