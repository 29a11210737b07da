"""Pydantic models shared across the conversation engine and the API.

Models:
    - Message: Immutable entry in the conversation log
    - Turn / ProviderRequest: Context assembled for the completion provider
    - GenerateContentResponse: Validated provider response
    - ChatRequest / ChatResponse / SessionInfo / PDFUploadResponse: API payloads
"""

from quirra.models.schemas import (
    ChatRequest,
    ChatResponse,
    ConversationState,
    GenerateContentResponse,
    Message,
    PDFUploadResponse,
    ProviderRequest,
    Sender,
    SessionInfo,
    Turn,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ConversationState",
    "GenerateContentResponse",
    "Message",
    "PDFUploadResponse",
    "ProviderRequest",
    "Sender",
    "SessionInfo",
    "Turn",
]
