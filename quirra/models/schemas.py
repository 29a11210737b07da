from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sender(str, Enum):
    """Author of a message in the conversation log."""

    USER = "user"
    BOT = "bot"


class ConversationState(str, Enum):
    """Lifecycle state of a conversation."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class Message(BaseModel):
    """A single immutable entry in the conversation log.

    Attributes:
        id: Strictly increasing identity, also used as the ordering key.
        text: The message text.
        sender: Who authored the message.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    text: str
    sender: Sender


class Turn(BaseModel):
    """One role-tagged unit of text submitted to the completion provider."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


class ProviderRequest(BaseModel):
    """Ordered turns sent to the completion provider for one reply."""

    model_config = ConfigDict(frozen=True)

    turns: tuple[Turn, ...] = ()


# Gemini generateContent response shape. Only the fields we read are modelled;
# everything else the provider sends is ignored.


class ResponsePart(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class ResponseContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    parts: list[ResponsePart] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: ResponseContent | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class GenerateContentResponse(BaseModel):
    """Validated body of a generateContent response."""

    model_config = ConfigDict(extra="ignore")

    candidates: list[Candidate] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request payload for chat completion endpoint.

    Attributes:
        message: User's question or prompt.
        session_id: Optional session for conversation continuity.
    """

    message: str = Field(..., min_length=1)
    session_id: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Reply recorded for a chat turn.

    Attributes:
        reply: Text of the bot message appended for this turn.
        session_id: Session identifier for follow-up questions.
        message_id: Identity of the bot message in the log.
        error: Error kind when the provider call failed.
    """

    reply: str
    session_id: str
    message_id: int
    error: str | None = None


class SessionInfo(BaseModel):
    """Snapshot of a chat session for rendering."""

    session_id: str
    state: ConversationState
    pending: bool
    has_document: bool
    messages: list[Message]


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        characters: Length of the stored document context.
        title: Document title from PDF metadata, if any.
        author: Document author from PDF metadata, if any.
        session_id: Session the document was attached to.
        message_id: Identity of the upload acknowledgment message.
        success: Whether the upload was successful.
    """

    filename: str
    pages: int
    characters: int
    title: str | None = None
    author: str | None = None
    session_id: str
    message_id: int
    success: bool
