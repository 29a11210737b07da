"""Conversation state and context assembly.

Responsibilities:
    - Append-only message log with stable identities
    - Single active document context
    - Provider request assembly with a pluggable history policy
    - Per-session turn lifecycle (pending flag, success, failure)
    - Registry of independent sessions
"""

from quirra.conversation.assembler import ContextAssembler
from quirra.conversation.controller import (
    ConversationController,
    DocumentUpload,
    TurnResult,
    UploadValidationError,
)
from quirra.conversation.document_store import DocumentContextStore
from quirra.conversation.history import (
    CharacterBudget,
    FullHistory,
    HistoryPolicy,
    LastMessages,
)
from quirra.conversation.log import ConversationLog
from quirra.conversation.registry import SessionRegistry, get_session_registry

__all__ = [
    "CharacterBudget",
    "ContextAssembler",
    "ConversationController",
    "ConversationLog",
    "DocumentContextStore",
    "DocumentUpload",
    "FullHistory",
    "HistoryPolicy",
    "LastMessages",
    "SessionRegistry",
    "TurnResult",
    "UploadValidationError",
    "get_session_registry",
]
