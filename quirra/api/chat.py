"""Chat endpoints: submit a turn and inspect session state."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from quirra.conversation.controller import ConversationController
from quirra.conversation.registry import SessionRegistry, get_session_registry
from quirra.models.schemas import ChatRequest, ChatResponse, SessionInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _session_info(session_id: str, controller: ConversationController) -> SessionInfo:
    return SessionInfo(
        session_id=session_id,
        state=controller.state,
        pending=controller.pending,
        has_document=controller.documents.has_context,
        messages=list(controller.messages),
    )


def _get_session(registry: SessionRegistry, session_id: str) -> ConversationController:
    try:
        return registry.get(session_id)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        ) from e


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ChatResponse:
    """Run one chat turn and return the bot message recorded for it.

    Provider failures do not fail the request: the recorded error message is
    returned with ``error`` set.
    """
    session_id, controller = registry.get_or_create(request.session_id)
    result = await controller.send(request.message)
    if result is None:
        # Unreachable after ChatRequest validation; kept for direct callers.
        raise HTTPException(
            status_code=422,
            detail="Message must not be empty",
        )

    return ChatResponse(
        reply=result.message.text,
        session_id=session_id,
        message_id=result.message.id,
        error=result.error,
    )


@router.get("/sessions/{session_id}", response_model=SessionInfo)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionInfo:
    """Return the transcript, pending flag, and document status of a session."""
    return _session_info(session_id, _get_session(registry, session_id))


@router.delete("/sessions/{session_id}/document", response_model=SessionInfo)
async def clear_document(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionInfo:
    """Drop the session's document context."""
    controller = _get_session(registry, session_id)
    controller.clear_document()
    logger.info(f"Cleared document context for session {session_id}")
    return _session_info(session_id, controller)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    """End a session: cancel its in-flight turns and discard its transcript."""
    _get_session(registry, session_id)
    await registry.close(session_id)
