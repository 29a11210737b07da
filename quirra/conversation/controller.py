"""Conversation controller: one chat session's state machine.

A turn moves the session from ``IDLE`` to ``AWAITING_REPLY``:

1. The user message is appended synchronously, together with a snapshot of
   the history and document context taken just before it. The provider
   request is built from that snapshot, so a turn never sees later messages.
2. The completion runs as an ``asyncio.Task`` returning a ``TurnResult``.
3. The reply (or a fixed error text on transport failure) is appended as a
   bot message, then the pending flag drops.

A second submit while a reply is outstanding is accepted immediately; each
turn carries its own request. Document upload is a side channel that only
touches the log and the document store after a successful extraction.
"""

import asyncio
import logging
from collections.abc import Callable

from pydantic import BaseModel

from quirra.agent.gemini_client import (
    CompletionClient,
    CompletionError,
    CompletionErrorKind,
)
from quirra.conversation.assembler import ContextAssembler
from quirra.conversation.document_store import DocumentContextStore
from quirra.conversation.log import ConversationLog
from quirra.models.schemas import (
    ConversationState,
    Message,
    ProviderRequest,
    Sender,
)
from quirra.parsing.pdf_parser import PDF_MIME_TYPE, PDFContent, PDFParseError, parse_pdf

logger = logging.getLogger(__name__)

ERROR_REPLY = "Error fetching response from Gemini API."
INVALID_FILE_MESSAGE = "Please upload a valid PDF file."


class UploadValidationError(Exception):
    """Raised when an uploaded file is rejected before reaching the session."""


class TurnResult(BaseModel):
    """Outcome of one completion turn.

    Attributes:
        message: The bot message appended for this turn.
        error: Error kind if the provider call failed, else None.
    """

    message: Message
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentUpload(BaseModel):
    """Result of a successful document upload."""

    filename: str
    pages: int
    characters: int
    title: str | None = None
    author: str | None = None
    message: Message


class ConversationController:
    """Owns the log, document context, and pending state of one session."""

    def __init__(
        self,
        client: CompletionClient,
        assembler: ContextAssembler | None = None,
        extractor: Callable[[bytes], PDFContent] = parse_pdf,
        max_document_chars: int | None = None,
    ) -> None:
        self._client = client
        self._assembler = assembler or ContextAssembler()
        self._extractor = extractor
        self._max_document_chars = max_document_chars
        self._log = ConversationLog()
        self._documents = DocumentContextStore()
        self._in_flight = 0
        self._tasks: set[asyncio.Task[TurnResult]] = set()

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def documents(self) -> DocumentContextStore:
        return self._documents

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._log.snapshot()

    @property
    def pending(self) -> bool:
        return self._in_flight > 0

    @property
    def state(self) -> ConversationState:
        if self.pending:
            return ConversationState.AWAITING_REPLY
        return ConversationState.IDLE

    def submit(self, text: str) -> asyncio.Task[TurnResult] | None:
        """Start a turn for ``text``.

        Must be called from a running event loop.

        Args:
            text: Raw user input.

        Returns:
            The task completing the turn, or None if the input was blank.
        """
        if not text or not text.strip():
            return None

        history = self._log.snapshot()
        document = self._documents.get_context()
        self._log.append(Sender.USER, text)
        request = self._assembler.build(history, document, text)

        self._in_flight += 1
        task = asyncio.get_running_loop().create_task(self._complete_turn(request))
        self._tasks.add(task)
        task.add_done_callback(self._finish_turn)
        return task

    def _finish_turn(self, task: asyncio.Task[TurnResult]) -> None:
        self._tasks.discard(task)
        self._in_flight -= 1

    async def send(self, text: str) -> TurnResult | None:
        """Submit ``text`` and wait for the turn to finish."""
        task = self.submit(text)
        if task is None:
            return None
        return await task

    async def await_turn(self, task: asyncio.Task[TurnResult]) -> TurnResult | None:
        """Wait for a submitted turn; None if it was cancelled by session teardown."""
        await asyncio.wait({task})
        if task.cancelled():
            return None
        return task.result()

    async def _complete_turn(self, request: ProviderRequest) -> TurnResult:
        try:
            reply = await self._client.complete(request)
        except CompletionError as e:
            logger.warning(f"Completion failed ({e.kind.value}): {e}")
            message = self._log.append(Sender.BOT, ERROR_REPLY)
            return TurnResult(message=message, error=e.kind.value)
        except Exception:
            logger.exception("Completion client raised an unexpected error")
            message = self._log.append(Sender.BOT, ERROR_REPLY)
            return TurnResult(
                message=message, error=CompletionErrorKind.TRANSPORT_FAILURE.value
            )
        message = self._log.append(Sender.BOT, reply)
        return TurnResult(message=message)

    async def upload_document(
        self, filename: str | None, content_type: str | None, data: bytes
    ) -> DocumentUpload:
        """Extract a PDF and make its text the active document context.

        Args:
            filename: Original file name.
            content_type: MIME type reported for the file.
            data: Raw file bytes.

        Returns:
            DocumentUpload describing the stored context.

        Raises:
            UploadValidationError: If the file is not an extractable PDF. The
                log and document context are left untouched.
        """
        if not filename:
            raise UploadValidationError("Filename is required")
        if content_type != PDF_MIME_TYPE:
            raise UploadValidationError(INVALID_FILE_MESSAGE)

        try:
            content = await asyncio.to_thread(self._extractor, data)
        except PDFParseError as e:
            logger.warning(f"PDF parse error for {filename}: {e}")
            raise UploadValidationError(str(e)) from e

        text = content.text
        limit = self._max_document_chars
        if limit is not None and len(text) > limit:
            logger.warning(
                f"Truncating document context for {filename} from {len(text)} to {limit} characters"
            )
            text = text[:limit]

        self._documents.set_context(text)
        message = self._log.append(Sender.USER, f"✅ 1 file uploaded: {filename}")
        logger.info(f"Loaded document context from {filename} ({content.pages} pages)")

        return DocumentUpload(
            filename=filename,
            pages=content.pages,
            characters=len(text),
            title=content.metadata.get("title"),
            author=content.metadata.get("author"),
            message=message,
        )

    def clear_document(self) -> None:
        self._documents.clear()

    async def aclose(self) -> None:
        """Cancel any turns still waiting for a reply."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
