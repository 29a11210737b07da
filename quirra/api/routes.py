"""PDF upload endpoint for document context.

Handles file upload, size validation, and handing the file to the session.
"""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status

from quirra.conversation.controller import UploadValidationError
from quirra.conversation.registry import SessionRegistry, get_session_registry
from quirra.models.schemas import PDFUploadResponse
from quirra.parsing.pdf_parser import MAX_FILE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.

    Returns:
        File content as bytes.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


@router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(
    file: UploadFile,
    session_id: str | None = Form(None),
    registry: SessionRegistry = Depends(get_session_registry),
) -> PDFUploadResponse:
    """Upload a PDF and make its text the session's document context.

    Args:
        file: The uploaded PDF file (multipart/form-data).
        session_id: Session to attach the document to; a new one is created
            when omitted.

    Returns:
        PDFUploadResponse with filename, page count, and acknowledgment id.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        413: File exceeds 10MB limit.
    """
    content = await _read_and_validate_size(file)
    session_id, controller = registry.get_or_create(session_id)

    try:
        upload = await controller.upload_document(file.filename, file.content_type, content)
    except UploadValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return PDFUploadResponse(
        filename=upload.filename,
        pages=upload.pages,
        characters=upload.characters,
        title=upload.title,
        author=upload.author,
        session_id=session_id,
        message_id=upload.message.id,
        success=True,
    )
