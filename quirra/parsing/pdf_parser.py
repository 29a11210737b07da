"""PDF text extraction using pypdf.

Produces page-segmented plain text suitable for use as document context.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MIME_TYPE = "application/pdf"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page-segmented text ("Page N:" blocks separated by blank lines).
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""


def _validate_pdf_bytes(file_content: bytes) -> None:
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    metadata: dict[str, str] = {}
    try:
        if reader.metadata:
            for key, field in (("title", "/Title"), ("author", "/Author")):
                value = reader.metadata.get(field)
                if value:
                    metadata[key] = str(value)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")
    return metadata


def format_page(number: int, text: str) -> str:
    return f"Page {number}:\n{text}"


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text page by page.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with page-segmented text, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    blocks: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text() or ""
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            continue
        blocks.append(format_page(number, page_text.strip()))

    text = "\n\n".join(blocks)

    if not any(block.split("\n", 1)[1] for block in blocks):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    logger.debug(f"Parsed PDF with {pages} pages ({len(text)} characters)")

    return PDFContent(text=text, pages=pages, metadata=_extract_metadata(reader))
