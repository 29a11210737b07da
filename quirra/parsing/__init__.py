"""PDF parsing utilities for document context.

Responsibilities:
    - File validation (header, size, emptiness)
    - Page-segmented text extraction with pypdf
    - Metadata extraction (title, author)
"""

from quirra.parsing.pdf_parser import (
    PDF_MIME_TYPE,
    PDFContent,
    PDFParseError,
    parse_pdf,
)

__all__ = ["PDF_MIME_TYPE", "PDFContent", "PDFParseError", "parse_pdf"]
