"""Unit tests for PDF parser module."""

from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check

from quirra.parsing.pdf_parser import MAX_FILE_SIZE, PDFParseError, parse_pdf


def _page(text: str | None = None, error: Exception | None = None) -> MagicMock:
    page = MagicMock()
    if error is not None:
        page.extract_text.side_effect = error
    else:
        page.extract_text.return_value = text
    return page


class TestParsePdfValid:
    def test_blank_page_pdf_succeeds(self, blank_pdf_bytes: bytes) -> None:
        """PDF with an empty page parses without error."""
        result = parse_pdf(blank_pdf_bytes)

        check.equal(result.pages, 1)
        check.equal(result.text, "Page 1:\n")

    def test_text_is_segmented_by_page(self) -> None:
        reader = MagicMock()
        reader.pages = [_page("Intro text  "), _page("Second page")]
        reader.metadata = {"/Title": "Report", "/Author": None}

        with patch("quirra.parsing.pdf_parser.PdfReader", return_value=reader):
            result = parse_pdf(b"%PDF-1.7 fake")

        check.equal(result.text, "Page 1:\nIntro text\n\nPage 2:\nSecond page")
        check.equal(result.pages, 2)
        check.equal(result.metadata, {"title": "Report"})

    def test_unreadable_page_is_skipped(self) -> None:
        reader = MagicMock()
        reader.pages = [_page(error=RuntimeError("bad font")), _page("kept")]
        reader.metadata = None

        with patch("quirra.parsing.pdf_parser.PdfReader", return_value=reader):
            result = parse_pdf(b"%PDF-1.7 fake")

        check.equal(result.text, "Page 2:\nkept")
        check.equal(result.pages, 2)


class TestParsePdfRejection:
    """Tests for PDF validation and rejection."""

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(PDFParseError, match="Empty file"):
            parse_pdf(b"")

    def test_rejects_non_pdf_file(self) -> None:
        with pytest.raises(PDFParseError, match="Invalid PDF"):
            parse_pdf(b"This is a plain text file, not a PDF.")

    def test_rejects_oversized_file(self) -> None:
        oversized = b"%PDF-1.4" + b"\x00" * (MAX_FILE_SIZE + 1)

        with pytest.raises(PDFParseError, match="exceeds maximum"):
            parse_pdf(oversized)

    def test_rejects_truncated_pdf(self) -> None:
        with pytest.raises(PDFParseError, match="Corrupt|Failed|no pages"):
            parse_pdf(b"%PDF-1.4\n1 0 obj\n<<")

    def test_rejects_pdf_without_pages(self) -> None:
        reader = MagicMock()
        reader.pages = []

        with (
            patch("quirra.parsing.pdf_parser.PdfReader", return_value=reader),
            pytest.raises(PDFParseError, match="no pages"),
        ):
            parse_pdf(b"%PDF-1.7 fake")
