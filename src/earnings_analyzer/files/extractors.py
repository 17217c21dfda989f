"""Text extraction from uploaded transcript files."""

from __future__ import annotations

import io
import logging
from typing import Protocol, runtime_checkable

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from earnings_analyzer.exceptions import ExtractionError

log = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def is_pdf_content_type(content_type: str | None) -> bool:
    """Return True for ``application/pdf``, ignoring case and parameters."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == PDF_MIME_TYPE


@runtime_checkable
class PdfExtractor(Protocol):
    """Turns raw PDF bytes into plain text.

    Implementations raise ``ExtractionError`` when the bytes cannot be read.
    An unreadable-but-valid PDF (e.g. scanned pages) returns empty text.
    """

    def extract(self, data: bytes) -> str: ...  # noqa: D102


class PypdfExtractor:
    """PDF text extraction with pypdf; pages are joined by blank lines."""

    def extract(self, data: bytes) -> str:
        """Extract the text of every page from ``data``.

        Raises:
            ExtractionError: If pypdf cannot parse the document.
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [(page.extract_text() or "").strip() for page in reader.pages]
        except (PyPdfError, ValueError, OSError) as e:
            raise ExtractionError(f"PDF text extraction failed: {e}", details=str(e)) from e

        text = "\n\n".join(page for page in pages if page)
        log.debug(
            "Extracted %d characters from %d PDF pages (%d with text)",
            len(text),
            len(pages),
            sum(1 for page in pages if page),
        )
        return text
