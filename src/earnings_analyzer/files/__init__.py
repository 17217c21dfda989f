"""File handling for uploaded transcripts."""

from .extractors import (
    PDF_MIME_TYPE,
    PdfExtractor,
    PypdfExtractor,
    is_pdf_content_type,
)

__all__ = ["PDF_MIME_TYPE", "PdfExtractor", "PypdfExtractor", "is_pdf_content_type"]
