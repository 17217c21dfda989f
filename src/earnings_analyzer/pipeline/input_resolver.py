"""Input resolution stage: turn a request payload into transcript text."""

from __future__ import annotations

import asyncio
import logging

from earnings_analyzer.core.types import Failure, Result, Success, TranscriptInput
from earnings_analyzer.exceptions import (
    ExtractionError,
    UnsupportedContentError,
    ValidationError,
)
from earnings_analyzer.files.extractors import (
    PdfExtractor,
    PypdfExtractor,
    is_pdf_content_type,
)
from earnings_analyzer.pipeline.base import BaseAsyncHandler

log = logging.getLogger(__name__)


class InputResolver(
    BaseAsyncHandler[TranscriptInput, str, ValidationError | ExtractionError]
):
    """Produces non-empty transcript text or a typed failure.

    Literal text is used as submitted. Uploaded files must be PDFs and are
    handed to the injected extractor, which runs in a worker thread so the
    event loop stays free for other requests.
    """

    def __init__(self, extractor: PdfExtractor | None = None) -> None:
        self._extractor: PdfExtractor = extractor or PypdfExtractor()

    async def handle(
        self, command: TranscriptInput
    ) -> Result[str, ValidationError | ExtractionError]:
        if command.text is not None and command.text.strip():
            return Success(command.text)

        if not command.has_file:
            return Failure(ValidationError("No transcript text or PDF file provided"))

        if not is_pdf_content_type(command.content_type):
            return Failure(
                UnsupportedContentError(
                    f"Only PDF files are allowed, got {command.content_type!r}"
                )
            )

        try:
            text = await asyncio.to_thread(
                self._extractor.extract, bytes(command.file_bytes or b"")
            )
        except ExtractionError as e:
            return Failure(e)
        except Exception as e:  # Defensive normalization of extractor failures
            return Failure(
                ExtractionError(f"PDF text extraction failed: {e}", details=str(e))
            )

        if not text or not text.strip():
            log.info("PDF '%s' produced no extractable text", command.filename)
            return Failure(ValidationError("No text could be extracted from the PDF"))
        return Success(text)
