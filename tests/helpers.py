"""Collaborator fakes shared across test modules."""

from datetime import UTC, datetime
import io

from pypdf import PdfWriter

from earnings_analyzer.exceptions import ExtractionError, ModelUnavailableError

FIXED_NOW = datetime(2026, 10, 19, 9, 30, 15, 123456, tzinfo=UTC)
FIXED_TIMESTAMP = "2026-10-19T09:30:15.123Z"


def fixed_clock() -> datetime:
    return FIXED_NOW


class FakeAdapter:
    """Records prompts and answers with a canned reply or error."""

    model_name = "fake-model"

    def __init__(self, reply: str = "{}", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeExtractor:
    """Returns canned text (or raises) for any bytes."""

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[bytes] = []

    def extract(self, data: bytes) -> str:
        self.calls.append(data)
        if self.error is not None:
            raise self.error
        return self.text


def unavailable(message: str = "quota exceeded") -> ModelUnavailableError:
    return ModelUnavailableError(f"Gemini quota or rate limit exceeded. Original error: {message}", details=message)


def extraction_failure(message: str = "EOF marker not found") -> ExtractionError:
    return ExtractionError(f"PDF text extraction failed: {message}", details=message)


def blank_pdf_bytes(pages: int = 1) -> bytes:
    """Build a valid PDF whose pages carry no text."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
