"""Unit tests for the input resolution stage."""

import pytest

from earnings_analyzer.core.types import Failure, Success, TranscriptInput
from earnings_analyzer.exceptions import (
    ExtractionError,
    UnsupportedContentError,
    ValidationError,
)
from earnings_analyzer.files import PypdfExtractor
from earnings_analyzer.pipeline.input_resolver import InputResolver
from tests.helpers import FakeExtractor, blank_pdf_bytes, extraction_failure


class TestLiteralText:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_text_is_returned_unchanged(self):
        resolver = InputResolver(FakeExtractor())

        result = await resolver.handle(TranscriptInput.from_text("  Q3 call.  "))

        assert result == Success("  Q3 call.  ")

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n\t"])
    async def test_missing_or_blank_text_without_file_fails(self, text):
        resolver = InputResolver(FakeExtractor())

        result = await resolver.handle(TranscriptInput(text=text))

        assert isinstance(result, Failure)
        assert type(result.error) is ValidationError

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_text_wins_over_file(self):
        extractor = FakeExtractor(text="from pdf")
        resolver = InputResolver(extractor)

        result = await resolver.handle(
            TranscriptInput(
                text="literal", file_bytes=b"%PDF", content_type="application/pdf"
            )
        )

        assert result == Success("literal")
        assert extractor.calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blank_text_falls_through_to_file(self):
        resolver = InputResolver(FakeExtractor(text="from pdf"))

        result = await resolver.handle(
            TranscriptInput(text="  ", file_bytes=b"%PDF", content_type="application/pdf")
        )

        assert result == Success("from pdf")


class TestFileInput:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pdf_is_extracted(self):
        extractor = FakeExtractor(text="Operator: welcome.")
        resolver = InputResolver(extractor)

        result = await resolver.handle(TranscriptInput.from_file(b"%PDF-1.7 data"))

        assert result == Success("Operator: welcome.")
        assert extractor.calls == [b"%PDF-1.7 data"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content_type", ["text/plain", "image/png", None, "application/pdfx"]
    )
    async def test_non_pdf_is_rejected_before_extraction(self, content_type):
        extractor = FakeExtractor(text="never")
        resolver = InputResolver(extractor)

        result = await resolver.handle(
            TranscriptInput.from_file(b"data", content_type=content_type)
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, UnsupportedContentError)
        assert isinstance(result.error, ValidationError)
        assert extractor.calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_content_type_parameters_are_ignored(self):
        resolver = InputResolver(FakeExtractor(text="ok"))

        result = await resolver.handle(
            TranscriptInput.from_file(b"data", content_type="Application/PDF; charset=binary")
        )

        assert result == Success("ok")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_extraction_is_a_validation_failure(self):
        resolver = InputResolver(FakeExtractor(text="  \n "))

        result = await resolver.handle(TranscriptInput.from_file(b"%PDF"))

        assert isinstance(result, Failure)
        assert type(result.error) is ValidationError
        assert "No text could be extracted" in str(result.error)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_extraction_error_passes_through(self):
        error = extraction_failure()
        resolver = InputResolver(FakeExtractor(error=error))

        result = await resolver.handle(TranscriptInput.from_file(b"junk"))

        assert result == Failure(error)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unexpected_extractor_error_is_normalized(self):
        resolver = InputResolver(FakeExtractor(error=RuntimeError("disk on fire")))

        result = await resolver.handle(TranscriptInput.from_file(b"junk"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ExtractionError)
        assert result.error.details == "disk on fire"


class TestPypdfExtractor:
    """The real extractor against generated documents."""

    @pytest.mark.unit
    def test_blank_pdf_yields_empty_text(self):
        assert PypdfExtractor().extract(blank_pdf_bytes(pages=2)) == ""

    @pytest.mark.unit
    def test_garbage_bytes_raise_extraction_error(self):
        with pytest.raises(ExtractionError):
            PypdfExtractor().extract(b"this is not a pdf")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_resolver_reports_blank_pdf_as_validation_failure(self):
        result = await InputResolver().handle(TranscriptInput.from_file(blank_pdf_bytes()))

        assert isinstance(result, Failure)
        assert type(result.error) is ValidationError
