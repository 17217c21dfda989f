"""Envelope construction for analysis results and pipeline failures.

Every request ends in exactly one envelope: the success envelope once a
model reply exists (structured or opaque), or the error envelope for the
three fatal kinds. Fields are never ``None``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from earnings_analyzer.core.types import (
    AnalysisResult,
    EnvelopeResponse,
    ErrorEnvelope,
    SuccessEnvelope,
)
from earnings_analyzer.exceptions import TranscriptAnalyzerError, ValidationError

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_ERROR = 500

UNEXPECTED_ERROR_SUMMARY = "Failed to analyze transcript"


def format_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with milliseconds and ``Z``."""
    utc = moment.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    return datetime.now(UTC)


def status_for(error: BaseException) -> int:
    """Map an error kind to its HTTP-equivalent status."""
    if isinstance(error, ValidationError):
        return HTTP_BAD_REQUEST
    return HTTP_INTERNAL_ERROR


class EnvelopeBuilder:
    """Wraps analysis results and failures into response envelopes.

    Attributes:
        clock: Zero-argument callable returning the current aware datetime.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock = clock

    def timestamp(self) -> str:
        return format_timestamp(self.clock())

    def success(self, result: AnalysisResult) -> EnvelopeResponse:
        """Build the 200 envelope for a structured or opaque result."""
        body: SuccessEnvelope = {
            "success": True,
            "analysis": result.to_payload(),
            "timestamp": self.timestamp(),
        }
        return EnvelopeResponse(status_code=HTTP_OK, body=body)

    def failure(self, error: BaseException) -> EnvelopeResponse:
        """Build the 400/500 envelope for a fatal pipeline error.

        Known error kinds contribute their summary and detail string; any
        other exception is reported as a generic analysis failure.
        """
        if isinstance(error, TranscriptAnalyzerError):
            body: ErrorEnvelope = {
                "error": error.summary,
                "details": error.detail_text,
            }
        else:
            body = {
                "error": UNEXPECTED_ERROR_SUMMARY,
                "details": str(error) or type(error).__name__,
            }
        return EnvelopeResponse(status_code=status_for(error), body=body)
