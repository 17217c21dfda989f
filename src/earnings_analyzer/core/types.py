"""Core data types that flow through the analysis pipeline.

This module defines the immutable data structures that represent a single
request as it moves through input resolution, model invocation, normalization
and decoding. Nothing here is shared between requests.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Minimal guard helpers (clarity > boilerplate) ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            enhanced_message = f"{field_name}: {message}"
            raise exc(enhanced_message)
        raise exc(message)


# --- Result Monad for Robust Error Handling ---
# Handlers return Success | Failure instead of raising, so the executor can
# map every failure kind to an envelope in one place.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Request Input ---


@dataclasses.dataclass(frozen=True, slots=True)
class TranscriptInput:
    """A transcript submitted for analysis.

    Carries either literal ``text`` or raw ``file_bytes`` (routed to a PDF
    extractor). Emptiness of the text is checked by the input resolver, not
    here, so that an empty submission surfaces as a ``ValidationError``
    envelope rather than a construction error.
    """

    text: str | None = None
    file_bytes: bytes | None = None
    filename: str | None = None
    content_type: str | None = None

    def __post_init__(self) -> None:
        """Validate field types."""
        _require(
            condition=self.text is None or isinstance(self.text, str),
            message="must be str or None",
            field_name="text",
            exc=TypeError,
        )
        _require(
            condition=self.file_bytes is None
            or isinstance(self.file_bytes, bytes | bytearray),
            message="must be bytes or None",
            field_name="file_bytes",
            exc=TypeError,
        )

    @property
    def has_file(self) -> bool:
        """True when the input carries an uploaded file."""
        return self.file_bytes is not None

    @classmethod
    def from_text(cls, text: str) -> TranscriptInput:
        """Build an input carrying literal transcript text."""
        return cls(text=text)

    @classmethod
    def from_file(
        cls,
        data: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = "application/pdf",
    ) -> TranscriptInput:
        """Build an input carrying an uploaded file."""
        return cls(file_bytes=data, filename=filename, content_type=content_type)


# --- Analysis Result (tagged union) ---


@dataclasses.dataclass(frozen=True, slots=True)
class Structured:
    """Model output that decoded as strict JSON (never a bare null)."""

    value: typing.Any

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=self.value is not None,
            message="must not be None; use Opaque for an empty analysis",
            field_name="value",
        )

    def to_payload(self) -> typing.Any:
        """Return the wire form of this result."""
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class Opaque:
    """Model output that could not be decoded; text is kept verbatim."""

    text: str

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.text, str),
            message="must be str",
            field_name="text",
            exc=TypeError,
        )

    def to_payload(self) -> dict[str, str]:
        """Return the wire form of this result."""
        return {"rawAnalysis": self.text}


AnalysisResult = Structured | Opaque

# --- Envelopes ---


class SuccessEnvelope(typing.TypedDict):
    """Happy-path response body."""

    success: bool
    analysis: typing.Any
    timestamp: str


class ErrorEnvelope(typing.TypedDict):
    """Failure response body. Both fields are always strings."""

    error: str
    details: str


class HealthEnvelope(typing.TypedDict):
    """Health probe response body."""

    status: str
    timestamp: str
    service: str


@dataclasses.dataclass(frozen=True, slots=True)
class EnvelopeResponse:
    """An envelope together with its HTTP-equivalent status code."""

    status_code: int
    body: SuccessEnvelope | ErrorEnvelope

    @property
    def ok(self) -> bool:
        """True for the success envelope."""
        return self.status_code == 200


def is_success_envelope(obj: object) -> typing.TypeGuard[SuccessEnvelope]:
    """Return True if ``obj`` has the success-envelope shape."""
    return (
        isinstance(obj, dict)
        and obj.get("success") is True
        and "analysis" in obj
        and isinstance(obj.get("timestamp"), str)
    )


def is_error_envelope(obj: object) -> typing.TypeGuard[ErrorEnvelope]:
    """Return True if ``obj`` has the error-envelope shape."""
    return (
        isinstance(obj, dict)
        and isinstance(obj.get("error"), str)
        and isinstance(obj.get("details"), str)
    )
