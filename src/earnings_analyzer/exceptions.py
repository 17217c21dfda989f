"""Exceptions raised by the transcript analysis pipeline.

Each fatal error kind carries a short, caller-facing ``summary`` used as the
``error`` field of the error envelope, plus the underlying detail string.
Decode mismatches are deliberately absent: they degrade to ``Opaque``.
"""


class TranscriptAnalyzerError(Exception):
    """Base exception for transcript analysis errors"""  # noqa: D415

    summary = "Failed to analyze transcript"

    def __init__(self, message: str = "", *, details: str | None = None) -> None:
        """Initialize with a message and an optional underlying detail string."""
        super().__init__(message or self.summary)
        self.details = details

    @property
    def detail_text(self) -> str:
        """Detail string for envelopes; never empty."""
        return self.details or str(self) or self.summary


class ValidationError(TranscriptAnalyzerError):
    """Raised when the transcript input is missing or empty"""  # noqa: D415

    summary = "Invalid transcript input"


class UnsupportedContentError(ValidationError):
    """Raised when an uploaded file is not a PDF"""  # noqa: D415

    summary = "Only PDF files are allowed"


class ExtractionError(TranscriptAnalyzerError):
    """Raised when text extraction from an uploaded file fails"""  # noqa: D415

    summary = "Failed to extract transcript text"


class ModelUnavailableError(TranscriptAnalyzerError):
    """Raised when the generative model call fails (network, quota, auth)"""  # noqa: D415

    summary = "Failed to analyze transcript"


class ConfigurationError(TranscriptAnalyzerError):
    """Raised when configuration cannot be resolved or validated"""  # noqa: D415

    summary = "Invalid configuration"
