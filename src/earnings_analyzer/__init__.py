"""Earnings-call transcript analysis with Gemini."""

import importlib.metadata
import logging

from earnings_analyzer.config import FrozenConfig, ResolvedConfig, resolve_config
from earnings_analyzer.core.types import (
    AnalysisResult,
    EnvelopeResponse,
    ErrorEnvelope,
    Failure,
    Opaque,
    Result,
    Structured,
    Success,
    SuccessEnvelope,
    TranscriptInput,
)
from earnings_analyzer.exceptions import (
    ConfigurationError,
    ExtractionError,
    ModelUnavailableError,
    TranscriptAnalyzerError,
    UnsupportedContentError,
    ValidationError,
)
from earnings_analyzer.executor import TranscriptAnalyzer, create_analyzer
from earnings_analyzer.pipeline.prompts import build_analysis_prompt
from earnings_analyzer.response import decode_analysis, normalize_response
from earnings_analyzer.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("earnings-analyzer")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Analyzer
    "TranscriptAnalyzer",
    "create_analyzer",
    # Pipeline building blocks
    "build_analysis_prompt",
    "normalize_response",
    "decode_analysis",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Core Types
    "TranscriptInput",
    "AnalysisResult",
    "Structured",
    "Opaque",
    "EnvelopeResponse",
    "SuccessEnvelope",
    "ErrorEnvelope",
    "Result",
    "Success",
    "Failure",
    # Exceptions
    "TranscriptAnalyzerError",
    "ValidationError",
    "UnsupportedContentError",
    "ExtractionError",
    "ModelUnavailableError",
    "ConfigurationError",
]
