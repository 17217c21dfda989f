"""The primary entry point for analyzing a transcript.

``TranscriptAnalyzer`` runs one request through input resolution, prompt
building, model invocation, normalization and decoding, and always returns
an ``EnvelopeResponse``. Stages report failures as ``Failure`` results; the
analyzer is the single place where they are logged and turned into error
envelopes.

Collaborators (generation adapter, PDF extractor) are built once and
injected, so tests substitute fakes and requests share no mutable state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from earnings_analyzer.config import FrozenConfig, resolve_config
from earnings_analyzer.core.types import (
    EnvelopeResponse,
    Failure,
    Opaque,
    TranscriptInput,
)
from earnings_analyzer.pipeline.adapters import build_adapter
from earnings_analyzer.pipeline.input_resolver import InputResolver
from earnings_analyzer.pipeline.model_invoker import ModelInvoker
from earnings_analyzer.pipeline.prompts import build_analysis_prompt
from earnings_analyzer.pipeline.result_builder import EnvelopeBuilder
from earnings_analyzer.response import decode_analysis, normalize_response
from earnings_analyzer.telemetry import TelemetryContext

if TYPE_CHECKING:
    from earnings_analyzer.files.extractors import PdfExtractor
    from earnings_analyzer.pipeline.adapters.base import GenerationAdapter
    from earnings_analyzer.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)


class TranscriptAnalyzer:
    """Executes the analysis pipeline for one transcript at a time.

    Instances are safe to share across concurrent requests: every call works
    on its own local values and awaits its two suspension points (extraction,
    model call) in order. Cancellation propagates; no envelope is produced
    for a cancelled request.
    """

    def __init__(
        self,
        adapter: GenerationAdapter,
        *,
        extractor: PdfExtractor | None = None,
        envelopes: EnvelopeBuilder | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._input_resolver = InputResolver(extractor)
        self._model_invoker = ModelInvoker(adapter)
        self._envelopes = envelopes or EnvelopeBuilder()
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @property
    def model_name(self) -> str:
        return self._model_invoker.model_name

    async def analyze(self, transcript: TranscriptInput) -> EnvelopeResponse:
        """Analyze a transcript and return the response envelope.

        Args:
            transcript: Literal text or an uploaded PDF.

        Returns:
            A 200 envelope once the model replied (structured or opaque), or
            a 400/500 error envelope for validation, extraction or model
            failures.
        """
        tele = self._telemetry
        source = "file" if transcript.has_file else "text"
        log.debug("Analyzing transcript from %s with model '%s'", source, self.model_name)
        with tele("analyze", source=source):
            with tele("resolve_input"):
                resolved = await self._input_resolver.handle(transcript)
            if isinstance(resolved, Failure):
                return self._fail(resolved.error, stage="resolve_input")
            text = resolved.value

            prompt = build_analysis_prompt(text)

            with tele("model", model=self.model_name):
                reply = await self._model_invoker.handle(prompt)
            if isinstance(reply, Failure):
                return self._fail(reply.error, stage="model")

            with tele("normalize"):
                normalized = normalize_response(reply.value)
                result = decode_analysis(normalized)

            if isinstance(result, Opaque):
                tele.count("opaque_result")
                log.info(
                    "Model reply was not strict JSON; returning raw analysis "
                    "(%d characters)",
                    len(result.text),
                )
            else:
                log.debug("Model reply decoded as structured JSON")
            return self._envelopes.success(result)

    async def analyze_text(self, text: str) -> EnvelopeResponse:
        """Convenience wrapper for literal transcript text."""
        return await self.analyze(TranscriptInput.from_text(text))

    def _fail(self, error: Exception, *, stage: str) -> EnvelopeResponse:
        response = self._envelopes.failure(error)
        self._telemetry.count("error", kind=type(error).__name__, stage=stage)
        if response.status_code < 500:
            log.warning("Rejected transcript at %s: %s", stage, error)
        else:
            log.error("Transcript analysis failed at %s: %s", stage, error, exc_info=error)
        return response


def create_analyzer(
    config: FrozenConfig | None = None,
    *,
    adapter: GenerationAdapter | None = None,
    extractor: PdfExtractor | None = None,
    telemetry: TelemetryContextProtocol | None = None,
) -> TranscriptAnalyzer:
    """Create an analyzer with collaborators selected by configuration.

    If no configuration is provided, it is resolved from the environment.
    An explicit ``adapter`` takes precedence over the configured one.
    """
    final_config = config if config is not None else resolve_config().to_frozen()
    chosen_adapter = adapter if adapter is not None else build_adapter(final_config)
    log.debug("Creating analyzer with %s", final_config)
    return TranscriptAnalyzer(chosen_adapter, extractor=extractor, telemetry=telemetry)
