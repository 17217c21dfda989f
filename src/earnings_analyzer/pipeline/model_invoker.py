"""Model invocation stage: send the built prompt to the generation adapter."""

from __future__ import annotations

import logging

from earnings_analyzer.core.types import Failure, Result, Success
from earnings_analyzer.exceptions import ModelUnavailableError
from earnings_analyzer.pipeline.adapters.base import GenerationAdapter
from earnings_analyzer.pipeline.base import BaseAsyncHandler

log = logging.getLogger(__name__)


class ModelInvoker(BaseAsyncHandler[str, str, ModelUnavailableError]):
    """Calls the injected adapter exactly once per request.

    No retry and no timeout: both belong to the adapter or an outer layer.
    """

    def __init__(self, adapter: GenerationAdapter) -> None:
        self._adapter = adapter

    @property
    def model_name(self) -> str:
        return getattr(self._adapter, "model_name", type(self._adapter).__name__)

    async def handle(self, command: str) -> Result[str, ModelUnavailableError]:
        try:
            raw = await self._adapter.generate(command)
        except ModelUnavailableError as e:
            return Failure(e)
        except Exception as e:  # Defensive normalization
            return Failure(
                ModelUnavailableError(f"Model invocation failed: {e}", details=str(e))
            )

        if not isinstance(raw, str):
            return Failure(
                ModelUnavailableError(
                    f"Model adapter returned {type(raw).__name__}, expected str"
                )
            )
        log.debug("Model '%s' replied with %d characters", self.model_name, len(raw))
        return Success(raw)
