"""Google GenAI (Gemini) generation adapter."""

from __future__ import annotations

import logging

from google import genai
from google.genai import errors as genai_errors

from earnings_analyzer.exceptions import ModelUnavailableError

log = logging.getLogger(__name__)


def describe_generation_error(error: Exception) -> str:
    """Turn a provider error into an informative, non-secret message."""
    error_str = str(error).lower()
    code = getattr(error, "code", None)

    if code in (401, 403) or "api key" in error_str or "permission" in error_str:
        return f"Gemini rejected the credentials. Check GEMINI_API_KEY. Original error: {error}"
    if code == 429 or "quota" in error_str or "rate limit" in error_str:
        return f"Gemini quota or rate limit exceeded. Original error: {error}"
    if code == 404 or "not found" in error_str:
        return f"Gemini model not found or unavailable. Original error: {error}"
    if isinstance(error, genai_errors.ServerError):
        return f"Gemini service error. Original error: {error}"
    return f"Content generation failed: {error}"


class GoogleGenAIAdapter:
    """Calls Gemini through the google-genai async client.

    One adapter (and one underlying client) is built at process start and
    shared by all requests; it holds no per-request state.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.0-flash",
        *,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize with a credential, or an already configured client."""
        self.model_name = model_name
        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` to the model and return the reply text.

        Raises:
            ModelUnavailableError: On any provider or transport failure.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
            )
        except Exception as e:
            raise ModelUnavailableError(
                describe_generation_error(e), details=str(e)
            ) from e

        text = response.text
        if text is None:
            # Blocked or empty candidates; an empty reply degrades to Opaque("")
            log.warning("Gemini returned no text for model '%s'", self.model_name)
            return ""
        return text
