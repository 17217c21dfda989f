"""Deterministic adapter used for tests, examples and local runs (no network)."""

import json

from earnings_analyzer.pipeline.prompts import SECTION_TITLES


class MockAdapter:
    """Answers every prompt with a fenced, loosely formatted JSON reply.

    The reply deliberately carries the presentation noise real models add
    (code fence, trailing comma) so local runs exercise normalization.
    """

    model_name = "mock"

    async def generate(self, prompt: str) -> str:
        body = {
            title: f"mock analysis ({len(prompt)} prompt chars)"
            for title in SECTION_TITLES
        }
        encoded = json.dumps(body, indent=2)
        # Reopen the closing brace to leave a trailing comma behind
        return f"```json\n{encoded[:-2]},\n}}\n```"
