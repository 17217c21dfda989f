"""Provider-neutral generation adapter protocol.

The core treats the generative model as an opaque async text-in/text-out
function. Adapters raise ``ModelUnavailableError`` for provider failures;
retries and timeouts, if any, live inside the adapter.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationAdapter(Protocol):
    """Async text generation against a single configured model."""

    model_name: str

    async def generate(self, prompt: str) -> str:
        """Return the model's raw text reply for ``prompt``."""
        ...
