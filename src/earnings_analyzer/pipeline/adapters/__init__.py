"""Generation adapters and the config-driven factory."""

from earnings_analyzer.config import FrozenConfig
from earnings_analyzer.exceptions import ConfigurationError

from .base import GenerationAdapter
from .mock import MockAdapter


def build_adapter(config: FrozenConfig) -> GenerationAdapter:
    """Build the adapter selected by ``config.use_real_api``.

    The real adapter is imported lazily so the mock path never touches the
    provider SDK.
    """
    if not config.use_real_api:
        return MockAdapter()
    if not config.api_key:
        raise ConfigurationError("api_key is required when use_real_api=True")

    from .gemini import GoogleGenAIAdapter

    return GoogleGenAIAdapter(config.api_key, config.model)


__all__ = ["GenerationAdapter", "MockAdapter", "build_adapter"]
