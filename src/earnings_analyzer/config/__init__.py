"""Configuration management for the earnings transcript analyzer.

Resolve once at process start, freeze, then pass the frozen config into the
analyzer and the HTTP app:

    config = resolve_config().to_frozen()
"""

from pathlib import Path
from typing import Any

from .loaders import CONFIG_TOOL_NAME, find_pyproject
from .resolver import ConfigResolver, SourceTracker
from .schema import DEFAULT_SERVICE_NAME, AnalyzerSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > .env file > pyproject.toml >
    Defaults.

    Args:
        programmatic: Dictionary of overrides. Only known fields are used.
        use_env_file: Optional path to a .env file to read. The file is read
            without modifying ``os.environ``.
        project_root: Directory to search for pyproject.toml. If None,
            searches the current directory and its parents.

    Raises:
        ConfigurationError: If validation fails or a source is malformed.

    Example:
        config = resolve_config({"use_real_api": True, "api_key": "..."})
        print(config.audit())
    """
    return _resolver.resolve(
        programmatic=programmatic,
        use_env_file=use_env_file,
        project_root=project_root,
    )


__all__ = [
    "CONFIG_TOOL_NAME",
    "DEFAULT_SERVICE_NAME",
    "AnalyzerSettings",
    "ConfigOrigin",
    "ConfigResolver",
    "FrozenConfig",
    "ResolvedConfig",
    "SourceMap",
    "SourceTracker",
    "find_pyproject",
    "resolve_config",
]
