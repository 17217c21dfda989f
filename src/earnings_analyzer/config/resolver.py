"""Configuration resolution with precedence handling.

This module implements the resolution algorithm that merges configuration
from multiple sources according to the documented precedence order:
Programmatic > Environment > .env file > Project file > Defaults
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError
from . import loaders
from .schema import AnalyzerSettings
from .types import ConfigOrigin, ResolvedConfig, SourceMap


class SourceTracker:
    """Tracks the origin of configuration values during resolution."""

    def __init__(self) -> None:
        """Initialize an empty source tracker."""
        self._origins: dict[str, ConfigOrigin] = {}

    def set_origin(self, field: str, origin: ConfigOrigin) -> None:
        """Record the origin of a configuration field."""
        self._origins[field] = origin

    def get_source_map(self) -> SourceMap:
        """Return a copy of the current source map."""
        return dict(self._origins)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        use_env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence).
            use_env_file: Optional .env file to read.
            project_root: Directory to search for pyproject.toml.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If a source is malformed or validation fails.
        """
        source_tracker = SourceTracker()
        merged_config: dict[str, Any] = {}

        # Step 1: Schema defaults (read from the field definitions so that
        # ambient environment variables are not mistaken for defaults)
        for field, info in AnalyzerSettings.model_fields.items():
            merged_config[field] = info.get_default(call_default_factory=True)
            source_tracker.set_origin(field, "default")

        layers: list[tuple[ConfigOrigin, Any]] = [
            ("file", loaders.load_pyproject(project_root)),
        ]
        if use_env_file is not None:
            layers.append(("dotenv", loaders.load_dotenv_file(use_env_file)))
        layers.append(("env", loaders.load_env()))
        if programmatic:
            layers.append(("programmatic", programmatic))

        # Steps 2-5: Apply each layer in increasing precedence
        for origin, values in layers:
            for field, value in values.items():
                if field in merged_config:  # Only override known fields
                    merged_config[field] = value
                    source_tracker.set_origin(field, origin)

        # Step 6: Validate the final configuration using Pydantic
        try:
            validated_settings = AnalyzerSettings(**merged_config)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}", details=str(e)
            ) from e
        final_config = validated_settings.to_dict()

        return ResolvedConfig(**final_config, origin=source_tracker.get_source_map())
