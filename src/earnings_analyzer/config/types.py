"""Core configuration data types.

This module defines the fundamental data structures used by the configuration
system, following the resolve-once, freeze-then-flow pattern.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "dotenv", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

ENV_PREFIX = "EARNINGS_ANALYZER_"

# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    This represents the validated, merged result of combining programmatic
    overrides, environment variables, files and defaults, plus the origin of
    every field for audit.
    """

    api_key: str | None
    model: str
    use_real_api: bool
    cors_origin: str
    host: str
    port: int
    log_level: str
    service_name: str

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, cors_origin={self.cors_origin!r}, "
            f"host={self.host!r}, port={self.port!r}, log_level={self.log_level!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration handed to the service."""
        return FrozenConfig(
            api_key=self.api_key,
            model=self.model,
            use_real_api=self.use_real_api,
            cors_origin=self.cors_origin,
            host=self.host,
            port=self.port,
            log_level=self.log_level,
            service_name=self.service_name,
        )

    def audit(self) -> str:
        """Generate a redacted audit report showing the origin of each field."""
        lines = []
        for field in self._fields:
            if field == "origin" or field not in self.origin:
                continue
            origin = self.origin[field]
            if field == "api_key":
                value_display = (
                    f"{origin}:None" if self.api_key is None else f"{origin}:[REDACTED]"
                )
            elif origin == "env":
                value_display = f"env:{ENV_PREFIX}{field.upper()}={getattr(self, field)}"
            else:
                value_display = f"{origin}:{getattr(self, field)}"
            lines.append(f"{field}: {value_display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to the analyzer and the HTTP app.

    Contains only the field values, without audit metadata. Any attempt to
    modify this object raises an exception.
    """

    api_key: str | None
    model: str
    use_real_api: bool
    cors_origin: str
    host: str
    port: int
    log_level: str
    service_name: str

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, cors_origin={self.cors_origin!r}, "
            f"host={self.host!r}, port={self.port!r}, log_level={self.log_level!r})"
        )

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        return self.__str__()
