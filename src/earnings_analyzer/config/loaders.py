"""Configuration loaders for environment, .env and project files.

This module provides pure data loading functions that extract configuration
values from various sources without performing validation. Each loader returns
a plain mapping that the resolver merges.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

# Python 3.11+ has tomllib in stdlib
import tomllib

from dotenv import dotenv_values

from ..exceptions import ConfigurationError
from .schema import FIELD_NAMES
from .types import ENV_PREFIX

if TYPE_CHECKING:
    from collections.abc import Mapping

# --- Constants ---

CONFIG_TOOL_NAME = "earnings_analyzer"

# Credential accepted without the project prefix, as the Gemini SDK docs use it
API_KEY_ALIAS = "GEMINI_API_KEY"


def _select_fields(values: Mapping[str, Any]) -> dict[str, Any]:
    """Map prefixed variable names to known field names, dropping the rest."""
    config: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        upper = key.upper()
        if upper == API_KEY_ALIAS:
            # The prefixed form wins when both are present
            config.setdefault("api_key", value)
            continue
        if not upper.startswith(ENV_PREFIX):
            continue
        field_name = upper[len(ENV_PREFIX) :].lower()
        if field_name in FIELD_NAMES:
            config[field_name] = value
    return config


# --- Environment Loading ---


def load_env() -> Mapping[str, Any]:
    """Load configuration from ``EARNINGS_ANALYZER_*`` environment variables.

    Values are returned as strings; Pydantic performs type coercion during
    final validation.
    """
    return _select_fields(os.environ)


def load_dotenv_file(path: str | Path) -> Mapping[str, Any]:
    """Load configuration from a .env file without touching ``os.environ``.

    Raises:
        ConfigurationError: If the file does not exist.
    """
    env_path = Path(path)
    if not env_path.exists():
        raise ConfigurationError(f"Environment file not found: {env_path}")
    return _select_fields(dotenv_values(env_path))


# --- Project file loading ---


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file, returning an empty dict when it does not exist.

    Raises:
        ConfigurationError: If the file exists but is not valid TOML.
    """
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def find_pyproject(start: Path | None = None) -> Path | None:
    """Find the nearest pyproject.toml from ``start`` (default: cwd) upwards."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_pyproject(project_root: Path | None = None) -> Mapping[str, Any]:
    """Load the ``[tool.earnings_analyzer]`` table from pyproject.toml.

    Args:
        project_root: Directory to start searching from. Defaults to the
            current working directory.

    Returns:
        Known configuration fields from the table; unknown keys are ignored.
    """
    path = find_pyproject(project_root)
    if path is None:
        return {}
    section = _read_toml(path).get("tool", {}).get(CONFIG_TOOL_NAME, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{CONFIG_TOOL_NAME}] in {path} must be a table"
        )
    return {k: v for k, v in section.items() if k in FIELD_NAMES}
