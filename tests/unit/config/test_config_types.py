"""Unit tests for ResolvedConfig / FrozenConfig behavior."""

import dataclasses

import pytest

from earnings_analyzer.config import FrozenConfig, resolve_config


@pytest.mark.unit
def test_to_frozen_copies_every_value(mock_api_key):
    resolved = resolve_config({"api_key": mock_api_key, "port": 8081})

    frozen = resolved.to_frozen()

    assert isinstance(frozen, FrozenConfig)
    assert frozen.api_key == mock_api_key
    assert frozen.port == 8081
    assert frozen.service_name == resolved.service_name


@pytest.mark.unit
def test_frozen_config_is_immutable(frozen_config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        frozen_config.model = "other"  # type: ignore[misc]


@pytest.mark.unit
def test_audit_reports_origin_per_field():
    config = resolve_config({"model": "gemini-2.5-flash"})

    audit = config.audit()

    assert "model: programmatic:gemini-2.5-flash" in audit
    assert "port: default:3000" in audit
    assert "api_key: default:None" in audit
