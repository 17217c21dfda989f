"""
Global test configuration: environment isolation, markers and collaborator fakes.
"""

import logging
import os

import pytest

from earnings_analyzer.config import resolve_config
from earnings_analyzer.executor import TranscriptAnalyzer
from earnings_analyzer.pipeline.result_builder import EnvelopeBuilder
from tests.helpers import FakeAdapter, FakeExtractor, fixed_clock


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_analyzer_env(request, monkeypatch):
    """Ensure a clean EARNINGS_ANALYZER_* / GEMINI_API_KEY environment per test.

    Escape hatch: mark a test with @pytest.mark.allow_env_pollution to keep
    the current environment unchanged.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("EARNINGS_ANALYZER_") or key == "GEMINI_API_KEY":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def neutral_project_root(monkeypatch, tmp_path):
    """Run each test from an empty directory so no real pyproject.toml is read."""
    work_dir = tmp_path / "workdir"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    for name in ("httpx", "httpcore", "pypdf", "google_genai"):
        logging.getLogger(name).setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with fake collaborators",
        "contract: Invariants that must hold for all inputs",
        "allow_env_pollution: Keep ambient EARNINGS_ANALYZER_* variables",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "test_api_key_12345_67890_abcdef_ghijkl"


@pytest.fixture
def frozen_config():
    """Default configuration resolved from an isolated environment."""
    return resolve_config().to_frozen()


@pytest.fixture
def fake_adapter():
    """Adapter answering with a fenced JSON reply."""
    return FakeAdapter(reply='```json\n{"summary": "steady growth",}\n```')


@pytest.fixture
def fake_extractor():
    return FakeExtractor(text="Operator: Welcome to the Q3 earnings call.")


@pytest.fixture
def analyzer(fake_adapter, fake_extractor):
    """Analyzer wired to fakes and a fixed clock."""
    return TranscriptAnalyzer(
        fake_adapter,
        extractor=fake_extractor,
        envelopes=EnvelopeBuilder(clock=fixed_clock),
    )
