import logging

import pytest

from earnings_analyzer import telemetry
from earnings_analyzer.telemetry import (
    LoggingReporter,
    SimpleReporter,
    TelemetryContext,
    TelemetryReporter,
)


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(telemetry, "_TELEMETRY_ENABLED", True)


@pytest.mark.unit
def test_disabled_context_is_a_shared_no_op():
    reporter = SimpleReporter()

    first = TelemetryContext(reporter)
    second = TelemetryContext()

    assert first is second
    with first("scope"):
        first.count("ignored")
    assert reporter.timings == {}
    assert reporter.metrics == {}


@pytest.mark.unit
def test_enabled_without_reporters_is_still_no_op(enabled):
    assert TelemetryContext() is TelemetryContext()


@pytest.mark.unit
def test_nested_scopes_produce_dotted_paths(enabled):
    reporter = SimpleReporter()
    tele = TelemetryContext(reporter)

    with tele("outer"):
        with tele("inner", model="m"):
            tele.metric("chars", 120)

    assert set(reporter.timings) == {"outer", "outer.inner"}
    (_duration, metadata), = reporter.timings["outer.inner"]
    assert metadata["parent_scope"] == "outer"
    assert metadata["model"] == "m"
    assert reporter.metrics["outer.inner.chars"][0][0] == 120


@pytest.mark.unit
def test_empty_scope_name_is_rejected(enabled):
    tele = TelemetryContext(SimpleReporter())

    with pytest.raises(ValueError, match="non-empty"):
        with tele(""):
            pass


@pytest.mark.unit
def test_simple_reporter_report(enabled):
    reporter = SimpleReporter()
    tele = TelemetryContext(reporter)

    with tele("analyze"):
        tele.count("error", kind="ValidationError")

    report = reporter.get_report()

    assert "=== Telemetry Report ===" in report
    assert "analyze" in report
    assert "analyze.error" in report


@pytest.mark.unit
def test_logging_reporter_emits_records(enabled, caplog):
    caplog.set_level(logging.INFO, logger="earnings_analyzer.telemetry")
    tele = TelemetryContext(LoggingReporter())

    with tele("analyze"):
        tele.count("opaque_result")

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("metric analyze.opaque_result=1") for m in messages)
    assert any(m.startswith("timing analyze ") for m in messages)


@pytest.mark.unit
def test_reporters_satisfy_protocol():
    assert isinstance(SimpleReporter(), TelemetryReporter)
    assert isinstance(LoggingReporter(), TelemetryReporter)
