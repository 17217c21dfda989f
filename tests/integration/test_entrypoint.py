import pytest

from earnings_analyzer import __main__ as entrypoint


@pytest.mark.integration
def test_main_serves_configured_app(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("EARNINGS_ANALYZER_PORT=4100\n")
    monkeypatch.setenv("EARNINGS_ANALYZER_HOST", "127.0.0.1")

    entrypoint.main()

    (app, kwargs), = calls
    assert kwargs == {"host": "127.0.0.1", "port": 4100, "log_level": "info"}
    assert app.state.config.port == 4100
    assert app.state.analyzer.model_name == "mock"
