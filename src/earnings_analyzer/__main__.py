"""Run the analyzer HTTP service: ``python -m earnings_analyzer``.

Configuration is read from ``EARNINGS_ANALYZER_*`` variables (plus
``GEMINI_API_KEY``), a ``.env`` file in the working directory when present,
and ``[tool.earnings_analyzer]`` in pyproject.toml.
"""

import logging
from pathlib import Path

import uvicorn

from earnings_analyzer.config import resolve_config
from earnings_analyzer.executor import create_analyzer
from earnings_analyzer.server import create_app
from earnings_analyzer.telemetry import LoggingReporter, TelemetryContext


def main() -> None:
    """Resolve config, configure logging, build the analyzer and serve."""
    env_file = Path(".env")
    resolved = resolve_config(use_env_file=env_file if env_file.is_file() else None)
    config = resolved.to_frozen()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("earnings_analyzer")
    logger.info("Resolved configuration:\n%s", resolved.audit())

    analyzer = create_analyzer(config, telemetry=TelemetryContext(LoggingReporter()))
    app = create_app(analyzer, config)
    logger.info(
        "Server running on port %d (model=%s)", config.port, analyzer.model_name
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
