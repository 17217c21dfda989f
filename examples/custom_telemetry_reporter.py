#!/usr/bin/env python3
"""Minimal custom telemetry reporter example for earnings-analyzer.
Shows how to print timing and metric events as they happen.
"""

import os

os.environ["EARNINGS_ANALYZER_TELEMETRY"] = "1"

import asyncio
from typing import Any

from earnings_analyzer import TelemetryContext, TelemetryReporter, create_analyzer


class PrintReporter(TelemetryReporter):
    """A minimal telemetry reporter that prints events to the console."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        """Prints timing events with indentation based on scope depth."""
        indent = "  " * metadata.get("depth", 0)
        print(f"[TIMING] {indent}{scope}: duration={duration:.4f}s")

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        """Prints a generic metric event."""
        print(f"[METRIC] {scope}: {value} (metadata: {metadata})")


async def main():
    analyzer = create_analyzer(telemetry=TelemetryContext(PrintReporter()))

    print("Analyzing...")
    await analyzer.analyze_text("CEO: Demand stayed strong through the quarter.")
    # An empty submission is rejected before the model and counted as an error
    await analyzer.analyze_text("")


if __name__ == "__main__":
    asyncio.run(main())
