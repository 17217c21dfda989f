#!/usr/bin/env python3  # noqa: EXE001
"""
Minimal demonstration of the Earnings Transcript Analyzer

Analyzes a short transcript with the deterministic mock adapter (no network).
Set EARNINGS_ANALYZER_USE_REAL_API=1 and GEMINI_API_KEY to call Gemini.
"""  # noqa: D212, D415

import asyncio
import json

from earnings_analyzer import create_analyzer

TRANSCRIPT = """\
Operator: Good morning and welcome to the third quarter earnings call.
CEO: Revenue grew 12% year over year, driven by subscription renewals.
CFO: Gross margin held at 41%. We are raising full-year guidance.
Analyst: How sustainable is the renewal rate into next year?
"""


async def main():  # noqa: D103
    print("📈 Earnings Transcript Analyzer - Demo\n")

    analyzer = create_analyzer()
    response = await analyzer.analyze_text(TRANSCRIPT)

    print(f"Model: {analyzer.model_name}  Status: {response.status_code}\n")
    print(json.dumps(response.body, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
