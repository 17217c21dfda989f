"""Analytical prompt template for earnings-call transcripts."""

SECTION_TITLES: tuple[str, ...] = (
    "Key Questions Identified",
    "Management Tone & Sentiment",
    "Critical Trends",
    "Actionable Investor Insights",
    "Forward-looking Growth Indicators",
)

_PROMPT_HEADER = "Analyze this earnings call transcript professionally:"
_PROMPT_FOOTER = (
    "Respond in a clear, concise JSON format with each section well-explained in short"
)


def build_analysis_prompt(text: str) -> str:
    """Embed a transcript into the fixed five-section analysis instruction.

    The transcript is inserted verbatim as one contiguous block.
    """
    sections = "\n".join(
        f"{number}. {title}" for number, title in enumerate(SECTION_TITLES, start=1)
    )
    return (
        f"{_PROMPT_HEADER}\n\n"
        f"Transcript: {text}\n\n"
        f"Provide a structured analysis with:\n{sections}\n\n"
        f"{_PROMPT_FOOTER}"
    )
