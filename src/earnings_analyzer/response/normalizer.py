"""Rewrite raw model output into text that is likely to be strict JSON.

The rewrites target the malformations Gemini replies actually show: markdown
code fences, a stray ``JSON`` label glued to the opening brace, irregular
whitespace and trailing commas. Anything outside that list is left alone;
the decoder's opaque fallback handles what remains.

Order matters. Newlines are removed before whitespace is collapsed, and the
label is stripped before collapsing so the replacement brace does not pick
up a boundary space.
"""

import re

_NEWLINES = re.compile(r"\n")
_CODE_FENCES = re.compile(r"```json|```")
_LEADING_LABEL = re.compile(r"^\s*JSON\{", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")
_TRAILING_COMMA_BRACE = re.compile(r",[\s,]*\}")
_TRAILING_COMMA_BRACKET = re.compile(r",[\s,]*\]")

# (name, pattern, replacement) in application order
REWRITES: tuple[tuple[str, re.Pattern[str], str], ...] = (
    # Newlines go before fences so "``\n`" cannot leave a fence behind
    ("strip_newlines", _NEWLINES, ""),
    ("strip_code_fences", _CODE_FENCES, ""),
    ("strip_leading_label", _LEADING_LABEL, "{"),
    ("collapse_whitespace", _WHITESPACE_RUN, " "),
    ("drop_trailing_comma_brace", _TRAILING_COMMA_BRACE, "}"),
    ("drop_trailing_comma_bracket", _TRAILING_COMMA_BRACKET, "]"),
)


def normalize_response(raw: str) -> str:
    """Apply the fixed rewrite sequence to a raw model reply.

    Total over all strings and idempotent: normalizing an already normalized
    string returns it unchanged.
    """
    text = raw
    for _name, pattern, replacement in REWRITES:
        text = pattern.sub(replacement, text)
    return text.strip()
