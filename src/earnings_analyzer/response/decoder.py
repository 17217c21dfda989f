"""Strict decoding of normalized model output with an opaque fallback."""

import json
import logging
from typing import NoReturn

from ..core.types import AnalysisResult, Opaque, Structured

log = logging.getLogger(__name__)


def _reject_constant(name: str) -> NoReturn:
    # Python's json accepts NaN/Infinity; strict JSON does not
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_analysis(normalized: str) -> AnalysisResult:
    """Decode normalized text as strict JSON.

    Returns ``Structured`` on success. On any decode failure, and for a bare
    ``null`` (which would leave the envelope without an analysis), returns
    ``Opaque`` carrying ``normalized`` verbatim; this function never raises
    for malformed input.
    """
    try:
        value = json.loads(normalized, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:  # JSONDecodeError is a ValueError
        log.debug("Model reply is not strict JSON, keeping it opaque: %s", e)
        return Opaque(normalized)
    if value is None:
        log.debug("Model reply decoded to null, keeping it opaque")
        return Opaque(normalized)
    return Structured(value)
