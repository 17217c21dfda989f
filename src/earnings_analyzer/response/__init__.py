"""Model reply normalization and decoding."""

from .decoder import decode_analysis
from .normalizer import REWRITES, normalize_response

__all__ = ["REWRITES", "decode_analysis", "normalize_response"]
