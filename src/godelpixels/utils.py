"""
Display helpers for presenting encoder and rasterizer output.
"""

import re
from typing import Iterable

from .core import EncodingTerm, to_decimal
from .raster import RasterResult

BINARY_DISPLAY_LIMIT = 10000


def truncate_binary(bits: str, limit: int = BINARY_DISPLAY_LIMIT) -> str:
    """
    Shorten a bit string for display.

    Only for showing the bits as text; the rasterizer always takes the full
    string.

    Args:
        bits: Binary digits.
        limit: Maximum number of digits kept before the ellipsis.

    Returns:
        ``bits`` unchanged if short enough, else the first ``limit`` digits plus "...".
    """
    if len(bits) <= limit:
        return bits
    return bits[:limit] + "..."


def digit_count(number: int) -> int:
    """Number of decimal digits in a non-negative integer."""
    return len(to_decimal(abs(number)))


def format_breakdown(breakdown: Iterable[EncodingTerm]) -> str:
    """Render each term as ``'A' → 2^1``, space separated."""
    return " ".join("'{}' → {}^{}".format(t.char, t.prime, t.exponent) for t in breakdown)


def describe_grid(result: RasterResult) -> str:
    """One-line summary, e.g. ``1-bit Black & White | Grid: 3 × 2 pixels (5 pixels from 5 bits)``."""
    return "{} | Grid: {} × {} pixels ({} pixels from {} bits)".format(
        result.description,
        result.width,
        result.height,
        result.pixel_count,
        result.bit_count,
    )


def filter_input(text: str) -> str:
    """Drop every character outside [A-Za-z0-9]."""
    return re.sub(r"[^A-Za-z0-9]", "", text)
