"""
GodelPixels: encode alphanumeric text as a Gödel number and draw its bits.

Each character becomes a prime power keyed by its position; the product's
binary expansion is then packed into a square-ish pixel grid.
"""

__version__ = "0.1.0"

from .api import encode_request, rasterize_request
from .core import (
    ALPHABET_SIZE,
    EncodeResult,
    EncoderConfig,
    EncodingTerm,
    GodelEncoder,
    char_value,
    encode,
    to_binary,
    to_decimal,
    validate_text,
)
from .errors import (
    EmptyInput,
    EncodeError,
    InputTooLong,
    InvalidCharacter,
    PrimeTableExhausted,
)
from .primes import PrimeTable, default_prime_table, generate_primes
from .raster import (
    CHANNEL_ORDERS,
    RASTER_MODES,
    RasterConfig,
    RasterImage,
    Rasterizer,
    RasterResult,
    grid_geometry,
    hue_color,
    rasterize,
)
from .utils import describe_grid, digit_count, filter_input, format_breakdown, truncate_binary

__all__ = [
    "ALPHABET_SIZE",
    "CHANNEL_ORDERS",
    "RASTER_MODES",
    "EmptyInput",
    "EncodeError",
    "EncodeResult",
    "EncoderConfig",
    "EncodingTerm",
    "GodelEncoder",
    "InputTooLong",
    "InvalidCharacter",
    "PrimeTable",
    "PrimeTableExhausted",
    "RasterConfig",
    "RasterImage",
    "RasterResult",
    "Rasterizer",
    "char_value",
    "default_prime_table",
    "describe_grid",
    "digit_count",
    "encode",
    "encode_request",
    "filter_input",
    "format_breakdown",
    "generate_primes",
    "grid_geometry",
    "hue_color",
    "rasterize",
    "rasterize_request",
    "to_binary",
    "to_decimal",
    "truncate_binary",
    "validate_text",
]
