"""
Request-level entry points returning plain, JSON-friendly dicts.

Input errors are reported in the payload, not raised, so a presentation
layer can show ``error["message"]`` directly.
"""

import logging
from typing import Dict, Optional

from .core import GodelEncoder
from .errors import EncodeError
from .raster import RasterConfig, Rasterizer

logger = logging.getLogger(__name__)


def encode_request(text: str, shift: int = 0, encoder: Optional[GodelEncoder] = None) -> Dict:
    """
    Encode text and package the result for display.

    Args:
        text: User input.
        shift: Cyclic character shift.
        encoder: Encoder to use. Defaults to one with the default configuration.

    Returns:
        ``{"ok": True, "godelNumber", "binaryDigits", "breakdown"}`` on success,
        ``{"ok": False, "error": {"code", "message"}}`` on invalid input.
    """
    encoder = encoder or GodelEncoder()
    try:
        result = encoder.encode(text, shift)
    except EncodeError as exc:
        logger.debug("Rejected input: %s", exc.code)
        return {"ok": False, "error": exc.to_dict()}

    return {
        "ok": True,
        "godelNumber": result.decimal,
        "binaryDigits": result.binary,
        "breakdown": [term.to_dict() for term in result.breakdown],
    }


def rasterize_request(
    binary_digits: str,
    mode: str = "bw",
    channel_order: Optional[str] = None,
    shift: int = 0,
) -> Dict:
    """
    Rasterize a bit string into pixels and grid geometry.

    Args:
        binary_digits: Full binary expansion to draw.
        mode: One of 'bw', 'greyscale', 'rgb', 'rainbow'.
        channel_order: Explicit rgb channel order, e.g. 'GBR'.
        shift: Colour shift selecting the channel order when none is given.

    Returns:
        Dict with pixels, width, height and pixelSize.
    """
    config = RasterConfig.for_mode(mode, channel_order=channel_order, color_shift=shift)
    return Rasterizer(config).rasterize(binary_digits).to_dict()
