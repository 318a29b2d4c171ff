"""
Bitmap rasterizer: binary digit strings to square-ish pixel grids.

Packing modes:
- bw: 1 bit per pixel, two fixed colours
- greyscale: 8 bits per pixel, replicated across R, G and B
- rgb: 24 bits per pixel, three 8-bit channels in a selectable order
- rainbow: 1 bit per pixel, set bits coloured by a hue sweep over bit position

The last group of a multi-bit mode is right-padded with zero bits. Grid cells
past the last pixel are filled with the background colour.
"""

import base64
import colorsys
import io
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

DEFAULT_MAX_CANVAS_SIZE = 500
DEFAULT_MAX_PIXEL_SIZE = 20

# ═══════════════════════════════════════════════════════════
# Mode presets
# ═══════════════════════════════════════════════════════════

RASTER_MODES = {
    "bw": {
        "bits_per_pixel": 1,
        "description": "1-bit Black & White",
    },
    "greyscale": {
        "bits_per_pixel": 8,
        "description": "8-bit Greyscale (256 levels)",
    },
    "rgb": {
        "bits_per_pixel": 24,
        "description": "24-bit RGB",
    },
    "rainbow": {
        "bits_per_pixel": 1,
        "description": "1-bit Rainbow (hue by bit position)",
    },
}

# Which channel receives the 1st, 2nd and 3rd byte of each 24-bit group
CHANNEL_ORDERS = ("RGB", "GBR", "BRG")


@dataclass
class RasterConfig:
    """Configuration for rasterizing a bit string."""

    mode: str = "bw"
    """Packing mode: 'bw', 'greyscale', 'rgb' or 'rainbow'. Default: 'bw'."""

    channel_order: Optional[str] = None
    """Channel order for rgb mode: 'RGB', 'GBR' or 'BRG'.

    When None, ``color_shift`` picks the order instead.
    """

    color_shift: int = 0
    """Cyclic index into CHANNEL_ORDERS, taken modulo 3. Default: 0 (RGB)."""

    max_canvas_size: int = DEFAULT_MAX_CANVAS_SIZE
    """Target canvas edge in screen pixels, used to size each cell. Default: 500."""

    max_pixel_size: int = DEFAULT_MAX_PIXEL_SIZE
    """Largest cell edge in screen pixels. Default: 20."""

    one_color: Color = (255, 255, 255)
    """Colour of a set bit in bw mode. Default: white."""

    zero_color: Color = (0, 0, 0)
    """Colour of a clear bit in bw mode. Default: black."""

    background_color: Color = (0, 0, 0)
    """Colour of clear bits in rainbow mode and of trailing grid cells. Default: black."""

    @staticmethod
    def for_mode(mode: str, **overrides) -> "RasterConfig":
        """Create a RasterConfig for a named mode.

        Args:
            mode: One of 'bw', 'greyscale', 'rgb', 'rainbow'.
            **overrides: Any other RasterConfig field.

        Raises:
            ValueError: If mode is not recognized.
        """
        if mode not in RASTER_MODES:
            valid = ", ".join(sorted(RASTER_MODES.keys()))
            raise ValueError("Unknown raster mode '{}'. Valid modes: {}".format(mode, valid))
        return RasterConfig(mode=mode, **overrides)

    @property
    def bits_per_pixel(self) -> int:
        return RASTER_MODES[self.mode]["bits_per_pixel"]

    @property
    def resolved_channel_order(self) -> str:
        """Channel order actually applied in rgb mode."""
        if self.channel_order is not None:
            if not isinstance(self.channel_order, str):
                raise ValueError(
                    "channel_order must be one of {}".format(", ".join(CHANNEL_ORDERS))
                )
            return self.channel_order.upper()
        return CHANNEL_ORDERS[self.color_shift % len(CHANNEL_ORDERS)]

    @property
    def description(self) -> str:
        """Human-readable mode label, e.g. '24-bit RGB (GBR order)'."""
        text = RASTER_MODES[self.mode]["description"]
        if self.mode == "rgb":
            text = "{} ({} order)".format(text, self.resolved_channel_order)
        return text


# ═══════════════════════════════════════════════════════════
# Geometry and colour helpers
# ═══════════════════════════════════════════════════════════


def grid_geometry(
    pixel_count: int,
    max_canvas_size: int = DEFAULT_MAX_CANVAS_SIZE,
    max_pixel_size: int = DEFAULT_MAX_PIXEL_SIZE,
) -> Tuple[int, int, int]:
    """Lay ``pixel_count`` pixels out as a roughly square grid.

    width = ceil(sqrt(n)), height = ceil(n / width), and the cell edge is
    ``floor(max_canvas_size / width)`` clamped to [1, max_pixel_size].

    Returns:
        (width, height, pixel_size)
    """
    if pixel_count < 1:
        raise ValueError("pixel_count must be >= 1")
    width = math.isqrt(pixel_count)
    if width * width < pixel_count:
        width += 1
    height = -(-pixel_count // width)
    pixel_size = max(1, min(max_pixel_size, max_canvas_size // width))
    return width, height, pixel_size


def hue_color(position: int, total: int) -> Color:
    """Full-saturation, full-value colour at hue 360 * position / total degrees."""
    r, g, b = colorsys.hsv_to_rgb(position / total, 1.0, 1.0)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def _chunks(bits: str, size: int) -> List[str]:
    """Split into groups of ``size`` bits, zero-padding the last one on the right."""
    return [bits[i : i + size].ljust(size, "0") for i in range(0, len(bits), size)]


# ═══════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════


class RasterImage:
    """A rasterized grid drawn as a Pillow image."""

    def __init__(self, image: Image.Image):
        self._image = image

    @property
    def image(self) -> Image.Image:
        """Underlying PIL Image."""
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def png_bytes(self) -> bytes:
        """Get raw PNG bytes."""
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG", optimize=True)
        return buffer.getvalue()

    def base64(self) -> str:
        """Get base64-encoded PNG."""
        return base64.b64encode(self.png_bytes()).decode("utf-8")

    def save(self, path: str) -> None:
        """Save image to file."""
        self._image.save(path, format="PNG", optimize=True)


@dataclass(frozen=True)
class RasterResult:
    """Pixel buffer plus the grid it is laid out on."""

    pixels: Tuple[Color, ...]
    width: int
    height: int
    pixel_size: int
    mode: str
    bits_per_pixel: int
    bit_count: int
    background_color: Color
    description: str

    @property
    def pixel_count(self) -> int:
        return len(self.pixels)

    @property
    def padding_cells(self) -> int:
        """Trailing grid cells with no encoded pixel."""
        return self.width * self.height - len(self.pixels)

    @property
    def cells(self) -> List[Color]:
        """Every grid cell row-major, trailing cells in the background colour."""
        return list(self.pixels) + [self.background_color] * self.padding_cells

    def to_dict(self) -> Dict:
        return {
            "pixels": [list(p) for p in self.pixels],
            "width": self.width,
            "height": self.height,
            "pixelSize": self.pixel_size,
        }

    def to_image(self, pixel_size: Optional[int] = None) -> RasterImage:
        """
        Draw the grid, each cell as a ``pixel_size`` square.

        Args:
            pixel_size: Cell edge in image pixels. Defaults to ``self.pixel_size``.
        """
        size = pixel_size or self.pixel_size
        grid = Image.new("RGB", (self.width, self.height), self.background_color)
        grid.putdata(self.cells)
        if size > 1:
            grid = grid.resize(
                (self.width * size, self.height * size), Image.Resampling.NEAREST
            )
        return RasterImage(grid)


# ═══════════════════════════════════════════════════════════
# Rasterizer
# ═══════════════════════════════════════════════════════════


class Rasterizer:
    """
    Packs a binary digit string into pixels under one of the RASTER_MODES.

    Example:
        >>> result = Rasterizer(RasterConfig(mode="greyscale")).rasterize("1111111100000001")
        >>> result.pixels
        ((255, 255, 255), (1, 1, 1))
    """

    def __init__(self, config: Optional[RasterConfig] = None):
        self.config = config or RasterConfig()
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate configuration values."""
        if self.config.mode not in RASTER_MODES:
            valid = ", ".join(sorted(RASTER_MODES.keys()))
            raise ValueError(
                "Unknown raster mode '{}'. Valid modes: {}".format(self.config.mode, valid)
            )
        if self.config.resolved_channel_order not in CHANNEL_ORDERS:
            raise ValueError(
                "channel_order must be one of {}".format(", ".join(CHANNEL_ORDERS))
            )
        if self.config.max_canvas_size < 1 or self.config.max_pixel_size < 1:
            raise ValueError("max_canvas_size and max_pixel_size must be >= 1")
        for name in ("one_color", "zero_color", "background_color"):
            color = getattr(self.config, name)
            if len(color) != 3 or not all(0 <= c <= 255 for c in color):
                raise ValueError("{} must be an (R, G, B) tuple of 0-255 values".format(name))

    def rasterize(self, bits: str) -> RasterResult:
        """
        Convert the full bit string into a pixel buffer and grid geometry.

        Args:
            bits: Binary digits, most significant first.

        Returns:
            RasterResult with one pixel per bit group.

        Raises:
            ValueError: If bits is empty or contains anything but '0' and '1'.
        """
        if not bits:
            raise ValueError("bits cannot be empty")
        if bits.strip("01"):
            raise ValueError("bits may only contain '0' and '1'")

        mode = self.config.mode
        if mode == "bw":
            pixels = self._pack_bw(bits)
        elif mode == "greyscale":
            pixels = self._pack_greyscale(bits)
        elif mode == "rgb":
            pixels = self._pack_rgb(bits)
        else:
            pixels = self._pack_rainbow(bits)

        width, height, pixel_size = grid_geometry(
            len(pixels), self.config.max_canvas_size, self.config.max_pixel_size
        )
        logger.debug(
            "Rasterized %d bits as %s: %d pixels on a %dx%d grid",
            len(bits),
            mode,
            len(pixels),
            width,
            height,
        )
        return RasterResult(
            pixels=tuple(pixels),
            width=width,
            height=height,
            pixel_size=pixel_size,
            mode=mode,
            bits_per_pixel=self.config.bits_per_pixel,
            bit_count=len(bits),
            background_color=tuple(self.config.background_color),
            description=self.config.description,
        )

    def _pack_bw(self, bits: str) -> List[Color]:
        one = tuple(self.config.one_color)
        zero = tuple(self.config.zero_color)
        return [one if bit == "1" else zero for bit in bits]

    def _pack_greyscale(self, bits: str) -> List[Color]:
        pixels = []
        for chunk in _chunks(bits, 8):
            level = int(chunk, 2)
            pixels.append((level, level, level))
        return pixels

    def _pack_rgb(self, bits: str) -> List[Color]:
        order = self.config.resolved_channel_order
        pixels = []
        for chunk in _chunks(bits, 24):
            channels = dict(zip(order, (int(chunk[i : i + 8], 2) for i in (0, 8, 16))))
            pixels.append((channels["R"], channels["G"], channels["B"]))
        return pixels

    def _pack_rainbow(self, bits: str) -> List[Color]:
        total = len(bits)
        background = tuple(self.config.background_color)
        return [
            hue_color(position, total) if bit == "1" else background
            for position, bit in enumerate(bits)
        ]


def rasterize(bits: str, mode: str = "bw", **options) -> RasterResult:
    """Rasterize with a one-off config built by ``RasterConfig.for_mode``."""
    return Rasterizer(RasterConfig.for_mode(mode, **options)).rasterize(bits)
