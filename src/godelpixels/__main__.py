"""
Command line front end.

    godelpixels HELLO --mode rgb --color-shift 1 --output hello.png
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .core import GodelEncoder
from .errors import EncodeError
from .raster import CHANNEL_ORDERS, RASTER_MODES, RasterConfig, Rasterizer
from .utils import describe_grid, digit_count, format_breakdown, truncate_binary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="godelpixels",
        description="Encode alphanumeric text as a Gödel number and draw its binary expansion.",
    )
    parser.add_argument("text", help="Letters and digits to encode (A-Z, a-z, 0-9).")
    parser.add_argument("--shift", type=int, default=0,
                        help="Cyclic shift applied to every character value (default: 0).")
    parser.add_argument("--mode", choices=sorted(RASTER_MODES), default="bw",
                        help="Pixel packing mode (default: bw).")
    parser.add_argument("--color-shift", type=int, default=0,
                        help="Channel order index for rgb mode, taken modulo 3 (default: 0).")
    parser.add_argument("--channel-order", choices=CHANNEL_ORDERS, default=None,
                        help="Explicit channel order for rgb mode; overrides --color-shift.")
    parser.add_argument("--output", "-o", default=None,
                        help="Write the pixel grid to this PNG file.")
    parser.add_argument("--json", action="store_true",
                        help="Print the result as JSON instead of text.")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s (%(name)s): %(message)s",
                        stream=sys.stderr)

    try:
        result = GodelEncoder().encode(args.text, args.shift)
    except EncodeError as exc:
        print("Error: {}".format(exc.message), file=sys.stderr)
        return 2

    config = RasterConfig.for_mode(
        args.mode, channel_order=args.channel_order, color_shift=args.color_shift
    )
    bits = result.binary
    raster = Rasterizer(config).rasterize(bits)

    if args.output:
        raster.to_image().save(args.output)
        logger.debug("Saved %dx%d grid to %s", raster.width, raster.height, args.output)

    if args.json:
        payload = {
            "godelNumber": result.decimal,
            "binaryDigits": bits,
            "breakdown": [term.to_dict() for term in result.breakdown],
            "width": raster.width,
            "height": raster.height,
            "pixelSize": raster.pixel_size,
            "pixelCount": raster.pixel_count,
        }
        print(json.dumps(payload, indent=2))
        return 0

    print("Breakdown: {}".format(format_breakdown(result.breakdown)))
    print("Gödel number ({:,} digits): {}".format(digit_count(result.number), result.decimal))
    print("Binary ({:,} bits): {}".format(len(bits), truncate_binary(bits)))
    print(describe_grid(raster))
    return 0


if __name__ == "__main__":
    sys.exit(main())
