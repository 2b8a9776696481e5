"""
Color space helpers.

RGB <-> HSL conversion with every HSL component normalized to [0, 1], and
hex formatting for the pipeline's canonical ``#rrggbb`` output. Note that
colorsys orders the triple as (h, l, s); this module always uses (h, s, l).
"""

import colorsys
import math
from typing import Tuple

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]


def _to_channel(value: float) -> int:
    # half-up rounding, clamped to 8 bits
    return max(0, min(255, int(math.floor(value * 255 + 0.5))))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB channels to an (h, s, l) triple in [0, 1].

    Achromatic colors (max == min) get hue 0 and saturation 0.
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert an (h, s, l) triple in [0, 1] back to 8-bit RGB (half-up rounded)."""
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return _to_channel(r), _to_channel(g), _to_channel(b)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format RGB channels as a lowercase ``#rrggbb`` string."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a ``#RRGGBB`` string (either case, leading '#' optional).

    Raises:
        ValueError: If the string is not six hex digits
    """
    digits = hex_color.strip().lstrip('#')
    if len(digits) != 6:
        raise ValueError(f"Expected #RRGGBB hex color, got {hex_color!r}")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
