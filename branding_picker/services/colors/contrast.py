"""
WCAG contrast helpers.

Relative luminance and contrast ratio between ``#RRGGBB`` colors. Inputs must
be well-formed hex strings; malformed strings raise ValueError from parsing.
"""

from .colorspace import hex_to_rgb

WHITE = "#ffffff"
BLACK = "#000000"

AA_NORMAL_TEXT = 4.5
AA_LARGE_TEXT = 3.0


def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """Relative luminance of an 8-bit sRGB color, in [0, 1]."""
    rl, gl, bl = (_linearize(c / 255.0) for c in (r, g, b))
    return 0.2126 * rl + 0.7152 * gl + 0.0722 * bl


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    """
    WCAG contrast ratio between two colors, from 1.0 to 21.0.

    Symmetric in its arguments.
    """
    la = relative_luminance(*hex_to_rgb(hex_a))
    lb = relative_luminance(*hex_to_rgb(hex_b))
    lighter = max(la, lb)
    darker = min(la, lb)
    return (lighter + 0.05) / (darker + 0.05)


def passes_aa(ratio: float, large_text: bool = False) -> bool:
    threshold = AA_LARGE_TEXT if large_text else AA_NORMAL_TEXT
    return ratio >= threshold


def contrast_label(hex_color: str) -> str:
    """Preview caption: ``#hex (W:x.xx, B:y.yy)`` against white and black."""
    with_white = contrast_ratio(hex_color, WHITE)
    with_black = contrast_ratio(hex_color, BLACK)
    return f"{hex_color} (W:{with_white:.2f}, B:{with_black:.2f})"


def preferred_foreground(hex_color: str, threshold: float = AA_LARGE_TEXT) -> str:
    """White text when it reaches ``threshold`` contrast on this color, else black."""
    return WHITE if contrast_ratio(hex_color, WHITE) >= threshold else BLACK
