"""
Branding Colors Module

Provides pixel sampling, k-means clustering, primary color selection and
light/dark variant derivation for icon images, plus WCAG contrast helpers.
"""

from .extraction import BrandColorResult, FALLBACK_RESULT, extract_brand_colors, analyze_buffer
from .sampling import PixelBuffer

__version__ = "1.0.0"

__all__ = [
    "BrandColorResult",
    "FALLBACK_RESULT",
    "PixelBuffer",
    "analyze_buffer",
    "extract_brand_colors",
]
