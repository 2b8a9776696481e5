"""
End-to-end tests for the branding color pipeline on in-memory buffers.

Covers:
- solid color and transparent-logo images
- the fixed fallback for fully transparent input
- the near-gray background guard
- determinism
"""

import numpy as np
import pytest

from branding_picker.services.colors import (
    FALLBACK_RESULT, BrandColorResult, PixelBuffer, analyze_buffer, extract_brand_colors
)
from branding_picker.services.colors.colorspace import hex_to_rgb, rgb_to_hsl
from conftest import solid_buffer


def lightness(hex_color):
    return rgb_to_hsl(*hex_to_rgb(hex_color))[2]


class TestFallback:
    """Test the zero-sample path"""

    def test_transparent_image_returns_fallback(self):
        result = extract_brand_colors(solid_buffer((0, 0, 0, 0), size=(10, 10)))
        assert result == FALLBACK_RESULT
        assert result.as_dict() == {"primary": "#888888", "light": "#bbbbbb", "dark": "#444444"}

    def test_fallback_skips_clustering(self):
        analysis = analyze_buffer(solid_buffer((255, 0, 0, 3), size=(10, 10)))
        assert analysis.fallback_used
        assert analysis.sample_count == 0
        assert analysis.clusters == []
        assert analysis.chosen is None


class TestExtraction:
    """Test full extraction on synthetic images"""

    def test_solid_red(self):
        result = extract_brand_colors(solid_buffer((255, 0, 0), size=(64, 64)))
        assert result == BrandColorResult(primary="#ff0000", light="#ff7070", dark="#7a0000")
        assert lightness(result.light) == pytest.approx(0.72, abs=0.01)
        assert lightness(result.dark) == pytest.approx(0.24, abs=0.01)

    def test_logo_on_transparent_background(self):
        """Transparent background pixels do not influence the primary"""
        arr = np.zeros((60, 60, 4), dtype=np.uint8)
        arr[20:40, 20:40] = (0, 90, 200, 255)
        analysis = analyze_buffer(PixelBuffer.from_array(arr))

        assert analysis.sample_count == 400
        assert analysis.result.primary == "#005ac8"

    def test_gray_background_loses_to_colored_band(self):
        """Large neutral background is replaced by a 10% saturated band"""
        arr = np.full((60, 60, 3), 128, dtype=np.uint8)
        arr[0:6, :] = (255, 0, 0)
        analysis = analyze_buffer(PixelBuffer.from_array(arr))

        assert analysis.result.primary == "#ff0000"
        ranked_first = max(analysis.clusters, key=lambda c: c.score)
        assert ranked_first.hex == "#808080"
        assert analysis.chosen.hex == "#ff0000"

    def test_near_black_logo(self):
        """Very dark primary uses the dark-end override"""
        result = extract_brand_colors(solid_buffer((20, 5, 5), size=(30, 30)))
        assert result.primary == "#140505"
        assert lightness(result.light) == pytest.approx(0.35, abs=0.01)
        assert lightness(result.dark) == pytest.approx(0.03, abs=0.01)

    def test_very_light_primary(self):
        result = extract_brand_colors(solid_buffer((240, 235, 250), size=(30, 30)))
        assert lightness(result.light) < lightness(result.primary)
        assert lightness(result.primary) - lightness(result.dark) >= 0.12

    def test_deterministic(self):
        rng = np.random.default_rng(11)
        arr = rng.integers(0, 256, size=(90, 90, 3), dtype=np.uint8)
        buffer = PixelBuffer.from_array(arr)

        first = analyze_buffer(buffer)
        second = analyze_buffer(buffer)

        assert first.result == second.result
        assert [c.rgb for c in first.clusters] == [c.rgb for c in second.clusters]
        assert [c.count for c in first.clusters] == [c.count for c in second.clusters]

    def test_result_is_valid_hex(self):
        rng = np.random.default_rng(5)
        arr = rng.integers(0, 256, size=(40, 70, 4), dtype=np.uint8)
        result = extract_brand_colors(PixelBuffer.from_array(arr))
        for value in result.as_dict().values():
            assert len(value) == 7 and value.startswith("#")
            int(value[1:], 16)
