"""
Test configuration and fixtures for branding picker tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from branding_picker.services.colors.sampling import PixelBuffer


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from branding_picker.utils.metrics import reset_metrics
    reset_metrics()


def solid_buffer(color, size=(40, 40)) -> PixelBuffer:
    """Opaque buffer filled with one RGB or RGBA color."""
    width, height = size
    arr = np.zeros((height, width, len(color)), dtype=np.uint8)
    arr[:, :] = color
    return PixelBuffer.from_array(arr)


def png_bytes(arr: np.ndarray) -> bytes:
    """Encode an (H, W, 3|4) uint8 array as PNG."""
    out = io.BytesIO()
    Image.fromarray(arr).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def red_png():
    """Opaque 64x64 pure red PNG."""
    arr = np.zeros((64, 64, 3), dtype=np.uint8)
    arr[:, :] = (255, 0, 0)
    return png_bytes(arr)


@pytest.fixture
def transparent_png():
    """Fully transparent 10x10 PNG."""
    return png_bytes(np.zeros((10, 10, 4), dtype=np.uint8))
