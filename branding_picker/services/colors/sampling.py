"""
Pixel sampling for branding color extraction.

Walks a bounded grid over a decoded pixel buffer and collects RGB samples,
skipping near-transparent pixels so logo backgrounds do not bias the result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple, Union

import numpy as np
from loguru import logger

Sample = Tuple[int, int, int]

# Grid cells per axis along the shorter image edge
SAMPLES_PER_AXIS = 60
# Alpha below this (out of 255) counts as transparent
MIN_ALPHA = 10


class SampleSkip(Enum):
    """Reason a grid pixel produced no sample."""
    TRANSPARENT = "transparent"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class PixelBuffer:
    """
    Read-only view of a decoded image.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        rowstride: Bytes per row (>= width * n_channels, may include padding)
        n_channels: 3 for RGB, 4 for RGBA
        pixels: Raw bytes, row-major, at least height * rowstride long
    """
    width: int
    height: int
    rowstride: int
    n_channels: int
    pixels: Sequence[int]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        if self.n_channels not in (3, 4):
            raise ValueError(f"Unsupported channel count: {self.n_channels}")
        if self.rowstride < self.width * self.n_channels:
            raise ValueError(
                f"Row stride {self.rowstride} smaller than "
                f"width*channels={self.width * self.n_channels}"
            )

    @property
    def has_alpha(self) -> bool:
        return self.n_channels == 4

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 3|4) uint8 array."""
        if array.ndim != 3:
            raise ValueError(f"Expected (H, W, C) array, got shape {array.shape}")
        height, width, channels = array.shape
        data = np.ascontiguousarray(array, dtype=np.uint8).tobytes()
        return cls(width=width, height=height, rowstride=width * channels,
                   n_channels=channels, pixels=data)

    def read(self, x: int, y: int) -> Union[Sample, SampleSkip]:
        """Read one pixel, returning a sample or the reason it was skipped."""
        idx = y * self.rowstride + x * self.n_channels
        try:
            if self.has_alpha and (self.pixels[idx + 3] & 0xFF) < MIN_ALPHA:
                return SampleSkip.TRANSPARENT
            return (self.pixels[idx] & 0xFF,
                    self.pixels[idx + 1] & 0xFF,
                    self.pixels[idx + 2] & 0xFF)
        except IndexError:
            return SampleSkip.OUT_OF_BOUNDS


@dataclass
class SampleSet:
    """Ordered samples plus counters for the pixels that were skipped."""
    samples: List[Sample] = field(default_factory=list)
    skipped_transparent: int = 0
    skipped_out_of_bounds: int = 0

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def is_empty(self) -> bool:
        return not self.samples


def sample_step(width: int, height: int) -> int:
    """Grid stride that keeps roughly SAMPLES_PER_AXIS samples per axis."""
    return max(1, min(width, height) // SAMPLES_PER_AXIS)


def sample_pixels(buffer: PixelBuffer) -> SampleSet:
    """
    Collect RGB samples from a pixel buffer on a fixed-stride grid.

    Args:
        buffer: Decoded pixel buffer

    Returns:
        SampleSet in row-major grid order; may be empty (e.g. fully
        transparent image), in which case callers use the fallback colors
    """
    step = sample_step(buffer.width, buffer.height)
    result = SampleSet()

    for y in range(0, buffer.height, step):
        for x in range(0, buffer.width, step):
            pixel = buffer.read(x, y)
            if pixel is SampleSkip.TRANSPARENT:
                result.skipped_transparent += 1
            elif pixel is SampleSkip.OUT_OF_BOUNDS:
                result.skipped_out_of_bounds += 1
            else:
                result.samples.append(pixel)

    logger.debug(f"Sampled {len(result)} pixels at step={step} "
                 f"(transparent={result.skipped_transparent}, "
                 f"out_of_bounds={result.skipped_out_of_bounds})")
    return result
