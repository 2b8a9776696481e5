"""
Branding color extraction pipeline.

This module ties the stages together: pixel sampling, k-means clustering,
primary cluster selection and light/dark variant derivation. It is pure:
every call takes an explicit pixel buffer and returns a fresh result.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from .base_selection import (
    DEFAULT_SELECTION, Cluster, SelectionParams, build_clusters, choose_primary_cluster
)
from .clustering import kmeans
from .sampling import PixelBuffer, sample_pixels
from .variants import DEFAULT_VARIANTS, VariantParams, derive_variants


@dataclass(frozen=True)
class BrandColorResult:
    """Primary color and its light/dark scheme variants as ``#rrggbb``."""
    primary: str
    light: str
    dark: str

    def as_dict(self) -> Dict[str, str]:
        return {"primary": self.primary, "light": self.light, "dark": self.dark}


# Returned when no opaque pixel could be sampled
FALLBACK_RESULT = BrandColorResult(primary="#888888", light="#bbbbbb", dark="#444444")


@dataclass
class BrandAnalysis:
    """Pipeline result plus the intermediate data used to reach it."""
    result: BrandColorResult
    sample_count: int
    clusters: List[Cluster] = field(default_factory=list)
    chosen: Optional[Cluster] = None
    iterations: int = 0
    duration_ms: float = 0.0

    @property
    def fallback_used(self) -> bool:
        return self.chosen is None


def analyze_buffer(buffer: PixelBuffer,
                   selection: SelectionParams = DEFAULT_SELECTION,
                   variants: VariantParams = DEFAULT_VARIANTS) -> BrandAnalysis:
    """
    Run the full pipeline on a pixel buffer and keep the intermediates.

    Args:
        buffer: Decoded pixel buffer
        selection: Cluster selection constants
        variants: Variant derivation constants

    Returns:
        BrandAnalysis; ``fallback_used`` is True when no samples were found
    """
    start_time = time.time()
    sample_set = sample_pixels(buffer)

    if sample_set.is_empty:
        logger.info(f"No opaque samples in {buffer.width}x{buffer.height} buffer, "
                    f"using fallback colors")
        return BrandAnalysis(
            result=FALLBACK_RESULT,
            sample_count=0,
            duration_ms=(time.time() - start_time) * 1000,
        )

    clustering = kmeans(sample_set.samples)
    clusters = build_clusters(clustering, selection)
    chosen = choose_primary_cluster(clusters, selection)

    primary, light, dark = derive_variants(chosen.rgb, chosen.hsl, variants)
    result = BrandColorResult(primary=primary, light=light, dark=dark)
    duration_ms = (time.time() - start_time) * 1000

    logger.info(f"Extracted branding colors primary={primary} light={light} dark={dark} "
                f"from {len(sample_set)} samples in {duration_ms:.1f}ms")

    return BrandAnalysis(
        result=result,
        sample_count=len(sample_set),
        clusters=clusters,
        chosen=chosen,
        iterations=clustering.iterations,
        duration_ms=duration_ms,
    )


def extract_brand_colors(buffer: PixelBuffer,
                         selection: SelectionParams = DEFAULT_SELECTION,
                         variants: VariantParams = DEFAULT_VARIANTS) -> BrandColorResult:
    """Extract the {primary, light, dark} branding colors from a pixel buffer."""
    return analyze_buffer(buffer, selection, variants).result
