"""
Primary Color Selection Module

Scores k-means clusters by size and saturation and picks the one that best
represents an icon's branding color, with a guard against large neutral
backgrounds winning over a smaller but clearly colored region.
"""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from .clustering import ClusteringResult
from .colorspace import HSL, RGB, rgb_to_hex, rgb_to_hsl


@dataclass(frozen=True)
class SelectionParams:
    """
    Tunable constants for primary cluster selection.

    Attributes:
        saturation_weight: Score multiplier applied to saturation
        gray_threshold: Saturation below which the top cluster counts as gray
        min_share: Minimum share of samples for a switch candidate
        switch_margin: Saturation lead a candidate needs to replace a gray pick
    """
    saturation_weight: float = 3.0
    gray_threshold: float = 0.12
    min_share: float = 0.03
    switch_margin: float = 0.05


DEFAULT_SELECTION = SelectionParams()


@dataclass(frozen=True)
class Cluster:
    """Read-only view of one converged cluster."""
    index: int
    count: int
    rgb: RGB
    hsl: HSL
    score: float

    @property
    def saturation(self) -> float:
        return self.hsl[1]

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.rgb)


def cluster_score(count: int, saturation: float, weight: float = 3.0) -> float:
    """Score = count * (1 + saturation * weight)."""
    return count * (1 + saturation * weight)


def build_clusters(result: ClusteringResult,
                   params: SelectionParams = DEFAULT_SELECTION) -> List[Cluster]:
    """Build scored Cluster views, in centroid order, from a clustering result."""
    counts = result.counts()
    clusters = []
    for index, centroid in enumerate(result.centroids):
        rgb = (int(centroid[0]), int(centroid[1]), int(centroid[2]))
        hsl = rgb_to_hsl(*rgb)
        count = int(counts[index])
        clusters.append(Cluster(
            index=index,
            count=count,
            rgb=rgb,
            hsl=hsl,
            score=cluster_score(count, hsl[1], params.saturation_weight),
        ))
    return clusters


def rank_clusters(clusters: List[Cluster]) -> List[Cluster]:
    """Sort by score descending; equal scores keep centroid order."""
    return sorted(clusters, key=lambda c: -c.score)


def _more_saturated_candidate(clusters: List[Cluster], total: int,
                              params: SelectionParams) -> Optional[Cluster]:
    min_count = max(1, int(total * params.min_share))
    candidates = [c for c in clusters if c.count >= min_count]
    if not candidates:
        return None
    return sorted(candidates, key=lambda c: -c.saturation)[0]


def choose_primary_cluster(clusters: List[Cluster],
                           params: SelectionParams = DEFAULT_SELECTION) -> Cluster:
    """
    Choose the primary branding cluster.

    The top-scoring cluster wins unless it is desaturated (below
    ``gray_threshold``); then the most saturated cluster holding at least
    ``min_share`` of the samples replaces it if its saturation is more than
    ``switch_margin`` higher.

    Args:
        clusters: Non-empty list of scored clusters
        params: Selection constants

    Returns:
        The chosen Cluster
    """
    ranked = rank_clusters(clusters)
    chosen = ranked[0]

    if chosen.saturation < params.gray_threshold:
        total = sum(c.count for c in clusters)
        candidate = _more_saturated_candidate(ranked, total, params)
        if candidate is not None and candidate.saturation > chosen.saturation + params.switch_margin:
            logger.debug(f"Top cluster {chosen.hex} is near-gray (s={chosen.saturation:.3f}); "
                         f"switching to {candidate.hex} (s={candidate.saturation:.3f})")
            chosen = candidate

    logger.info(f"Selected cluster {chosen.index} {chosen.hex} "
                f"count={chosen.count} score={chosen.score:.2f}")
    return chosen
