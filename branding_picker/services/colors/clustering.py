"""
Deterministic k-means clustering of RGB samples.

Centroids are seeded from evenly spaced samples rather than at random, so a
given sample ordering always produces the same centroids and assignments.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from loguru import logger

from .sampling import Sample

MIN_CLUSTERS = 2
MAX_CLUSTERS = 6
SAMPLES_PER_CLUSTER = 20
MAX_ITERATIONS = 12


@dataclass
class ClusteringResult:
    """
    Outcome of one k-means run.

    Attributes:
        centroids: (k, 3) int64 array of integer RGB centroids
        labels: (n,) int64 array mapping each sample to a centroid index
        iterations: Number of assign/update passes performed
        converged: True if the run stopped before the iteration cap
    """
    centroids: np.ndarray
    labels: np.ndarray
    iterations: int
    converged: bool

    @property
    def k(self) -> int:
        return len(self.centroids)

    def counts(self) -> np.ndarray:
        """Member count per centroid."""
        return np.bincount(self.labels, minlength=self.k)


def choose_k(sample_count: int) -> int:
    """Cluster count scaled by sample density, clamped to [2, 6]."""
    return min(MAX_CLUSTERS, max(MIN_CLUSTERS, sample_count // SAMPLES_PER_CLUSTER))


def initial_centroids(samples: np.ndarray, k: int) -> np.ndarray:
    """Pick k centroids at evenly spaced positions through the sample list."""
    n = len(samples)
    return np.array([samples[(i * n) // k] for i in range(k)], dtype=np.int64)


def _rounded_means(sums: np.ndarray, counts: np.ndarray) -> np.ndarray:
    # half-up rounding, exact on integers
    return (2 * sums + counts[:, None]) // (2 * counts[:, None])


def _nearest_centroids(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the closest centroid per point, scanning one centroid at a time."""
    best = ((points - centroids[0]) ** 2).sum(axis=1)
    nearest = np.zeros(len(points), dtype=np.int64)
    for index in range(1, len(centroids)):
        distance = ((points - centroids[index]) ** 2).sum(axis=1)
        # strict comparison keeps the lowest index on ties
        closer = distance < best
        nearest[closer] = index
        best = np.where(closer, distance, best)
    return nearest


def kmeans(samples: Sequence[Sample], max_iter: int = MAX_ITERATIONS) -> ClusteringResult:
    """
    Partition samples into k color clusters.

    Each pass assigns every sample to its nearest centroid (squared Euclidean
    distance in RGB, ties to the lowest centroid index) and then moves each
    non-empty centroid to the rounded mean of its members. Empty centroids
    keep their value. The run stops once a pass changes neither an
    assignment nor a centroid, or after ``max_iter`` passes.

    Args:
        samples: Non-empty ordered RGB samples
        max_iter: Iteration cap

    Returns:
        ClusteringResult with final centroids and assignments

    Raises:
        ValueError: If samples is empty
    """
    if len(samples) == 0:
        raise ValueError("kmeans requires at least one sample")

    points = np.asarray(samples, dtype=np.int64).reshape(-1, 3)
    k = choose_k(len(points))
    centroids = initial_centroids(points, k)
    labels = np.zeros(len(points), dtype=np.int64)

    iterations = 0
    converged = False
    for _ in range(max_iter):
        iterations += 1

        nearest = _nearest_centroids(points, centroids)
        changed = bool(np.any(nearest != labels))
        labels = nearest

        counts = np.bincount(labels, minlength=k)
        sums = np.zeros((k, 3), dtype=np.int64)
        np.add.at(sums, labels, points)

        occupied = counts > 0
        updated = centroids.copy()
        updated[occupied] = _rounded_means(sums[occupied], counts[occupied])
        if not np.array_equal(updated, centroids):
            changed = True
        centroids = updated

        if not changed:
            converged = True
            break

    logger.debug(f"k-means: k={k}, n={len(points)}, iterations={iterations}, "
                 f"converged={converged}")
    return ClusteringResult(centroids=centroids, labels=labels,
                            iterations=iterations, converged=converged)
