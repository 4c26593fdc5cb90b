# nuri/cluster.py
from __future__ import annotations

"""
Seeded weighted k-means in CIE Lab.

Exports:
- kmeans(samples, k, seed, *, max_iterations, tolerance, debug) -> List[WeightedCluster]
- build_clusters(centroids, weights) -> List[WeightedCluster]

Behaviour:
- Initial centroids are k distinct unique colours picked by
  numpy.random.default_rng(seed); with fewer unique colours than k the picks
  repeat.
- Each iteration assigns samples to the nearest centroid and moves each
  centroid to the count-weighted mean of its members.
- A centroid that loses all members is moved onto the sample farthest from
  its nearest centroid. When every sample already sits on a centroid there is
  nothing better to move to and the centroid is left where it is.
- The loop ends when no centroid moves more than `tolerance` (and nothing was
  reseeded), or after `max_iterations`.
- Exactly k clusters are returned, heaviest first.
"""

from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from .colour_convert import lab_to_lch
from .constants import KMEANS_MAX_ITERATIONS, KMEANS_TOLERANCE
from .core_types import InvalidInputError, SampleSet, WeightedCluster
from .utils import debug_log, key_value_pairs_to_string


def _squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """[N,3] x [K,3] -> [N,K] squared Euclidean distances."""
    diff = points[:, None, :] - centroids[None, :, :]
    return np.sum(diff * diff, axis=2)


def _initial_centroids(points: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    n = points.shape[0]
    idx = rng.choice(n, size=k, replace=n < k)
    return points[idx].copy()


def _reseed_empty(
    centroids: np.ndarray,
    empty: NDArray[np.intp],
    points: np.ndarray,
    nearest_d2: np.ndarray,
) -> int:
    """Move empty centroids onto the farthest samples. Returns how many moved."""
    far = nearest_d2.copy()
    moved = 0
    for j in empty.tolist():
        i = int(np.argmax(far))
        if far[i] <= 0.0:
            break
        centroids[j] = points[i]
        far[i] = -1.0
        moved += 1
    return moved


def _lloyd(
    points: np.ndarray,
    weights: np.ndarray,
    centroids: np.ndarray,
    max_iterations: int,
    tolerance: float,
) -> Tuple[np.ndarray, int, int]:
    """Run bounded Lloyd iterations in place. Returns (centroids, iterations, reseeds)."""
    k = centroids.shape[0]
    reseeds = 0
    iteration = 0
    for iteration in range(1, max_iterations + 1):
        d2 = _squared_distances(points, centroids)
        labels = np.argmin(d2, axis=1)
        counts = np.bincount(labels, weights=weights, minlength=k)

        sums = np.zeros_like(centroids)
        np.add.at(sums, labels, points * weights[:, None])

        updated = centroids.copy()
        filled = counts > 0
        updated[filled] = sums[filled] / counts[filled, None]

        empty = np.flatnonzero(~filled)
        moved = 0
        if empty.size:
            moved = _reseed_empty(updated, empty, points, d2[np.arange(points.shape[0]), labels])
            reseeds += moved

        shift = float(np.max(np.sqrt(np.sum((updated - centroids) ** 2, axis=1))))
        centroids = updated
        if moved == 0 and shift < tolerance:
            break
    return centroids, iteration, reseeds


def build_clusters(centroids: np.ndarray, weights: np.ndarray) -> List[WeightedCluster]:
    """Wrap centroid rows and weights as WeightedCluster values, heaviest first."""
    order = np.argsort(-weights, kind="stable")
    out: List[WeightedCluster] = []
    for j in order.tolist():
        lab = tuple(float(v) for v in centroids[j])
        out.append(WeightedCluster(lab=lab, weight=int(weights[j]), lch=lab_to_lch(centroids[j])))  # type: ignore[arg-type]
    return out


def kmeans(
    samples: SampleSet,
    k: int,
    seed: int,
    *,
    max_iterations: int = KMEANS_MAX_ITERATIONS,
    tolerance: float = KMEANS_TOLERANCE,
    debug: bool = False,
) -> List[WeightedCluster]:
    """
    Cluster the sample set into exactly k weighted clusters.

    Identical samples, seed and k give identical clusters.
    """
    if len(samples) == 0:
        raise InvalidInputError("cannot cluster an empty sample set")
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    points = np.asarray(samples.lab, dtype=np.float64)
    weights = np.asarray(samples.counts, dtype=np.float64)
    rng = np.random.default_rng(seed)

    centroids = _initial_centroids(points, k, rng)
    centroids, iterations, reseeds = _lloyd(
        points, weights, centroids, max_iterations, tolerance
    )

    labels = np.argmin(_squared_distances(points, centroids), axis=1)
    final_counts = np.bincount(labels, weights=samples.counts, minlength=k)
    final_counts = np.rint(final_counts).astype(np.int64)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("K", k),
                    ("Seed", seed),
                    ("Iterations", iterations),
                    ("Reseeds", reseeds),
                    ("Empty", int(np.count_nonzero(final_counts == 0))),
                ]
            )
        )
    return build_clusters(centroids, final_counts)


__all__ = ["kmeans", "build_clusters"]
