# nuri/dedup.py
from __future__ import annotations

"""
Merge clusters whose centroids are perceptually indistinguishable.

Exports:
- merge_clusters(a, b) -> WeightedCluster
- deduplicate_clusters(clusters, threshold=DEDUP_DISTANCE) -> List[WeightedCluster]
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .colour_convert import lab_to_lch
from .constants import DEDUP_DISTANCE
from .core_types import WeightedCluster


def merge_clusters(a: WeightedCluster, b: WeightedCluster) -> WeightedCluster:
    """Weight-averaged centroid, summed weight. Two empty clusters average evenly."""
    total = a.weight + b.weight
    lab_a = np.asarray(a.lab, dtype=np.float64)
    lab_b = np.asarray(b.lab, dtype=np.float64)
    if total > 0:
        lab = (lab_a * a.weight + lab_b * b.weight) / total
    else:
        lab = 0.5 * (lab_a + lab_b)
    return WeightedCluster(
        lab=(float(lab[0]), float(lab[1]), float(lab[2])),
        weight=total,
        lch=lab_to_lch(lab),
    )


def _closest_pair(labs: np.ndarray) -> Optional[Tuple[int, int, float]]:
    """First (i, j) in row-major order with the smallest distance, i < j."""
    n = labs.shape[0]
    if n < 2:
        return None
    diff = labs[:, None, :] - labs[None, :, :]
    dist = np.sqrt(np.sum(diff * diff, axis=2))
    dist[np.tril_indices(n)] = np.inf
    flat = int(np.argmin(dist))
    i, j = divmod(flat, n)
    return i, j, float(dist[i, j])


def deduplicate_clusters(
    clusters: Sequence[WeightedCluster], threshold: float = DEDUP_DISTANCE
) -> List[WeightedCluster]:
    """
    Repeatedly merge the closest pair while it is nearer than `threshold`
    (CIE Lab dE76). Result is sorted heaviest first.
    """
    pool = list(clusters)
    while True:
        pair = _closest_pair(np.array([c.lab for c in pool], dtype=np.float64).reshape(-1, 3))
        if pair is None or pair[2] >= threshold:
            break
        i, j, _ = pair
        merged = merge_clusters(pool[i], pool[j])
        pool[i] = merged
        del pool[j]
    return sorted(pool, key=lambda c: -c.weight)


__all__ = ["merge_clusters", "deduplicate_clusters"]
