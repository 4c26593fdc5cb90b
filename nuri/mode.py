# nuri/mode.py
from __future__ import annotations
from typing import Optional, Sequence, Union

from .constants import MODE_LIGHTNESS_SPLIT
from .core_types import Mode, WeightedCluster, optional_mode

"""
Mode selection helpers.

Exports:
- detect_mode(clusters, *, split=MODE_LIGHTNESS_SPLIT) -> Mode
- resolve_mode(clusters, override) -> Mode

Notes:
- Detection uses the sample-weighted mean OKLab lightness of the clusters.
  Below the split the image reads as dark.
- An override is returned as is; the clusters are not inspected.
"""


def detect_mode(
    clusters: Sequence[WeightedCluster], *, split: float = MODE_LIGHTNESS_SPLIT
) -> Mode:
    """Weighted mean lightness < split -> DARK, else LIGHT. No weight -> DARK."""
    total = sum(c.weight for c in clusters)
    if total <= 0:
        return Mode.DARK
    mean_l = sum(c.lch.l * c.weight for c in clusters) / total
    return Mode.DARK if mean_l < split else Mode.LIGHT


def resolve_mode(
    clusters: Sequence[WeightedCluster], override: Optional[Union[str, Mode]] = None
) -> Mode:
    """
    Resolve a caller-requested mode into a concrete one.
    - DARK / LIGHT (or "dark" / "light") stay as is
    - None -> detect_mode(...)
    """
    forced = optional_mode(override)
    if forced is not None:
        return forced
    return detect_mode(clusters)


__all__ = ["detect_mode", "resolve_mode"]
