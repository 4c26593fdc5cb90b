# nuri/assign.py
from __future__ import annotations

"""
Base slot assignment (ANSI 0-7).

Black and white are synthesised from the mode's lightness extremes, tinted
with the hue of the most dominant chromatic cluster. The six accent slots are
filled greedily in SLOT_FILL_ORDER: each takes the unused chromatic cluster
whose hue is closest to the slot's canonical hue, preferring heavier clusters
among near-equal candidates. Slots with no cluster within MAX_HUE_DISTANCE get
a synthesised colour at the canonical hue.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .colour_convert import hue_distance, lch_to_rgb
from .constants import (
    ACCENT_L_BAND,
    BLACK_L,
    FALLBACK_C,
    FALLBACK_L,
    HUE_TIE_TOLERANCE,
    MAX_HUE_DISTANCE,
    MIN_ACCENT_CHROMA,
    NEUTRAL_TINT_C,
    SLOT_FILL_ORDER,
    SLOT_TARGET_HUES,
    WHITE_L,
)
from .core_types import LchColor, Mode, RgbColor, WeightedCluster, clamp_value


def _is_candidate(cluster: WeightedCluster) -> bool:
    return cluster.weight > 0 and cluster.lch.c >= MIN_ACCENT_CHROMA


def dominant_tint(clusters: Sequence[WeightedCluster]) -> Tuple[float, float]:
    """(chroma, hue) used to tint neutrals; (0, 0) when the image has no chromatic cluster."""
    best: Optional[WeightedCluster] = None
    for c in clusters:
        if _is_candidate(c) and (best is None or c.weight > best.weight):
            best = c
    if best is None:
        return 0.0, 0.0
    return NEUTRAL_TINT_C, best.lch.h


def pick_cluster_for_hue(
    clusters: Sequence[WeightedCluster],
    available: Sequence[int],
    target_hue: float,
    max_distance: float = MAX_HUE_DISTANCE,
) -> Optional[Tuple[int, float]]:
    """
    Nearest hue among `available` cluster indices, ignoring any farther than
    `max_distance` from the target.

    Candidates within HUE_TIE_TOLERANCE of the best distance compete on weight;
    remaining ties go to the smaller distance, then the lower index.
    Returns (index, hue distance) or None when no cluster is close enough.
    """
    scored = [(hue_distance(clusters[i].lch.h, target_hue), i) for i in available]
    scored = [(d, i) for d, i in scored if d <= max_distance]
    if not scored:
        return None
    best_d = min(d for d, _ in scored)
    near = [(d, i) for d, i in scored if d <= best_d + HUE_TIE_TOLERANCE]
    d, i = min(near, key=lambda t: (-clusters[t[1]].weight, t[0], t[1]))
    return i, d


def assign_slot_sources(
    clusters: Sequence[WeightedCluster],
) -> Dict[int, Optional[int]]:
    """
    Map each accent slot (1-6) to the index of the cluster it takes, or None
    when the slot falls back to a synthesised colour.
    """
    available = [i for i, c in enumerate(clusters) if _is_candidate(c)]
    sources: Dict[int, Optional[int]] = {}
    for slot in SLOT_FILL_ORDER:
        pick = pick_cluster_for_hue(clusters, available, SLOT_TARGET_HUES[slot])
        if pick is None:
            sources[slot] = None
            continue
        sources[slot] = pick[0]
        available.remove(pick[0])
    return sources


def fallback_accent(slot: int, mode: Mode) -> LchColor:
    """Synthesised accent at the slot's canonical hue."""
    return LchColor(FALLBACK_L[mode], FALLBACK_C[mode], SLOT_TARGET_HUES[slot])


def fit_accent(lch: LchColor, mode: Mode) -> LchColor:
    """Keep hue and chroma, clamp lightness into the mode's accent band."""
    lo, hi = ACCENT_L_BAND[mode]
    return lch.with_lightness(clamp_value(lch.l, lo, hi))


def assign_base_lch(
    clusters: Sequence[WeightedCluster], mode: Mode
) -> List[LchColor]:
    """The eight base slots in OKLCh, slot order black..white."""
    tint_c, tint_h = dominant_tint(clusters)
    base: List[Optional[LchColor]] = [None] * 8
    base[0] = LchColor(BLACK_L[mode], tint_c, tint_h)
    base[7] = LchColor(WHITE_L[mode], tint_c, tint_h)

    for slot, idx in assign_slot_sources(clusters).items():
        if idx is None:
            base[slot] = fallback_accent(slot, mode)
        else:
            base[slot] = fit_accent(clusters[idx].lch, mode)
    return [c for c in base if c is not None]


def assign_base_slots(
    clusters: Sequence[WeightedCluster], mode: Mode
) -> List[RgbColor]:
    """The eight base slots as in-gamut RgbColor values."""
    return [lch_to_rgb(c) for c in assign_base_lch(clusters, mode)]


__all__ = [
    "dominant_tint",
    "pick_cluster_for_hue",
    "assign_slot_sources",
    "fallback_accent",
    "fit_accent",
    "assign_base_lch",
    "assign_base_slots",
]
