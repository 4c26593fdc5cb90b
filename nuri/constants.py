# nuri/constants.py
"""
Tunables used across the project.

- Sampling and clustering (SAMPLE_*, KMEANS_*, DEDUP_*)
- Mode split
- Slot assignment (canonical hues, lightness bands, fallbacks)
- Variant and special colour derivation
- Contrast enforcement

Lightness and chroma values are OKLCh (L in 0..1, C roughly 0..0.4).
Distances used by clustering are CIE Lab (dE76) units.
"""
from __future__ import annotations

from typing import Dict, Tuple

from .core_types import Mode

# ==================
# Sampling / k-means
# ==================
SAMPLE_MAX_DIM: int = 256
DEFAULT_CLUSTER_COUNT: int = 16
KMEANS_MAX_ITERATIONS: int = 50
KMEANS_TOLERANCE: float = 1e-3
DEDUP_DISTANCE: float = 6.0

# =============
# Mode decision
# =============
MODE_LIGHTNESS_SPLIT: float = 0.5

# ===============
# Slot assignment
# ===============
# Canonical OKLCh hue per accent slot, keyed by slot index.
SLOT_TARGET_HUES: Dict[int, float] = {
    1: 25.0,  # red
    2: 145.0,  # green
    3: 90.0,  # yellow
    4: 255.0,  # blue
    5: 320.0,  # magenta
    6: 195.0,  # cyan
}
# Primary accents are resolved before secondary ones.
SLOT_FILL_ORDER: Tuple[int, ...] = (1, 3, 2, 6, 4, 5)

MIN_ACCENT_CHROMA: float = 0.03
MAX_HUE_DISTANCE: float = 40.0
HUE_TIE_TOLERANCE: float = 5.0

ACCENT_L_BAND: Dict[Mode, Tuple[float, float]] = {
    Mode.DARK: (0.62, 0.82),
    Mode.LIGHT: (0.40, 0.56),
}
FALLBACK_L: Dict[Mode, float] = {Mode.DARK: 0.72, Mode.LIGHT: 0.50}
FALLBACK_C: Dict[Mode, float] = {Mode.DARK: 0.12, Mode.LIGHT: 0.13}

NEUTRAL_TINT_C: float = 0.015
BLACK_L: Dict[Mode, float] = {Mode.DARK: 0.25, Mode.LIGHT: 0.26}
WHITE_L: Dict[Mode, float] = {Mode.DARK: 0.86, Mode.LIGHT: 0.88}

# ========================
# Variants / special roles
# ========================
BRIGHT_L_DELTA: float = 0.08
BRIGHT_C_DELTA: float = 0.02
BRIGHT_BLACK_L: Dict[Mode, float] = {Mode.DARK: 0.55, Mode.LIGHT: 0.58}
BRIGHT_WHITE_L: Dict[Mode, float] = {Mode.DARK: 0.96, Mode.LIGHT: 0.96}

BACKGROUND_L: Dict[Mode, float] = {Mode.DARK: 0.18, Mode.LIGHT: 0.97}
FOREGROUND_L: Dict[Mode, float] = {Mode.DARK: 0.90, Mode.LIGHT: 0.27}
BACKGROUND_C: float = 0.012
FOREGROUND_C: float = 0.01
SELECTION_L_SHIFT: float = 0.12
SELECTION_C_BOOST: float = 0.04

# ====================
# Contrast enforcement
# ====================
DEFAULT_MIN_CONTRAST: float = 4.5
DEFAULT_MIN_FOREGROUND_CONTRAST: float = 7.0
DEFAULT_MIN_BRIGHT_BLACK_CONTRAST: float = 3.0
CONTRAST_RATIO_RANGE: Tuple[float, float] = (1.0, 21.0)
CONTRAST_STEP: float = 0.005
MAX_LIGHTNESS_SHIFT: float = 0.6

# Gamut search
GAMUT_EPSILON: float = 1e-6
GAMUT_BISECT_STEPS: int = 28
