"""Pytest configuration: synthetic images and cluster builders (no external files needed)."""

from typing import Callable, List, Sequence, Tuple

import numpy as np
import pytest

from nuri.colour_convert import lab_to_lch, lch_to_rgb, rgb_to_lab
from nuri.constants import SLOT_TARGET_HUES
from nuri.core_types import LchColor, RgbColor, WeightedCluster


def solid_image(rgb: Tuple[int, int, int], width: int = 64, height: int = 64) -> np.ndarray:
    """A single-colour uint8 (H,W,3) image."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[...] = rgb
    return img


def blocks_image(colours: Sequence[RgbColor], block: int = 8) -> np.ndarray:
    """Colours laid out left to right as equal square blocks."""
    img = np.zeros((block, block * len(colours), 3), dtype=np.uint8)
    for i, c in enumerate(colours):
        img[:, i * block : (i + 1) * block] = c.as_tuple()
    return img


def canonical_accents(l: float = 0.7, c: float = 0.12) -> List[RgbColor]:  # noqa: E741
    """One colour per accent slot at its canonical hue, slot order 1..6."""
    return [lch_to_rgb(LchColor(l, c, SLOT_TARGET_HUES[slot])) for slot in range(1, 7)]


def cluster_from_rgb(rgb: RgbColor, weight: int) -> WeightedCluster:
    lab = rgb_to_lab(np.array(rgb.as_tuple(), dtype=np.uint8))
    return WeightedCluster(
        lab=(float(lab[0]), float(lab[1]), float(lab[2])),
        weight=weight,
        lch=lab_to_lch(lab),
    )


@pytest.fixture
def make_cluster() -> Callable[..., WeightedCluster]:
    """Build a WeightedCluster from OKLCh components."""

    def _make(l: float, c: float, h: float, weight: int = 100) -> WeightedCluster:  # noqa: E741
        return cluster_from_rgb(lch_to_rgb(LchColor(l, c, h)), weight)

    return _make


@pytest.fixture
def noise_image() -> np.ndarray:
    """Deterministic colourful 48x48 noise."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(48, 48, 3), dtype=np.uint8)


@pytest.fixture
def gradient_image() -> np.ndarray:
    """Horizontal red->blue ramp over a vertical dark->light ramp."""
    xs = np.linspace(0, 255, 80, dtype=np.float64)
    ys = np.linspace(40, 220, 60, dtype=np.float64)
    img = np.zeros((60, 80, 3), dtype=np.uint8)
    img[..., 0] = (255 - xs)[None, :].astype(np.uint8)
    img[..., 1] = ys[:, None].astype(np.uint8)
    img[..., 2] = xs[None, :].astype(np.uint8)
    return img


@pytest.fixture
def six_hue_image() -> np.ndarray:
    """Black, white and the six canonical accent hues as equal blocks."""
    colours = [RgbColor(0, 0, 0), RgbColor(255, 255, 255)] + canonical_accents()
    return blocks_image(colours)
