# nuri/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, D65).

Two perceptual spaces are used:
  OKLab / OKLCh : adjustment, hue matching and lightness work (LchColor).
  CIE Lab       : clustering and deduplication distances (cluster space).

Exports:
  srgb_to_linear(srgb)
  linear_to_srgb(linear)
  rgb_to_oklab(rgb)            vectorised, uint8 or 0..1 input
  oklab_to_linear_rgb(oklab)   vectorised, unclipped
  rgb_to_lch(RgbColor)         -> LchColor
  lch_to_rgb(LchColor)         -> RgbColor, chroma-reduced into gamut
  rgb_to_lab(rgb)              sRGB -> CIE Lab, vectorised
  lab_to_rgb_float(lab)        CIE Lab -> sRGB 0..1, clipped
  lab_to_lch(lab)              CIE Lab centroid -> LchColor
  hue_distance(a, b)
  cluster_distance(lab1, lab2)
  lerp_lch(a, b, t)
  relative_luminance(RgbColor)
  contrast_ratio(a, b)
"""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .constants import GAMUT_BISECT_STEPS, GAMUT_EPSILON
from .core_types import Lab, LabTuple, LchColor, RgbColor, clamp_value


# sRGB transfer


def srgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Args:
      srgb: array[...] in 0..1 (float)
    Returns:
      float64 array, same shape
    """
    srgb_f = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb_f <= 0.04045, srgb_f / 12.92, ((srgb_f + 0.055) / 1.055) ** 2.4
    )


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Linear RGB (0..1) to non-linear sRGB. Negative inputs are treated as 0."""
    lin = np.maximum(np.asarray(linear, dtype=np.float64), 0.0)
    return np.where(
        lin <= 0.0031308, 12.92 * lin, 1.055 * np.power(lin, 1.0 / 2.4) - 0.055
    )


def _as_unit_rgb(rgb: np.ndarray) -> np.ndarray:
    """uint8 [0..255] -> float [0..1]; float input is assumed to be 0..1 already."""
    arr = np.asarray(rgb)
    if np.issubdtype(arr.dtype, np.integer):
        return arr.astype(np.float64) / 255.0
    arr = arr.astype(np.float64, copy=False)
    if np.isnan(arr).any() or (arr < 0.0).any():
        raise ValueError("RGB channels must be non-negative numbers")
    return arr


# OKLab

_M_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)
_M_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)
_M_LMS_INV = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)
_M_RGB_INV = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def rgb_to_oklab(rgb: np.ndarray) -> NDArray[np.float64]:
    """sRGB (uint8 or 0..1 float) [...,3] -> OKLab [...,3]."""
    lin = srgb_to_linear(_as_unit_rgb(rgb))
    lms = np.cbrt(lin @ _M_LMS.T)
    return lms @ _M_OKLAB.T


def oklab_to_linear_rgb(oklab: np.ndarray) -> NDArray[np.float64]:
    """OKLab [...,3] -> linear RGB [...,3]. Not clipped; out-of-gamut values leave 0..1."""
    lms_ = np.asarray(oklab, dtype=np.float64) @ _M_LMS_INV.T
    return (lms_**3) @ _M_RGB_INV.T


def _lch_to_oklab(l: float, c: float, h: float) -> np.ndarray:  # noqa: E741
    rad = math.radians(h)
    return np.array([l, c * math.cos(rad), c * math.sin(rad)])


def _in_gamut(linear: np.ndarray) -> bool:
    return bool(np.all(linear >= -GAMUT_EPSILON) and np.all(linear <= 1.0 + GAMUT_EPSILON))


def _linear_to_rgb_color(linear: np.ndarray) -> RgbColor:
    srgb = np.clip(linear_to_srgb(np.clip(linear, 0.0, 1.0)), 0.0, 1.0)
    r, g, b = (int(round(float(v) * 255.0)) for v in srgb)
    return RgbColor(r, g, b)


def rgb_to_lch(color: RgbColor) -> LchColor:
    """RgbColor -> OKLCh."""
    L, a, b = rgb_to_oklab(np.array(color.as_tuple(), dtype=np.uint8))
    C = math.hypot(a, b)
    h = (math.degrees(math.atan2(b, a)) + 360.0) % 360.0
    return LchColor(clamp_value(float(L), 0.0, 1.0), float(C), h)


def lch_to_rgb(color: LchColor) -> RgbColor:
    """
    OKLCh -> RgbColor.

    Lightness is restricted to its domain [0,1]. If the colour is outside the
    sRGB gamut, chroma is reduced by bisection at fixed lightness and hue until
    it fits; lightness is never traded for gamut.
    """
    L = clamp_value(color.l, 0.0, 1.0)
    linear = oklab_to_linear_rgb(_lch_to_oklab(L, color.c, color.h))
    if _in_gamut(linear):
        return _linear_to_rgb_color(linear)

    lo, hi = 0.0, color.c
    for _ in range(GAMUT_BISECT_STEPS):
        mid = 0.5 * (lo + hi)
        if _in_gamut(oklab_to_linear_rgb(_lch_to_oklab(L, mid, color.h))):
            lo = mid
        else:
            hi = mid
    return _linear_to_rgb_color(oklab_to_linear_rgb(_lch_to_oklab(L, lo, color.h)))


# CIE Lab (cluster space)

_M_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)
_M_XYZ_INV = np.array(
    [
        [3.2404542, -1.5371385, -0.4985314],
        [-0.9692660, 1.8760108, 0.0415560],
        [0.0556434, -0.2040259, 1.0572252],
    ]
)
_WHITE_D65 = np.array([0.95047, 1.00000, 1.08883])
_LAB_E = 216.0 / 24389.0
_LAB_K = 24389.0 / 27.0


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Accepts uint8 [0..255] or float [0..1]. Preserves shape (...,3). Returns float64.
    """
    lin = srgb_to_linear(_as_unit_rgb(rgb))
    xyz = (lin @ _M_XYZ.T) / _WHITE_D65

    f = np.where(xyz > _LAB_E, np.cbrt(xyz), (_LAB_K * xyz + 16.0) / 116.0)
    out = np.empty(f.shape, dtype=np.float64)
    out[..., 0] = 116.0 * f[..., 1] - 16.0
    out[..., 1] = 500.0 * (f[..., 0] - f[..., 1])
    out[..., 2] = 200.0 * (f[..., 1] - f[..., 2])
    return out


def lab_to_rgb_float(lab: np.ndarray) -> NDArray[np.float64]:
    """CIE Lab (D65) [...,3] -> sRGB 0..1 [...,3], clipped into gamut."""
    lab_f = np.asarray(lab, dtype=np.float64)
    fy = (lab_f[..., 0] + 16.0) / 116.0
    fx = lab_f[..., 1] / 500.0 + fy
    fz = fy - lab_f[..., 2] / 200.0
    f = np.stack([fx, fy, fz], axis=-1)
    xyz = np.where(f**3 > _LAB_E, f**3, (116.0 * f - 16.0) / _LAB_K) * _WHITE_D65
    linear = np.clip(xyz @ _M_XYZ_INV.T, 0.0, 1.0)
    return np.clip(linear_to_srgb(linear), 0.0, 1.0)


def lab_to_lch(lab: Sequence[float] | np.ndarray) -> LchColor:
    """CIE Lab centroid -> OKLCh, through clipped sRGB."""
    srgb = lab_to_rgb_float(np.asarray(lab, dtype=np.float64))
    L, a, b = rgb_to_oklab(srgb)
    C = math.hypot(a, b)
    h = (math.degrees(math.atan2(b, a)) + 360.0) % 360.0
    return LchColor(clamp_value(float(L), 0.0, 1.0), float(C), h)


# Distances / interpolation


def hue_distance(hue_a: float, hue_b: float) -> float:
    """Shortest arc between two hues in degrees, in [0, 180]."""
    d = abs(hue_a - hue_b) % 360.0
    return 360.0 - d if d > 180.0 else d


def cluster_distance(lab1: LabTuple | np.ndarray, lab2: LabTuple | np.ndarray) -> float:
    """Euclidean (dE76) distance in cluster space."""
    diff = np.asarray(lab1, dtype=np.float64) - np.asarray(lab2, dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))


def lerp_lch(a: LchColor, b: LchColor, t: float) -> LchColor:
    """Linear interpolation in OKLCh; hue travels the shorter arc."""
    t = clamp_value(float(t), 0.0, 1.0)
    dh = (b.h - a.h) % 360.0
    if dh > 180.0:
        dh -= 360.0
    return LchColor(
        a.l + (b.l - a.l) * t,
        max(0.0, a.c + (b.c - a.c) * t),
        a.h + dh * t,
    )


# WCAG 2.0


def relative_luminance(color: RgbColor) -> float:
    """WCAG relative luminance from linearised sRGB channels."""
    r, g, b = srgb_to_linear(np.array(color.as_tuple(), dtype=np.float64) / 255.0)
    return float(0.2126 * r + 0.7152 * g + 0.0722 * b)


def contrast_ratio(a: RgbColor, b: RgbColor) -> float:
    """(L1 + 0.05) / (L2 + 0.05) with L1 the lighter of the two."""
    la, lb = relative_luminance(a), relative_luminance(b)
    hi, lo = (la, lb) if la >= lb else (lb, la)
    return (hi + 0.05) / (lo + 0.05)


__all__ = [
    "srgb_to_linear",
    "linear_to_srgb",
    "rgb_to_oklab",
    "oklab_to_linear_rgb",
    "rgb_to_lch",
    "lch_to_rgb",
    "rgb_to_lab",
    "lab_to_rgb_float",
    "lab_to_lch",
    "hue_distance",
    "cluster_distance",
    "lerp_lch",
    "relative_luminance",
    "contrast_ratio",
]
