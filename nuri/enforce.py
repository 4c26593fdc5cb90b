# nuri/enforce.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from .colour_convert import contrast_ratio, lch_to_rgb, rgb_to_lch
from .constants import (
    CONTRAST_STEP,
    DEFAULT_MIN_BRIGHT_BLACK_CONTRAST,
    DEFAULT_MIN_CONTRAST,
    DEFAULT_MIN_FOREGROUND_CONTRAST,
    MAX_LIGHTNESS_SHIFT,
)
from .core_types import AnsiPalette, RgbColor
from .utils import debug_log, warn

ACCENT_SLOTS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
BRIGHT_ACCENT_SLOTS: Tuple[int, ...] = (9, 10, 11, 12, 13, 14)
BRIGHT_BLACK_SLOT: int = 8


@dataclass(frozen=True)
class ContrastTargets:
    accent: float = DEFAULT_MIN_CONTRAST
    foreground: float = DEFAULT_MIN_FOREGROUND_CONTRAST
    bright_black: float = DEFAULT_MIN_BRIGHT_BLACK_CONTRAST


def meet_contrast(
    color: RgbColor, counterpart: RgbColor, minimum: float
) -> Tuple[RgbColor, bool]:
    """
    Step OKLab lightness away from `counterpart` until contrast >= minimum.

    Hue and chroma are carried through unchanged. Stops at MAX_LIGHTNESS_SHIFT
    or at the lightness bounds and keeps the best colour seen.
    Returns (colour, reached).
    """
    best = color
    best_ratio = contrast_ratio(color, counterpart)
    if best_ratio >= minimum:
        return color, True

    lch = rgb_to_lch(color)
    direction = 1.0 if rgb_to_lch(counterpart).l <= lch.l else -1.0
    steps = int(round(MAX_LIGHTNESS_SHIFT / CONTRAST_STEP))
    for n in range(1, steps + 1):
        lightness = lch.l + direction * CONTRAST_STEP * n
        if lightness < 0.0 or lightness > 1.0:
            break
        candidate = lch_to_rgb(lch.with_lightness(lightness))
        ratio = contrast_ratio(candidate, counterpart)
        if ratio > best_ratio:
            best, best_ratio = candidate, ratio
        if ratio >= minimum:
            return candidate, True
    return best, False


def enforce_contrast(
    palette: AnsiPalette,
    targets: ContrastTargets = ContrastTargets(),
    *,
    debug: bool = False,
) -> AnsiPalette:
    """
    Repair the constrained colours against the background:
      slots 1-6 -> targets.accent, slot 8 -> targets.bright_black,
      foreground -> targets.foreground.
    Every other colour is left as is; cursor and selection foreground track
    the foreground.
    """
    bg = palette.background
    slots: List[RgbColor] = list(palette.slots)

    constrained = [(i, targets.accent) for i in ACCENT_SLOTS]
    constrained.append((BRIGHT_BLACK_SLOT, targets.bright_black))
    for idx, minimum in constrained:
        fixed, reached = meet_contrast(slots[idx], bg, minimum)
        if debug and fixed != slots[idx]:
            debug_log(f"slot {idx}: {slots[idx].hex} -> {fixed.hex}")
        if debug and not reached:
            warn(f"slot {idx}: contrast {minimum:g}:1 not reachable, kept best")
        slots[idx] = fixed

    fg, reached = meet_contrast(palette.foreground, bg, targets.foreground)
    if debug and not reached:
        warn(f"foreground: contrast {targets.foreground:g}:1 not reachable, kept best")

    cursor = fg if palette.cursor == palette.foreground else palette.cursor
    selection_fg = fg if palette.selection_fg == palette.foreground else palette.selection_fg
    return replace(
        palette,
        slots=tuple(slots),
        foreground=fg,
        cursor=cursor,
        selection_fg=selection_fg,
    )


def palette_contrast_report(palette: AnsiPalette) -> Dict[str, float]:
    """
    Measured ratios against the background: foreground, slots 1-6, 8 and 9-14.
    `dimmest_accent` is the lowest over base and bright accents.
    """
    bg = palette.background
    report = {"foreground": contrast_ratio(palette.foreground, bg)}
    accents = ACCENT_SLOTS + BRIGHT_ACCENT_SLOTS
    for i in sorted(accents + (BRIGHT_BLACK_SLOT,)):
        report[f"slot{i}"] = contrast_ratio(palette.slots[i], bg)
    report["dimmest_accent"] = min(report[f"slot{i}"] for i in accents)
    return report


__all__ = [
    "ACCENT_SLOTS",
    "BRIGHT_ACCENT_SLOTS",
    "BRIGHT_BLACK_SLOT",
    "ContrastTargets",
    "meet_contrast",
    "enforce_contrast",
    "palette_contrast_report",
]
