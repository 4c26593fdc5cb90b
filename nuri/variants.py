# nuri/variants.py
from __future__ import annotations

"""
Bright slots (ANSI 8-15) and special colours.

Exports:
- bright_variant(base) -> LchColor
- derive_bright_slots(base, mode) -> List[RgbColor]
- SpecialColours
- derive_special_colours(base, mode) -> SpecialColours
- build_palette(base, mode) -> AnsiPalette
"""

from dataclasses import dataclass
from typing import List, Sequence

from .colour_convert import lch_to_rgb, rgb_to_lch
from .constants import (
    BACKGROUND_C,
    BACKGROUND_L,
    BRIGHT_BLACK_L,
    BRIGHT_C_DELTA,
    BRIGHT_L_DELTA,
    BRIGHT_WHITE_L,
    FOREGROUND_C,
    FOREGROUND_L,
    SELECTION_C_BOOST,
    SELECTION_L_SHIFT,
)
from .core_types import AnsiPalette, LchColor, Mode, RgbColor, clamp_value


def bright_variant(base: LchColor) -> LchColor:
    """Lighter and slightly more saturated; gamut is handled on conversion."""
    return LchColor(
        clamp_value(base.l + BRIGHT_L_DELTA, 0.0, 1.0),
        base.c + BRIGHT_C_DELTA,
        base.h,
    )


def derive_bright_slots(base: Sequence[RgbColor], mode: Mode) -> List[RgbColor]:
    """Slots 8-15 from slots 0-7."""
    if len(base) != 8:
        raise ValueError(f"expected 8 base slots, got {len(base)}")
    base_lch = [rgb_to_lch(c) for c in base]

    black, white = base_lch[0], base_lch[7]
    bright: List[LchColor] = [black.with_lightness(BRIGHT_BLACK_L[mode])]
    bright.extend(bright_variant(c) for c in base_lch[1:7])
    bright.append(white.with_lightness(max(white.l, BRIGHT_WHITE_L[mode])))
    return [lch_to_rgb(c) for c in bright]


@dataclass(frozen=True)
class SpecialColours:
    background: RgbColor
    foreground: RgbColor
    cursor: RgbColor
    cursor_text: RgbColor
    selection_bg: RgbColor
    selection_fg: RgbColor


def selection_background(background: LchColor, mode: Mode) -> LchColor:
    """Background hue, nudged toward the foreground and made a little more colourful."""
    shift = SELECTION_L_SHIFT if mode is Mode.DARK else -SELECTION_L_SHIFT
    return LchColor(
        clamp_value(background.l + shift, 0.0, 1.0),
        background.c + SELECTION_C_BOOST,
        background.h,
    )


def derive_special_colours(base: Sequence[RgbColor], mode: Mode) -> SpecialColours:
    """
    DARK: background from black's family, foreground from white's.
    LIGHT: the other way round.
    """
    black, white = rgb_to_lch(base[0]), rgb_to_lch(base[7])
    bg_src, fg_src = (black, white) if mode is Mode.DARK else (white, black)

    bg_lch = LchColor(BACKGROUND_L[mode], min(bg_src.c, BACKGROUND_C), bg_src.h)
    fg_lch = LchColor(FOREGROUND_L[mode], min(fg_src.c, FOREGROUND_C), fg_src.h)
    background = lch_to_rgb(bg_lch)
    foreground = lch_to_rgb(fg_lch)
    return SpecialColours(
        background=background,
        foreground=foreground,
        cursor=foreground,
        cursor_text=background,
        selection_bg=lch_to_rgb(selection_background(bg_lch, mode)),
        selection_fg=foreground,
    )


def build_palette(base: Sequence[RgbColor], mode: Mode) -> AnsiPalette:
    """Assemble the full palette from the eight base slots."""
    specials = derive_special_colours(base, mode)
    return AnsiPalette(
        slots=tuple(base) + tuple(derive_bright_slots(base, mode)),
        background=specials.background,
        foreground=specials.foreground,
        cursor=specials.cursor,
        cursor_text=specials.cursor_text,
        selection_bg=specials.selection_bg,
        selection_fg=specials.selection_fg,
        mode=mode,
    )


__all__ = [
    "bright_variant",
    "derive_bright_slots",
    "SpecialColours",
    "selection_background",
    "derive_special_colours",
    "build_palette",
]
