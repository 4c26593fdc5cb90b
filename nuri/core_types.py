# nuri/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, errors, and lightweight helpers.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
LabTuple = Tuple[float, float, float]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
Lab = NDArray[np.float64]  # (..., 3) CIE Lab

SLOT_NAMES: Tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

# Errors


class NuriError(Exception):
    """Base class for errors raised by the palette pipeline."""


class InvalidInputError(NuriError, ValueError):
    """The image or sample set cannot produce a palette (empty, wrong shape)."""


class ConfigurationError(NuriError, ValueError):
    """A pipeline setting is outside its accepted range."""


# Value objects


class Mode(Enum):
    """Theme polarity: which luminance extreme becomes the background."""

    DARK = "dark"
    LIGHT = "light"

    @classmethod
    def parse(cls, value: Union[str, "Mode"]) -> "Mode":
        if isinstance(value, Mode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"mode must be 'dark' or 'light', got {value!r}"
            ) from None


@dataclass(frozen=True)
class RgbColor:
    """8-bit sRGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
                raise ValueError(f"channel {name} must be an int, got {v!r}")
            if not 0 <= int(v) <= 255:
                raise ValueError(f"channel {name} must be 0-255, got {v}")
            object.__setattr__(self, name, int(v))

    @classmethod
    def from_hex(cls, hex_str: str) -> "RgbColor":
        return cls(*hex_to_rgb(hex_str))

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self.as_tuple())

    def as_tuple(self) -> RGBTuple:
        return (self.r, self.g, self.b)

    def relative_luminance(self) -> float:
        """WCAG relative luminance (0..1)."""
        from .colour_convert import relative_luminance

        return relative_luminance(self)

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class LchColor:
    """
    OKLCh colour: lightness l in [0,1], chroma c >= 0, hue h in degrees [0,360).
    Hue is normalised on construction.
    """

    l: float  # noqa: E741
    c: float
    h: float

    def __post_init__(self) -> None:
        l, c, h = float(self.l), float(self.c), float(self.h)  # noqa: E741
        if math.isnan(l) or math.isnan(c) or math.isnan(h):
            raise ValueError("LchColor components must not be NaN")
        if c < 0.0:
            raise ValueError(f"chroma must be >= 0, got {c}")
        object.__setattr__(self, "l", l)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "h", h % 360.0)

    def with_lightness(self, l: float) -> "LchColor":  # noqa: E741
        return LchColor(l, self.c, self.h)


@dataclass(frozen=True)
class WeightedCluster:
    """Cluster centroid in CIE Lab with its sample count and derived OKLCh colour."""

    lab: LabTuple
    weight: int
    lch: LchColor

    def share(self, total: int) -> float:
        """Fraction of all samples that fell into this cluster."""
        return self.weight / total if total > 0 else 0.0

    @property
    def rgb(self) -> RgbColor:
        """Centroid as 8-bit sRGB, clipped into gamut."""
        from .colour_convert import lab_to_rgb_float

        srgb = lab_to_rgb_float(np.asarray(self.lab, dtype=np.float64))
        r, g, b = (int(round(float(v) * 255.0)) for v in srgb)
        return RgbColor(r, g, b)


@dataclass(frozen=True)
class SampleSet:
    """Unique colours of the sampled image with counts and CIE Lab rows."""

    rgb: U8Image  # (U, 3) uint8
    counts: NDArray[np.int64]  # (U,)
    lab: Lab  # (U, 3)
    width: int
    height: int

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def __len__(self) -> int:
        return int(self.counts.shape[0])


@dataclass(frozen=True)
class AnsiPalette:
    """
    The 16 ANSI slots plus special colours. Slots 0-7 are black, red, green,
    yellow, blue, magenta, cyan, white; 8-15 their bright counterparts.
    """

    slots: Tuple[RgbColor, ...]
    background: RgbColor
    foreground: RgbColor
    cursor: RgbColor
    cursor_text: RgbColor
    selection_bg: RgbColor
    selection_fg: RgbColor
    mode: Mode

    def __post_init__(self) -> None:
        slots = tuple(self.slots)
        if len(slots) != 16:
            raise ValueError(f"palette needs 16 slots, got {len(slots)}")
        object.__setattr__(self, "slots", slots)

    def slot(self, name: str, bright: bool = False) -> RgbColor:
        """Look up a slot by its conventional name, e.g. slot('cyan', bright=True)."""
        try:
            idx = SLOT_NAMES.index(name.lower())
        except ValueError:
            raise KeyError(f"unknown slot name: {name!r}") from None
        return self.slots[idx + 8 if bright else idx]

    def to_dict(self) -> Dict[str, object]:
        """Hex strings keyed by role, for formatters."""
        return {
            "mode": self.mode.value,
            "background": self.background.hex,
            "foreground": self.foreground.hex,
            "cursor": self.cursor.hex,
            "cursor_text": self.cursor_text.hex,
            "selection_bg": self.selection_bg.hex,
            "selection_fg": self.selection_fg.hex,
            "slots": [c.hex for c in self.slots],
        }


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] not in (3, 4):
        raise InvalidInputError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


def optional_mode(value: Optional[Union[str, Mode]]) -> Optional[Mode]:
    """None stays None; strings and Mode values resolve through Mode.parse."""
    return None if value is None else Mode.parse(value)


__all__ = [
    # aliases / types
    "RGBTuple",
    "LabTuple",
    "HexStr",
    "U8Image",
    "Lab",
    "SLOT_NAMES",
    # errors
    "NuriError",
    "InvalidInputError",
    "ConfigurationError",
    # value objects
    "Mode",
    "RgbColor",
    "LchColor",
    "WeightedCluster",
    "SampleSet",
    "AnsiPalette",
    # helpers
    "clamp_value",
    "rgb_to_hex",
    "hex_to_rgb",
    "assert_u8_image_rgb",
    "optional_mode",
]
