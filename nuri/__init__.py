# nuri/__init__.py
"""
nuri package.

Purpose:
  Turn an image into a 16-colour terminal palette plus background, foreground,
  cursor and selection colours, with WCAG contrast guarantees.

Public API:
  generate_palette : image (or cached samples) -> AnsiPalette.
  run_pipeline     : same, returning clusters and mode for inspection.
  regenerate       : re-run a previous run with a new seed.
  PipelineConfig   : cluster count, contrast minimums, mode override, seed.
  load_image_rgb   : read an image file into a uint8 RGB array.
  colour_convert   : OKLCh / CIE Lab transforms and WCAG contrast.
  core_types       : RgbColor, LchColor, WeightedCluster, Mode, AnsiPalette, errors.

Quick start:
  from nuri import generate_palette, load_image_rgb
  palette = generate_palette(load_image_rgb("wallpaper.png"))
  print(palette.background.hex, [c.hex for c in palette.slots])
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import constants
from . import core_types

from .config import PipelineConfig
from .core_types import (
    AnsiPalette,
    ConfigurationError,
    InvalidInputError,
    LchColor,
    Mode,
    NuriError,
    RgbColor,
    SampleSet,
    WeightedCluster,
)
from .image_io import load_image_rgb
from .pipeline import (
    PipelineRun,
    extract_colors,
    generate_palette,
    prepare_samples,
    regenerate,
    run_pipeline,
)

__all__ = [
    "__version__",
    "colour_convert",
    "constants",
    "core_types",
    "PipelineConfig",
    "AnsiPalette",
    "ConfigurationError",
    "InvalidInputError",
    "LchColor",
    "Mode",
    "NuriError",
    "RgbColor",
    "SampleSet",
    "WeightedCluster",
    "load_image_rgb",
    "PipelineRun",
    "extract_colors",
    "generate_palette",
    "prepare_samples",
    "regenerate",
    "run_pipeline",
]
