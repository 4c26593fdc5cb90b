# nuri/config.py
from __future__ import annotations

"""
Pipeline configuration.

Exports:
- PipelineConfig: cluster count, contrast minimums, mode override, seed, bounds.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .constants import (
    CONTRAST_RATIO_RANGE,
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_MIN_BRIGHT_BLACK_CONTRAST,
    DEFAULT_MIN_CONTRAST,
    DEFAULT_MIN_FOREGROUND_CONTRAST,
    KMEANS_MAX_ITERATIONS,
    SAMPLE_MAX_DIM,
)
from .core_types import ConfigurationError, Mode, optional_mode


@dataclass(frozen=True)
class PipelineConfig:
    """
    Everything a run depends on besides the image.

    k                         : number of k-means clusters
    min_contrast              : accent slots 1-6 against the background
    min_foreground_contrast   : foreground against background
    min_bright_black_contrast : slot 8 against background
    mode                      : force DARK / LIGHT; None => detect from the image
    seed                      : k-means initialisation seed
    max_iterations            : k-means iteration bound
    sample_max_dim            : longest side of the sampled image
    """

    k: int = DEFAULT_CLUSTER_COUNT
    min_contrast: float = DEFAULT_MIN_CONTRAST
    min_foreground_contrast: float = DEFAULT_MIN_FOREGROUND_CONTRAST
    min_bright_black_contrast: float = DEFAULT_MIN_BRIGHT_BLACK_CONTRAST
    mode: Optional[Mode] = None
    seed: int = 0
    max_iterations: int = KMEANS_MAX_ITERATIONS
    sample_max_dim: int = SAMPLE_MAX_DIM

    def __post_init__(self) -> None:
        if isinstance(self.mode, str):
            object.__setattr__(self, "mode", optional_mode(self.mode))

    def validate(self) -> "PipelineConfig":
        """Raise ConfigurationError on the first bad field; return self otherwise."""
        for name in ("k", "seed", "max_iterations", "sample_max_dim"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(f"{name} must be an int, got {value!r}")
        if self.k <= 0:
            raise ConfigurationError(f"k must be positive, got {self.k}")
        if self.seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {self.seed}")
        if self.max_iterations <= 0:
            raise ConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
        if self.sample_max_dim <= 0:
            raise ConfigurationError(
                f"sample_max_dim must be positive, got {self.sample_max_dim}"
            )

        lo, hi = CONTRAST_RATIO_RANGE
        for name, value in self.contrast_minimums():
            numeric = isinstance(value, (int, float, np.integer, np.floating))
            if not numeric or not lo <= float(value) <= hi:
                raise ConfigurationError(
                    f"{name} must be within {lo:g}..{hi:g}, got {value!r}"
                )
        if self.mode is not None and not isinstance(self.mode, Mode):
            raise ConfigurationError(f"mode must be a Mode or None, got {self.mode!r}")
        return self

    def contrast_minimums(self) -> Tuple[Tuple[str, float], ...]:
        return (
            ("min_contrast", self.min_contrast),
            ("min_foreground_contrast", self.min_foreground_contrast),
            ("min_bright_black_contrast", self.min_bright_black_contrast),
        )

    def with_seed(self, seed: int) -> "PipelineConfig":
        return replace(self, seed=seed)


__all__ = ["PipelineConfig"]
