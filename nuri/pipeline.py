# nuri/pipeline.py
from __future__ import annotations

"""
Image -> AnsiPalette.

Stages, in order:
  sample -> cluster -> deduplicate -> mode -> base slots -> variants/specials
  -> contrast enforcement

Exports:
  prepare_samples(image, max_dim)
  extract_colors(samples, k, seed, ...)
  run_pipeline(source, config=None, debug=False) -> PipelineRun
  generate_palette(source, config=None, debug=False) -> AnsiPalette
  regenerate(run, seed, debug=False) -> PipelineRun

`source` may be a NumPy image, a Pillow image, or a SampleSet from an earlier
run. The seed is read only by the clustering stage, so a cached SampleSet can
be re-run with a new seed without sampling again.
"""

import time
from dataclasses import dataclass
from typing import List, Optional, Union

from .assign import assign_base_slots
from .cluster import kmeans
from .config import PipelineConfig
from .constants import KMEANS_MAX_ITERATIONS, SAMPLE_MAX_DIM
from .core_types import AnsiPalette, Mode, SampleSet, WeightedCluster
from .dedup import deduplicate_clusters
from .enforce import ContrastTargets, enforce_contrast, palette_contrast_report
from .mode import resolve_mode
from .sample import ImageLike, sample_image
from .utils import (
    debug_log,
    format_percentage,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)
from .variants import build_palette

Source = Union[ImageLike, SampleSet]


@dataclass(frozen=True)
class PipelineRun:
    """Everything a run produced; `palette` is the result, the rest is diagnostics."""

    palette: AnsiPalette
    clusters: List[WeightedCluster]
    mode: Mode
    samples: SampleSet
    config: PipelineConfig


def prepare_samples(image: ImageLike, max_dim: int = SAMPLE_MAX_DIM) -> SampleSet:
    """Sampling stage on its own; the result can be reused across seeds."""
    return sample_image(image, max_dim)


def extract_colors(
    samples: SampleSet,
    k: int,
    seed: int,
    *,
    max_iterations: int = KMEANS_MAX_ITERATIONS,
    debug: bool = False,
) -> List[WeightedCluster]:
    """k-means followed by deduplication."""
    clusters = kmeans(samples, k, seed, max_iterations=max_iterations, debug=debug)
    return deduplicate_clusters(clusters)


def _debug_clusters(clusters: List[WeightedCluster], total: int) -> None:
    debug_log(f"clusters after dedup: {len(clusters)}")
    for c in clusters:
        if c.weight == 0:
            continue
        debug_log(
            f"  L={c.lch.l:.3f} C={c.lch.c:.3f} h={c.lch.h:.1f}  "
            f"share={format_percentage(c.share(total))}"
        )


def run_pipeline(
    source: Source, config: Optional[PipelineConfig] = None, *, debug: bool = False
) -> PipelineRun:
    """
    Run every stage once. Raises ConfigurationError before any work when the
    config is invalid and InvalidInputError when the image has no pixels.
    """
    config = (config or PipelineConfig()).validate()
    t_start = time.perf_counter()
    if debug:
        print_config_line(
            "pipeline",
            [
                ("K", config.k),
                ("Seed", config.seed),
                ("Mode", config.mode.value if config.mode else "auto"),
                ("Min contrast", config.min_contrast),
            ],
            debug=True,
        )

    if isinstance(source, SampleSet):
        samples = source
    else:
        samples = prepare_samples(source, config.sample_max_dim)
    t_sampled = time.perf_counter()

    clusters = extract_colors(
        samples, config.k, config.seed, max_iterations=config.max_iterations, debug=debug
    )
    t_clustered = time.perf_counter()

    mode = resolve_mode(clusters, config.mode)
    base = assign_base_slots(clusters, mode)
    draft = build_palette(base, mode)
    targets = ContrastTargets(
        accent=config.min_contrast,
        foreground=config.min_foreground_contrast,
        bright_black=config.min_bright_black_contrast,
    )
    palette = enforce_contrast(draft, targets, debug=debug)
    t_done = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Sampled", f"{samples.width}x{samples.height}"),
                    ("Uniques", len(samples)),
                    ("Mode", mode.value),
                ]
            )
        )
        _debug_clusters(clusters, samples.total)
        report = palette_contrast_report(palette)
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Foreground contrast", round(report["foreground"], 2)),
                    ("Dimmest accent", round(report["dimmest_accent"], 2)),
                ]
            )
        )
        debug_log(
            f"Total {format_seconds_compact(t_done - t_start)}  "
            f"(sample={format_seconds_compact(t_sampled - t_start)}, "
            f"cluster={format_seconds_compact(t_clustered - t_sampled)}, "
            f"assign={format_seconds_compact(t_done - t_clustered)})"
        )

    return PipelineRun(
        palette=palette, clusters=clusters, mode=mode, samples=samples, config=config
    )


def generate_palette(
    source: Source, config: Optional[PipelineConfig] = None, *, debug: bool = False
) -> AnsiPalette:
    """The palette for an image (or cached samples) under `config`."""
    return run_pipeline(source, config, debug=debug).palette


def regenerate(run: PipelineRun, seed: int, *, debug: bool = False) -> PipelineRun:
    """Re-run from the cached samples of `run` with a different seed."""
    return run_pipeline(run.samples, run.config.with_seed(seed), debug=debug)


__all__ = [
    "Source",
    "PipelineRun",
    "prepare_samples",
    "extract_colors",
    "run_pipeline",
    "generate_palette",
    "regenerate",
]
