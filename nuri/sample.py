# nuri/sample.py
from __future__ import annotations

"""
Sampler: reduce an image to a bounded set of weighted colour samples.

Exports:
- downscale_rgb(image, max_dim) -> (rgb uint8 [h,w,3], visible mask [h,w] | None)
- unique_colours_with_counts(rgb, mask) -> (unique uint8 [U,3], counts int64 [U])
- sample_image(image, max_dim=SAMPLE_MAX_DIM) -> SampleSet

Notes:
- Images with a side longer than max_dim are shrunk with Pillow's BOX filter
  (area averaging), keeping the aspect ratio. Smaller images are not scaled.
- Fully transparent pixels are dropped when an alpha channel is present.
- Identical colours are folded into one sample with a count, so clustering
  cost depends on colour diversity, not on the pixel count.
"""

from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from .colour_convert import rgb_to_lab
from .constants import SAMPLE_MAX_DIM
from .core_types import InvalidInputError, SampleSet, U8Image, assert_u8_image_rgb

ImageLike = Union[np.ndarray, Image.Image]


def _to_rgba_array(image: ImageLike) -> np.ndarray:
    if isinstance(image, Image.Image):
        im = image if image.mode in ("RGB", "RGBA") else image.convert("RGBA")
        return np.array(im, dtype=np.uint8)
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidInputError(f"expected a non-empty (H,W,3/4) image, got shape {arr.shape}")
    return assert_u8_image_rgb(arr)


def downscale_rgb(
    image: ImageLike, max_dim: int = SAMPLE_MAX_DIM
) -> Tuple[U8Image, Optional[np.ndarray]]:
    """Fit the image inside max_dim x max_dim. Returns (rgb, visible mask or None)."""
    arr = _to_rgba_array(image)
    height, width = int(arr.shape[0]), int(arr.shape[1])
    if height == 0 or width == 0:
        raise InvalidInputError("image has no pixels")

    if width > max_dim or height > max_dim:
        scale = min(max_dim / float(width), max_dim / float(height))
        dst_w = max(1, int(round(width * scale)))
        dst_h = max(1, int(round(height * scale)))
        im = Image.fromarray(np.ascontiguousarray(arr))
        arr = np.array(im.resize((dst_w, dst_h), Image.Resampling.BOX), dtype=np.uint8)

    rgb = np.ascontiguousarray(arr[..., :3])
    mask = (arr[..., 3] > 0) if arr.shape[-1] == 4 else None
    return rgb, mask


def unique_colours_with_counts(
    rgb: U8Image, mask: Optional[np.ndarray] = None
) -> Tuple[U8Image, np.ndarray]:
    """Return (unique RGB rows among visible pixels, counts)."""
    flat = rgb[mask] if mask is not None else rgb.reshape(-1, 3)
    if flat.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros((0,), dtype=np.int64)
    uniques, counts = np.unique(flat.reshape(-1, 3), axis=0, return_counts=True)
    return uniques.astype(np.uint8, copy=False), counts.astype(np.int64, copy=False)


def sample_image(image: ImageLike, max_dim: int = SAMPLE_MAX_DIM) -> SampleSet:
    """
    Downscale, fold identical colours, convert to CIE Lab.

    Raises InvalidInputError when nothing visible remains.
    """
    rgb, mask = downscale_rgb(image, max_dim)
    uniques, counts = unique_colours_with_counts(rgb, mask)
    if uniques.shape[0] == 0:
        raise InvalidInputError("image has no visible pixels to sample")
    return SampleSet(
        rgb=uniques,
        counts=counts,
        lab=rgb_to_lab(uniques),
        width=int(rgb.shape[1]),
        height=int(rgb.shape[0]),
    )


__all__ = ["ImageLike", "downscale_rgb", "unique_colours_with_counts", "sample_image"]
