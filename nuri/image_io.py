# nuri/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import InvalidInputError, U8Image

"""
Image loading (RGB in sRGB) for the sampler.
"""


def load_image_rgb(path: Union[str, Path]) -> U8Image:
    """
    Read any Pillow-supported image, apply EXIF orientation and return uint8 (H,W,3).

    Raises FileNotFoundError for a missing path and InvalidInputError for files
    Pillow cannot decode.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"file not found: {path}")
    try:
        with Image.open(path) as im0:
            im = ImageOps.exif_transpose(im0).convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidInputError(
            f"unsupported or corrupt image: {path}. "
            "Supported formats: PNG, JPEG, WebP, BMP, TIFF, GIF"
        ) from exc
    return np.array(im, dtype=np.uint8)


__all__ = ["load_image_rgb"]
