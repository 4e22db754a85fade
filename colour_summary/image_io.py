# colour_summary/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageOps

from .core_types import U8Image, U8Pixels, as_pixel_rows

"""
Image I/O helpers: decode to sRGB RGBA, flatten to visible pixel rows, save PNG.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif", ".tga"}


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (OSError, ValueError, ImageCms.PyCMSError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_image_rgba(path: Path) -> Tuple[U8Image, np.ndarray]:
    """Decode `path` to (rgb (H,W,3), alpha (H,W)) uint8 arrays."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    arr = np.array(im, dtype=np.uint8)
    return arr[..., :3], arr[..., 3]


def load_visible_pixels(path: Path) -> Tuple[U8Pixels, Tuple[int, int]]:
    """
    Decode `path` and return its pixels with alpha > 0 as (N, 3) rows in
    row-major order, plus the (width, height) of the image.

    Raises ValueError for images with no pixels.
    """
    rgb, alpha = load_image_rgba(path)
    height, width = rgb.shape[0], rgb.shape[1]
    if width * height <= 0:
        raise ValueError(f'image "{path.stem}" is empty')
    return as_pixel_rows(rgb, alpha), (width, height)


def save_png_rgb(path: Path, rgb: U8Image) -> Path:
    """Save an (H,W,3) uint8 array as PNG; forces the .png suffix."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(path)
    return path


__all__ = [
    "IMAGE_EXTS",
    "load_image_rgba",
    "load_visible_pixels",
    "save_png_rgb",
]
