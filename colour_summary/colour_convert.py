# colour_summary/colour_convert.py
from __future__ import annotations

from typing import Tuple

import numpy as np

from .constants import LUMA_WEIGHTS
from .core_types import F32, U8Pixels

"""
sRGB <-> HSV and perceptual luma. Vectorized NumPy implementations.

Exports:
- rgb_to_hsv(rgb)     # -> (hue degrees [0,360), saturation [0,1], value [0,1])
- hsv_to_rgb(h, s, v) # -> uint8 (..., 3)
- rgb_luma(rgb)       # -> [0,1]
"""


def rgb_to_hsv(rgb: np.ndarray) -> Tuple[F32, F32, F32]:
    """
    uint8 RGB (..., 3) -> (h_deg, s, v), each float32 with the leading shape.
    Greys (max == min) get h = 0, s = 0. Black gets s = 0.
    """
    arr = np.asarray(rgb, dtype=np.float32)[..., :3] / np.float32(255.0)
    r = arr[..., 0]
    g = arr[..., 1]
    b = arr[..., 2]

    cmax = np.max(arr, axis=-1)
    cmin = np.min(arr, axis=-1)
    delta = cmax - cmin

    v = cmax
    s = np.zeros_like(cmax)
    np.divide(delta, cmax, out=s, where=cmax > 0)

    chromatic = delta > 0
    safe = np.where(chromatic, delta, np.float32(1.0))
    h = np.where(
        r >= cmax,
        (g - b) / safe,
        np.where(g >= cmax, 2.0 + (b - r) / safe, 4.0 + (r - g) / safe),
    )
    h = h * np.float32(60.0)
    h = np.where(h < 0, h + np.float32(360.0), h)
    h = np.where(chromatic, h, np.float32(0.0))
    # 359.99999 style results fold back to 0 on the [0,360) scale
    h = np.where(h >= 360.0, h - np.float32(360.0), h)

    return (
        h.astype(np.float32, copy=False),
        s.astype(np.float32, copy=False),
        v.astype(np.float32, copy=False),
    )


def hsv_to_rgb(h_deg: np.ndarray, s: np.ndarray, v: np.ndarray) -> U8Pixels:
    """
    (h_deg, s, v) -> uint8 (..., 3). Channels are truncated, not rounded.
    Uses c = v - v*s*clamp(min(k, 4-k), 0, 1) with k = (n + h/60) mod 6.
    """
    h = np.asarray(h_deg, dtype=np.float32)
    sat = np.asarray(s, dtype=np.float32)
    val = np.asarray(v, dtype=np.float32)

    def channel(n: float) -> np.ndarray:
        k = np.mod(np.float32(n) + h / np.float32(60.0), np.float32(6.0))
        k = np.clip(np.minimum(k, np.float32(4.0) - k), 0.0, 1.0)
        return (val - val * sat * k) * np.float32(255.0)

    out = np.stack([channel(5.0), channel(3.0), channel(1.0)], axis=-1)
    return np.clip(out, 0.0, 255.0).astype(np.uint8)


def rgb_luma(rgb: np.ndarray) -> F32:
    """Perceptual luma (0.3 r + 0.587 g + 0.113 b) / 255."""
    arr = np.asarray(rgb, dtype=np.float32)[..., :3]
    wr, wg, wb = LUMA_WEIGHTS
    luma = arr[..., 0] * wr + arr[..., 1] * wg + arr[..., 2] * wb
    return (luma / np.float32(255.0)).astype(np.float32, copy=False)


__all__ = [
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_luma",
]
