# colour_summary/pixel_model.py
from __future__ import annotations

"""
Per-sample colour records used by both engines.

A PixelTable keeps one array per field so filters and sorts stay vectorized.
Pixel is the single-record view of a row.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .colour_convert import rgb_luma, rgb_to_hsv
from .constants import (
    GATHER_DISTANCE_WEIGHTS,
    GATHER_EXTREME_LUMA_HI,
    GATHER_EXTREME_LUMA_LO,
    GATHER_EXTREME_SAT,
    GATHER_SAT_STEPS,
)
from .core_types import F32, IndexArray, PixelSource, RGBTuple, U8Pixels, as_pixel_rows


def weighted_distance(h_a, s_a, v_a, h_b, s_b, v_b):
    """
    Weighted HSV distance used to gate cluster splits. Works on floats or
    arrays. Hue difference is plain, not circular.
    """
    wh, ws, wv = GATHER_DISTANCE_WEIGHTS
    return abs(h_a - h_b) * wh + abs(s_a - s_b) * ws + abs(v_a - v_b) * wv


@dataclass(frozen=True)
class Pixel:
    r: int
    g: int
    b: int
    h: float  # [0,1)
    s: float
    v: float
    l: float  # noqa: E741
    stepped_s: int

    @property
    def rgb(self) -> RGBTuple:
        return (self.r, self.g, self.b)

    def distance(self, other: Pixel) -> float:
        return weighted_distance(self.h, self.s, self.v, other.h, other.s, other.v)


@dataclass(frozen=True)
class PixelTable:
    """Column-wise pixel records. Row i of every array describes the same sample."""

    rgb: U8Pixels  # (N, 3)
    h: F32  # hue fraction [0,1)
    s: F32
    v: F32
    l: F32  # noqa: E741
    stepped_s: np.ndarray  # int32

    def __len__(self) -> int:
        return int(self.rgb.shape[0])

    def record(self, index: int) -> Pixel:
        r, g, b = (int(c) for c in self.rgb[index])
        return Pixel(
            r=r,
            g=g,
            b=b,
            h=float(self.h[index]),
            s=float(self.s[index]),
            v=float(self.v[index]),
            l=float(self.l[index]),
            stepped_s=int(self.stepped_s[index]),
        )

    def take(self, indices: IndexArray) -> PixelTable:
        """Rows at `indices`, in that order."""
        return PixelTable(
            rgb=self.rgb[indices],
            h=self.h[indices],
            s=self.s[indices],
            v=self.v[indices],
            l=self.l[indices],
            stepped_s=self.stepped_s[indices],
        )

    def extreme_mask(self) -> np.ndarray:
        """Washed out (s < 0.2), near black or near white by luma."""
        return (
            (self.s < GATHER_EXTREME_SAT)
            | (self.l < GATHER_EXTREME_LUMA_LO)
            | (self.l > GATHER_EXTREME_LUMA_HI)
        )


def stepped_saturation(s: np.ndarray, steps: int = GATHER_SAT_STEPS) -> np.ndarray:
    """round(s * steps), half to even."""
    return np.rint(np.asarray(s, dtype=np.float32) * np.float32(steps)).astype(np.int32)


def derive_pixels(pixels: PixelSource, alpha: Optional[np.ndarray] = None) -> PixelTable:
    """Build a PixelTable from any RGB(A) source, keeping input order."""
    rows = as_pixel_rows(pixels, alpha)
    h_deg, s, v = rgb_to_hsv(rows)
    return PixelTable(
        rgb=rows,
        h=(h_deg / np.float32(360.0)).astype(np.float32, copy=False),
        s=s,
        v=v,
        l=rgb_luma(rows),
        stepped_s=stepped_saturation(s),
    )


def derive_pixel(rgb: RGBTuple) -> Pixel:
    """Single-sample convenience wrapper around derive_pixels."""
    return derive_pixels([rgb]).record(0)


__all__ = [
    "Pixel",
    "PixelTable",
    "weighted_distance",
    "stepped_saturation",
    "derive_pixels",
    "derive_pixel",
]
