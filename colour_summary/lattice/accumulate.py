# colour_summary/lattice/accumulate.py
from __future__ import annotations

"""
Lattice accumulation.

Seeds an HSV lattice from the interesting pixels of an image, floods every
remaining cell from its nearest seed, then slices one hue x saturation image
per requested value level.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

from ..colour_convert import hsv_to_rgb, rgb_to_hsv
from ..constants import (
    LATTICE_BACKGROUND,
    LATTICE_CONNECTIVITY,
    LATTICE_DEFAULT_LEVELS,
    LATTICE_HUE_BINS,
    LATTICE_MAX_VAL,
    LATTICE_MIN_SAT,
    LATTICE_MIN_VAL,
    LATTICE_SAT_BINS,
    LATTICE_VAL_BINS,
)
from ..core_types import IndexArray, PixelSource, U8Image, as_pixel_rows
from ..utils import debug_log, key_value_pairs_to_string
from .grid import Lattice, pack_index


@dataclass(frozen=True)
class AccumulateResult:
    """Filled lattice plus one (101, 360, 3) image per value level."""

    lattice: Lattice
    value_levels: Tuple[int, ...]
    images: U8Image  # (levels, 101, 360, 3), row = saturation, column = hue
    seed_count: int

    def __len__(self) -> int:
        return len(self.value_levels)


def quantise_hsv(
    h_deg: np.ndarray, s: np.ndarray, v: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Round to lattice coordinates; negative values wrap into range."""
    hq = np.mod(np.rint(h_deg).astype(np.int64), LATTICE_HUE_BINS)
    sq = np.mod(np.rint(np.asarray(s) * np.float32(100.0)).astype(np.int64), LATTICE_SAT_BINS)
    vq = np.mod(np.rint(np.asarray(v) * np.float32(100.0)).astype(np.int64), LATTICE_VAL_BINS)
    return hq, sq, vq


def seed_indices(pixels: PixelSource) -> IndexArray:
    """Packed lattice index per qualifying pixel, in input order (duplicates kept)."""
    rows = as_pixel_rows(pixels)
    h_deg, s, v = rgb_to_hsv(rows)
    keep = (s >= LATTICE_MIN_SAT) & (v >= LATTICE_MIN_VAL) & (v <= LATTICE_MAX_VAL)
    hq, sq, vq = quantise_hsv(h_deg[keep], s[keep], v[keep])
    return pack_index(hq, sq, vq).astype(np.int64, copy=False)


def value_levels(levels: int) -> Tuple[int, ...]:
    """Evenly spaced value percentages round(t * 100 / (levels - 1))."""
    if levels < 1:
        raise ValueError("levels must be >= 1")
    if levels == 1:
        return (0,)
    return tuple(int(round(t * 100.0 / (levels - 1))) for t in range(levels))


def reconstruct_levels(
    lattice: Lattice,
    levels: Tuple[int, ...],
    background: Tuple[int, int, int] = LATTICE_BACKGROUND,
) -> U8Image:
    """Slice (hue, sat) planes at each value level and convert stored HSV to RGB."""
    out = np.empty((len(levels), LATTICE_SAT_BINS, LATTICE_HUE_BINS, 3), dtype=np.uint8)
    if not levels:
        return out
    valid = lattice.valid_mask()
    h, s, v = lattice.stored_hsv()
    bg = np.asarray(background, dtype=np.uint8)
    for t, level in enumerate(levels):
        # (360, 101) planes -> (101, 360) images
        plane_valid = valid[:, :, level].T
        rgb = hsv_to_rgb(
            h[:, :, level].T.astype(np.float32),
            s[:, :, level].T.astype(np.float32) / np.float32(100.0),
            v[:, :, level].T.astype(np.float32) / np.float32(100.0),
        )
        rgb[~plane_valid] = bg
        out[t] = rgb
    return out


def accumulate(
    pixels: PixelSource,
    levels: int = LATTICE_DEFAULT_LEVELS,
    *,
    connectivity: int = LATTICE_CONNECTIVITY,
    background: Tuple[int, int, int] = LATTICE_BACKGROUND,
    debug: bool = False,
    log_debug: Callable[[str], None] = debug_log,
) -> AccumulateResult:
    """
    Build, flood and slice the HSV lattice for one pixel array.

    Args:
      pixels       : RGB(A) samples, any shape accepted by as_pixel_rows
      levels       : number of value levels to reconstruct
      connectivity : 6 (faces) or 18 (faces + edges)
      background   : colour for cells that never got filled
      log_debug    : receives the [debug] summary line when debug is set

    Returns:
      AccumulateResult with images shaped (levels, 101, 360, 3).
    """
    level_values = value_levels(levels)
    lattice = Lattice()
    seeds = lattice.seed(seed_indices(pixels))
    layers = lattice.flood_fill(seeds, connectivity=connectivity)
    images = reconstruct_levels(lattice, level_values, background)

    if debug:
        log_debug(
            key_value_pairs_to_string(
                [
                    ("Seeds", int(seeds.size)),
                    ("Filled", lattice.filled_count()),
                    ("Layers", layers),
                    ("Levels", len(level_values)),
                ]
            )
        )

    return AccumulateResult(
        lattice=lattice,
        value_levels=level_values,
        images=images,
        seed_count=int(seeds.size),
    )


__all__ = [
    "AccumulateResult",
    "quantise_hsv",
    "seed_indices",
    "value_levels",
    "reconstruct_levels",
    "accumulate",
]
