# colour_summary/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Pixels = NDArray[np.uint8]  # (N, 3)
F32 = NDArray[np.float32]
IndexArray = NDArray[np.int64]

PixelSource = Union[np.ndarray, Sequence[Sequence[int]]]

# Value objects


@dataclass(frozen=True)
class LatticeCell:
    """One lattice entry. h/s/v are the stored (seed) value, not the coordinates."""

    valid: bool
    h: int
    s: int
    v: int


@dataclass(frozen=True)
class HueBand:
    """Pixels grouped around one anchor hue; members index the hue-sorted table."""

    target_hue: float
    members: IndexArray

    def __len__(self) -> int:
        return int(self.members.size)


@dataclass(frozen=True)
class WeightedColor:
    """Representative colour and the number of pixels it stands for."""

    weight: int
    color: RGBTuple

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self.color)


@dataclass(frozen=True)
class GatheringResult:
    """Weighted colours ordered by descending weight. Callers must not re-sort."""

    colors: Tuple[WeightedColor, ...] = ()

    @property
    def total_weight(self) -> int:
        return sum(c.weight for c in self.colors)

    @property
    def max_weight(self) -> int:
        return max((c.weight for c in self.colors), default=0)

    def shares(self) -> List[float]:
        """weight / total_weight per entry; empty when there is nothing to share."""
        total = self.total_weight
        if total == 0:
            return []
        return [c.weight / total for c in self.colors]

    def __len__(self) -> int:
        return len(self.colors)


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def hue_delta(hue_a: float, hue_b: float) -> float:
    """Circular absolute difference between two hue fractions in [0, 1)."""
    d = abs(hue_a - hue_b) % 1.0
    return 1.0 - d if d > 0.5 else d


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def as_pixel_rows(pixels: PixelSource, alpha: Optional[np.ndarray] = None) -> U8Pixels:
    """
    Flatten any RGB(A) source to a contiguous (N, 3) uint8 array in input order.

    Accepts (N,3|4) and (H,W,3|4) arrays or a sequence of RGB(A) tuples.
    Alpha channels are dropped; pass `alpha` to keep only pixels with alpha > 0.
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    if arr.ndim not in (2, 3) or arr.shape[-1] not in (3, 4):
        raise TypeError(f"expected (N,3|4) or (H,W,3|4) pixels, got shape {arr.shape}")
    if arr.dtype != np.uint8:
        if np.any((arr < 0) | (arr > 255)):
            raise TypeError("pixel channels must be within 0..255")
        arr = arr.astype(np.uint8)
    rows = arr.reshape(-1, arr.shape[-1])
    if alpha is not None:
        visible = np.asarray(alpha).reshape(-1) > 0
        if visible.shape[0] != rows.shape[0]:
            raise TypeError("alpha does not match pixel count")
        rows = rows[visible]
    return np.ascontiguousarray(rows[:, :3])


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Pixels",
    "F32",
    "IndexArray",
    "PixelSource",
    # value objects
    "LatticeCell",
    "HueBand",
    "WeightedColor",
    "GatheringResult",
    # helpers
    "clamp_value",
    "hue_delta",
    "rgb_to_hex",
    "as_pixel_rows",
]
