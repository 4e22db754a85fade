# colour_summary/lattice/grid.py
from __future__ import annotations

"""
Dense (hue, saturation, value) lattice stored as a flat arena.

Each cell holds the packed index of the HSV triple it was filled with, or -1
while it is not valid. A cell is written at most once.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from ..constants import LATTICE_SAT_BINS, LATTICE_SHAPE, LATTICE_VAL_BINS
from ..core_types import IndexArray, LatticeCell

EMPTY = -1
CELL_COUNT = LATTICE_SHAPE[0] * LATTICE_SHAPE[1] * LATTICE_SHAPE[2]


def _scan_offsets(max_changed_axes: int) -> Tuple[Tuple[int, int, int], ...]:
    out = []
    for di in (-1, 0, 1):
        for dj in (-1, 0, 1):
            for dk in (-1, 0, 1):
                changed = (di != 0) + (dj != 0) + (dk != 0)
                if 0 < changed <= max_changed_axes:
                    out.append((di, dj, dk))
    return tuple(out)


NEIGHBOUR_OFFSETS = {
    6: _scan_offsets(1),
    18: _scan_offsets(2),
}


def pack_index(h: np.ndarray | int, s: np.ndarray | int, v: np.ndarray | int):
    """(h, s, v) -> flat arena index."""
    return (h * LATTICE_SAT_BINS + s) * LATTICE_VAL_BINS + v


def unpack_index(index: np.ndarray | int):
    """Flat arena index -> (h, s, v)."""
    hs, v = np.divmod(index, LATTICE_VAL_BINS)
    h, s = np.divmod(hs, LATTICE_SAT_BINS)
    return h, s, v


@dataclass
class Lattice:
    """Arena for one accumulation run. Not shared between runs."""

    cells: np.ndarray = field(
        default_factory=lambda: np.full(CELL_COUNT, EMPTY, dtype=np.int32)
    )

    @property
    def shape(self) -> Tuple[int, int, int]:
        return LATTICE_SHAPE

    def valid_mask(self) -> np.ndarray:
        """Boolean (360, 101, 101) occupancy."""
        return (self.cells != EMPTY).reshape(LATTICE_SHAPE)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells != EMPTY))

    def cell(self, h: int, s: int, v: int) -> LatticeCell:
        stored = int(self.cells[pack_index(h, s, v)])
        if stored == EMPTY:
            return LatticeCell(False, 0, 0, 0)
        sh, ss, sv = unpack_index(stored)
        return LatticeCell(True, int(sh), int(ss), int(sv))

    def stored_hsv(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Stored (h, s, v) per cell as (360, 101, 101) arrays; 0 where not valid."""
        packed = np.where(self.cells == EMPTY, 0, self.cells)
        h, s, v = unpack_index(packed)
        return (
            h.reshape(LATTICE_SHAPE),
            s.reshape(LATTICE_SHAPE),
            v.reshape(LATTICE_SHAPE),
        )

    def seed(self, indices: IndexArray) -> IndexArray:
        """
        Mark cells valid with their own HSV, first occurrence wins.
        Returns the newly seeded indices in discovery order.
        """
        if indices.size == 0:
            return np.zeros((0,), dtype=np.int64)
        uniq, first = np.unique(indices, return_index=True)
        ordered = uniq[np.argsort(first, kind="stable")]
        fresh = ordered[self.cells[ordered] == EMPTY]
        self.cells[fresh] = fresh
        return fresh.astype(np.int64, copy=False)

    def flood_fill(self, frontier: IndexArray, connectivity: int = 6) -> int:
        """
        Breadth-first fill from `frontier` (queue order). Processed one layer at
        a time; within a layer, neighbours are claimed in (queue position,
        offset order) so the first discoverer wins exactly as a FIFO queue would.
        Returns the number of layers walked.
        """
        offsets = NEIGHBOUR_OFFSETS.get(connectivity)
        if offsets is None:
            raise ValueError(f"connectivity must be one of {sorted(NEIGHBOUR_OFFSETS)}")
        off = np.asarray(offsets, dtype=np.int64)  # (K, 3)
        bounds = np.asarray(LATTICE_SHAPE, dtype=np.int64)
        cells = self.cells

        layers = 0
        frontier = np.asarray(frontier, dtype=np.int64)
        while frontier.size:
            layers += 1
            h, s, v = unpack_index(frontier)
            coords = np.stack([h, s, v], axis=1)  # (F, 3)
            cand = coords[:, None, :] + off[None, :, :]  # (F, K, 3)
            inside = np.all((cand >= 0) & (cand < bounds), axis=2)  # (F, K)

            source = np.broadcast_to(frontier[:, None], inside.shape)[inside]
            cand = cand[inside]
            target = pack_index(cand[:, 0], cand[:, 1], cand[:, 2])

            open_ = cells[target] == EMPTY
            target = target[open_]
            source = source[open_]
            if target.size == 0:
                break

            _, first = np.unique(target, return_index=True)
            order = np.sort(first)
            target = target[order]
            cells[target] = cells[source[order]]
            frontier = target
        return layers


__all__ = [
    "EMPTY",
    "CELL_COUNT",
    "NEIGHBOUR_OFFSETS",
    "pack_index",
    "unpack_index",
    "Lattice",
]
