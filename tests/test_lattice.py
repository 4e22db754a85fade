"""Tests for the HSV lattice accumulator."""

import itertools
from collections import deque

import numpy as np
import pytest

from colour_summary.colour_convert import hsv_to_rgb
from colour_summary.core_types import LatticeCell
from colour_summary.lattice import Lattice, accumulate
from colour_summary.lattice.accumulate import quantise_hsv, seed_indices, value_levels
from colour_summary.lattice.grid import CELL_COUNT, EMPTY, pack_index, unpack_index


def test_pack_unpack():
    idx = pack_index(359, 100, 100)
    assert idx == CELL_COUNT - 1
    assert tuple(int(x) for x in unpack_index(idx)) == (359, 100, 100)
    assert tuple(int(x) for x in unpack_index(pack_index(12, 34, 56))) == (12, 34, 56)


def test_quantise_wraps_negative_and_full_turn():
    h, s, v = quantise_hsv(np.array([-1.0, 359.6, 12.4]), np.array([0.2, 0.5, 1.0]), np.array([0.1, 0.9, 0.5]))
    assert h.tolist() == [359, 0, 12]
    assert s.tolist() == [20, 50, 100]
    assert v.tolist() == [10, 90, 50]


def test_value_levels():
    assert value_levels(12) == (0, 9, 18, 27, 36, 45, 55, 64, 73, 82, 91, 100)
    assert value_levels(2) == (0, 100)
    assert value_levels(1) == (0,)
    with pytest.raises(ValueError):
        value_levels(0)


def test_uninteresting_pixels_never_seed():
    pixels = [(128, 128, 128), (0, 0, 0), (255, 255, 255), (250, 240, 240), (20, 5, 5)]
    assert seed_indices(pixels).size == 0


def test_empty_input_leaves_lattice_unfilled():
    result = accumulate([], levels=3)
    assert result.seed_count == 0
    assert result.lattice.filled_count() == 0
    assert not result.lattice.valid_mask().any()
    assert result.images.shape == (3, 101, 360, 3)
    assert not result.images.any()


def test_single_seed_floods_whole_lattice():
    result = accumulate([(200, 100, 50)], levels=4)
    assert result.seed_count == 1
    assert result.lattice.filled_count() == CELL_COUNT
    assert result.lattice.cell(0, 0, 0) == LatticeCell(True, 20, 75, 78)
    assert result.lattice.cell(359, 100, 100) == LatticeCell(True, 20, 75, 78)

    expected = hsv_to_rgb(np.float32(20.0), np.float32(0.75), np.float32(0.78)).tolist()
    assert result.value_levels == (0, 33, 67, 100)
    for image in result.images:
        assert (image.reshape(-1, 3) == expected).all()


def test_first_pixel_on_a_cell_seeds_it_once():
    lattice = Lattice()
    fresh = lattice.seed(np.array([5, 3, 5, 7, 3], dtype=np.int64))
    assert fresh.tolist() == [5, 3, 7]
    assert lattice.seed(np.array([7, 9], dtype=np.int64)).tolist() == [9]
    assert lattice.cells[5] == 5 and lattice.cells[9] == 9


def test_equidistant_cell_goes_to_first_discovered_seed():
    a = pack_index(100, 50, 50)
    b = pack_index(102, 50, 50)

    first_a = Lattice()
    first_a.flood_fill(first_a.seed(np.array([a, b], dtype=np.int64)))
    assert first_a.cell(101, 50, 50) == LatticeCell(True, 100, 50, 50)
    assert first_a.cell(90, 50, 50) == LatticeCell(True, 100, 50, 50)
    assert first_a.cell(110, 50, 50) == LatticeCell(True, 102, 50, 50)

    first_b = Lattice()
    first_b.flood_fill(first_b.seed(np.array([b, a], dtype=np.int64)))
    assert first_b.cell(101, 50, 50) == LatticeCell(True, 102, 50, 50)


def test_hue_axis_does_not_wrap():
    lattice = Lattice()
    lattice.flood_fill(
        lattice.seed(np.array([pack_index(2, 50, 50), pack_index(300, 50, 50)], dtype=np.int64))
    )
    # 359 is one step from 0 on a circle but the lattice is clamped
    assert lattice.cell(359, 50, 50).h == 300
    assert lattice.cell(0, 50, 50).h == 2


def test_edge_connectivity_fills_everything():
    lattice = Lattice()
    lattice.flood_fill(lattice.seed(np.array([pack_index(10, 10, 10)], dtype=np.int64)), connectivity=18)
    assert lattice.filled_count() == CELL_COUNT


def test_unknown_connectivity_raises():
    with pytest.raises(ValueError):
        Lattice().flood_fill(np.zeros((0,), dtype=np.int64), connectivity=26)


def test_every_cell_traces_back_to_a_seed_and_is_deterministic():
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(400, 3), dtype=np.uint8)

    first = accumulate(pixels, levels=3)
    second = accumulate(pixels, levels=3)
    assert np.array_equal(first.lattice.cells, second.lattice.cells)
    assert np.array_equal(first.images, second.images)

    seeds = np.unique(seed_indices(pixels))
    cells = first.lattice.cells
    assert first.seed_count == seeds.size
    assert (cells != EMPTY).all()
    assert np.isin(cells, seeds).all()
    # seed cells keep their own value
    assert (cells[seeds] == seeds).all()


FACE_ORDER = [(-1, 0, 0), (0, -1, 0), (0, 0, -1), (0, 0, 1), (0, 1, 0), (1, 0, 0)]
FACE_AND_EDGE_ORDER = [
    d for d in itertools.product((-1, 0, 1), repeat=3) if 0 < sum(x != 0 for x in d) <= 2
]


def _queue_fill(seeds, offsets):
    """Plain FIFO flood fill, one cell at a time."""
    n_h, n_s, n_v = 360, 101, 101
    cells = [EMPTY] * (n_h * n_s * n_v)
    queue = deque()
    for idx in seeds:
        if cells[idx] == EMPTY:
            cells[idx] = idx
            queue.append(idx)
    while queue:
        idx = queue.popleft()
        hs, v = divmod(idx, n_v)
        h, s = divmod(hs, n_s)
        value = cells[idx]
        for dh, ds, dv in offsets:
            nh, ns, nv = h + dh, s + ds, v + dv
            if 0 <= nh < n_h and 0 <= ns < n_s and 0 <= nv < n_v:
                n = (nh * n_s + ns) * n_v + nv
                if cells[n] == EMPTY:
                    cells[n] = value
                    queue.append(n)
    return np.asarray(cells, dtype=np.int32)


@pytest.mark.parametrize("connectivity,offsets", [(6, FACE_ORDER), (18, FACE_AND_EDGE_ORDER)])
def test_layered_fill_matches_fifo_queue(connectivity, offsets):
    rng = np.random.default_rng(13)
    pixels = rng.integers(0, 256, size=(300, 3), dtype=np.uint8)
    seeds = seed_indices(pixels)

    lattice = Lattice()
    lattice.flood_fill(lattice.seed(seeds), connectivity=connectivity)

    expected = _queue_fill(seeds.tolist(), offsets)
    mismatched = np.flatnonzero(lattice.cells != expected)
    assert mismatched.size == 0, f"{mismatched.size} cells differ, first at {mismatched[:5].tolist()}"
