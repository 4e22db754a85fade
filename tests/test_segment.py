"""Tests for circular hue segmentation."""

import numpy as np

from colour_summary.core_types import hue_delta
from colour_summary.gathering.segment import continue_search, fill_column, segment_hue_bands


def _members(bands):
    return [b.members.tolist() for b in bands]


def test_continue_search_stops_at_threshold_and_bounds():
    hues = [0.10, 0.12, 0.13, 0.20, 0.21]
    assert continue_search(hues, 0, 1, 0, 4) == 2
    assert continue_search(hues, 0, 1, 0, 1) == 1
    assert continue_search(hues, 3, 1, 3, 4) == 4
    assert continue_search(hues, 2, -1, 0, 4) == 0


def test_continue_search_wraps_leftwards():
    hues = [0.01, 0.5, 0.98, 0.99]
    assert continue_search(hues, 0, -1, 0, 3) == 2


def test_wrap_remainder_joins_first_band():
    hues = [0.01, 0.02, 0.5, 0.98, 0.99]
    bands = segment_hue_bands(hues)
    assert _members(bands) == [[3, 4, 0, 1], [2]]


def test_no_wrap_when_last_hue_is_far():
    hues = [0.01, 0.02, 0.3, 0.31, 0.7]
    bands = segment_hue_bands(hues)
    assert _members(bands) == [[0, 1], [2, 3], [4]]


def test_all_close_hues_form_one_band():
    hues = [0.0, 0.01, 0.02, 0.03]
    bands = segment_hue_bands(hues)
    assert len(bands) == 1
    assert sorted(bands[0].members.tolist()) == [0, 1, 2, 3]


def test_empty_and_single():
    assert segment_hue_bands([]) == []
    assert _members(segment_hue_bands([0.4])) == [[0]]


def test_fill_column_splits_after_min_count():
    hues = [0.0, 0.0, 0.0, 0.1, 0.1, 0.1]
    bands = fill_column(hues, 0, 6, min_count=2)
    assert _members(bands) == [[0, 1, 2], [3, 4, 5]]
    assert bands[1].target_hue == 0.1
    # below the minimum nothing is split
    assert len(fill_column(hues, 0, 6, min_count=256)) == 1


def test_every_pixel_in_exactly_one_band_and_bands_stay_near_anchor():
    rng = np.random.default_rng(3)
    hues = np.sort(rng.random(3000))
    bands = segment_hue_bands(hues)

    seen = np.concatenate([b.members for b in bands])
    assert sorted(seen.tolist()) == list(range(3000))

    for band in bands[1:]:
        deltas = [hue_delta(hues[i], band.target_hue) for i in band.members]
        assert max(deltas) <= 0.04 + 1e-12
