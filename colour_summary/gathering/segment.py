# colour_summary/gathering/segment.py
from __future__ import annotations

"""
Circular hue segmentation.

Input is the hue column of a hue-sorted pixel table. Output is a list of
HueBand whose members index that table; every pixel lands in exactly one band.
The band containing index 0 is grown in both directions so pixels near hue 1.0
join pixels near hue 0.0.
"""

from typing import List, Sequence

import numpy as np

from ..constants import GATHER_HUE_THRESHOLD, GATHER_MIN_SPLIT_COUNT
from ..core_types import HueBand, hue_delta


def continue_search(
    hues: Sequence[float],
    start: int,
    step: int,
    lo: int,
    hi: int,
    threshold: float = GATHER_HUE_THRESHOLD,
) -> int:
    """
    Walk from `start` by `step` (wrapping, at most len(hues) steps) while the
    index stays in [lo, hi] and the hue stays within `threshold` of the start
    pixel. Returns the last index that qualified.
    """
    n = len(hues)
    anchor = hues[start]
    result = start
    index = start
    for _ in range(n):
        if index < lo or index > hi:
            break
        if hue_delta(hues[index], anchor) > threshold:
            break
        result = index
        index = (index + step) % n
    return result


def fill_column(
    hues: Sequence[float],
    start: int,
    length: int,
    threshold: float = GATHER_HUE_THRESHOLD,
    min_count: int = GATHER_MIN_SPLIT_COUNT,
) -> List[HueBand]:
    """
    Cut `length` pixels from `start` (wrapping) into bands. A band closes when
    it holds at least max(min_count, length // 4) pixels and the next hue has
    drifted more than `threshold` from its anchor; that pixel anchors the next.
    """
    n = len(hues)
    min_split = max(min_count, length // 4)
    bands: List[HueBand] = []
    members: List[int] = []
    anchor = 0.0
    for offset in range(length):
        index = (start + offset) % n
        hue = hues[index]
        if len(members) >= min_split and hue_delta(anchor, hue) > threshold:
            bands.append(HueBand(anchor, np.asarray(members, dtype=np.int64)))
            members = []
        if not members:
            anchor = hue
        members.append(index)
    if members:
        bands.append(HueBand(anchor, np.asarray(members, dtype=np.int64)))
    return bands


def segment_hue_bands(
    sorted_hues: np.ndarray | Sequence[float],
    threshold: float = GATHER_HUE_THRESHOLD,
    min_count: int = GATHER_MIN_SPLIT_COUNT,
) -> List[HueBand]:
    """Split hue-sorted pixels into circular hue bands."""
    hues = np.asarray(sorted_hues, dtype=np.float64).tolist()
    n = len(hues)
    if n == 0:
        return []

    # First band: extend left across the wrap, then right inside what is left.
    left = continue_search(hues, 0, -1, 0, n - 1, threshold)
    window_right = left - 1 if left != 0 else n - 1
    right = continue_search(hues, 0, 1, 0, window_right, threshold)
    if left != 0:
        first_start, first_length = left, (n - left) + right + 1
    else:
        first_start, first_length = 0, right + 1
    bands = fill_column(hues, first_start, first_length, threshold, min_count)

    current = right + 1
    while current <= window_right:
        end = continue_search(hues, current, 1, current, window_right, threshold)
        bands.extend(fill_column(hues, current, end - current + 1, threshold, min_count))
        current = end + 1
    return bands


__all__ = ["continue_search", "fill_column", "segment_hue_bands"]
