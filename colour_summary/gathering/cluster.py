# colour_summary/gathering/cluster.py
from __future__ import annotations

"""
Per-band ordering, cluster splitting, and weighted representative colours.
"""

from typing import List

import numpy as np

from ..constants import GATHER_DISTANCE_THRESHOLD
from ..core_types import GatheringResult, IndexArray, RGBTuple, WeightedColor
from ..pixel_model import PixelTable, weighted_distance

SPLIT_POLICIES = ("stepped", "distance")


def order_band(table: PixelTable, members: IndexArray) -> IndexArray:
    """Members sorted by stepped saturation descending, then value ascending (stable)."""
    members = np.asarray(members, dtype=np.int64)
    by_value = members[np.argsort(table.v[members], kind="stable")]
    return by_value[np.argsort(-table.stepped_s[by_value], kind="stable")]


def split_band(
    table: PixelTable,
    ordered: IndexArray,
    policy: str = "stepped",
    distance_threshold: float = GATHER_DISTANCE_THRESHOLD,
) -> List[IndexArray]:
    """
    Cut an ordered band into clusters.

    stepped  : maximal runs of equal stepped saturation
    distance : as stepped, and also when the weighted HSV distance to the
               cluster anchor exceeds `distance_threshold`
    The pixel that starts a new cluster is its anchor and its first member.
    """
    if policy not in SPLIT_POLICIES:
        raise ValueError(f"unknown split policy {policy!r}; expected one of {SPLIT_POLICIES}")
    if ordered.size == 0:
        return []

    stepped = table.stepped_s[ordered]
    if policy == "stepped":
        cuts = np.flatnonzero(np.diff(stepped)) + 1
        return [part for part in np.split(ordered, cuts) if part.size]

    h = table.h[ordered].astype(np.float64).tolist()
    s = table.s[ordered].astype(np.float64).tolist()
    v = table.v[ordered].astype(np.float64).tolist()
    steps = stepped.tolist()

    starts = [0]
    anchor = 0
    for i in range(1, len(steps)):
        dist = weighted_distance(h[i], s[i], v[i], h[anchor], s[anchor], v[anchor])
        if steps[i] != steps[anchor] or dist > distance_threshold:
            starts.append(i)
            anchor = i
    return [part for part in np.split(ordered, starts[1:]) if part.size]


def representative_colour(rgb_rows: np.ndarray) -> RGBTuple:
    """Rounded per-channel mean, clamped to 0..255."""
    mean = np.asarray(rgb_rows, dtype=np.float64).mean(axis=0)
    r, g, b = np.clip(np.rint(mean), 0, 255).astype(int).tolist()
    return (r, g, b)


def weigh_clusters(table: PixelTable, clusters: List[IndexArray]) -> GatheringResult:
    """Largest clusters first; equal sizes keep discovery order."""
    non_empty = [c for c in clusters if c.size]
    non_empty.sort(key=lambda c: -int(c.size))
    colors = tuple(
        WeightedColor(weight=int(c.size), color=representative_colour(table.rgb[c]))
        for c in non_empty
    )
    return GatheringResult(colors=colors)


__all__ = [
    "SPLIT_POLICIES",
    "order_band",
    "split_band",
    "representative_colour",
    "weigh_clusters",
]
