# colour_summary/gathering/run.py
from __future__ import annotations

"""
Gathering entry points.

Filters pixels to the common or extreme set, sorts them by hue, cuts circular
hue bands, splits each band by saturation step, and weighs the clusters.
"""

from typing import Callable, List, Union

import numpy as np

from ..constants import GATHER_SPLIT_POLICY
from ..core_types import GatheringResult, IndexArray, PixelSource
from ..mode import FilterMode, filter_indices, resolve_filter_mode
from ..pixel_model import PixelTable, derive_pixels
from ..utils import debug_log, key_value_pairs_to_string
from .cluster import SPLIT_POLICIES, order_band, split_band, weigh_clusters
from .segment import segment_hue_bands


def gather_mode(
    pixels: Union[PixelSource, PixelTable],
    mode: FilterMode = "common",
    *,
    split_policy: str = GATHER_SPLIT_POLICY,
    debug: bool = False,
    log_debug: Callable[[str], None] = debug_log,
) -> GatheringResult:
    """
    Weighted representative colours for the pixels selected by `mode`.

    Args:
      pixels       : RGB(A) samples or an already derived PixelTable
      mode         : "all" | "common" | "extreme"
      split_policy : "stepped" | "distance"
      log_debug    : receives the [debug] summary line when debug is set

    Returns:
      GatheringResult ordered by descending weight. total_weight equals the
      number of pixels that passed the filter.
    """
    if split_policy not in SPLIT_POLICIES:
        raise ValueError(f"unknown split policy {split_policy!r}; expected one of {SPLIT_POLICIES}")
    table = pixels if isinstance(pixels, PixelTable) else derive_pixels(pixels)

    kept = table.take(filter_indices(table, mode))
    by_hue = kept.take(np.argsort(kept.h, kind="stable"))

    bands = segment_hue_bands(by_hue.h)
    clusters: List[IndexArray] = []
    for band in bands:
        clusters.extend(split_band(by_hue, order_band(by_hue, band.members), split_policy))
    result = weigh_clusters(by_hue, clusters)

    if debug:
        log_debug(
            key_value_pairs_to_string(
                [
                    ("Mode", mode),
                    ("Kept", len(kept)),
                    ("Bands", len(bands)),
                    ("Clusters", len(result)),
                    ("Split", split_policy),
                ]
            )
        )
    return result


def gather(
    pixels: Union[PixelSource, PixelTable],
    select_extreme: bool = False,
    *,
    split_policy: str = GATHER_SPLIT_POLICY,
    debug: bool = False,
    log_debug: Callable[[str], None] = debug_log,
) -> GatheringResult:
    """gather_mode() on the common (default) or extreme pixels."""
    return gather_mode(
        pixels,
        resolve_filter_mode(select_extreme),
        split_policy=split_policy,
        debug=debug,
        log_debug=log_debug,
    )


__all__ = ["gather", "gather_mode"]
