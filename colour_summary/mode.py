# colour_summary/mode.py
from __future__ import annotations
from typing import Literal

import numpy as np

from .pixel_model import PixelTable

"""
Filter mode helpers for the gathering engine.

Exports:
- resolve_filter_mode(select_extreme) -> Literal["common","extreme"]
- filter_indices(table, mode) -> np.ndarray of kept row indices, input order

Notes:
- "extreme" pixels are washed out (s < 0.2), near black (l < 0.1) or near
  white (l > 0.9); "common" is everything else; "all" keeps every pixel.
"""


FilterMode = Literal["all", "common", "extreme"]
FILTER_MODES = ("all", "common", "extreme")


def resolve_filter_mode(select_extreme: bool) -> FilterMode:
    return "extreme" if select_extreme else "common"


def filter_indices(table: PixelTable, mode: FilterMode) -> np.ndarray:
    """Row indices of `table` kept by `mode`, ascending."""
    if mode not in FILTER_MODES:
        raise ValueError(f"unknown filter mode {mode!r}; expected one of {FILTER_MODES}")
    if mode == "all":
        return np.arange(len(table), dtype=np.int64)
    extreme = table.extreme_mask()
    keep = extreme if mode == "extreme" else ~extreme
    return np.flatnonzero(keep).astype(np.int64, copy=False)


__all__ = ["FilterMode", "FILTER_MODES", "resolve_filter_mode", "filter_indices"]
