# colour_summary/result.py
from __future__ import annotations

"""
Runs the requested engines on one pixel array and packages their outputs.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .constants import (
    GATHER_SPLIT_POLICY,
    LATTICE_CONNECTIVITY,
    LATTICE_DEFAULT_LEVELS,
)
from .core_types import GatheringResult, PixelSource, as_pixel_rows
from .gathering import gather
from .lattice import AccumulateResult, accumulate
from .pixel_model import derive_pixels
from .utils import debug_log


@dataclass(frozen=True)
class SummaryResult:
    pixel_count: int
    accumulation: Optional[AccumulateResult]
    common: Optional[GatheringResult]
    extreme: Optional[GatheringResult]

    @property
    def has_gathering(self) -> bool:
        return self.common is not None and self.extreme is not None


def summarise(
    pixels: PixelSource,
    *,
    accumulation: bool = False,
    gathering: bool = True,
    levels: int = LATTICE_DEFAULT_LEVELS,
    connectivity: int = LATTICE_CONNECTIVITY,
    split_policy: str = GATHER_SPLIT_POLICY,
    debug: bool = False,
    log_debug: Callable[[str], None] = debug_log,
) -> SummaryResult:
    """
    Run the lattice accumulator and/or both gathering passes (common, extreme)
    on the same pixels. Pixels are derived once and shared by both passes.
    Engine [debug] lines go to `log_debug`, so callers on worker threads can
    collect them and print later.
    """
    rows = as_pixel_rows(pixels)

    acc: Optional[AccumulateResult] = None
    if accumulation:
        acc = accumulate(
            rows, levels, connectivity=connectivity, debug=debug, log_debug=log_debug
        )

    common: Optional[GatheringResult] = None
    extreme: Optional[GatheringResult] = None
    if gathering:
        table = derive_pixels(rows)
        common, extreme = (
            gather(
                table,
                select_extreme,
                split_policy=split_policy,
                debug=debug,
                log_debug=log_debug,
            )
            for select_extreme in (False, True)
        )

    return SummaryResult(
        pixel_count=int(rows.shape[0]),
        accumulation=acc,
        common=common,
        extreme=extreme,
    )


def gathering_totals(result: SummaryResult) -> Tuple[int, int]:
    """(common total weight, extreme total weight); zeros when gathering was skipped."""
    common = result.common.total_weight if result.common is not None else 0
    extreme = result.extreme.total_weight if result.extreme is not None else 0
    return common, extreme


__all__ = ["SummaryResult", "summarise", "gathering_totals"]
