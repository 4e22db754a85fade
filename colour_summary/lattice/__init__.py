"""
Lattice-mode API.

Provides:
  accumulate(pixels, levels=12, *, connectivity=6, background=(0,0,0), debug=False)
    -> AccumulateResult
    Seed an HSV lattice (hue 0..359, saturation 0..100, value 0..100) from the
    pixels that are neither washed out, near black nor near white, flood every
    unseeded cell from its nearest seed, and slice one hue x saturation image
    per value level.

    Args:
      pixels       : uint8 (N,3|4), (H,W,3|4) or a sequence of RGB(A) tuples
      levels       : int, value levels round(t*100/(levels-1))
      connectivity : 6 (faces) or 18 (faces + edges)

    Returns:
      AccumulateResult(lattice, value_levels, images[(levels,101,360,3)], seed_count)

    Notes:
      - First pixel to land on a cell seeds it; input order decides ties.
      - With no qualifying pixels every image is the background colour.
"""

from .accumulate import AccumulateResult, accumulate
from .grid import Lattice

__all__ = ["AccumulateResult", "Lattice", "accumulate"]
