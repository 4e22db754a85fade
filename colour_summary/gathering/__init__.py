"""
Gathering API.

Provides:
  gather(pixels, select_extreme=False, *, split_policy="stepped", debug=False)
    -> GatheringResult
    Weighted representative colours of the common or extreme pixels.

  gather_mode(pixels, mode="common", *, split_policy="stepped", debug=False)
    Same, with mode "all" | "common" | "extreme".

    Args:
      pixels       : uint8 (N,3|4), (H,W,3|4), RGB(A) tuples, or a PixelTable
      split_policy : "stepped"  -> clusters are runs of equal round(s * 12)
                     "distance" -> also split past weighted HSV distance 0.06

    Returns:
      GatheringResult(colors=(WeightedColor(weight, color), ...)) ordered by
      descending weight; total_weight is the number of pixels kept.

    Notes:
      - Hue bands are circular: hues near 1.0 merge with hues near 0.0.
      - Every sort is stable, so input order decides ties.
"""

from .run import gather, gather_mode

__all__ = ["gather", "gather_mode"]
