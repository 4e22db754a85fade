# colour_summary/render.py
from __future__ import annotations

"""
Presentation helpers: turn engine results into plain RGB arrays.

Exports:
  stack_levels(images, highest_first=True)      -> uint8 (L*101, 360, 3)
  draw_weighted_bars(result, width, height)     -> uint8 (height, width, 3)
  compose_gather_panel(common, extreme, w, h)   -> uint8 (h, w, 3)
"""

from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw

from .constants import LATTICE_BACKGROUND
from .core_types import GatheringResult, U8Image


def stack_levels(images: U8Image, highest_first: bool = True) -> U8Image:
    """
    Stack per-level (101, 360, 3) images vertically. Each strip is flipped so
    full saturation sits on top.
    """
    if images.shape[0] == 0:
        return np.zeros((0, images.shape[2], 3), dtype=np.uint8)
    strips = [img[::-1] for img in images]
    if highest_first:
        strips = strips[::-1]
    return np.concatenate(strips, axis=0)


def draw_weighted_bars(
    result: GatheringResult,
    width: int,
    height: int,
    background: Tuple[int, int, int] = LATTICE_BACKGROUND,
) -> U8Image:
    """Left-to-right bars, each as wide as its share of the total weight."""
    im = Image.new("RGB", (width, height), background)
    total = result.total_weight
    if total == 0:
        return np.array(im, dtype=np.uint8)

    draw = ImageDraw.Draw(im)
    running = 0
    x0 = 0
    for wc in result.colors:
        running += wc.weight
        x1 = int(round(width * running / total))
        if x1 > x0:
            draw.rectangle([x0, 0, x1 - 1, height - 1], fill=wc.color)
        x0 = x1
    return np.array(im, dtype=np.uint8)


def compose_gather_panel(
    common: GatheringResult, extreme: GatheringResult, width: int, height: int
) -> U8Image:
    """Common colours on the top half, extreme colours on the bottom half."""
    top_h = height // 2
    top = draw_weighted_bars(common, width, top_h)
    bottom = draw_weighted_bars(extreme, width, height - top_h)
    return np.concatenate([top, bottom], axis=0)


__all__ = ["stack_levels", "draw_weighted_bars", "compose_gather_panel"]
