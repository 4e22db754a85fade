# colour_summary/__init__.py
"""
colour_summary package.

Purpose:
  Summarise the colours of a decoded image. See summarise.py for CLI.

Public API:
  accumulate    : HSV lattice flood fill, one hue x saturation image per value level.
  gather        : weighted representative colours of the common or extreme pixels.
  gather_mode   : gather() with an explicit "all" | "common" | "extreme" filter.
  summarise     : run both engines on one pixel array.
  colour_convert: RGB <-> HSV and luma.
  core_types    : shared type aliases and value objects (WeightedColor, GatheringResult, ...).
  pixel_model   : per-sample records (Pixel, PixelTable).
  render        : engine results to plain RGB arrays.
  utils         : shared helpers (formatting, logging).

Quick start:
  from colour_summary import accumulate, gather
  result = gather(pixels, select_extreme=False)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import pixel_model
from . import render
from . import utils
from . import lattice
from . import gathering

# Engine entry points. ImportError should surface immediately if missing.
from .lattice import AccumulateResult, accumulate  # noqa: E402,F401
from .gathering import gather, gather_mode  # noqa: E402,F401
from .result import SummaryResult, summarise  # noqa: E402,F401
from .core_types import GatheringResult, WeightedColor  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "pixel_model",
    "render",
    "utils",
    "lattice",
    "gathering",
    "AccumulateResult",
    "accumulate",
    "gather",
    "gather_mode",
    "GatheringResult",
    "WeightedColor",
    "SummaryResult",
    "summarise",
]
