"""
Global tunables used across the project.

- Lattice dimensions and filter (LATTICE_*)
- Gathering filter, hue segmentation and cluster splitting (GATHER_*)
- Rendering defaults (RENDER_*)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Lattice accumulation
# =========================
LATTICE_HUE_BINS: int = 360  # hue degrees 0..359
LATTICE_SAT_BINS: int = 101  # saturation percent 0..100
LATTICE_VAL_BINS: int = 101  # value percent 0..100
LATTICE_SHAPE: Tuple[int, int, int] = (LATTICE_HUE_BINS, LATTICE_SAT_BINS, LATTICE_VAL_BINS)

# Pixels outside these bounds never seed the lattice.
LATTICE_MIN_SAT: float = 0.2
LATTICE_MIN_VAL: float = 0.1
LATTICE_MAX_VAL: float = 0.9

LATTICE_DEFAULT_LEVELS: int = 12
LATTICE_CONNECTIVITY: int = 6  # 6 = faces, 18 = faces + edges
LATTICE_BACKGROUND: Tuple[int, int, int] = (0, 0, 0)

# =========================
# Hue gathering
# =========================
# "extreme" = washed out, near black or near white by luma
GATHER_EXTREME_SAT: float = 0.2
GATHER_EXTREME_LUMA_LO: float = 0.1
GATHER_EXTREME_LUMA_HI: float = 0.9

GATHER_HUE_THRESHOLD: float = 0.04  # on the [0,1) hue scale
GATHER_MIN_SPLIT_COUNT: int = 256
GATHER_SAT_STEPS: int = 12

GATHER_SPLIT_POLICY: str = "stepped"
GATHER_DISTANCE_THRESHOLD: float = 0.06
GATHER_DISTANCE_WEIGHTS: Tuple[float, float, float] = (0.5, 0.15, 0.35)  # h, s, v

# Perceptual luma weights (r, g, b)
LUMA_WEIGHTS: Tuple[float, float, float] = (0.3, 0.587, 0.113)

# =========================
# Rendering
# =========================
RENDER_WIDTH: int = 1000
RENDER_HEIGHT: int = 1000
RENDER_MIN_SIZE: int = 200
RENDER_MAX_SIZE: int = 4000
RENDER_REPORT_TOP: int = 16
