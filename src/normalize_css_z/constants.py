"""Named constants for the CSS z-index normalizer.

The supported domain is bounded by float32 geometry: each power-of-two
octave below 1.0 holds ``MANTISSA`` distinct values, three octaves are used,
and the two exact endpoints (0.0 and 1.0) add one more slot between them.
"""
from __future__ import annotations

MAX_CSS_Z = 2_147_483_647
MANTISSA = 8_388_608  # 2^23, float32 values per octave
NUM_OF_OCTAVES = 3
NUM_OF_SUPPORTED_Z = MANTISSA * NUM_OF_OCTAVES + 1

# ---------------------------------------------------------------------------
# Default partition
#
#   | lower | middle       | upper |
#   |-------|--------------|-------|
#   | 2^23  | 3 * 2^22 + 1 | 2^22  |
#
# Asymmetric around 0 so that z-index 0 lands exactly on the 0.5 anchor.
# ---------------------------------------------------------------------------

RANGE_LOWER: tuple[int, int] = (-MAX_CSS_Z, -MAX_CSS_Z + MANTISSA - 1)
RANGE_MIDDLE: tuple[int, int] = (-MANTISSA, MANTISSA // 2)
RANGE_UPPER: tuple[int, int] = (MAX_CSS_Z - MANTISSA // 2 + 1, MAX_CSS_Z)
