"""
Shared scoring utilities.

Small helpers used by the similarity scorer:
- `clamp01`: keep sub-scores within 0..1
- `round_half_up`: integer rounding that matches the product's historical scores (x.5 -> up)
- `clamp_score`: keep final scores within 0..100, logging any out-of-range value
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    return max(0.0, min(1.0, float(x)))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(float(x) + 0.5))


def clamp_score(score: int, *, context: str = "") -> int:
    """Clamp a 0..100 score; an out-of-range input is an internal logic error and is logged."""
    if SCORE_MIN <= score <= SCORE_MAX:
        return score
    logger.warning("Score %s out of range [%d, %d] for %s; clamping", score, SCORE_MIN, SCORE_MAX, context or "?")
    return max(SCORE_MIN, min(SCORE_MAX, score))
