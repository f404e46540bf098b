"""
Shared scoring helpers
======================
Rounding and clamping used by every engine that reports a 0–100 score.
"""

from __future__ import annotations

import math

SCORE_MIN = 0
SCORE_MAX = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (72.5 -> 73).

    Unlike the built-in ``round``, which rounds halves to even.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def to_score(weighted_sum: float, total_weight: float) -> int:
    """Scale a weighted average of 0–1 components to an int in [0, 100].

    The average is clamped before rounding, so infinite components land on
    a bound. NaN scores 0.
    """
    normalized = (weighted_sum / total_weight) * 100
    if math.isnan(normalized):
        return SCORE_MIN
    return round_half_up(min(SCORE_MAX, max(SCORE_MIN, normalized)))
