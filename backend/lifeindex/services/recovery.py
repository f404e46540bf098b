"""
Recovery Score
==============
Readiness for the day from HRV, resting heart rate and last night's
sleep, each compared with a personal baseline.

Each input is optional. Only supplied inputs become components, and the
weights (HRV 0.40, RHR 0.30, sleep 0.30) are renormalized over those.
HRV above baseline and RHR below baseline are capped at full marks,
never treated as "too good".
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from lifeindex.services.common import to_score

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_HRV_BASELINE = 50.0  # ms
DEFAULT_RHR_BASELINE = 62.0  # bpm

HRV_WEIGHT = 0.40
RHR_WEIGHT = 0.30
SLEEP_WEIGHT = 0.30

IDEAL_SLEEP_MIN = 420.0  # 7h
IDEAL_SLEEP_MAX = 540.0  # 9h
OVERSLEEP_DECAY_MINUTES = 180.0
OVERSLEEP_FLOOR = 0.5

REST_THRESHOLD = 40


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def _ratio(numerator: float, denominator: float) -> float:
    # A zero denominator reads as "infinitely better than baseline".
    if denominator == 0:
        return math.inf
    return numerator / denominator


def sleep_component(minutes: float) -> float:
    if IDEAL_SLEEP_MIN <= minutes <= IDEAL_SLEEP_MAX:
        return 1.0
    if minutes < IDEAL_SLEEP_MIN:
        return max(0.0, minutes / IDEAL_SLEEP_MIN)
    excess = minutes - IDEAL_SLEEP_MAX
    return max(OVERSLEEP_FLOOR, 1.0 - excess / OVERSLEEP_DECAY_MINUTES)


def compute_recovery_score(
    hrv: Optional[float],
    resting_hr: Optional[float],
    sleep_minutes: Optional[float],
    hrv_baseline: float = DEFAULT_HRV_BASELINE,
    rhr_baseline: float = DEFAULT_RHR_BASELINE,
) -> Optional[int]:
    """Recovery score in ``[0, 100]``, or ``None`` if no input is present."""
    components: list[tuple[float, float]] = []

    if hrv is not None:
        components.append((min(1.0, _ratio(hrv, hrv_baseline)), HRV_WEIGHT))

    if resting_hr is not None:
        components.append((min(1.0, _ratio(rhr_baseline, resting_hr)), RHR_WEIGHT))

    if sleep_minutes is not None:
        components.append((sleep_component(sleep_minutes), SLEEP_WEIGHT))

    if not components:
        logger.debug("No recovery inputs supplied")
        return None

    total_weight = sum(weight for _, weight in components)
    weighted_sum = sum(score * weight for score, weight in components)
    return to_score(weighted_sum, total_weight)


def recovery_label(score: int) -> str:
    if score >= 80:
        return "Fully Recovered"
    if score >= 60:
        return "Mostly Recovered"
    if score >= REST_THRESHOLD:
        return "Partially Recovered"
    return "Rest Recommended"


def should_rest(score: int) -> bool:
    """Advise a rest day when the score is below 40."""
    return score < REST_THRESHOLD
