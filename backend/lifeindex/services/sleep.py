"""
Sleep Score
===========
Turns a night's sleep duration and stage breakdown into a 0–100 score,
modelled on a three-factor methodology:

    Duration       50%   always scored when there is any sleep
    Quality        30%   deep and REM share of time asleep (needs stages)
    Interruptions  20%   awake share of time in bed (needs stages)

Without stage data only duration is scored, and the result is normalized
by the weight actually used, so a duration-only night still spans 0–100.

Oversleeping is never penalized. Labels follow the reference app's
published breakpoints (96 / 81 / 61 / 41) and must not drift.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from lifeindex.services.common import to_score

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DURATION_WEIGHT = 0.50
QUALITY_WEIGHT = 0.30
INTERRUPTIONS_WEIGHT = 0.20

IDEAL_MIN_MINUTES = 420.0  # 7h
IDEAL_MAX_MINUTES = 480.0  # 8h

# penalty = (deficit_hours * 0.35) ** 1.3
# -> ~12% at 1h short, ~40% at 2h short, ~70% at 3h short
DEFICIT_SCALE = 0.35
DEFICIT_EXPONENT = 1.3

DEEP_IDEAL = (0.12, 0.20)
REM_IDEAL = (0.15, 0.25)
ABOVE_IDEAL_STAGE_SCORE = 0.95
STAGE_SCORE_FLOOR = 0.4
DEEP_SHARE = 0.6
REM_SHARE = 0.4

# (max awake fraction, score), checked in order
INTERRUPTION_STEPS: tuple[tuple[float, float], ...] = (
    (0.05, 1.0),
    (0.10, 0.90),
    (0.15, 0.75),
    (0.20, 0.60),
)
INTERRUPTION_FLOOR = 0.3

# label, localization key, reference-app wording; checked top down
_LABEL_TIERS: tuple[tuple[int, str, str, str], ...] = (
    (96, "Excellent", "sleep.excellent", "Very High"),
    (81, "Great", "sleep.great", "High"),
    (61, "Good", "sleep.good", "OK"),
    (41, "Fair", "sleep.fair", "Low"),
    (0, "Poor", "sleep.poor", "Very Low"),
)

REFERENCE_LABELS: dict[str, str] = {label: ref for _, label, _, ref in _LABEL_TIERS}


# ---------------------------------------------------------------------------
# Stage breakdown
# ---------------------------------------------------------------------------

def _percent(part: float, whole: float) -> int:
    """``part`` as a truncated percentage of ``whole``; 0 when undefined."""
    if whole <= 0:
        return 0
    ratio = part / whole * 100
    if not math.isfinite(ratio):
        return 0
    return int(ratio)


@dataclass(frozen=True)
class SleepStages:
    """Minutes spent in each stage during one night. Totals are derived."""

    awake_minutes: float = 0.0
    rem_minutes: float = 0.0
    core_minutes: float = 0.0
    deep_minutes: float = 0.0

    @property
    def total_asleep_minutes(self) -> float:
        return self.rem_minutes + self.core_minutes + self.deep_minutes

    @property
    def total_minutes(self) -> float:
        """Time in bed: asleep plus awake."""
        return self.awake_minutes + self.total_asleep_minutes

    def _percent_of_total(self, minutes: float) -> int:
        return _percent(minutes, self.total_minutes)

    @property
    def awake_percent(self) -> int:
        return self._percent_of_total(self.awake_minutes)

    @property
    def rem_percent(self) -> int:
        return self._percent_of_total(self.rem_minutes)

    @property
    def core_percent(self) -> int:
        return self._percent_of_total(self.core_minutes)

    @property
    def deep_percent(self) -> int:
        return self._percent_of_total(self.deep_minutes)

    @property
    def has_stage_data(self) -> bool:
        return self.rem_minutes > 0 or self.core_minutes > 0 or self.deep_minutes > 0


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def duration_component(minutes: float) -> float:
    """1.0 from 7h up; below that a non-linear deficit penalty."""
    if minutes >= IDEAL_MIN_MINUTES:
        return 1.0

    deficit_hours = (IDEAL_MIN_MINUTES - minutes) / 60
    penalty = (deficit_hours * DEFICIT_SCALE) ** DEFICIT_EXPONENT
    return max(0.0, 1.0 - penalty)


def _stage_share_score(share: float, ideal: tuple[float, float]) -> float:
    low, high = ideal
    if low <= share <= high:
        return 1.0
    if share > high:
        return ABOVE_IDEAL_STAGE_SCORE
    return max(STAGE_SCORE_FLOOR, share / low)


def quality_component(stages: SleepStages) -> float:
    """Deep and REM share of time asleep, deep weighted 60/40."""
    asleep = stages.total_asleep_minutes
    if asleep <= 0:
        return 0.5

    deep = _stage_share_score(stages.deep_minutes / asleep, DEEP_IDEAL)
    rem = _stage_share_score(stages.rem_minutes / asleep, REM_IDEAL)
    return deep * DEEP_SHARE + rem * REM_SHARE


def interruptions_component(stages: SleepStages) -> float:
    """Step function over the awake fraction of time in bed."""
    if stages.total_minutes <= 0:
        return 1.0

    awake = stages.awake_minutes / stages.total_minutes
    for ceiling, score in INTERRUPTION_STEPS:
        if awake <= ceiling:
            return score
    return max(INTERRUPTION_FLOOR, 1.0 - awake)


# ---------------------------------------------------------------------------
# Score
# ---------------------------------------------------------------------------

def compute_sleep_score(
    sleep_minutes: Optional[float],
    stages: Optional[SleepStages] = None,
) -> Optional[int]:
    """Score a night of sleep, or ``None`` when there is no sleep to score.

    ``sleep_minutes`` is time asleep, excluding awake time.
    """
    if sleep_minutes is None or sleep_minutes <= 0:
        logger.debug("No sleep minutes to score (%s)", sleep_minutes)
        return None

    weighted_sum = duration_component(sleep_minutes) * DURATION_WEIGHT
    total_weight = DURATION_WEIGHT

    if stages is not None and stages.has_stage_data:
        weighted_sum += quality_component(stages) * QUALITY_WEIGHT
        total_weight += QUALITY_WEIGHT

        weighted_sum += interruptions_component(stages) * INTERRUPTIONS_WEIGHT
        total_weight += INTERRUPTIONS_WEIGHT

    return to_score(weighted_sum, total_weight)


def _tier(score: int) -> tuple[int, str, str, str]:
    for tier in _LABEL_TIERS:
        if score >= tier[0]:
            return tier
    return _LABEL_TIERS[-1]


def sleep_label(score: int) -> str:
    return _tier(score)[1]


def sleep_label_key(score: int) -> str:
    return _tier(score)[2]


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

def duration_insight(minutes: float) -> str:
    """Localization key describing how long the night was."""
    hours = minutes / 60
    if 7 <= hours <= 9:
        return "sleep.insight.healthy"
    if hours > 9:
        return "sleep.insight.long"
    if hours >= 6:
        return "sleep.insight.need_more"
    return "sleep.insight.aim"


def quality_insight(stages: SleepStages) -> Optional[str]:
    """Localization key for a notable stage pattern, if there is one."""
    if not stages.has_stage_data:
        return None

    deep_percent = _percent(stages.deep_minutes, stages.total_asleep_minutes)
    awake_percent = stages.awake_percent

    if deep_percent >= 12 and awake_percent <= 10:
        return "sleep.insight.great_quality"
    if deep_percent < 10:
        return "sleep.insight.improve_deep"
    if awake_percent > 15:
        return "sleep.insight.awakenings"
    return None
