"""
Daily Composite Score
=====================
Combines up to nine weighted health metrics into the single 0–100
LifeIndex score shown on the dashboard.

Scoring model:
    1. Each metric has a fixed weight (weights sum to 1.0) and an ideal
       target range.
    2. Cumulative metrics (steps, active calories, workout and mindful
       minutes) build up over the day, so during the day their targets are
       scaled by how much of the waking day (06:00–23:00) has passed.
    3. A metric inside its target scores 1.0. Outside, the score decays
       exponentially with the distance to the nearer bound, measured in
       units of the range's span.
    4. Metrics with no reading are skipped entirely: they add nothing to
       the weighted sum or the weight total, so the result is renormalized
       over what is actually present.

Every function here is total. Empty readings score 0 and degenerate
targets count as satisfied; nothing raises on numeric input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, time
from types import MappingProxyType
from typing import Mapping, Optional, Union

from lifeindex.config import get_settings
from lifeindex.models.metrics import MetricKind
from lifeindex.services.common import to_score

logger = logging.getLogger(__name__)

TimeOfDay = Union[datetime, time]


@dataclass(frozen=True)
class TargetRange:
    """Closed interval ``[lower, upper]``."""

    lower: float
    upper: float

    @property
    def span(self) -> float:
        return self.upper - self.lower

    def __contains__(self, value: float) -> bool:
        return self.lower <= value <= self.upper


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

WEIGHTS: Mapping[MetricKind, float] = MappingProxyType({
    MetricKind.STEPS: 0.15,
    MetricKind.HEART_RATE: 0.10,
    MetricKind.HEART_RATE_VARIABILITY: 0.15,
    MetricKind.RESTING_HEART_RATE: 0.10,
    MetricKind.BLOOD_OXYGEN: 0.10,
    MetricKind.ACTIVE_CALORIES: 0.10,
    MetricKind.SLEEP_DURATION: 0.20,
    MetricKind.MINDFUL_MINUTES: 0.05,
    MetricKind.WORKOUT_MINUTES: 0.05,
})

TARGETS: Mapping[MetricKind, TargetRange] = MappingProxyType({
    MetricKind.STEPS: TargetRange(8000, 12000),
    MetricKind.HEART_RATE: TargetRange(60, 100),
    MetricKind.HEART_RATE_VARIABILITY: TargetRange(30, 80),
    MetricKind.RESTING_HEART_RATE: TargetRange(50, 70),
    MetricKind.BLOOD_OXYGEN: TargetRange(0.95, 1.0),
    MetricKind.ACTIVE_CALORIES: TargetRange(300, 600),
    MetricKind.SLEEP_DURATION: TargetRange(420, 540),
    MetricKind.MINDFUL_MINUTES: TargetRange(5, 30),
    MetricKind.WORKOUT_MINUTES: TargetRange(20, 60),
})

CUMULATIVE_METRICS = frozenset({
    MetricKind.STEPS,
    MetricKind.ACTIVE_CALORIES,
    MetricKind.WORKOUT_MINUTES,
    MetricKind.MINDFUL_MINUTES,
})

WAKE_MINUTE = 6 * 60     # 06:00
SLEEP_MINUTE = 23 * 60   # 23:00
WAKING_WINDOW_MINUTES = SLEEP_MINUTE - WAKE_MINUTE  # 1020

PRE_WAKE_FACTOR = 0.05
MIN_WAKING_FACTOR = 0.1

MORNING_END_HOUR = 12


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricScore:
    kind: MetricKind
    value: float
    score: float
    target: TargetRange

    @property
    def weight(self) -> float:
        return WEIGHTS[self.kind]


@dataclass(frozen=True)
class ScoreContributor:
    kind: MetricKind
    percentage: float


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------

def _now() -> datetime:
    return datetime.now(get_settings().tzinfo)


def _local(at: TimeOfDay) -> TimeOfDay:
    """Aware datetimes are read on the configured wall clock; naive ones as-is."""
    if isinstance(at, datetime) and at.tzinfo is not None:
        return at.astimezone(get_settings().tzinfo)
    return at


def compute_day_progress_factor(time_of_day: Optional[TimeOfDay] = None) -> float:
    """Fraction of the waking day that has passed, in ``[0.05, 1.0]``.

    At or before 06:00 this is a flat 0.05 (exactly 06:00 included), from
    23:00 on it is 1.0, and in between it never drops below 0.1.
    """
    local = _local(time_of_day if time_of_day is not None else _now())
    minutes = local.hour * 60 + local.minute

    if minutes <= WAKE_MINUTE:
        return PRE_WAKE_FACTOR
    if minutes >= SLEEP_MINUTE:
        return 1.0

    return max(MIN_WAKING_FACTOR, (minutes - WAKE_MINUTE) / WAKING_WINDOW_MINUTES)


def scale_target_for_time(kind: MetricKind, target: TargetRange, factor: float) -> TargetRange:
    """Scale a cumulative metric's target by ``factor``; others pass through.

    At 08:00 (factor ~0.12) the step target 8000–12000 becomes ~941–1412.
    """
    if kind not in CUMULATIVE_METRICS:
        return target

    lower = target.lower * factor
    upper = target.upper * factor
    return TargetRange(lower, max(lower, upper))


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_single_metric(value: float, target: TargetRange, kind: MetricKind) -> float:
    """Score one reading against its (possibly scaled) target, in ``[0, 1]``."""
    if value in target:
        return 1.0

    span = target.span
    if span <= 0:
        return 1.0

    if value < target.lower:
        distance = target.lower - value
    else:
        distance = value - target.upper

    return max(0.0, min(1.0, math.exp(-distance / span)))


def score_breakdown(
    readings: Mapping[MetricKind, float],
    time_aware: bool = True,
    at: Optional[TimeOfDay] = None,
) -> list[MetricScore]:
    """Per-metric scores for every present metric, in ``MetricKind`` order."""
    factor = compute_day_progress_factor(at) if time_aware else 1.0

    breakdown: list[MetricScore] = []
    for kind in MetricKind:
        value = readings.get(kind)
        target = TARGETS.get(kind)
        if value is None or target is None or kind not in WEIGHTS:
            continue

        effective = scale_target_for_time(kind, target, factor)
        breakdown.append(MetricScore(
            kind=kind,
            value=value,
            score=score_single_metric(value, effective, kind),
            target=effective,
        ))
    return breakdown


def composite_from_breakdown(breakdown: list[MetricScore]) -> int:
    """Weighted average of an already computed breakdown, as a 0–100 int."""
    weighted_sum = 0.0
    total_weight = 0.0

    for item in breakdown:
        weighted_sum += item.score * item.weight
        total_weight += item.weight

    if total_weight <= 0:
        return 0

    return to_score(weighted_sum, total_weight)


def compute_composite_score(
    readings: Mapping[MetricKind, float],
    time_aware: bool = True,
    at: Optional[TimeOfDay] = None,
) -> int:
    """The daily LifeIndex score, an int in ``[0, 100]``.

    With ``time_aware`` (the live dashboard) cumulative targets are scaled
    to the time ``at``, defaulting to now. Pass ``time_aware=False`` to score
    a finished day.
    """
    breakdown = score_breakdown(readings, time_aware=time_aware, at=at)
    if not breakdown:
        logger.debug("No scorable metrics among %d readings", len(readings))
    return composite_from_breakdown(breakdown)


def compute_final_score(readings: Mapping[MetricKind, float]) -> int:
    """Score a complete past day: no time-of-day scaling."""
    return compute_composite_score(readings, time_aware=False)


def top_and_weakest(
    breakdown: list[MetricScore],
) -> tuple[Optional[ScoreContributor], Optional[ScoreContributor]]:
    """Best metric and, when at least two are present, the worst one."""
    if not breakdown:
        return None, None

    ranked = sorted(breakdown, key=lambda item: item.score, reverse=True)
    best = ScoreContributor(ranked[0].kind, ranked[0].score * 100)
    if len(ranked) < 2:
        return best, None
    return best, ScoreContributor(ranked[-1].kind, ranked[-1].score * 100)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def label_for_score(score: int, at: Optional[TimeOfDay] = None) -> str:
    """Six-tier label. Before noon the two lowest tiers read "Getting Started"."""
    morning = at is not None and _local(at).hour < MORNING_END_HOUR

    if score >= 90:
        return "Excellent"
    if score >= 75:
        return "Great"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Building Up"
    if morning:
        return "Getting Started"
    if score >= 20:
        return "Room to Grow"
    return "Just Starting"


def explain_score(score: int, at: Optional[TimeOfDay] = None) -> str:
    """One-sentence explanation of a daily score for the dashboard card."""
    local = _local(at if at is not None else _now())
    morning = local.hour < MORNING_END_HOUR

    if score >= 90:
        return "Outstanding day. All your metrics are in excellent shape."
    if score >= 80:
        return "Most metrics are on track. A small push could get you to Excellent."
    if score >= 70:
        return "Solid effort today. Focus on your weaker areas to level up."
    if score >= 60:
        if morning:
            return "Your day is shaping up. Sleep and vitals look decent, keep building."
        return "A decent day, but a couple areas could use a boost."
    if score >= 40:
        if morning:
            return (
                "Still early. Your sleep and vitals set the foundation, "
                "and activity will build through the day."
            )
        return "Some metrics are off today. Prioritize what you can still control."
    if score >= 20:
        if morning:
            return "Your day is just getting started. Focus on what's ahead, not what's missing yet."
        return "Your body may need extra care today. Rest and recover."
    if morning:
        return "Good morning. Your score will build as the day progresses."
    return "Take it easy. Focus on the basics: sleep, hydration, movement."
