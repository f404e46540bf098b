"""
Score History
=============
Summarises a run of past days (typically the last week) for the
dashboard's weekly section.

Answers: "What did each finished day score, what is the weekly average,
what did yesterday score, and are steps trending down?"

Past days are complete, so they are scored with ``compute_final_score``
(no time-of-day scaling). Days with no readings at all are skipped rather
than scored as 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

import pandas as pd

from lifeindex.models.metrics import MetricKind
from lifeindex.services.composite import compute_final_score

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_TREND_DAYS = 3
SPLIT_TREND_DAYS = 5
RECENT_WINDOW = 3
DECLINE_RATIO = 0.8


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DayReadings:
    day: date
    readings: Mapping[MetricKind, float]


@dataclass(frozen=True)
class DailyScore:
    day: date
    score: int


@dataclass(frozen=True)
class StepTrend:
    direction: str  # "declining" | "steady"
    average: float
    recent_average: Optional[float] = None
    earlier_average: Optional[float] = None


@dataclass(frozen=True)
class HistorySummary:
    scores: list[DailyScore]
    weekly_average: Optional[int]
    yesterday_score: Optional[int]
    step_trend: Optional[StepTrend]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _frame(days: Iterable[DayReadings]) -> pd.DataFrame:
    """One row per day, one column per metric, missing metrics as NaN."""
    rows = [
        {"date": pd.Timestamp(d.day), **{kind.value: value for kind, value in d.readings.items()}}
        for d in days
    ]
    columns = ["date"] + [kind.value for kind in MetricKind]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows).reindex(columns=columns).sort_values("date").reset_index(drop=True)


def daily_scores(days: Iterable[DayReadings]) -> list[DailyScore]:
    """Final scores for every day that has at least one reading, oldest first."""
    ordered = sorted(days, key=lambda d: d.day)
    return [
        DailyScore(day=d.day, score=compute_final_score(d.readings))
        for d in ordered
        if d.readings
    ]


def weekly_average(scores: list[DailyScore]) -> Optional[int]:
    """Integer mean of the daily scores (truncated), ``None`` if there are none."""
    if not scores:
        return None
    return sum(s.score for s in scores) // len(scores)


def step_trend(days: Iterable[DayReadings]) -> Optional[StepTrend]:
    """Compare the last three days of steps with the days before them."""
    steps = _frame(days)[MetricKind.STEPS.value].dropna().astype(float)

    if len(steps) < MIN_TREND_DAYS:
        return None

    average = float(steps.mean())
    if len(steps) < SPLIT_TREND_DAYS:
        return StepTrend(direction="steady", average=average)

    recent = float(steps.tail(RECENT_WINDOW).mean())
    earlier = float(steps.head(len(steps) - RECENT_WINDOW).mean())
    direction = "declining" if recent < earlier * DECLINE_RATIO else "steady"
    return StepTrend(
        direction=direction,
        average=average,
        recent_average=recent,
        earlier_average=earlier,
    )


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def summarize_history(days: Iterable[DayReadings], today: date) -> HistorySummary:
    """Weekly dashboard summary relative to ``today``."""
    days = list(days)
    scores = daily_scores(days)
    yesterday = today - timedelta(days=1)

    summary = HistorySummary(
        scores=scores,
        weekly_average=weekly_average(scores),
        yesterday_score=next((s.score for s in scores if s.day == yesterday), None),
        step_trend=step_trend(days),
    )
    logger.debug(
        "History summary: %d scored days of %d, average %s",
        len(scores), len(days), summary.weekly_average,
    )
    return summary
