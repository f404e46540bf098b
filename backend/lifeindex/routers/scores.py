"""
Daily Score Router
==================
POST /api/v1/scores/daily   -> LifeIndex score for a snapshot of today's metrics.
POST /api/v1/scores/history -> Final scores and weekly summary for past days.

Both endpoints are stateless: the app sends the readings it already has
and gets scores back. Nothing is stored.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime

from fastapi import APIRouter, HTTPException, status

from lifeindex.config import get_settings
from lifeindex.models.metrics import ContributorOut, MetricScoreOut, TargetRangeOut
from lifeindex.models.scores import (
    DailyScorePoint,
    DailyScoreRequest,
    DailyScoreResponse,
    HistoryRequest,
    HistoryResponse,
    StepTrendOut,
)
from lifeindex.services.composite import (
    composite_from_breakdown,
    compute_day_progress_factor,
    explain_score,
    label_for_score,
    score_breakdown,
    top_and_weakest,
)
from lifeindex.services.history import DayReadings, summarize_history

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scores", tags=["scores"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _contributor(item) -> ContributorOut | None:
    if item is None:
        return None
    return ContributorOut(metric=item.kind, percentage=item.percentage)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/daily",
    response_model=DailyScoreResponse,
    status_code=status.HTTP_200_OK,
    summary="Score today's metrics",
    description=(
        "Combine whichever metrics are present into the 0–100 LifeIndex score. "
        "Missing metrics are skipped and the weights renormalized over the rest."
    ),
)
async def daily_score(body: DailyScoreRequest) -> DailyScoreResponse:
    """Compute the live (or, with time_aware=false, final) daily score."""
    at = body.at or datetime.now(get_settings().tzinfo)
    readings = body.metrics.to_readings()

    breakdown = score_breakdown(readings, time_aware=body.time_aware, at=at)
    score = composite_from_breakdown(breakdown)
    top, weakest = top_and_weakest(breakdown)

    return DailyScoreResponse(
        score=score,
        label=label_for_score(score, at=at),
        explanation=explain_score(score, at=at),
        day_progress_factor=compute_day_progress_factor(at) if body.time_aware else 1.0,
        breakdown=[
            MetricScoreOut(
                metric=item.kind,
                value=item.value,
                score=item.score,
                weight=item.weight,
                unit=item.kind.unit,
                target=TargetRangeOut(lower=item.target.lower, upper=item.target.upper),
            )
            for item in breakdown
        ],
        top_contributor=_contributor(top),
        weakest_area=_contributor(weakest),
        has_data=bool(readings),
    )


@router.post(
    "/history",
    response_model=HistoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Summarise past days",
    description=(
        "Score each finished day without time-of-day scaling and return the "
        "weekly average, yesterday's score and the step trend. Days with no "
        "metrics are omitted from the scores."
    ),
    responses={
        200: {"description": "History summarised"},
        422: {"description": "Invalid body or the same date sent twice"},
    },
)
async def score_history(body: HistoryRequest) -> HistoryResponse:
    """Summarise a run of past days."""
    duplicates = sorted(d for d, n in Counter(day.date for day in body.days).items() if n > 1)
    if duplicates:
        logger.warning("History request with duplicate dates: %s", duplicates)
        raise HTTPException(
            status_code=422,
            detail={
                "message": f"Each date may appear once; duplicated: {', '.join(d.isoformat() for d in duplicates)}",
                "code": "duplicate_date",
            },
        )

    today = body.today or datetime.now(get_settings().tzinfo).date()
    summary = summarize_history(
        [DayReadings(day=d.date, readings=d.metrics.to_readings()) for d in body.days],
        today=today,
    )

    trend = summary.step_trend
    return HistoryResponse(
        scores=[DailyScorePoint(date=s.day, score=s.score) for s in summary.scores],
        weekly_average=summary.weekly_average,
        yesterday_score=summary.yesterday_score,
        step_trend=StepTrendOut(
            direction=trend.direction,
            average=trend.average,
            recent_average=trend.recent_average,
            earlier_average=trend.earlier_average,
        ) if trend else None,
    )
