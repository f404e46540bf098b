"""
Daily Score Schemas
===================
Pydantic models for the daily LifeIndex score and the weekly history
endpoints.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from lifeindex.models.metrics import ContributorOut, MetricReadings, MetricScoreOut


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class DailyScoreRequest(BaseModel):
    """Today's readings as they stand right now."""

    metrics: MetricReadings = Field(default_factory=MetricReadings)
    time_aware: bool = Field(
        default=True,
        description=(
            "Scale cumulative targets (steps, calories, workout and mindful "
            "minutes) to the time of day. Set false to score a finished day."
        ),
    )
    at: Optional[datetime] = Field(
        default=None,
        description="Moment to score for. Defaults to now in the server timezone.",
    )


class HistoryDay(BaseModel):
    date: date
    metrics: MetricReadings = Field(default_factory=MetricReadings)


class HistoryRequest(BaseModel):
    days: list[HistoryDay] = Field(default_factory=list, max_length=31)
    today: Optional[date] = Field(
        default=None,
        description="Reference day for 'yesterday'. Defaults to today in the server timezone.",
    )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class DailyScoreResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    label: str
    explanation: str
    day_progress_factor: float = Field(
        ...,
        description="Share of the waking day used to scale cumulative targets (1.0 when not time-aware).",
    )
    breakdown: list[MetricScoreOut]
    top_contributor: Optional[ContributorOut] = None
    weakest_area: Optional[ContributorOut] = None
    has_data: bool = Field(..., description="False when no metric was supplied.")


class DailyScorePoint(BaseModel):
    date: date
    score: int


class StepTrendOut(BaseModel):
    direction: Literal["declining", "steady"]
    average: float
    recent_average: Optional[float] = None
    earlier_average: Optional[float] = None


class HistoryResponse(BaseModel):
    scores: list[DailyScorePoint]
    weekly_average: Optional[int] = None
    yesterday_score: Optional[int] = None
    step_trend: Optional[StepTrendOut] = None
