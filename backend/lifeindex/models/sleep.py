"""
Sleep Score Schemas
===================
Pydantic models for the sleep score endpoint.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from lifeindex.services.sleep import SleepStages


class SleepStagesIn(BaseModel):
    """Minutes per stage for one night. Totals are computed server-side."""

    model_config = {"allow_inf_nan": False}

    awake_minutes: float = Field(default=0.0, ge=0)
    rem_minutes: float = Field(default=0.0, ge=0)
    core_minutes: float = Field(default=0.0, ge=0)
    deep_minutes: float = Field(default=0.0, ge=0)

    def to_stages(self) -> SleepStages:
        return SleepStages(**self.model_dump())


class SleepScoreRequest(BaseModel):
    model_config = {"allow_inf_nan": False}

    sleep_minutes: Optional[float] = Field(
        default=None,
        description=(
            "Minutes asleep, excluding awake time. If omitted and stages are "
            "given, the stage total asleep is used."
        ),
    )
    stages: Optional[SleepStagesIn] = None


class SleepStagePercents(BaseModel):
    awake: int
    rem: int
    core: int
    deep: int


class SleepScoreResponse(BaseModel):
    score: Optional[int] = Field(default=None, ge=0, le=100)
    label: Optional[str] = None
    label_key: Optional[str] = None
    reference_label: Optional[str] = Field(
        default=None,
        description="Equivalent wording on the reference app's scale.",
    )
    duration_insight: Optional[str] = None
    quality_insight: Optional[str] = None
    stage_percents: Optional[SleepStagePercents] = None
    has_data: bool
