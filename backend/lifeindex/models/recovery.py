"""
Recovery Score Schemas
======================
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RecoveryScoreRequest(BaseModel):
    model_config = {"allow_inf_nan": False}

    hrv: Optional[float] = Field(default=None, ge=0, description="HRV SDNN, ms.")
    resting_hr: Optional[float] = Field(default=None, ge=0, description="Resting heart rate, bpm.")
    sleep_minutes: Optional[float] = Field(default=None, ge=0)
    hrv_baseline: Optional[float] = Field(
        default=None,
        gt=0,
        description="Personal HRV baseline. Defaults to the configured baseline.",
    )
    rhr_baseline: Optional[float] = Field(
        default=None,
        gt=0,
        description="Personal resting HR baseline. Defaults to the configured baseline.",
    )


class RecoveryScoreResponse(BaseModel):
    score: Optional[int] = Field(default=None, ge=0, le=100)
    label: Optional[str] = None
    should_rest: bool = False
    has_data: bool
