"""
Metric Schemas
==============
The closed set of health metrics the daily score understands, and the
pydantic shapes the mobile app uses to send a day's readings.

Key design decisions:
- Every metric field is Optional. ``null`` or an omitted field means
  "no data for this metric" and is dropped before scoring, so a real
  reading of 0 is never confused with a missing one.
- ``blood_oxygen`` is a fraction (0.97), not a percentage (97).
- ``sleep_duration`` is in minutes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MetricKind(str, Enum):
    """Health metrics that feed the daily LifeIndex score."""

    STEPS = "steps"
    HEART_RATE = "heart_rate"
    HEART_RATE_VARIABILITY = "heart_rate_variability"
    RESTING_HEART_RATE = "resting_heart_rate"
    BLOOD_OXYGEN = "blood_oxygen"
    ACTIVE_CALORIES = "active_calories"
    SLEEP_DURATION = "sleep_duration"
    MINDFUL_MINUTES = "mindful_minutes"
    WORKOUT_MINUTES = "workout_minutes"

    @property
    def unit(self) -> str:
        return _UNITS[self]


_UNITS: dict[MetricKind, str] = {
    MetricKind.STEPS: "steps",
    MetricKind.HEART_RATE: "bpm",
    MetricKind.HEART_RATE_VARIABILITY: "ms",
    MetricKind.RESTING_HEART_RATE: "bpm",
    MetricKind.BLOOD_OXYGEN: "fraction",
    MetricKind.ACTIVE_CALORIES: "kcal",
    MetricKind.SLEEP_DURATION: "min",
    MetricKind.MINDFUL_MINUTES: "min",
    MetricKind.WORKOUT_MINUTES: "min",
}


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class MetricReadings(BaseModel):
    """One snapshot of a day's metrics. Omitted fields are missing, not zero."""

    model_config = {"allow_inf_nan": False}

    steps: Optional[float] = None
    heart_rate: Optional[float] = Field(default=None, description="Average heart rate, bpm.")
    heart_rate_variability: Optional[float] = Field(default=None, description="HRV SDNN, ms.")
    resting_heart_rate: Optional[float] = Field(default=None, description="Resting heart rate, bpm.")
    blood_oxygen: Optional[float] = Field(default=None, description="SpO2 as a fraction, e.g. 0.97.")
    active_calories: Optional[float] = Field(default=None, description="Active energy, kcal.")
    sleep_duration: Optional[float] = Field(default=None, description="Minutes asleep last night.")
    mindful_minutes: Optional[float] = None
    workout_minutes: Optional[float] = None

    def to_readings(self) -> dict[MetricKind, float]:
        """Return only the metrics that are present, keyed by ``MetricKind``."""
        return {
            MetricKind(name): value
            for name, value in self.model_dump(exclude_none=True).items()
        }


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class TargetRangeOut(BaseModel):
    lower: float
    upper: float


class MetricScoreOut(BaseModel):
    """Per-metric contribution to the daily score."""

    metric: MetricKind
    value: float
    score: float = Field(..., ge=0.0, le=1.0)
    weight: float
    unit: str = Field(..., description="Unit of ``value``, e.g. \"bpm\" or \"min\".")
    target: TargetRangeOut = Field(
        ...,
        description="Effective target after time-of-day scaling.",
    )


class ContributorOut(BaseModel):
    metric: MetricKind
    percentage: float
