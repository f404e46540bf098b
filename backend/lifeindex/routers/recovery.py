"""
Recovery Router
===============
POST /api/v1/recovery/score -> Readiness from HRV, resting HR and sleep.

Baselines not sent by the app fall back to the configured defaults.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from lifeindex.config import get_settings
from lifeindex.models.recovery import RecoveryScoreRequest, RecoveryScoreResponse
from lifeindex.services.recovery import compute_recovery_score, recovery_label, should_rest

router = APIRouter(prefix="/api/v1/recovery", tags=["recovery"])


@router.post(
    "/score",
    response_model=RecoveryScoreResponse,
    status_code=status.HTTP_200_OK,
    summary="Score today's recovery",
)
async def recovery_score(body: RecoveryScoreRequest) -> RecoveryScoreResponse:
    settings = get_settings()

    score = compute_recovery_score(
        hrv=body.hrv,
        resting_hr=body.resting_hr,
        sleep_minutes=body.sleep_minutes,
        hrv_baseline=body.hrv_baseline or settings.hrv_baseline_ms,
        rhr_baseline=body.rhr_baseline or settings.rhr_baseline_bpm,
    )
    if score is None:
        return RecoveryScoreResponse(has_data=False)

    return RecoveryScoreResponse(
        score=score,
        label=recovery_label(score),
        should_rest=should_rest(score),
        has_data=True,
    )
