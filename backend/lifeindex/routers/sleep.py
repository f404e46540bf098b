"""
Sleep Score Router
==================
POST /api/v1/sleep/score -> Score one night from duration and stages.

A night with no sleep recorded is not an error: the response is 200 with
``score: null`` and ``has_data: false`` so the app can show an empty state.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from lifeindex.models.sleep import SleepScoreRequest, SleepScoreResponse, SleepStagePercents
from lifeindex.services.sleep import (
    REFERENCE_LABELS,
    compute_sleep_score,
    duration_insight,
    quality_insight,
    sleep_label,
    sleep_label_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sleep", tags=["sleep"])


@router.post(
    "/score",
    response_model=SleepScoreResponse,
    status_code=status.HTTP_200_OK,
    summary="Score a night of sleep",
)
async def sleep_score(body: SleepScoreRequest) -> SleepScoreResponse:
    stages = body.stages.to_stages() if body.stages else None

    minutes = body.sleep_minutes
    if minutes is None and stages is not None and stages.has_stage_data:
        minutes = stages.total_asleep_minutes

    score = compute_sleep_score(minutes, stages)
    if score is None:
        logger.info("No sleep to score (minutes=%s, has_stages=%s)", minutes, stages is not None)
        return SleepScoreResponse(has_data=False)

    label = sleep_label(score)
    return SleepScoreResponse(
        score=score,
        label=label,
        label_key=sleep_label_key(score),
        reference_label=REFERENCE_LABELS[label],
        duration_insight=duration_insight(minutes),
        quality_insight=quality_insight(stages) if stages else None,
        stage_percents=SleepStagePercents(
            awake=stages.awake_percent,
            rem=stages.rem_percent,
            core=stages.core_percent,
            deep=stages.deep_percent,
        ) if stages and stages.has_stage_data else None,
        has_data=True,
    )
