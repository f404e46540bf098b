"""
Tests for the sleep, recovery and nutrition endpoints
=====================================================
Covers:
- Sleep: duration-only score with label, key, reference wording, insight
- Sleep: stages only → minutes taken from stage total asleep
- Sleep: no data → 200 with score null, has_data False, logged at INFO
- Sleep: negative stage minutes rejected (422)
- Sleep: Infinity / NaN in the body rejected (422), not a server error
- Recovery: full inputs, rest advisory, no data
- Recovery: request baseline overrides, configured baseline fallback
- Recovery: non-positive baseline rejected (422)
- Recovery: negative or non-finite inputs rejected (422), echoed as strings
- Recovery: huge finite inputs still score within bounds
- Nutrition: goals for a profile, unknown tier and bad body values rejected
- Nutrition: NaN body values rejected (422)
- Nutrition: options list every tier with its data

Run: pytest tests/test_engines_api.py -v
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from lifeindex.config import Settings
from lifeindex.main import app

client = TestClient(app)


def _post_raw(path: str, body: str):
    """POST a hand-written JSON body, e.g. with Infinity or NaN literals."""
    return client.post(path, content=body, headers={"Content-Type": "application/json"})

_PROFILE = {
    "weight_kg": 70,
    "height_cm": 170,
    "age": 25,
    "is_male": True,
    "activity_level": "moderate",
    "goal_type": "lose",
}


# ---------------------------------------------------------------------------
# Sleep
# ---------------------------------------------------------------------------

class TestSleepScore:

    def test_duration_only(self):
        resp = client.post("/api/v1/sleep/score", json={"sleep_minutes": 450})
        assert resp.status_code == 200
        body = resp.json()
        assert body["score"] == 100
        assert body["label"] == "Excellent"
        assert body["label_key"] == "sleep.excellent"
        assert body["reference_label"] == "Very High"
        assert body["duration_insight"] == "sleep.insight.healthy"
        assert body["quality_insight"] is None
        assert body["stage_percents"] is None
        assert body["has_data"] is True

    def test_stages_only(self):
        resp = client.post("/api/v1/sleep/score", json={
            "stages": {"awake_minutes": 10, "rem_minutes": 100, "core_minutes": 230, "deep_minutes": 70},
        })
        body = resp.json()
        assert body["score"] == 97
        assert body["quality_insight"] == "sleep.insight.great_quality"
        assert body["stage_percents"]["awake"] == 2

    def test_short_night_with_interruptions(self):
        resp = client.post("/api/v1/sleep/score", json={
            "sleep_minutes": 300,
            "stages": {"awake_minutes": 100, "rem_minutes": 60, "core_minutes": 180, "deep_minutes": 60},
        })
        body = resp.json()
        assert body["score"] == 64
        assert body["label"] == "Good"
        assert body["duration_insight"] == "sleep.insight.aim"

    @pytest.mark.parametrize("payload", [{}, {"sleep_minutes": 0}, {"stages": {"awake_minutes": 30}}])
    def test_no_data(self, payload: dict):
        resp = client.post("/api/v1/sleep/score", json=payload)
        assert resp.status_code == 200
        assert resp.json()["score"] is None
        assert resp.json()["has_data"] is False

    def test_no_data_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="lifeindex.routers.sleep"):
            client.post("/api/v1/sleep/score", json={"sleep_minutes": 0})
        assert "No sleep to score" in caplog.text

    def test_negative_stage_rejected(self):
        resp = client.post("/api/v1/sleep/score", json={
            "sleep_minutes": 400,
            "stages": {"deep_minutes": -5},
        })
        assert resp.status_code == 422

    @pytest.mark.parametrize("body", [
        '{"sleep_minutes": 450, "stages": {"deep_minutes": Infinity}}',
        '{"sleep_minutes": Infinity}',
        '{"sleep_minutes": NaN}',
    ])
    def test_non_finite_rejected(self, body: str):
        resp = _post_raw("/api/v1/sleep/score", body)
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["type"] == "finite_number"


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------

class TestRecoveryScore:

    def test_full_inputs(self):
        resp = client.post("/api/v1/recovery/score", json={
            "hrv": 25, "resting_hr": 62, "sleep_minutes": 210,
        })
        assert resp.status_code == 200
        assert resp.json() == {
            "score": 65,
            "label": "Mostly Recovered",
            "should_rest": False,
            "has_data": True,
        }

    def test_rest_advised(self):
        resp = client.post("/api/v1/recovery/score", json={
            "hrv": 10, "resting_hr": 124, "sleep_minutes": 100,
        })
        body = resp.json()
        assert body["score"] == 30
        assert body["label"] == "Rest Recommended"
        assert body["should_rest"] is True

    def test_no_data(self):
        resp = client.post("/api/v1/recovery/score", json={})
        assert resp.status_code == 200
        assert resp.json() == {
            "score": None,
            "label": None,
            "should_rest": False,
            "has_data": False,
        }

    def test_request_baseline_override(self):
        resp = client.post("/api/v1/recovery/score", json={"hrv": 60, "hrv_baseline": 80})
        assert resp.json()["score"] == 75

    def test_configured_baseline(self):
        settings = Settings(hrv_baseline_ms=100.0)
        with patch("lifeindex.routers.recovery.get_settings", return_value=settings):
            resp = client.post("/api/v1/recovery/score", json={"hrv": 50})
        assert resp.json()["score"] == 50

    def test_zero_baseline_rejected(self):
        resp = client.post("/api/v1/recovery/score", json={"hrv": 50, "hrv_baseline": 0})
        assert resp.status_code == 422

    @pytest.mark.parametrize("payload", [
        {"resting_hr": -1e-307},
        {"hrv": -1e308},
        {"sleep_minutes": -1},
    ])
    def test_negative_inputs_rejected(self, payload: dict):
        resp = client.post("/api/v1/recovery/score", json=payload)
        assert resp.status_code == 422

    def test_infinite_input_rejected_and_echoed(self):
        resp = _post_raw("/api/v1/recovery/score", '{"hrv": Infinity}')
        assert resp.status_code == 422
        error = resp.json()["detail"][0]
        assert error["loc"] == ["body", "hrv"]
        assert error["input"] == "inf"

    def test_extreme_finite_inputs_in_bounds(self):
        # HRV and RHR capped at 1.0, oversleep floored at 0.5
        resp = client.post("/api/v1/recovery/score", json={
            "hrv": 1e308, "resting_hr": 1e-307, "sleep_minutes": 1e308,
        })
        assert resp.status_code == 200
        assert resp.json()["score"] == 85


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------

class TestNutritionGoals:

    def test_goals(self):
        resp = client.post("/api/v1/nutrition/goals", json=_PROFILE)
        assert resp.status_code == 200
        body = resp.json()
        assert body["bmr"] == pytest.approx(1643.8)
        assert body["tdee"] == pytest.approx(2547.89)
        assert body["calorie_goal"] == 2048
        assert body["macros"] == {"protein_g": 153, "carbs_g": 204, "fat_g": 68}

    def test_defaults_to_moderate_maintain(self):
        payload = {k: v for k, v in _PROFILE.items() if k not in ("activity_level", "goal_type")}
        resp = client.post("/api/v1/nutrition/goals", json=payload)
        assert resp.json()["calorie_goal"] == 2548

    def test_floor_applied(self):
        resp = client.post("/api/v1/nutrition/goals", json={
            "weight_kg": 40, "height_cm": 150, "age": 80, "is_male": False,
            "activity_level": "sedentary", "goal_type": "lose",
        })
        assert resp.json()["calorie_goal"] == 1200

    def test_unknown_activity_rejected(self):
        resp = client.post("/api/v1/nutrition/goals", json={**_PROFILE, "activity_level": "couch"})
        assert resp.status_code == 422

    @pytest.mark.parametrize("field", ["weight_kg", "height_cm", "age"])
    def test_non_positive_body_values_rejected(self, field: str):
        resp = client.post("/api/v1/nutrition/goals", json={**_PROFILE, field: 0})
        assert resp.status_code == 422

    def test_nan_weight_rejected(self):
        body = '{"weight_kg": NaN, "height_cm": 170, "age": 25, "is_male": true}'
        resp = _post_raw("/api/v1/nutrition/goals", body)
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["input"] == "nan"


class TestNutritionOptions:

    def test_lists_tiers(self):
        resp = client.get("/api/v1/nutrition/options")
        assert resp.status_code == 200
        body = resp.json()
        assert [a["key"] for a in body["activity_levels"]] == [
            "sedentary", "light", "moderate", "active", "very_active",
        ]
        assert body["activity_levels"][0]["multiplier"] == 1.2
        assert {g["key"]: g["calorie_adjustment"] for g in body["goal_types"]} == {
            "lose": -500, "maintain": 0, "gain": 300,
        }
