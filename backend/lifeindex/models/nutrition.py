"""
Nutrition Goal Schemas
======================
Pydantic models for the nutrition goals endpoint. Tiers are sent by key
("moderate", "lose"), matching the ``ActivityLevel`` / ``GoalType`` enums.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from lifeindex.services.nutrition import ActivityLevel, BodyProfile, GoalType

ActivityKey = Literal["sedentary", "light", "moderate", "active", "very_active"]
GoalKey = Literal["lose", "maintain", "gain"]


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class NutritionGoalRequest(BaseModel):
    model_config = {"allow_inf_nan": False}

    weight_kg: float = Field(..., gt=0, le=500)
    height_cm: float = Field(..., gt=0, le=300)
    age: int = Field(..., gt=0, le=120)
    is_male: bool = Field(..., description="Selects the Mifflin–St Jeor sex constant.")
    activity_level: ActivityKey = "moderate"
    goal_type: GoalKey = "maintain"

    def to_profile(self) -> BodyProfile:
        return BodyProfile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age=self.age,
            is_male=self.is_male,
            activity_level=ActivityLevel.coerce(self.activity_level),
            goal_type=GoalType.coerce(self.goal_type),
        )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class MacroTargetsOut(BaseModel):
    protein_g: int
    carbs_g: int
    fat_g: int


class NutritionGoalResponse(BaseModel):
    bmr: float
    tdee: float
    calorie_goal: int = Field(..., ge=1200)
    macros: MacroTargetsOut


class ActivityLevelOption(BaseModel):
    key: ActivityKey
    display_name: str
    description: str
    multiplier: float


class GoalTypeOption(BaseModel):
    key: GoalKey
    display_name: str
    calorie_adjustment: int


class NutritionOptionsResponse(BaseModel):
    activity_levels: list[ActivityLevelOption]
    goal_types: list[GoalTypeOption]
