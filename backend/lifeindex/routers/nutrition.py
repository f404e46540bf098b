"""
Nutrition Router
================
POST /api/v1/nutrition/goals   -> Calorie and macro targets for a body profile.
GET  /api/v1/nutrition/options -> Activity levels and goal types for the settings picker.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from lifeindex.models.nutrition import (
    ActivityLevelOption,
    GoalTypeOption,
    MacroTargetsOut,
    NutritionGoalRequest,
    NutritionGoalResponse,
    NutritionOptionsResponse,
)
from lifeindex.services.nutrition import (
    ActivityLevel,
    GoalType,
    bmr,
    calorie_goal,
    macro_targets,
    tdee,
)

router = APIRouter(prefix="/api/v1/nutrition", tags=["nutrition"])


@router.post(
    "/goals",
    response_model=NutritionGoalResponse,
    status_code=status.HTTP_200_OK,
    summary="Daily calorie and macro goals",
    description=(
        "Mifflin–St Jeor BMR × activity multiplier, adjusted for the weight goal "
        "and floored at 1200 kcal. Macros split 30/40/30 protein/carbs/fat."
    ),
)
async def nutrition_goals(body: NutritionGoalRequest) -> NutritionGoalResponse:
    profile = body.to_profile()

    basal = bmr(profile.weight_kg, profile.height_cm, profile.age, profile.is_male)
    expenditure = tdee(basal, profile.activity_level)
    goal = calorie_goal(expenditure, profile.goal_type)
    macros = macro_targets(goal)

    return NutritionGoalResponse(
        bmr=basal,
        tdee=expenditure,
        calorie_goal=goal,
        macros=MacroTargetsOut(protein_g=macros.protein, carbs_g=macros.carbs, fat_g=macros.fat),
    )


@router.get(
    "/options",
    response_model=NutritionOptionsResponse,
    summary="Activity level and goal choices",
)
async def nutrition_options() -> NutritionOptionsResponse:
    return NutritionOptionsResponse(
        activity_levels=[
            ActivityLevelOption(
                key=level.key,
                display_name=level.display_name,
                description=level.description,
                multiplier=level.multiplier,
            )
            for level in ActivityLevel
        ],
        goal_types=[
            GoalTypeOption(
                key=goal.key,
                display_name=goal.display_name,
                calorie_adjustment=goal.calorie_adjustment,
            )
            for goal in GoalType
        ],
    )
