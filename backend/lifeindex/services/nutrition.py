"""
Nutrition Goals
===============
Daily calorie and macro targets from a body profile.

    BMR   Mifflin–St Jeor
    TDEE  BMR × activity multiplier
    Goal  TDEE + goal adjustment, never below 1200 kcal
    Macros  protein 30% / carbs 40% / fat 30% of the goal

Inputs are not validated here; the API layer does that.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from lifeindex.services.common import round_half_up

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_SAFE_CALORIES = 1200

PROTEIN_SHARE = 0.30
CARBS_SHARE = 0.40
FAT_SHARE = 0.30

KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_CARBS = 4.0
KCAL_PER_GRAM_FAT = 9.0


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

class ActivityLevel(Enum):
    """Activity tiers; each carries its TDEE multiplier."""

    SEDENTARY = ("sedentary", 1.2, "Sedentary", "Little or no exercise")
    LIGHT = ("light", 1.375, "Lightly Active", "Light exercise 1-3 days/week")
    MODERATE = ("moderate", 1.55, "Moderately Active", "Moderate exercise 3-5 days/week")
    ACTIVE = ("active", 1.725, "Active", "Hard exercise 6-7 days/week")
    VERY_ACTIVE = ("very_active", 1.9, "Very Active", "Very hard exercise, physical job")

    def __init__(self, key: str, multiplier: float, display_name: str, description: str) -> None:
        self.key = key
        self.multiplier = multiplier
        self.display_name = display_name
        self.description = description

    @classmethod
    def coerce(cls, value: Union["ActivityLevel", str, int]) -> "ActivityLevel":
        """Accept a member, its key, or its 0-based tier index.

        Anything unrecognised falls back to ``MODERATE``.
        """
        return _coerce(cls, value, cls.MODERATE)


class GoalType(Enum):
    """Weight goals; each carries its daily calorie adjustment."""

    LOSE = ("lose", -500, "Lose Weight")
    MAINTAIN = ("maintain", 0, "Maintain")
    GAIN = ("gain", 300, "Gain Weight")

    def __init__(self, key: str, calorie_adjustment: int, display_name: str) -> None:
        self.key = key
        self.calorie_adjustment = calorie_adjustment
        self.display_name = display_name

    @classmethod
    def coerce(cls, value: Union["GoalType", str, int]) -> "GoalType":
        """Like ``ActivityLevel.coerce``; unknown values become ``MAINTAIN``."""
        return _coerce(cls, value, cls.MAINTAIN)


def _coerce(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    members = list(enum_cls)
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(members):
            return members[value]
    elif isinstance(value, str):
        for member in members:
            if member.key == value:
                return member
    logger.debug("Unknown %s %r, using %s", enum_cls.__name__, value, default.key)
    return default


# ---------------------------------------------------------------------------
# Profile / results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BodyProfile:
    weight_kg: float
    height_cm: float
    age: int
    is_male: bool
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal_type: GoalType = GoalType.MAINTAIN


@dataclass(frozen=True)
class MacroTargets:
    """Daily grams of each macronutrient."""

    protein: int
    carbs: int
    fat: int


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

def bmr(weight_kg: float, height_cm: float, age: int, is_male: bool) -> float:
    """Basal metabolic rate in kcal/day (Mifflin–St Jeor)."""
    base = 9.99 * weight_kg + 6.25 * height_cm - 4.92 * age
    return base + (5.0 if is_male else -161.0)


def tdee(bmr: float, activity_level: Union[ActivityLevel, str, int]) -> float:
    """Total daily energy expenditure."""
    return bmr * ActivityLevel.coerce(activity_level).multiplier


def calorie_goal(tdee: float, goal_type: Union[GoalType, str, int]) -> int:
    """Daily calorie target, floored at the 1200 kcal safety minimum.

    A non-finite ``tdee`` has no meaningful target and gets the floor.
    """
    target = tdee + GoalType.coerce(goal_type).calorie_adjustment
    if not math.isfinite(target):
        logger.warning("Non-finite calorie target %s, using the safety minimum", target)
        return MIN_SAFE_CALORIES
    return max(MIN_SAFE_CALORIES, round_half_up(target))


def daily_calorie_goal(profile: BodyProfile) -> int:
    b = bmr(profile.weight_kg, profile.height_cm, profile.age, profile.is_male)
    return calorie_goal(tdee(b, profile.activity_level), profile.goal_type)


def macro_targets(calorie_goal: int) -> MacroTargets:
    calories = float(calorie_goal)
    return MacroTargets(
        protein=int(calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN),
        carbs=int(calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        fat=int(calories * FAT_SHARE / KCAL_PER_GRAM_FAT),
    )
