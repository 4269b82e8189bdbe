"""
Calorie and protein targets from basic biometrics.

Mifflin-St Jeor BMR, activity multiplier TDEE, and goal adjustments.
Inputs use imperial units (lbs, inches) and are converted for the formula.
"""

from typing import Optional

from fitness_genie.api.model import UserProfile
from fitness_genie.utils import round_half_up


LBS_TO_KG = 0.453592
INCHES_TO_CM = 2.54

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
}
DEFAULT_MULTIPLIER = 1.2

# lose_weight targets about 1 lb per week
DEFICIT_KCAL = 500
SURPLUS_KCAL = 300


def calculate_bmr(weight: float, height: float, age: int, gender: str) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor)."""
    weight_kg = weight * LBS_TO_KG
    height_cm = height * INCHES_TO_CM

    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == "male" else base - 161


def calculate_tdee(bmr: float, activity_level: str) -> int:
    """Total daily energy expenditure. Unknown levels count as sedentary."""
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_MULTIPLIER))


def calculate_calorie_target(tdee: int, goal: str) -> int:
    if goal == "lose_weight":
        return round_half_up(tdee - DEFICIT_KCAL)
    if goal == "gain_muscle":
        return round_half_up(tdee + SURPLUS_KCAL)
    return tdee


def calculate_protein_target(weight: float, goal: str) -> int:
    """Grams per day: 1 g/lb for weight loss or muscle gain, 0.8 g/lb otherwise."""
    if goal in ("lose_weight", "gain_muscle"):
        return round_half_up(weight)
    return round_half_up(weight * 0.8)


def create_user_profile(
    age: int,
    gender: str,
    weight: float,
    height: float,
    goal: str,
    activity_level: str,
    target_weight: Optional[float] = None,
) -> UserProfile:
    """
    Build a validated profile with its daily calorie and protein targets.

    Raises:
        ValueError: If an enumerated field is out of range
    """
    profile = UserProfile(
        age=age,
        gender=gender,
        weight=weight,
        height=height,
        goal=goal,
        activity_level=activity_level,
        target_weight=target_weight,
    )
    profile.validate()

    bmr = calculate_bmr(weight, height, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    profile.daily_calories = calculate_calorie_target(tdee, goal)
    profile.protein_target = calculate_protein_target(weight, goal)
    return profile
