"""Daily target calculation and profile construction."""

import math
from collections.abc import Iterable

from nutri_coach.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
)

NO_CONDITIONS = "None of the above"
MIN_CALORIES = 1200
LOSE_ADJUSTMENT = -500
GAIN_ADJUSTMENT = 300
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

DIET_SUGGESTIONS: tuple[str, ...] = (
    "None",
    "Vegan",
    "Vegetarian",
    "Keto",
    "Paleo",
    "Mediterranean",
    "Gluten free",
)

HEALTH_CONDITION_SUGGESTIONS: tuple[str, ...] = (
    NO_CONDITIONS,
    "Celiac disease (gluten free)",
    "Lactose intolerance",
    "Diabetes (sugar control)",
    "Hypertension (low sodium)",
    "Kidney failure (protein/potassium control)",
    "Hyperuricemia / gout (no purines)",
    "Gastritis / reflux (no irritants)",
    "Nut allergy",
    "Fatty liver (low saturated fat)",
)

ZERO_TARGETS = NutritionTargets(
    target_calories=0, target_protein=0, target_carbs=0, target_fat=0
)


def compute_targets(  # noqa: PLR0913
    gender: Gender,
    age: float,
    height: float,
    weight: float,
    activity_level: ActivityLevel,
    goal: Goal,
) -> NutritionTargets:
    """Compute daily targets with the Mifflin-St Jeor equation.

    Incomplete physical data (any non-positive or non-finite value) yields
    all-zero targets instead of an error.
    """
    if not is_physical_data_complete(age, height, weight):
        return ZERO_TARGETS

    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if gender == Gender.MALE else -161
    tdee = bmr * activity_level.multiplier

    calories = tdee
    if goal == Goal.LOSE:
        calories += LOSE_ADJUSTMENT
    elif goal == Goal.GAIN:
        calories += GAIN_ADJUSTMENT
    target_calories = max(MIN_CALORIES, _round_half_up(calories))

    protein_ratio = 1.8 if goal == Goal.MAINTAIN else 2.0
    target_protein = _round_half_up(weight * protein_ratio)
    target_fat = _round_half_up(target_calories * FAT_CALORIE_SHARE / KCAL_PER_G_FAT)
    remaining = (
        target_calories
        - target_protein * KCAL_PER_G_PROTEIN
        - target_fat * KCAL_PER_G_FAT
    )
    target_carbs = max(0, _round_half_up(remaining / KCAL_PER_G_CARBS))

    return NutritionTargets(
        target_calories=target_calories,
        target_protein=target_protein,
        target_carbs=target_carbs,
        target_fat=target_fat,
    )


def build_profile(  # noqa: PLR0913
    *,
    gender: Gender,
    age: float,
    height: float,
    weight: float,
    activity_level: ActivityLevel,
    goal: Goal,
    diet_type: str,
    health_conditions: Iterable[str] = (),
) -> UserProfile:
    """Create a profile whose targets are derived from its inputs."""
    return UserProfile(
        gender=gender,
        age=age,
        height=height,
        weight=weight,
        activity_level=activity_level,
        goal=goal,
        diet_type=diet_type,
        health_conditions=normalize_health_conditions(health_conditions),
        targets=compute_targets(gender, age, height, weight, activity_level, goal),
    )


def rederive_profile(profile: UserProfile) -> UserProfile:
    """Return the profile rebuilt from its inputs."""
    return build_profile(
        gender=profile.gender,
        age=profile.age,
        height=profile.height,
        weight=profile.weight,
        activity_level=profile.activity_level,
        goal=profile.goal,
        diet_type=profile.diet_type,
        health_conditions=profile.health_conditions,
    )


def is_physical_data_complete(age: float, height: float, weight: float) -> bool:
    """Return True when all physical measurements are finite and positive."""
    return all(math.isfinite(value) and value > 0 for value in (age, height, weight))


def toggle_health_condition(
    conditions: Iterable[str], condition: str
) -> tuple[str, ...]:
    """Toggle a condition label, keeping the sentinel exclusive."""
    if condition == NO_CONDITIONS:
        return (NO_CONDITIONS,)
    filtered = [item for item in conditions if item != NO_CONDITIONS]
    if condition in filtered:
        return tuple(item for item in filtered if item != condition)
    return (*filtered, condition)


def normalize_health_conditions(labels: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate labels and drop the sentinel when others are present."""
    seen: list[str] = []
    for label in labels:
        cleaned = label.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    if NO_CONDITIONS in seen and len(seen) > 1:
        seen.remove(NO_CONDITIONS)
    return tuple(seen)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
