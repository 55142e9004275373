"""Tests for target calculation and profile helpers."""

import itertools
import math

from nutri_coach.domain.profile import ActivityLevel, Gender, Goal, NutritionTargets
from nutri_coach.services.goals import (
    NO_CONDITIONS,
    build_profile,
    compute_targets,
    is_physical_data_complete,
    normalize_health_conditions,
    toggle_health_condition,
)


def test_compute_targets_male_maintain_example() -> None:
    targets = compute_targets(
        Gender.MALE, 30, 175, 70, ActivityLevel.MODERATE, Goal.MAINTAIN
    )

    assert targets == NutritionTargets(
        target_calories=2556, target_protein=126, target_carbs=353, target_fat=71
    )


def test_compute_targets_female_lose() -> None:
    targets = compute_targets(
        Gender.FEMALE, 25, 165, 60, ActivityLevel.LIGHT, Goal.LOSE
    )

    assert targets.target_calories == 1350
    assert targets.target_protein == 120
    assert targets.target_fat == 38
    assert targets.target_carbs == 132


def test_compute_targets_gain_adds_surplus() -> None:
    targets = compute_targets(
        Gender.MALE, 30, 175, 70, ActivityLevel.MODERATE, Goal.GAIN
    )

    assert targets.target_calories == 2856
    assert targets.target_protein == 140
    assert targets.target_fat == 79
    assert targets.target_carbs == 396


def test_compute_targets_applies_calorie_floor() -> None:
    targets = compute_targets(
        Gender.FEMALE, 80, 150, 40, ActivityLevel.SEDENTARY, Goal.LOSE
    )

    assert targets.target_calories == 1200
    assert targets.target_protein == 80
    assert targets.target_fat == 33
    assert targets.target_carbs == 146


def test_compute_targets_rounds_half_up() -> None:
    targets = compute_targets(
        Gender.MALE, 30, 180, 61.25, ActivityLevel.ACTIVE, Goal.LOSE
    )

    assert targets.target_protein == 123


def test_compute_targets_zero_for_incomplete_data() -> None:
    for age, height, weight in [(0, 175, 70), (30, 0, 70), (30, 175, 0), (-1, 1, 1)]:
        for gender, goal in itertools.product(Gender, Goal):
            targets = compute_targets(
                gender, age, height, weight, ActivityLevel.VERY_ACTIVE, goal
            )
            assert targets == NutritionTargets(0, 0, 0, 0)


def test_compute_targets_macro_calories_fit_within_target() -> None:
    grid = itertools.product(
        Gender,
        (18, 45, 80),
        (150, 175, 200),
        (45, 70, 120),
        ActivityLevel,
        Goal,
    )
    for gender, age, height, weight, activity, goal in grid:
        targets = compute_targets(gender, age, height, weight, activity, goal)
        assert targets.target_calories >= 1200
        assert (
            targets.target_protein * 4 + targets.target_fat * 9
            <= targets.target_calories + 9
        )
        assert targets.target_carbs >= 0


def test_compute_targets_is_deterministic() -> None:
    args = (Gender.FEMALE, 41, 168, 63.5, ActivityLevel.ACTIVE, Goal.GAIN)

    assert compute_targets(*args) == compute_targets(*args)


def test_activity_level_multipliers() -> None:
    assert ActivityLevel.SEDENTARY.multiplier == 1.2
    assert ActivityLevel.LIGHT.multiplier == 1.375
    assert ActivityLevel.MODERATE.multiplier == 1.55
    assert ActivityLevel.ACTIVE.multiplier == 1.725
    assert ActivityLevel.VERY_ACTIVE.multiplier == 1.9


def test_build_profile_derives_targets_and_normalizes_conditions() -> None:
    profile = build_profile(
        gender=Gender.MALE,
        age=30,
        height=175,
        weight=70,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.MAINTAIN,
        diet_type="Keto",
        health_conditions=[NO_CONDITIONS, "Nut allergy", "Nut allergy"],
    )

    assert profile.targets.target_calories == 2556
    assert profile.health_conditions == ("Nut allergy",)


def test_toggle_health_condition_sentinel_is_exclusive() -> None:
    conditions = toggle_health_condition(("Nut allergy", "Diabetes"), NO_CONDITIONS)
    assert conditions == (NO_CONDITIONS,)

    conditions = toggle_health_condition(conditions, "Nut allergy")
    assert conditions == ("Nut allergy",)

    conditions = toggle_health_condition(conditions, "Nut allergy")
    assert conditions == ()


def test_normalize_health_conditions_keeps_order() -> None:
    assert normalize_health_conditions([" Diabetes ", "Gout", "Diabetes", ""]) == (
        "Diabetes",
        "Gout",
    )
    assert normalize_health_conditions([NO_CONDITIONS]) == (NO_CONDITIONS,)


def test_compute_targets_zero_for_non_finite_data() -> None:
    for age, height, weight in [
        (30, 175, math.inf),
        (30, math.inf, 70),
        (math.nan, 175, 70),
    ]:
        targets = compute_targets(
            Gender.MALE, age, height, weight, ActivityLevel.MODERATE, Goal.MAINTAIN
        )
        assert targets == NutritionTargets(0, 0, 0, 0)
        assert not is_physical_data_complete(age, height, weight)
