"""Domain models for the user profile and its daily targets."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Supported genders for the BMR equation."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class ActivityLevel(StrEnum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "SEDENTARY"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    ACTIVE = "ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"

    @property
    def multiplier(self) -> float:
        """Return the factor applied to BMR."""
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class Goal(StrEnum):
    """Weight goal."""

    LOSE = "LOSE"
    MAINTAIN = "MAINTAIN"
    GAIN = "GAIN"


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    target_calories: int
    target_protein: int
    target_carbs: int
    target_fat: int


@dataclass(frozen=True)
class UserProfile:
    """Profile snapshot, replaced wholesale on every edit."""

    gender: Gender
    age: float
    height: float
    weight: float
    activity_level: ActivityLevel
    goal: Goal
    diet_type: str
    health_conditions: tuple[str, ...]
    targets: NutritionTargets
