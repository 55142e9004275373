"""Domain models for meal logging."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator


class MealDraft(BaseModel):
    """Nutritional fields of a meal before it gets an id and timestamp."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0.0, strict=True, allow_inf_nan=False)
    protein: float = Field(ge=0.0, strict=True, allow_inf_nan=False)
    carbs: float = Field(ge=0.0, strict=True, allow_inf_nan=False)
    fat: float = Field(ge=0.0, strict=True, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


@dataclass(frozen=True)
class Meal:
    """A logged meal. Id and timestamp never change after creation."""

    id: str
    timestamp: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DailyLog:
    """Meals logged on one calendar day, in entry order."""

    date: str
    meals: tuple[Meal, ...] = ()


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros for a day."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DaySummary:
    """History entry for one logged day."""

    date: str
    totals: DailyTotals
    meal_count: int
