"""Request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from nutri_coach.domain.profile import ActivityLevel, Gender, Goal


class ProfileRequest(BaseModel):
    """Onboarding or profile edit payload."""

    model_config = ConfigDict(allow_inf_nan=False)

    gender: Gender = Gender.MALE
    age: float = 0
    height: float = 0
    weight: float = 0
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: Goal = Goal.MAINTAIN
    diet_type: str = "None"
    health_conditions: list[str] = Field(default_factory=list)


class IngestRequest(BaseModel):
    """Multimodal meal input with base64 media."""

    text: str | None = None
    image: str | None = None
    audio: str | None = None


class ConditionToggleRequest(BaseModel):
    """Current onboarding selection plus the condition label being toggled."""

    conditions: list[str] = Field(default_factory=list)
    condition: str = Field(min_length=1)
