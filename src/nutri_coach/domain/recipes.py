"""Models for recommended recipes."""

from pydantic import BaseModel, ConfigDict


class Recipe(BaseModel):
    """A recipe suggestion returned by the inference service."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    title: str
    description: str
    ingredients: list[str]
    steps: list[str]
    calories: float
    protein: float
    carbs: float
    fat: float
    time: str
