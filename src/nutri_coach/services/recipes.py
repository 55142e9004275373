"""Personalized recipe recommendations."""

import json
import logging
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from nutri_coach.domain.profile import UserProfile
from nutri_coach.domain.recipes import Recipe
from nutri_coach.services.inference import InferenceClient, TextPart

_logger = logging.getLogger(__name__)

RECIPE_COUNT = 4

_RECIPE_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "description": {"type": "string"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "steps": {"type": "array", "items": {"type": "string"}},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
        "time": {"type": "string"},
    },
    "required": [
        "id",
        "title",
        "description",
        "ingredients",
        "steps",
        "calories",
        "protein",
        "carbs",
        "fat",
        "time",
    ],
    "additionalProperties": False,
}

# Structured outputs require an object at the root.
RECIPES_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"recipes": {"type": "array", "items": _RECIPE_ITEM_SCHEMA}},
    "required": ["recipes"],
    "additionalProperties": False,
}

_RECIPE_LIST = TypeAdapter(list[Recipe])


@dataclass
class RecipeService:
    """Fetches recipe suggestions tailored to a profile."""

    client: InferenceClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def fetch(self, profile: UserProfile) -> list[Recipe]:
        """Return recipes for the profile, or an empty list on any failure."""
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                parts=[TextPart(text=build_recipe_prompt(profile))],
                schema=RECIPES_SCHEMA,
                schema_name="recipe_batch",
            )
        except Exception:
            _logger.exception("Recipe fetch failed during inference call")
            return []
        if not raw or not raw.strip():
            _logger.warning("Recipe fetch returned an empty response")
            return []
        try:
            recipes = parse_recipes(raw)
        except (json.JSONDecodeError, ValidationError) as exc:
            _logger.warning("Recipe fetch returned an invalid payload: %s", exc)
            return []
        _logger.info("Recipes fetched: count=%s", len(recipes))
        return recipes


def build_recipe_prompt(profile: UserProfile) -> str:
    """Build the recipe request from diet, goal and health conditions."""
    conditions = ", ".join(profile.health_conditions)
    return (
        f"Generate {RECIPE_COUNT} short recipes for: Diet {profile.diet_type}, "
        f"Goal {profile.goal.value}, Health: {conditions}. JSON ARRAY."
    )


def parse_recipes(raw: str) -> list[Recipe]:
    """Validate a bare recipe array or a ``{"recipes": [...]}`` wrapper."""
    payload = json.loads(raw.strip())
    if isinstance(payload, dict) and "recipes" in payload:
        payload = payload["recipes"]
    return _RECIPE_LIST.validate_python(payload)
