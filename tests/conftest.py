"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from nutri_coach.config import Settings
from nutri_coach.containers import AppContainer
from nutri_coach.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from nutri_coach.services.goals import build_profile
from nutri_coach.services.inference import InferenceClient, Part
from nutri_coach.services.ingestion import MealIngestionService
from nutri_coach.services.persistence import KeyValueStore, StatePersistence
from nutri_coach.services.recipes import RecipeService
from nutri_coach.services.state import StateStore

MEAL_PAYLOAD = json.dumps(
    {"name": "Chicken salad", "calories": 420, "protein": 35, "carbs": 12, "fat": 24}
)

RECIPE_ITEM: dict[str, object] = {
    "id": "r1",
    "title": "Lentil bowl",
    "description": "Warm lentils with roasted vegetables",
    "ingredients": ["lentils", "carrot", "olive oil"],
    "steps": ["Boil lentils", "Roast carrot", "Combine"],
    "calories": 520,
    "protein": 28,
    "carbs": 70,
    "fat": 14,
    "time": "25 min",
}


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: int = 0
    fail_reads: bool = False
    fail_writes: bool = False

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise RuntimeError("storage unavailable")
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise RuntimeError("storage unavailable")
        self.writes += 1
        self.values[key] = value


@dataclass
class FakeInferenceClient(InferenceClient):
    """Fake inference client returning a fixed reply and recording calls."""

    reply: str = MEAL_PAYLOAD
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        parts: list[Part],
        schema: dict[str, object],
        schema_name: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "reasoning_effort": reasoning_effort,
                "parts": parts,
                "schema": schema,
                "schema_name": schema_name,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


def make_profile(**overrides: object) -> UserProfile:
    values: dict[str, object] = {
        "gender": Gender.MALE,
        "age": 30,
        "height": 175,
        "weight": 70,
        "activity_level": ActivityLevel.MODERATE,
        "goal": Goal.MAINTAIN,
        "diet_type": "Mediterranean",
        "health_conditions": ["Lactose intolerance"],
    }
    values.update(overrides)
    return build_profile(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(openai_api_key="openai-key", state_dir=tmp_path / "state")


@pytest.fixture
def key_value_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def meal_client() -> FakeInferenceClient:
    return FakeInferenceClient()


@pytest.fixture
def recipe_client() -> FakeInferenceClient:
    return FakeInferenceClient(reply=json.dumps({"recipes": [RECIPE_ITEM]}))


@pytest.fixture
def container(
    settings: Settings,
    key_value_store: InMemoryKeyValueStore,
    meal_client: FakeInferenceClient,
    recipe_client: FakeInferenceClient,
) -> AppContainer:
    persistence = StatePersistence(key_value_store)
    ingestion_service = MealIngestionService(
        client=meal_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    recipe_service = RecipeService(
        client=recipe_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_recipe_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        persistence=persistence,
        state_store=StateStore(sink=persistence, state=persistence.load()),
        ingestion_service=ingestion_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
