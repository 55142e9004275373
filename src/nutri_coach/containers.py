"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutri_coach.adapters.file_state_store import FileStateStore
from nutri_coach.adapters.openai_inference_client import OpenAIInferenceClient
from nutri_coach.adapters.supabase_state_store import SupabaseStateStore
from nutri_coach.config import Settings
from nutri_coach.services.ingestion import MealIngestionService
from nutri_coach.services.persistence import KeyValueStore, StatePersistence
from nutri_coach.services.recipes import RecipeService
from nutri_coach.services.state import StateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    persistence: StatePersistence
    state_store: StateStore
    ingestion_service: MealIngestionService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    persistence = StatePersistence(_build_key_value_store(resolved_settings))
    state_store = StateStore(sink=persistence, state=persistence.load())
    inference_client = OpenAIInferenceClient.create(resolved_settings.openai_api_key)
    ingestion_service = MealIngestionService(
        client=inference_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    recipe_service = RecipeService(
        client=inference_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_recipe_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await inference_client.close()

    return AppContainer(
        settings=resolved_settings,
        persistence=persistence,
        state_store=state_store,
        ingestion_service=ingestion_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )


def _build_key_value_store(settings: Settings) -> KeyValueStore:
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateStore(client)
    return FileStateStore(settings.state_dir)
