"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder

from nutri_coach.api.models import (
    ConditionToggleRequest,
    IngestRequest,
    ProfileRequest,
)
from nutri_coach.app_logging import configure_logging
from nutri_coach.containers import AppContainer
from nutri_coach.domain.meals import MealDraft
from nutri_coach.domain.profile import UserProfile
from nutri_coach.domain.state import AppState
from nutri_coach.services import logs as meal_logs
from nutri_coach.services.goals import (
    DIET_SUGGESTIONS,
    HEALTH_CONDITION_SUGGESTIONS,
    NO_CONDITIONS,
    build_profile,
    is_physical_data_complete,
    toggle_health_condition,
)
from nutri_coach.services.ingestion import MultimodalInput
from nutri_coach.services.state import (
    AddMeal,
    ClearProfile,
    CompleteProfile,
    RemoveMeal,
    ReplaceRecipes,
    UpdateMeal,
)

UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def get_state(request: Request) -> dict[str, object]:
        """Return the full application state."""
        state = _container(request).state_store.state
        return {"is_onboarded": state.is_onboarded, **jsonable_encoder(state)}

    @app.put("/profile")
    async def put_profile(
        payload: ProfileRequest, request: Request, background_tasks: BackgroundTasks
    ) -> dict[str, object]:
        """Complete onboarding or replace the profile wholesale."""
        state_container = _container(request)
        if not is_physical_data_complete(payload.age, payload.height, payload.weight):
            raise HTTPException(
                status_code=UNPROCESSABLE,
                detail="Please fill in your physical data correctly.",
            )
        profile = build_profile(
            gender=payload.gender,
            age=payload.age,
            height=payload.height,
            weight=payload.weight,
            activity_level=payload.activity_level,
            goal=payload.goal,
            diet_type=payload.diet_type,
            health_conditions=payload.health_conditions,
        )
        state_container.state_store.dispatch(CompleteProfile(profile))
        background_tasks.add_task(_refresh_recipes, state_container, profile)
        return {"profile": jsonable_encoder(profile)}

    @app.get("/profile/options")
    async def get_profile_options() -> dict[str, object]:
        """Return the onboarding choice lists."""
        return {
            "diets": list(DIET_SUGGESTIONS),
            "health_conditions": list(HEALTH_CONDITION_SUGGESTIONS),
            "no_conditions": NO_CONDITIONS,
        }

    @app.post("/profile/conditions/toggle")
    async def toggle_condition(payload: ConditionToggleRequest) -> dict[str, object]:
        """Apply one condition toggle to an onboarding selection."""
        conditions = toggle_health_condition(payload.conditions, payload.condition)
        return {"health_conditions": list(conditions)}

    @app.delete("/profile")
    async def delete_profile(request: Request) -> dict[str, object]:
        """Clear the profile and return to onboarding."""
        state = _container(request).state_store.dispatch(ClearProfile())
        return {"is_onboarded": state.is_onboarded}

    @app.get("/today")
    async def get_today(request: Request) -> dict[str, object]:
        """Return today's meals, totals and remaining calories."""
        state_container = _container(request)
        return _today_view(state_container, state_container.state_store.state)

    @app.get("/history")
    async def get_history(
        request: Request, limit: int = meal_logs.HISTORY_DAYS
    ) -> dict[str, object]:
        """Return per-day totals for the most recent logged days."""
        state = _container(request).state_store.state
        profile = _require_profile(state)
        return {
            "target_calories": profile.targets.target_calories,
            "days": jsonable_encoder(meal_logs.history(state.logs, limit)),
        }

    @app.post("/meals")
    async def add_meal(draft: MealDraft, request: Request) -> dict[str, object]:
        """Log a meal for today."""
        state_container = _container(request)
        _require_profile(state_container.state_store.state)
        action = AddMeal.create(_today(state_container), draft)
        state = state_container.state_store.dispatch(action)
        return _today_view(state_container, state)

    @app.put("/meals/{meal_id}")
    async def update_meal(
        meal_id: str, draft: MealDraft, request: Request
    ) -> dict[str, object]:
        """Edit one of today's meals in place."""
        state_container = _container(request)
        _require_profile(state_container.state_store.state)
        state = state_container.state_store.dispatch(
            UpdateMeal(date_key=_today(state_container), meal_id=meal_id, draft=draft)
        )
        return _today_view(state_container, state)

    @app.delete("/meals/{meal_id}")
    async def remove_meal(meal_id: str, request: Request) -> dict[str, object]:
        """Remove one of today's meals."""
        state_container = _container(request)
        _require_profile(state_container.state_store.state)
        state = state_container.state_store.dispatch(
            RemoveMeal(date_key=_today(state_container), meal_id=meal_id)
        )
        return _today_view(state_container, state)

    @app.post("/meals/ingest")
    async def ingest_meal(
        payload: IngestRequest, request: Request
    ) -> dict[str, object]:
        """Estimate a meal from text, photo or voice without logging it."""
        state_container = _container(request)
        result = await state_container.ingestion_service.ingest(
            MultimodalInput(text=payload.text, image=payload.image, audio=payload.audio)
        )
        if not result.ok:
            raise HTTPException(
                status_code=UNPROCESSABLE,
                detail=result.message,
            )
        return {"draft": jsonable_encoder(result.draft)}

    @app.get("/recipes")
    async def get_recipes(request: Request) -> dict[str, object]:
        """Return the current recipe recommendations."""
        state = _container(request).state_store.state
        return {"recipes": jsonable_encoder(state.recommended_recipes)}

    @app.post("/recipes/refresh")
    async def refresh_recipes(request: Request) -> dict[str, object]:
        """Fetch a new recommendation batch for the current profile."""
        state_container = _container(request)
        profile = _require_profile(state_container.state_store.state)
        state = await _refresh_recipes(state_container, profile)
        return {"recipes": jsonable_encoder(state.recommended_recipes)}

    return app


async def _refresh_recipes(container: AppContainer, profile: UserProfile) -> AppState:
    recipes = await container.recipe_service.fetch(profile)
    return container.state_store.dispatch(
        ReplaceRecipes(recipes=tuple(recipes), requested_for=profile)
    )


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _today(container: AppContainer) -> str:
    return meal_logs.today_key(container.settings.timezone)


def _require_profile(state: AppState) -> UserProfile:
    if state.profile is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Onboarding is pending."
        )
    return state.profile


def _today_view(container: AppContainer, state: AppState) -> dict[str, object]:
    profile = _require_profile(state)
    date_key = _today(container)
    log = state.logs.get(date_key)
    totals = meal_logs.daily_totals(log)
    return {
        "date": date_key,
        "meals": jsonable_encoder(log.meals if log else ()),
        "totals": jsonable_encoder(totals),
        "targets": jsonable_encoder(profile.targets),
        "remaining_calories": meal_logs.remaining_calories(profile.targets, totals),
        "streak": state.streak,
    }
