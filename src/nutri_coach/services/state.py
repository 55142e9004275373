"""State container with pure reducer transitions."""

import logging
from dataclasses import dataclass, field, replace
from typing import Protocol

from nutri_coach.domain.meals import MealDraft
from nutri_coach.domain.profile import UserProfile
from nutri_coach.domain.recipes import Recipe
from nutri_coach.domain.state import AppState
from nutri_coach.services import logs as meal_logs

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompleteProfile:
    """Install a new profile, replacing any previous one."""

    profile: UserProfile


@dataclass(frozen=True)
class ClearProfile:
    """Remove the profile and return to onboarding."""


@dataclass(frozen=True)
class AddMeal:
    """Append a meal to a day's log."""

    date_key: str
    draft: MealDraft
    meal_id: str
    timestamp: int

    @classmethod
    def create(cls, date_key: str, draft: MealDraft) -> "AddMeal":
        """Build the action with a fresh id and the current timestamp."""
        return cls(
            date_key=date_key,
            draft=draft,
            meal_id=meal_logs.new_meal_id(),
            timestamp=meal_logs.now_millis(),
        )


@dataclass(frozen=True)
class UpdateMeal:
    """Replace the nutritional fields of an existing meal."""

    date_key: str
    meal_id: str
    draft: MealDraft


@dataclass(frozen=True)
class RemoveMeal:
    """Delete a meal by id."""

    date_key: str
    meal_id: str


@dataclass(frozen=True)
class ReplaceRecipes:
    """Replace the recommendation list with a freshly fetched batch."""

    recipes: tuple[Recipe, ...]
    requested_for: UserProfile | None = None


Action = (
    CompleteProfile | ClearProfile | AddMeal | UpdateMeal | RemoveMeal | ReplaceRecipes
)


def reduce(state: AppState, action: Action) -> AppState:  # noqa: PLR0911
    """Return the state that results from applying ``action``."""
    if isinstance(action, CompleteProfile):
        return replace(state, profile=action.profile)
    if isinstance(action, ClearProfile):
        return replace(state, profile=None)
    if isinstance(action, AddMeal):
        logs = meal_logs.add_meal(
            state.logs,
            action.date_key,
            action.draft,
            meal_id=action.meal_id,
            timestamp=action.timestamp,
        )
        return replace(
            state, logs=logs, streak=meal_logs.compute_streak(logs, action.date_key)
        )
    if isinstance(action, UpdateMeal):
        logs = meal_logs.update_meal(
            state.logs, action.date_key, action.meal_id, action.draft
        )
        if logs is state.logs:
            return state
        return replace(state, logs=logs)
    if isinstance(action, RemoveMeal):
        logs = meal_logs.remove_meal(state.logs, action.date_key, action.meal_id)
        if logs is state.logs:
            return state
        return replace(
            state, logs=logs, streak=meal_logs.compute_streak(logs, action.date_key)
        )
    if isinstance(action, ReplaceRecipes):
        if action.requested_for is not None and action.requested_for != state.profile:
            return state
        return replace(state, recommended_recipes=action.recipes)
    raise TypeError(f"Unsupported action: {type(action).__name__}")


class StateSink(Protocol):
    """Destination for committed state snapshots."""

    def save(self, state: AppState) -> None:
        """Persist a full state snapshot."""


@dataclass
class StateStore:
    """Holds the current state and persists every committed change."""

    sink: StateSink
    state: AppState = field(default_factory=AppState)

    def dispatch(self, action: Action) -> AppState:
        """Apply an action to the latest state and persist the result."""
        next_state = reduce(self.state, action)
        if next_state is self.state:
            _logger.info("State unchanged: action=%s", type(action).__name__)
            return next_state
        self.state = next_state
        _logger.info("State committed: action=%s", type(action).__name__)
        self.sink.save(next_state)
        return next_state
