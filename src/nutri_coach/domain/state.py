"""Root application state."""

from dataclasses import dataclass, field

from nutri_coach.domain.meals import DailyLog
from nutri_coach.domain.profile import UserProfile
from nutri_coach.domain.recipes import Recipe


@dataclass(frozen=True)
class AppState:
    """Single source of truth for the application.

    A ``profile`` of ``None`` means onboarding is still pending.
    """

    profile: UserProfile | None = None
    logs: dict[str, DailyLog] = field(default_factory=dict)
    streak: int = 0
    recommended_recipes: tuple[Recipe, ...] = ()

    @property
    def is_onboarded(self) -> bool:
        """Return True once a profile has been completed."""
        return self.profile is not None


def default_state() -> AppState:
    """Return the canonical empty state."""
    return AppState()
