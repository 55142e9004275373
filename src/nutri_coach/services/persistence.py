"""Whole-state persistence in a single key-value slot."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from nutri_coach.domain.state import AppState, default_state
from nutri_coach.services.goals import rederive_profile

_logger = logging.getLogger(__name__)

STATE_SLOT = "nutri_app_state_v3"

_STATE_ADAPTER = TypeAdapter(AppState)


class KeyValueStore(Protocol):
    """Opaque durable key-value storage."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def write(self, key: str, value: str) -> None:
        """Overwrite the text stored under a key."""


@dataclass
class StatePersistence:
    """Loads and saves the full application state."""

    store: KeyValueStore
    slot: str = STATE_SLOT

    def load(self) -> AppState:
        """Return the stored state, or the default one if unusable."""
        try:
            raw = self.store.read(self.slot)
        except Exception:
            _logger.exception("State read failed, starting from defaults")
            return default_state()
        if raw is None:
            return default_state()
        try:
            state = _STATE_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            _logger.warning(
                "Stored state is corrupt, resetting: errors=%s", exc.error_count()
            )
            return default_state()
        if state.profile is not None:
            state = replace(state, profile=rederive_profile(state.profile))
        return state

    def save(self, state: AppState) -> None:
        """Write a full snapshot. Failures are logged, not raised."""
        try:
            self.store.write(self.slot, serialize_state(state))
        except Exception:
            _logger.exception("State write failed")


def serialize_state(state: AppState) -> str:
    """Return the JSON text for a state snapshot."""
    return _STATE_ADAPTER.dump_json(state).decode("utf-8")
