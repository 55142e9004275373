"""Tests for container wiring."""

import asyncio

from nutri_coach.adapters.file_state_store import FileStateStore
from nutri_coach.containers import build_container
from nutri_coach.domain.state import default_state


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.persistence.store, FileStateStore)
    assert container.state_store.state == default_state()
    assert container.ingestion_service.model == settings.openai_model
    assert container.recipe_service.reasoning_effort is None
    asyncio.run(container.close_resources())
