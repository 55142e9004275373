"""Supabase-backed key-value slot for application state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutri_coach.services.persistence import KeyValueStore


@dataclass
class SupabaseStateStore(KeyValueStore):
    """Supabase implementation storing one row per key."""

    client: Client
    table: str = "app_state"

    def read(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def write(self, key: str, value: str) -> None:
        """Insert or overwrite the row for a key."""
        response = (
            self.client.table(self.table)
            .upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to write app state to Supabase")
