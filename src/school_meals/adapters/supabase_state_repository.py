"""Supabase repository for serialized store state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from school_meals.services.state import StateStore


@dataclass
class SupabaseStateStore(StateStore):
    """Supabase implementation keeping one row per state key."""

    client: Client
    table_name: str = "app_state"

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key."""
        response = (
            self.client.table(self.table_name)
            .select("blob")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        blob = response.data[0].get("blob")
        return str(blob) if blob is not None else None

    def save(self, key: str, blob: str) -> None:
        """Insert or replace the blob for a key."""
        self.client.table(self.table_name).upsert(
            {
                "key": key,
                "blob": blob,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
