"""Supabase reads for the tables that feed routine snapshots."""

from dataclasses import dataclass

from supabase import Client

from protocol_tracker.adapters.supabase_errors import execute
from protocol_tracker.services.snapshots import RoutineSourceRepository


@dataclass
class SupabaseRoutineSourceRepository(RoutineSourceRepository):
    """Supabase implementation for snapshot source reads."""

    client: Client

    def get_diet(self, user_id: str) -> dict[str, object] | None:
        """Return the user's diet settings row, if any."""
        response = execute(
            self.client.table("user_diet")
            .select("*")
            .eq("user_id", user_id)
            .limit(1),
            "load diet settings",
        )
        if not response.data:
            return None
        return response.data[0]

    def list_active_supplements(self, user_id: str) -> list[dict[str, object]]:
        """Return supplements flagged active."""
        return self._list_active("supplements", user_id)

    def list_active_equipment(self, user_id: str) -> list[dict[str, object]]:
        """Return equipment flagged active."""
        return self._list_active("equipment", user_id)

    def list_active_schedule_items(self, user_id: str) -> list[dict[str, object]]:
        """Return exercises and meals flagged active."""
        return self._list_active("schedule_items", user_id)

    def list_routines(self, user_id: str) -> list[dict[str, object]]:
        """Return routines with their items embedded."""
        response = execute(
            self.client.table("routines")
            .select("*, items:routine_items(*)")
            .eq("user_id", user_id),
            "load routines",
        )
        return response.data or []

    def _list_active(self, table: str, user_id: str) -> list[dict[str, object]]:
        response = execute(
            self.client.table(table)
            .select("*")
            .eq("user_id", user_id)
            .eq("is_active", True),
            f"load {table}",
        )
        return response.data or []
