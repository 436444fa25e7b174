"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from protocol_tracker.adapters.supabase_errors import execute
from protocol_tracker.domain.models import UserRecord
from protocol_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user row, if present."""
        response = execute(
            self.client.table("users")
            .select("id, email, is_active")
            .eq("id", user_id)
            .limit(1),
            "load user",
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            id=str(row["id"]),
            email=row.get("email"),
            is_active=row.get("is_active") is not False,
        )

    def touch_last_login(self, user_id: str) -> None:
        """Update the updated_at timestamp for a user."""
        execute(
            self.client.table("users")
            .update({"updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", user_id),
            "touch user",
        )
