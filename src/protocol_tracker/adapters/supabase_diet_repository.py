"""Supabase repository for diet settings."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from protocol_tracker.adapters.supabase_errors import execute
from protocol_tracker.domain.diet import DietSettings
from protocol_tracker.errors import DatastoreError
from protocol_tracker.services.diet import DietRepository


@dataclass
class SupabaseDietRepository(DietRepository):
    """Supabase implementation for diet settings."""

    client: Client

    def get_diet(self, user_id: str) -> DietSettings | None:
        """Return the stored diet settings for a user."""
        response = execute(
            self.client.table("user_diet")
            .select("*")
            .eq("user_id", user_id)
            .limit(1),
            "load diet settings",
        )
        if not response.data:
            return None
        return _parse_diet(response.data[0])

    def create_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        """Insert a diet settings row."""
        response = execute(
            self.client.table("user_diet").insert(
                {
                    **values,
                    "user_id": user_id,
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            ),
            "create diet settings",
        )
        if not response.data:
            raise DatastoreError("Failed to create diet settings")
        return _parse_diet(response.data[0])

    def update_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        """Update the user's diet settings."""
        response = execute(
            self.client.table("user_diet")
            .update({**values, "updated_at": now.isoformat()})
            .eq("user_id", user_id),
            "update diet settings",
        )
        if not response.data:
            raise DatastoreError("Failed to update diet settings")
        return _parse_diet(response.data[0])


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _parse_diet(row: dict[str, object]) -> DietSettings:
    return DietSettings(
        id=UUID(row["id"]),
        user_id=str(row["user_id"]),
        diet_type=str(row.get("diet_type") or "untracked"),
        diet_type_other=row.get("diet_type_other"),
        target_protein_g=row.get("target_protein_g"),
        target_carbs_g=row.get("target_carbs_g"),
        target_fat_g=row.get("target_fat_g"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
