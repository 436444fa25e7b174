"""Supabase repository for schedule items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from protocol_tracker.adapters.supabase_errors import execute
from protocol_tracker.domain.schedule import ScheduleItem
from protocol_tracker.errors import DatastoreError
from protocol_tracker.services.schedule_items import ScheduleItemRepository


@dataclass
class SupabaseScheduleItemRepository(ScheduleItemRepository):
    """Supabase implementation for exercises and meals."""

    client: Client

    def list_items(
        self,
        user_id: str,
        item_type: str | None,
        is_active: bool | None,
        limit: int,
    ) -> list[ScheduleItem]:
        """Return the user's items, newest first."""
        query = (
            self.client.table("schedule_items")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
        )
        if item_type:
            query = query.eq("item_type", item_type)
        if is_active is not None:
            query = query.eq("is_active", is_active)
        response = execute(query, "list schedule items")
        return [ScheduleItem.from_dict(row) for row in response.data or []]

    def get_item(self, user_id: str, item_id: UUID) -> ScheduleItem | None:
        """Return an item owned by the user, if present."""
        response = execute(
            self.client.table("schedule_items")
            .select("*")
            .eq("id", str(item_id))
            .eq("user_id", user_id)
            .limit(1),
            "load schedule item",
        )
        if not response.data:
            return None
        return ScheduleItem.from_dict(response.data[0])

    def create_item(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        """Insert a schedule item."""
        response = execute(
            self.client.table("schedule_items").insert(
                {
                    **values,
                    "user_id": user_id,
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            ),
            "create schedule item",
        )
        if not response.data:
            raise DatastoreError("Failed to create schedule item")
        return ScheduleItem.from_dict(response.data[0])

    def update_item(
        self, user_id: str, item_id: UUID, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        """Update a schedule item owned by the user."""
        response = execute(
            self.client.table("schedule_items")
            .update({**values, "updated_at": now.isoformat()})
            .eq("id", str(item_id))
            .eq("user_id", user_id),
            "update schedule item",
        )
        if not response.data:
            raise DatastoreError("Failed to update schedule item")
        return ScheduleItem.from_dict(response.data[0])

    def delete_item(self, user_id: str, item_id: UUID) -> None:
        """Delete a schedule item owned by the user."""
        execute(
            self.client.table("schedule_items")
            .delete()
            .eq("id", str(item_id))
            .eq("user_id", user_id),
            "delete schedule item",
        )
