"""Supabase reads over the equipment table."""

from dataclasses import dataclass

from supabase import Client

from protocol_tracker.adapters.supabase_errors import execute
from protocol_tracker.domain.equipment import EquipmentSummary
from protocol_tracker.services.equipment import EquipmentRepository


@dataclass
class SupabaseEquipmentRepository(EquipmentRepository):
    """Supabase implementation for equipment lookups."""

    client: Client

    def list_equipment(
        self, user_id: str, exclude_id: str | None = None
    ) -> list[EquipmentSummary]:
        """Return the user's equipment, optionally skipping one row."""
        query = (
            self.client.table("equipment")
            .select("id, name, brand, model")
            .eq("user_id", user_id)
        )
        if exclude_id:
            query = query.neq("id", exclude_id)
        response = execute(query, "list equipment")
        return [
            EquipmentSummary(
                id=str(row["id"]),
                name=str(row.get("name") or ""),
                brand=row.get("brand"),
                model=row.get("model"),
            )
            for row in response.data or []
        ]
