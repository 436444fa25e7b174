"""Snapshot builder for a user's current routine."""

import logging
from dataclasses import dataclass
from typing import Protocol

from protocol_tracker.domain.routines import (
    EQUIPMENT,
    ROUTINE,
    SCHEDULE_ITEM,
    SUPPLEMENT,
    UNTRACKED_DIET,
    DietSnapshot,
    EquipmentItem,
    MacroTargets,
    RoutineSnapshot,
    RoutineStepItem,
    ScheduleEntryItem,
    SnapshotItem,
    SupplementItem,
    snapshot_item_id,
)

_logger = logging.getLogger(__name__)

DEFAULT_DIET_ROW: dict[str, object] = {
    "diet_type": UNTRACKED_DIET,
    "diet_type_other": None,
    "target_protein_g": None,
    "target_carbs_g": None,
    "target_fat_g": None,
}


class RoutineSourceRepository(Protocol):
    """Read interface over the tables that feed a routine snapshot."""

    def get_diet(self, user_id: str) -> dict[str, object] | None:
        """Return the user's diet settings row, if any."""

    def list_active_supplements(self, user_id: str) -> list[dict[str, object]]:
        """Return supplements flagged active."""

    def list_active_equipment(self, user_id: str) -> list[dict[str, object]]:
        """Return equipment flagged active."""

    def list_active_schedule_items(self, user_id: str) -> list[dict[str, object]]:
        """Return exercises and meals flagged active."""

    def list_routines(self, user_id: str) -> list[dict[str, object]]:
        """Return routines with their items embedded under ``items``."""


@dataclass
class SnapshotBuilder:
    """Assemble the routine snapshot from every scheduled source."""

    repository: RoutineSourceRepository

    def build(self, user_id: str) -> RoutineSnapshot:
        """Read the user's current protocol without writing anything."""
        diet_row = self.repository.get_diet(user_id) or DEFAULT_DIET_ROW
        supplements = [
            row
            for row in self.repository.list_active_supplements(user_id)
            if row.get("timings")
        ]
        equipment = [
            row
            for row in self.repository.list_active_equipment(user_id)
            if row.get("usage_timing")
        ]
        schedule_items = [
            row
            for row in self.repository.list_active_schedule_items(user_id)
            if row.get("timing")
        ]
        routine_items = [
            item
            for routine in self.repository.list_routines(user_id)
            for item in routine.get("items") or []
        ]

        items: list[SnapshotItem] = [
            *(_supplement_item(row) for row in supplements),
            *(_equipment_item(row) for row in equipment),
            *(_schedule_item(row) for row in schedule_items),
            *(_routine_item(row) for row in routine_items),
        ]
        _logger.debug(
            "Built routine snapshot",
            extra={"user_id": user_id, "item_count": len(items)},
        )
        return RoutineSnapshot(diet=_diet_snapshot(diet_row), items=items)


def _diet_snapshot(row: dict[str, object]) -> DietSnapshot:
    return DietSnapshot(
        type=row.get("diet_type") or UNTRACKED_DIET,
        type_other=row.get("diet_type_other"),
        macros=MacroTargets(
            protein_g=row.get("target_protein_g"),
            carbs_g=row.get("target_carbs_g"),
            fat_g=row.get("target_fat_g"),
        ),
    )


def _supplement_item(row: dict[str, object]) -> SupplementItem:
    timings = row.get("timings")
    return SupplementItem(
        id=snapshot_item_id(SUPPLEMENT, row["id"]),
        source=SUPPLEMENT,
        source_id=row["id"],
        name=row.get("name"),
        timing=timings[0] if timings else None,
        timings=timings,
        frequency=row.get("frequency") or "daily",
        frequency_days=row.get("frequency_days"),
        category=row.get("category"),
        intake_quantity=row.get("intake_quantity"),
        intake_form=row.get("intake_form"),
    )


def _equipment_item(row: dict[str, object]) -> EquipmentItem:
    return EquipmentItem(
        id=snapshot_item_id(EQUIPMENT, row["id"]),
        source=EQUIPMENT,
        source_id=row["id"],
        name=row.get("name"),
        timing=row.get("usage_timing"),
        frequency=row.get("usage_frequency") or "daily",
        frequency_days=None,
        duration=row.get("usage_duration"),
    )


def _schedule_item(row: dict[str, object]) -> ScheduleEntryItem:
    return ScheduleEntryItem(
        id=snapshot_item_id(SCHEDULE_ITEM, row["id"]),
        source=SCHEDULE_ITEM,
        source_id=row["id"],
        name=row.get("name"),
        timing=row.get("timing"),
        frequency=row.get("frequency"),
        frequency_days=row.get("frequency_days"),
        item_type=row.get("item_type"),
        exercise_type=row.get("exercise_type"),
        meal_type=row.get("meal_type"),
        duration=row.get("duration"),
    )


def _routine_item(row: dict[str, object]) -> RoutineStepItem:
    return RoutineStepItem(
        id=snapshot_item_id(ROUTINE, row["id"]),
        source=ROUTINE,
        source_id=row["id"],
        name=row.get("title"),
        timing=row.get("time"),
        frequency="daily",
        frequency_days=row.get("days"),
        duration=row.get("duration"),
    )
