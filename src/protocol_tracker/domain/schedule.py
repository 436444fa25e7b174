"""Scheduled exercises and meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

EXERCISE = "exercise"
MEAL = "meal"

ITEM_TYPES = (EXERCISE, MEAL)
TIMINGS = ("wake_up", "am", "lunch", "pm", "dinner", "evening", "bed")
FREQUENCIES = ("daily", "every_other_day", "custom", "as_needed")
EXERCISE_TYPES = (
    "hiit",
    "run",
    "bike",
    "swim",
    "strength",
    "yoga",
    "walk",
    "stretch",
    "sports",
    "other",
)
MEAL_TYPES = ("meal", "protein_shake", "snack")


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


@dataclass(frozen=True)
class ScheduleItem:
    """An exercise or meal the user does at a set time."""

    id: UUID
    user_id: str
    item_type: str
    name: str
    timing: str | None
    frequency: str | None
    frequency_days: list[str] | None
    exercise_type: str | None
    meal_type: str | None
    duration: str | None
    notes: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "item_type": self.item_type,
            "name": self.name,
            "timing": self.timing,
            "frequency": self.frequency,
            "frequency_days": self.frequency_days,
            "exercise_type": self.exercise_type,
            "meal_type": self.meal_type,
            "duration": self.duration,
            "notes": self.notes,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "ScheduleItem":
        """Parse a ``schedule_items`` row."""
        return cls(
            id=UUID(str(row["id"])),
            user_id=str(row["user_id"]),
            item_type=str(row["item_type"]),
            name=str(row.get("name") or ""),
            timing=row.get("timing"),
            frequency=row.get("frequency"),
            frequency_days=row.get("frequency_days"),
            exercise_type=row.get("exercise_type"),
            meal_type=row.get("meal_type"),
            duration=row.get("duration"),
            notes=row.get("notes"),
            is_active=row.get("is_active") is not False,
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )
