"""Domain models for routine snapshots and versions."""

from dataclasses import MISSING, asdict, dataclass, field, fields
from datetime import datetime
from uuid import UUID

SUPPLEMENT = "supplement"
EQUIPMENT = "equipment"
SCHEDULE_ITEM = "schedule_item"
ROUTINE = "routine"

UNTRACKED_DIET = "untracked"
MACRO_FIELDS = ("protein_g", "carbs_g", "fat_g")


def snapshot_item_id(source: str, source_id: object) -> str:
    """Return the stable snapshot id for a source record."""
    return f"{source}-{source_id}"


@dataclass(frozen=True)
class SnapshotItem:
    """Scheduled item shared by every source family."""

    id: str
    source: str
    source_id: str
    name: str
    timing: str | None
    frequency: str
    frequency_days: list[str] | None

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape of the item."""
        return asdict(self)

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "SnapshotItem":
        """Parse a stored item, dispatching on its source family."""
        item_type = _ITEM_TYPES.get(str(row.get("source")), cls)
        values: dict[str, object] = {}
        for item_field in fields(item_type):
            if item_field.name in row:
                values[item_field.name] = row[item_field.name]
            elif (
                item_field.default is MISSING
                and item_field.default_factory is MISSING
            ):
                values[item_field.name] = None
        return item_type(**values)


@dataclass(frozen=True)
class SupplementItem(SnapshotItem):
    """Supplement taken at one or more timings."""

    timings: list[str] | None = None
    category: str | None = None
    intake_quantity: float | None = None
    intake_form: str | None = None


@dataclass(frozen=True)
class EquipmentItem(SnapshotItem):
    """Equipment used on a schedule."""

    duration: str | None = None


@dataclass(frozen=True)
class ScheduleEntryItem(SnapshotItem):
    """Scheduled exercise or meal."""

    item_type: str | None = None
    exercise_type: str | None = None
    meal_type: str | None = None
    duration: str | None = None


@dataclass(frozen=True)
class RoutineStepItem(SnapshotItem):
    """Step of a user-defined routine."""

    duration: str | None = None


_ITEM_TYPES: dict[str, type[SnapshotItem]] = {
    SUPPLEMENT: SupplementItem,
    EQUIPMENT: EquipmentItem,
    SCHEDULE_ITEM: ScheduleEntryItem,
    ROUTINE: RoutineStepItem,
}


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in grams."""

    protein_g: int | None = None
    carbs_g: int | None = None
    fat_g: int | None = None


@dataclass(frozen=True)
class DietSnapshot:
    """Point-in-time copy of the user's diet settings."""

    type: str = UNTRACKED_DIET
    type_other: str | None = None
    macros: MacroTargets = field(default_factory=MacroTargets)

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape of the diet."""
        return asdict(self)

    @classmethod
    def from_dict(cls, row: dict[str, object] | None) -> "DietSnapshot":
        """Parse a stored diet, falling back to untracked."""
        if not row:
            return cls()
        macros = row.get("macros") or {}
        return cls(
            type=str(row.get("type") or UNTRACKED_DIET),
            type_other=row.get("type_other"),
            macros=MacroTargets(
                protein_g=macros.get("protein_g"),
                carbs_g=macros.get("carbs_g"),
                fat_g=macros.get("fat_g"),
            ),
        )


@dataclass(frozen=True)
class RoutineSnapshot:
    """Diet plus every scheduled item at one moment."""

    diet: DietSnapshot
    items: list[SnapshotItem]

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape of the snapshot."""
        return {
            "diet": self.diet.to_dict(),
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "RoutineSnapshot":
        """Parse a stored snapshot."""
        return cls(
            diet=DietSnapshot.from_dict(row.get("diet")),
            items=[SnapshotItem.from_dict(item) for item in row.get("items") or []],
        )


@dataclass(frozen=True)
class ValueChange:
    """Before and after values of a single setting."""

    from_value: object
    to_value: object

    def to_dict(self) -> dict[str, object]:
        return {"from": self.from_value, "to": self.to_value}

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "ValueChange":
        return cls(from_value=row.get("from"), to_value=row.get("to"))


@dataclass(frozen=True)
class FieldChange:
    """Change of one tracked field on an item."""

    field: str
    from_value: object
    to_value: object

    def to_dict(self) -> dict[str, object]:
        return {"field": self.field, "from": self.from_value, "to": self.to_value}


@dataclass(frozen=True)
class ModifiedItem:
    """Item present in both snapshots with differing schedule fields."""

    item: SnapshotItem
    changes: list[FieldChange]

    def to_dict(self) -> dict[str, object]:
        return {
            "item": self.item.to_dict(),
            "changes": [change.to_dict() for change in self.changes],
        }


@dataclass(frozen=True)
class RoutineChanges:
    """Delta between two routine snapshots."""

    diet_changed: ValueChange | None = None
    macros_changed: dict[str, ValueChange] | None = None
    started: list[SnapshotItem] = field(default_factory=list)
    stopped: list[SnapshotItem] = field(default_factory=list)
    modified: list[ModifiedItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape of the changes."""
        return {
            "diet_changed": self.diet_changed.to_dict()
            if self.diet_changed
            else None,
            "macros_changed": {
                name: change.to_dict() for name, change in self.macros_changed.items()
            }
            if self.macros_changed is not None
            else None,
            "started": [item.to_dict() for item in self.started],
            "stopped": [item.to_dict() for item in self.stopped],
            "modified": [entry.to_dict() for entry in self.modified],
        }

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "RoutineChanges":
        """Parse stored changes."""
        diet_changed = row.get("diet_changed")
        macros_changed = row.get("macros_changed")
        return cls(
            diet_changed=ValueChange.from_dict(diet_changed) if diet_changed else None,
            macros_changed={
                name: ValueChange.from_dict(change)
                for name, change in macros_changed.items()
            }
            if macros_changed is not None
            else None,
            started=[SnapshotItem.from_dict(item) for item in row.get("started") or []],
            stopped=[SnapshotItem.from_dict(item) for item in row.get("stopped") or []],
            modified=[
                ModifiedItem(
                    item=SnapshotItem.from_dict(entry["item"]),
                    changes=[
                        FieldChange(
                            field=change["field"],
                            from_value=change.get("from"),
                            to_value=change.get("to"),
                        )
                        for change in entry.get("changes") or []
                    ],
                )
                for entry in row.get("modified") or []
            ],
        )


@dataclass(frozen=True)
class RoutineVersion:
    """Persisted, numbered routine snapshot with its diff."""

    id: UUID
    user_id: str
    version_number: int
    snapshot: RoutineSnapshot
    changes: RoutineChanges
    reason: str | None
    created_at: datetime

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape of the version."""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "version_number": self.version_number,
            "snapshot": self.snapshot.to_dict(),
            "changes": self.changes.to_dict(),
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
        }
