"""Diet settings domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DIET_TYPES = (
    "untracked",
    "standard",
    "keto",
    "carnivore",
    "vegan",
    "vegetarian",
    "mediterranean",
    "paleo",
    "low_fodmap",
    "other",
)


@dataclass(frozen=True)
class DietSettings:
    """A user's stored diet type and macro targets."""

    id: UUID
    user_id: str
    diet_type: str
    diet_type_other: str | None
    target_protein_g: int | None
    target_carbs_g: int | None
    target_fat_g: int | None
    created_at: datetime | None
    updated_at: datetime | None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "diet_type": self.diet_type,
            "diet_type_other": self.diet_type_other,
            "target_protein_g": self.target_protein_g,
            "target_carbs_g": self.target_carbs_g,
            "target_fat_g": self.target_fat_g,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
