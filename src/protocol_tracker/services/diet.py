"""Diet settings service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from protocol_tracker.domain.diet import DIET_TYPES, DietSettings
from protocol_tracker.domain.routines import UNTRACKED_DIET
from protocol_tracker.errors import ValidationError


class DietRepository(Protocol):
    """Persistence interface for diet settings."""

    def get_diet(self, user_id: str) -> DietSettings | None:
        """Return the user's diet settings, if present."""

    def create_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        """Insert a diet settings row and return it."""

    def update_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        """Update the user's diet settings row and return it."""


@dataclass
class DietService:
    """Service for reading and editing diet settings."""

    repository: DietRepository

    def get_or_create(self, user_id: str) -> DietSettings:
        """Return diet settings, creating the untracked default on first use."""
        existing = self.repository.get_diet(user_id)
        if existing:
            return existing
        return self.repository.create_diet(
            user_id, {"diet_type": UNTRACKED_DIET}, datetime.now(tz=UTC)
        )

    def update(self, user_id: str, values: dict[str, object]) -> DietSettings:
        """Apply the provided fields, creating the row when missing."""
        diet_type = values.get("diet_type")
        if diet_type and diet_type not in DIET_TYPES:
            raise ValidationError(
                f"Invalid diet_type. Must be one of: {', '.join(DIET_TYPES)}"
            )
        now = datetime.now(tz=UTC)
        if self.repository.get_diet(user_id) is None:
            return self.repository.create_diet(
                user_id, {**values, "diet_type": diet_type or UNTRACKED_DIET}, now
            )
        return self.repository.update_diet(user_id, values, now)
