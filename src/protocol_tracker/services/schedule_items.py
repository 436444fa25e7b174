"""Schedule item service for exercises and meals."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from protocol_tracker.domain.schedule import (
    EXERCISE,
    EXERCISE_TYPES,
    FREQUENCIES,
    ITEM_TYPES,
    MEAL,
    MEAL_TYPES,
    TIMINGS,
    ScheduleItem,
)
from protocol_tracker.errors import NotFoundError, ValidationError

_logger = logging.getLogger(__name__)

_CHOICES = {
    "timing": TIMINGS,
    "frequency": FREQUENCIES,
    "exercise_type": EXERCISE_TYPES,
    "meal_type": MEAL_TYPES,
}


class ScheduleItemRepository(Protocol):
    """Persistence interface for schedule items."""

    def list_items(
        self,
        user_id: str,
        item_type: str | None,
        is_active: bool | None,
        limit: int,
    ) -> list[ScheduleItem]:
        """Return the user's items, newest first."""

    def get_item(self, user_id: str, item_id: UUID) -> ScheduleItem | None:
        """Return an item owned by the user, if present."""

    def create_item(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        """Insert an item and return it."""

    def update_item(
        self, user_id: str, item_id: UUID, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        """Update an item owned by the user and return it."""

    def delete_item(self, user_id: str, item_id: UUID) -> None:
        """Delete an item owned by the user."""


@dataclass
class ScheduleItemService:
    """Create, edit and switch scheduled exercises and meals."""

    repository: ScheduleItemRepository

    def list_items(
        self,
        user_id: str,
        item_type: str | None = None,
        is_active: bool | None = None,
        limit: int = 100,
    ) -> list[ScheduleItem]:
        """Return the user's items, optionally filtered."""
        return self.repository.list_items(user_id, item_type, is_active, limit)

    def get_item(self, user_id: str, item_id: str) -> ScheduleItem:
        """Return one of the user's items."""
        return self._require(user_id, item_id)

    def create(self, user_id: str, values: dict[str, object]) -> ScheduleItem:
        """Validate and insert a new active item."""
        item_type = values.get("item_type")
        if not item_type or not values.get("name"):
            raise ValidationError("item_type and name are required")
        _validate(values)

        is_exercise = item_type == EXERCISE
        item = self.repository.create_item(
            user_id,
            {
                **values,
                "frequency": values.get("frequency") or "daily",
                "exercise_type": values.get("exercise_type") if is_exercise else None,
                "meal_type": values.get("meal_type") if item_type == MEAL else None,
                "duration": values.get("duration") if is_exercise else None,
                "is_active": True,
            },
            datetime.now(tz=UTC),
        )
        _logger.info(
            "Created schedule item",
            extra={"user_id": user_id, "item_type": item_type},
        )
        return item

    def update(
        self, user_id: str, item_id: str, values: dict[str, object]
    ) -> ScheduleItem:
        """Apply the provided fields to an existing item."""
        existing = self._require(user_id, item_id)
        _validate(values)
        return self.repository.update_item(
            user_id, existing.id, values, datetime.now(tz=UTC)
        )

    def toggle(self, user_id: str, item_id: str) -> ScheduleItem:
        """Flip whether the item is part of the active routine."""
        existing = self._require(user_id, item_id)
        return self.repository.update_item(
            user_id,
            existing.id,
            {"is_active": not existing.is_active},
            datetime.now(tz=UTC),
        )

    def delete(self, user_id: str, item_id: str) -> None:
        """Delete one of the user's items."""
        self.repository.delete_item(user_id, _parse_id(item_id))

    def _require(self, user_id: str, item_id: str) -> ScheduleItem:
        item = self.repository.get_item(user_id, _parse_id(item_id))
        if item is None:
            raise NotFoundError("Schedule item not found")
        return item


def _parse_id(item_id: str) -> UUID:
    try:
        return UUID(item_id)
    except ValueError:
        raise NotFoundError("Schedule item not found") from None


def _validate(values: dict[str, object]) -> None:
    item_type = values.get("item_type")
    if item_type is not None and item_type not in ITEM_TYPES:
        raise ValidationError('item_type must be "exercise" or "meal"')
    for name, allowed in _CHOICES.items():
        value = values.get(name)
        if value is not None and value not in allowed:
            raise ValidationError(
                f"Invalid {name}. Must be one of: {', '.join(allowed)}"
            )
