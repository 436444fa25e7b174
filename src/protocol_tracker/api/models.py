"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class CreateRoutineVersionRequest(BaseModel):
    """Body of a routine version save."""

    reason: str | None = None


class UpdateDietRequest(BaseModel):
    """Partial update of diet settings."""

    diet_type: str | None = None
    diet_type_other: str | None = None
    target_protein_g: int | None = None
    target_carbs_g: int | None = None
    target_fat_g: int | None = None


class CheckDuplicateRequest(BaseModel):
    """Candidate equipment to compare against existing entries."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    brand: str | None = None
    model: str | None = None
    exclude_id: str | None = Field(default=None, alias="excludeId")


class CreateScheduleItemRequest(BaseModel):
    """New exercise or meal."""

    item_type: str | None = None
    name: str | None = None
    timing: str | None = None
    frequency: str | None = None
    frequency_days: list[str] | None = None
    exercise_type: str | None = None
    meal_type: str | None = None
    duration: str | None = None
    notes: str | None = None


class UpdateScheduleItemRequest(BaseModel):
    """Partial update of a schedule item."""

    item_type: str | None = None
    name: str | None = None
    timing: str | None = None
    frequency: str | None = None
    frequency_days: list[str] | None = None
    exercise_type: str | None = None
    meal_type: str | None = None
    duration: str | None = None
    notes: str | None = None
    is_active: bool | None = None
