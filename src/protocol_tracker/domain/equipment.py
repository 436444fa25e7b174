"""Equipment domain models used for duplicate detection."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EquipmentSummary:
    """Identifying fields of an equipment row."""

    id: str | None
    name: str
    brand: str | None = None
    model: str | None = None


@dataclass(frozen=True)
class DuplicateCheck:
    """Outcome of comparing two equipment items."""

    is_duplicate: bool
    confidence: float
    reason: str


@dataclass(frozen=True)
class DuplicateMatch:
    """Existing equipment that looks like a duplicate."""

    id: str
    name: str
    brand: str | None
    confidence: float
    reason: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "confidence": self.confidence,
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload
