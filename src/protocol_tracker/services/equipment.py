"""Duplicate detection for equipment entries."""

import re
from dataclasses import dataclass
from typing import Protocol

from protocol_tracker.domain.equipment import (
    DuplicateCheck,
    DuplicateMatch,
    EquipmentSummary,
)

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_MODEL_SUFFIXES = re.compile(
    r"\b(pro|plus|max|elite|ultra|mini|lite|ii|iii|iv|v|2|3|4|5)\b",
    re.IGNORECASE | re.ASCII,
)

SIMILAR_NAME_THRESHOLD = 0.8
SAME_BRAND_THRESHOLD = 0.6
SAME_BRAND_PENALTY = 0.9


class EquipmentRepository(Protocol):
    """Read interface for a user's equipment."""

    def list_equipment(
        self, user_id: str, exclude_id: str | None = None
    ) -> list[EquipmentSummary]:
        """Return the user's equipment, optionally skipping one row."""


def normalize_name(value: str | None) -> str:
    """Lowercase and strip punctuation and model suffixes for comparison."""
    if not value:
        return ""
    cleaned = _WHITESPACE.sub(" ", value.lower().strip())
    cleaned = _NON_WORD.sub("", cleaned)
    return _MODEL_SUFFIXES.sub("", cleaned).strip()


def name_similarity(first: str, second: str) -> float:
    """Return a 0..1 similarity ratio between two names."""
    left = normalize_name(first)
    right = normalize_name(second)
    if left == right:
        return 1.0
    if not left or not right:
        return 0.0
    if left in right or right in left:
        longer, shorter = (left, right) if len(left) > len(right) else (right, left)
        return len(shorter) / len(longer)

    left_words = [word for word in left.split(" ") if len(word) > 1]
    right_words = [word for word in right.split(" ") if len(word) > 1]
    if not left_words or not right_words:
        return 0.0
    common = [word for word in left_words if word in right_words]
    return len(common) / len(set(left_words) | set(right_words))


def check_duplicate(
    candidate: EquipmentSummary, existing: EquipmentSummary
) -> DuplicateCheck:
    """Decide whether two equipment entries describe the same thing."""
    similarity = name_similarity(candidate.name, existing.name)
    if normalize_name(candidate.name) == normalize_name(existing.name):
        return DuplicateCheck(True, 1.0, "Exact name match")

    if similarity > SIMILAR_NAME_THRESHOLD:
        brand_match = (not candidate.brand and not existing.brand) or normalize_name(
            candidate.brand
        ) == normalize_name(existing.brand)
        if brand_match:
            return DuplicateCheck(True, similarity, "Similar name with matching brand")

    if (
        similarity > SAME_BRAND_THRESHOLD
        and candidate.brand
        and existing.brand
        and normalize_name(candidate.brand) == normalize_name(existing.brand)
    ):
        return DuplicateCheck(
            True, similarity * SAME_BRAND_PENALTY, "Same brand with similar name"
        )

    return DuplicateCheck(False, 0.0, "")


def group_duplicates(
    equipment: list[EquipmentSummary],
) -> list[list[DuplicateMatch]]:
    """Group equipment around the first entry each duplicate resembles."""
    groups: list[list[DuplicateMatch]] = []
    processed: set[str | None] = set()
    for index, anchor in enumerate(equipment):
        if anchor.id in processed:
            continue
        group = [DuplicateMatch(anchor.id, anchor.name, anchor.brand, 1.0)]
        for other in equipment[index + 1 :]:
            if other.id in processed:
                continue
            result = check_duplicate(anchor, other)
            if result.is_duplicate:
                group.append(
                    DuplicateMatch(other.id, other.name, other.brand, result.confidence)
                )
                processed.add(other.id)
        if len(group) > 1:
            groups.append(group)
            processed.add(anchor.id)
    return groups


@dataclass
class EquipmentDuplicateService:
    """Find likely duplicate equipment for a user."""

    repository: EquipmentRepository

    def find_duplicates(
        self,
        user_id: str,
        candidate: EquipmentSummary,
        exclude_id: str | None = None,
    ) -> list[DuplicateMatch]:
        """Return existing equipment resembling the candidate, best match first."""
        matches = []
        for existing in self.repository.list_equipment(user_id, exclude_id):
            result = check_duplicate(candidate, existing)
            if result.is_duplicate:
                matches.append(
                    DuplicateMatch(
                        id=existing.id,
                        name=existing.name,
                        brand=existing.brand,
                        confidence=result.confidence,
                        reason=result.reason,
                    )
                )
        return sorted(matches, key=lambda match: match.confidence, reverse=True)

    def find_duplicate_groups(self, user_id: str) -> list[list[DuplicateMatch]]:
        """Return every duplicate group among the user's equipment."""
        return group_duplicates(self.repository.list_equipment(user_id))
