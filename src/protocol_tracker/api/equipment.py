"""Equipment duplicate detection endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from protocol_tracker.api.dependencies import require_user
from protocol_tracker.api.models import CheckDuplicateRequest
from protocol_tracker.api.responses import success
from protocol_tracker.domain.equipment import DuplicateMatch, EquipmentSummary
from protocol_tracker.domain.models import UserRecord  # noqa: TC001
from protocol_tracker.errors import ValidationError

if TYPE_CHECKING:
    from protocol_tracker.containers import AppContainer

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("/duplicates")
async def list_duplicates(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return groups of equipment that look like duplicates."""
    container: AppContainer = request.app.state.container
    groups = container.equipment_duplicate_service.find_duplicate_groups(user.id)
    return success(
        {
            "duplicateIds": _duplicate_ids(groups),
            "groups": [
                {"items": [match.to_dict() for match in group]} for group in groups
            ],
        }
    )


@router.post("/check-duplicate")
async def check_duplicate(
    payload: CheckDuplicateRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Check a candidate entry against the caller's equipment."""
    if not payload.name or not payload.name.strip():
        raise ValidationError("name is required")
    container: AppContainer = request.app.state.container
    duplicates = container.equipment_duplicate_service.find_duplicates(
        user.id,
        EquipmentSummary(
            id=None, name=payload.name, brand=payload.brand, model=payload.model
        ),
        exclude_id=payload.exclude_id,
    )
    return success(
        {
            "isDuplicate": bool(duplicates),
            "duplicates": [match.to_dict() for match in duplicates],
        }
    )


def _duplicate_ids(groups: list[list[DuplicateMatch]]) -> list[str]:
    ids: list[str] = []
    for group in groups:
        for match in group:
            if match.id not in ids:
                ids.append(match.id)
    return ids
