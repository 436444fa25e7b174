"""Diet settings endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from protocol_tracker.api.dependencies import require_user
from protocol_tracker.api.models import UpdateDietRequest
from protocol_tracker.api.responses import success
from protocol_tracker.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from protocol_tracker.containers import AppContainer

router = APIRouter(prefix="/user-diet", tags=["user-diet"])


@router.get("")
async def get_diet(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return diet settings, creating the default row on first access."""
    container: AppContainer = request.app.state.container
    diet = container.diet_service.get_or_create(user.id)
    return success(diet.to_dict())


@router.patch("")
async def update_diet(
    payload: UpdateDietRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Update the provided diet fields."""
    container: AppContainer = request.app.state.container
    diet = container.diet_service.update(
        user.id, payload.model_dump(exclude_unset=True)
    )
    return success(diet.to_dict())
