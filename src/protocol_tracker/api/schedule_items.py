"""Schedule item endpoints for exercises and meals."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from protocol_tracker.api.dependencies import require_user
from protocol_tracker.api.models import (
    CreateScheduleItemRequest,
    UpdateScheduleItemRequest,
)
from protocol_tracker.api.responses import success
from protocol_tracker.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from protocol_tracker.containers import AppContainer

router = APIRouter(prefix="/schedule-items", tags=["schedule-items"])


@router.get("")
async def list_items(
    request: Request,
    item_type: str | None = None,
    is_active: bool | None = None,
    limit: int = Query(default=100, ge=1),
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's exercises and meals, newest first."""
    container: AppContainer = request.app.state.container
    items = container.schedule_item_service.list_items(
        user.id, item_type=item_type, is_active=is_active, limit=limit
    )
    return success([item.to_dict() for item in items])


@router.get("/{item_id}")
async def get_item(
    item_id: str, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    item = container.schedule_item_service.get_item(user.id, item_id)
    return success(item.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: CreateScheduleItemRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Add an exercise or meal to the schedule."""
    container: AppContainer = request.app.state.container
    item = container.schedule_item_service.create(
        user.id, payload.model_dump(exclude_unset=True)
    )
    return success(item.to_dict())


@router.put("/{item_id}")
async def update_item(
    item_id: str,
    payload: UpdateScheduleItemRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Update the provided fields of an item."""
    container: AppContainer = request.app.state.container
    item = container.schedule_item_service.update(
        user.id, item_id, payload.model_dump(exclude_unset=True)
    )
    return success(item.to_dict())


@router.patch("/{item_id}/toggle")
async def toggle_item(
    item_id: str, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Switch an item between active and paused."""
    container: AppContainer = request.app.state.container
    item = container.schedule_item_service.toggle(user.id, item_id)
    return success(item.to_dict())


@router.delete("/{item_id}")
async def delete_item(
    item_id: str, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.schedule_item_service.delete(user.id, item_id)
    return success(message="Schedule item deleted")
