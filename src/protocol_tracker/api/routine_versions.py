"""Routine version history endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from protocol_tracker.api.dependencies import require_user
from protocol_tracker.api.models import CreateRoutineVersionRequest
from protocol_tracker.api.responses import success
from protocol_tracker.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from protocol_tracker.containers import AppContainer

router = APIRouter(prefix="/routine-versions", tags=["routine-versions"])


@router.get("")
async def list_versions(
    request: Request,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's routine history, newest first."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    versions = container.routine_version_service.list_versions(
        user.id, limit=page_size, offset=offset
    )
    return success([version.to_dict() for version in versions])


@router.get("/latest")
async def latest_version(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return the most recent version, or null before the first save."""
    container: AppContainer = request.app.state.container
    version = container.routine_version_service.latest(user.id)
    return success(version.to_dict() if version else None)


@router.get("/current-snapshot")
async def current_snapshot(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return the unsaved current routine for preview."""
    container: AppContainer = request.app.state.container
    snapshot = container.routine_version_service.current_snapshot(user.id)
    return success(snapshot.to_dict())


@router.get("/{version_id}")
async def get_version(
    version_id: str, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return one of the caller's versions."""
    container: AppContainer = request.app.state.container
    version = container.routine_version_service.get_version(user.id, version_id)
    return success(version.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_version(
    request: Request,
    payload: CreateRoutineVersionRequest | None = None,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    """Save the current routine as a new version."""
    container: AppContainer = request.app.state.container
    reason = payload.reason if payload else None
    version = container.routine_version_service.create(user.id, reason=reason)
    return success(version.to_dict())
