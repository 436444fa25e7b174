"""FastAPI dependencies resolving the calling user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Header, Request

from protocol_tracker.domain.models import UserRecord
from protocol_tracker.errors import AuthenticationError

if TYPE_CHECKING:
    from protocol_tracker.containers import AppContainer

DEV_USER = UserRecord(id="dev-user-id", email="dev@protocol.local")

_logger = logging.getLogger(__name__)


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
    x_dev_bypass: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the authenticated user from the bearer token."""
    container: AppContainer = request.app.state.container
    if container.settings.dev_bypass_enabled and x_dev_bypass == "true":
        _logger.info("Development auth bypass for %s", request.url.path)
        return DEV_USER
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing or invalid authorization header")
    return container.user_service.authenticate(authorization.removeprefix("Bearer "))
