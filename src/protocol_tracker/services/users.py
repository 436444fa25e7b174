"""User authentication and lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol

from protocol_tracker.domain.models import UserRecord
from protocol_tracker.errors import (
    AccountDeactivatedError,
    AuthenticationError,
    DatastoreError,
    NotFoundError,
)

_logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Verifies access tokens issued by the identity provider."""

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for a valid token, otherwise None."""


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user row, if present."""

    def touch_last_login(self, user_id: str) -> None:
        """Update the last login timestamp for the user."""


@dataclass
class UserService:
    """Application service resolving the caller behind a token."""

    auth_client: AuthClient
    repository: UserRepository

    def authenticate(self, access_token: str) -> UserRecord:
        """Return the active user for an access token."""
        user_id = self.auth_client.get_user_id(access_token)
        if not user_id:
            raise AuthenticationError("Invalid or expired token", "INVALID_TOKEN")

        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        if not user.is_active:
            raise AccountDeactivatedError()

        try:
            self.repository.touch_last_login(user.id)
        except DatastoreError:
            _logger.warning("Failed to update last login", extra={"user_id": user.id})
        return user
