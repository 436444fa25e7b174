"""Supabase Auth token verification."""

import logging
from dataclasses import dataclass

from supabase import Client

from protocol_tracker.services.users import AuthClient

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthClient(AuthClient):
    """Verify access tokens with the Supabase Auth API."""

    client: Client

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id behind a token, or None if it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            _logger.warning("Token verification failed", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return str(response.user.id)
