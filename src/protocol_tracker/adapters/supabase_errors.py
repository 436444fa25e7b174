"""Translation of PostgREST failures into application errors."""

import logging
from typing import Any

from postgrest.exceptions import APIError

from protocol_tracker.errors import DatastoreError

UNIQUE_VIOLATION = "23505"

_logger = logging.getLogger(__name__)


def execute(query: Any, action: str) -> Any:
    """Run a Supabase query, raising DatastoreError when it fails."""
    try:
        return query.execute()
    except APIError as exc:
        _logger.error(
            "Supabase query failed: %s",
            action,
            extra={"code": exc.code, "details": exc.details},
        )
        raise DatastoreError(exc.message or f"Failed to {action}") from exc
