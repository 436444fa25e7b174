"""Supabase repository for routine versions."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from protocol_tracker.adapters.supabase_errors import UNIQUE_VIOLATION, execute
from protocol_tracker.domain.routines import (
    RoutineChanges,
    RoutineSnapshot,
    RoutineVersion,
)
from protocol_tracker.errors import DatastoreError, VersionConflictError
from protocol_tracker.services.versions import RoutineVersionRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseRoutineVersionRepository(RoutineVersionRepository):
    """Supabase implementation for routine version history."""

    client: Client

    def get_latest(self, user_id: str) -> RoutineVersion | None:
        """Return the highest-numbered version for a user."""
        response = execute(
            self.client.table("routine_versions")
            .select("*")
            .eq("user_id", user_id)
            .order("version_number", desc=True)
            .limit(1),
            "load latest routine version",
        )
        if not response.data:
            return None
        return _parse_version(response.data[0])

    def list_versions(
        self, user_id: str, limit: int, offset: int
    ) -> list[RoutineVersion]:
        """Return versions newest first."""
        response = execute(
            self.client.table("routine_versions")
            .select("*")
            .eq("user_id", user_id)
            .order("version_number", desc=True)
            .range(offset, offset + limit - 1),
            "list routine versions",
        )
        return [_parse_version(row) for row in response.data or []]

    def get_version(self, user_id: str, version_id: UUID) -> RoutineVersion | None:
        """Return a version owned by the user, if present."""
        response = execute(
            self.client.table("routine_versions")
            .select("*")
            .eq("id", str(version_id))
            .eq("user_id", user_id)
            .limit(1),
            "load routine version",
        )
        if not response.data:
            return None
        return _parse_version(response.data[0])

    def create_version(  # noqa: PLR0913
        self,
        user_id: str,
        version_number: int,
        snapshot: RoutineSnapshot,
        changes: RoutineChanges,
        reason: str | None,
        created_at: datetime,
    ) -> RoutineVersion:
        """Insert a version row and return it."""
        try:
            response = (
                self.client.table("routine_versions")
                .insert(
                    {
                        "user_id": user_id,
                        "version_number": version_number,
                        "snapshot": snapshot.to_dict(),
                        "changes": changes.to_dict(),
                        "reason": reason,
                        "created_at": created_at.isoformat(),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise VersionConflictError(
                    f"Routine version {version_number} already exists"
                ) from exc
            _logger.error(
                "Failed to create routine version",
                extra={"user_id": user_id, "code": exc.code},
            )
            message = exc.message or "Failed to create routine version"
            raise DatastoreError(message) from exc
        if not response.data:
            raise DatastoreError("Failed to create routine version")
        return _parse_version(response.data[0])


def _parse_version(row: dict[str, object]) -> RoutineVersion:
    return RoutineVersion(
        id=UUID(row["id"]),
        user_id=str(row["user_id"]),
        version_number=int(row["version_number"]),
        snapshot=RoutineSnapshot.from_dict(row.get("snapshot") or {}),
        changes=RoutineChanges.from_dict(row.get("changes") or {}),
        reason=row.get("reason"),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
