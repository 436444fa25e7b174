"""Routine version history service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from protocol_tracker.domain.routines import (
    RoutineChanges,
    RoutineSnapshot,
    RoutineVersion,
)
from protocol_tracker.errors import NoChangesError, NotFoundError, VersionConflictError
from protocol_tracker.services.routine_diff import compute_changes, has_changes
from protocol_tracker.services.snapshots import SnapshotBuilder

_logger = logging.getLogger(__name__)


class RoutineVersionRepository(Protocol):
    """Persistence interface for routine versions."""

    def get_latest(self, user_id: str) -> RoutineVersion | None:
        """Return the highest-numbered version for a user."""

    def list_versions(
        self, user_id: str, limit: int, offset: int
    ) -> list[RoutineVersion]:
        """Return versions newest first."""

    def get_version(self, user_id: str, version_id: UUID) -> RoutineVersion | None:
        """Return a version owned by the user, if present."""

    def create_version(  # noqa: PLR0913
        self,
        user_id: str,
        version_number: int,
        snapshot: RoutineSnapshot,
        changes: RoutineChanges,
        reason: str | None,
        created_at: datetime,
    ) -> RoutineVersion:
        """Insert a version; raise VersionConflictError if the number is taken."""


@dataclass
class RoutineVersionService:
    """Snapshot, diff and append routine versions."""

    snapshot_builder: SnapshotBuilder
    repository: RoutineVersionRepository
    max_attempts: int = 3

    def latest(self, user_id: str) -> RoutineVersion | None:
        """Return the latest version or None when nothing was saved yet."""
        return self.repository.get_latest(user_id)

    def list_versions(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> list[RoutineVersion]:
        """Return a page of the user's history, newest first."""
        return self.repository.list_versions(user_id, limit, offset)

    def get_version(self, user_id: str, version_id: str) -> RoutineVersion:
        """Return one of the user's versions."""
        try:
            parsed_id = UUID(version_id)
        except ValueError:
            raise NotFoundError("Routine version not found") from None
        version = self.repository.get_version(user_id, parsed_id)
        if version is None:
            raise NotFoundError("Routine version not found")
        return version

    def current_snapshot(self, user_id: str) -> RoutineSnapshot:
        """Return the unsaved current state."""
        return self.snapshot_builder.build(user_id)

    def create(self, user_id: str, reason: str | None = None) -> RoutineVersion:
        """Save the current routine as the next version."""
        attempt = 0
        while True:
            attempt += 1
            current = self.snapshot_builder.build(user_id)
            previous = self.repository.get_latest(user_id)
            changes = compute_changes(
                previous.snapshot if previous else None, current
            )
            if not has_changes(changes):
                _logger.info("No routine changes to save", extra={"user_id": user_id})
                raise NoChangesError()

            version_number = (previous.version_number if previous else 0) + 1
            try:
                version = self.repository.create_version(
                    user_id=user_id,
                    version_number=version_number,
                    snapshot=current,
                    changes=changes,
                    reason=reason,
                    created_at=datetime.now(tz=UTC),
                )
            except VersionConflictError:
                _logger.warning(
                    "Routine version %s already taken (attempt %s/%s)",
                    version_number,
                    attempt,
                    self.max_attempts,
                    extra={"user_id": user_id},
                )
                if attempt >= self.max_attempts:
                    raise
                continue

            _logger.info(
                "Saved routine version %s",
                version.version_number,
                extra={"user_id": user_id},
            )
            return version
