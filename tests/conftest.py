"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from protocol_tracker.api.app import create_app
from protocol_tracker.config import Settings
from protocol_tracker.containers import AppContainer
from protocol_tracker.domain.diet import DietSettings
from protocol_tracker.domain.equipment import EquipmentSummary
from protocol_tracker.domain.models import UserRecord
from protocol_tracker.domain.routines import (
    RoutineChanges,
    RoutineSnapshot,
    RoutineVersion,
)
from protocol_tracker.domain.schedule import ScheduleItem
from protocol_tracker.errors import VersionConflictError
from protocol_tracker.services.diet import DietRepository, DietService
from protocol_tracker.services.equipment import (
    EquipmentDuplicateService,
    EquipmentRepository,
)
from protocol_tracker.services.schedule_items import (
    ScheduleItemRepository,
    ScheduleItemService,
)
from protocol_tracker.services.snapshots import (
    RoutineSourceRepository,
    SnapshotBuilder,
)
from protocol_tracker.services.users import AuthClient, UserRepository, UserService
from protocol_tracker.services.versions import (
    RoutineVersionRepository,
    RoutineVersionService,
)

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"
VALID_TOKEN = "valid-token"


@dataclass
class InMemoryRoutineSourceRepository(RoutineSourceRepository):
    """In-memory snapshot sources keyed like the Supabase tables."""

    diets: dict[str, dict[str, object]] = field(default_factory=dict)
    supplements: list[dict[str, object]] = field(default_factory=list)
    equipment: list[dict[str, object]] = field(default_factory=list)
    schedule_items: list[dict[str, object]] = field(default_factory=list)
    routines: list[dict[str, object]] = field(default_factory=list)
    reads: list[str] = field(default_factory=list)

    def get_diet(self, user_id: str) -> dict[str, object] | None:
        self.reads.append("user_diet")
        return self.diets.get(user_id)

    def list_active_supplements(self, user_id: str) -> list[dict[str, object]]:
        self.reads.append("supplements")
        return _active(self.supplements, user_id)

    def list_active_equipment(self, user_id: str) -> list[dict[str, object]]:
        self.reads.append("equipment")
        return _active(self.equipment, user_id)

    def list_active_schedule_items(self, user_id: str) -> list[dict[str, object]]:
        self.reads.append("schedule_items")
        return _active(self.schedule_items, user_id)

    def list_routines(self, user_id: str) -> list[dict[str, object]]:
        self.reads.append("routines")
        return [row for row in self.routines if row.get("user_id") == user_id]


def _active(rows: list[dict[str, object]], user_id: str) -> list[dict[str, object]]:
    return [
        row for row in rows if row.get("user_id") == user_id and row.get("is_active")
    ]


@dataclass
class InMemoryRoutineVersionRepository(RoutineVersionRepository):
    """In-memory version table enforcing unique version numbers per user."""

    versions: list[RoutineVersion] = field(default_factory=list)
    stale_latest_reads: int = 0

    def get_latest(self, user_id: str) -> RoutineVersion | None:
        if self.stale_latest_reads > 0:
            self.stale_latest_reads -= 1
            return None
        owned = [version for version in self.versions if version.user_id == user_id]
        if not owned:
            return None
        return max(owned, key=lambda version: version.version_number)

    def list_versions(
        self, user_id: str, limit: int, offset: int
    ) -> list[RoutineVersion]:
        owned = sorted(
            (version for version in self.versions if version.user_id == user_id),
            key=lambda version: version.version_number,
            reverse=True,
        )
        return owned[offset : offset + limit]

    def get_version(self, user_id: str, version_id: UUID) -> RoutineVersion | None:
        for version in self.versions:
            if version.id == version_id and version.user_id == user_id:
                return version
        return None

    def create_version(  # noqa: PLR0913
        self,
        user_id: str,
        version_number: int,
        snapshot: RoutineSnapshot,
        changes: RoutineChanges,
        reason: str | None,
        created_at: datetime,
    ) -> RoutineVersion:
        for version in self.versions:
            if version.user_id == user_id and version.version_number == version_number:
                raise VersionConflictError(
                    f"Routine version {version_number} already exists"
                )
        version = RoutineVersion(
            id=uuid4(),
            user_id=user_id,
            version_number=version_number,
            snapshot=snapshot,
            changes=changes,
            reason=reason,
            created_at=created_at,
        )
        self.versions.append(version)
        return version


@dataclass
class InMemoryDietRepository(DietRepository):
    """In-memory diet settings repository for tests."""

    diets: dict[str, DietSettings] = field(default_factory=dict)
    writes: list[dict[str, object]] = field(default_factory=list)

    def get_diet(self, user_id: str) -> DietSettings | None:
        return self.diets.get(user_id)

    def create_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        self.writes.append(dict(values))
        diet = DietSettings(
            id=uuid4(),
            user_id=user_id,
            diet_type=str(values.get("diet_type")),
            diet_type_other=values.get("diet_type_other"),
            target_protein_g=values.get("target_protein_g"),
            target_carbs_g=values.get("target_carbs_g"),
            target_fat_g=values.get("target_fat_g"),
            created_at=now,
            updated_at=now,
        )
        self.diets[user_id] = diet
        return diet

    def update_diet(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> DietSettings:
        self.writes.append(dict(values))
        current = self.diets[user_id]
        updated = DietSettings(
            id=current.id,
            user_id=user_id,
            diet_type=str(values.get("diet_type", current.diet_type)),
            diet_type_other=values.get("diet_type_other", current.diet_type_other),
            target_protein_g=values.get("target_protein_g", current.target_protein_g),
            target_carbs_g=values.get("target_carbs_g", current.target_carbs_g),
            target_fat_g=values.get("target_fat_g", current.target_fat_g),
            created_at=current.created_at,
            updated_at=now,
        )
        self.diets[user_id] = updated
        return updated


@dataclass
class InMemoryEquipmentRepository(EquipmentRepository):
    """In-memory equipment list for tests."""

    items: dict[str, list[EquipmentSummary]] = field(default_factory=dict)

    def list_equipment(
        self, user_id: str, exclude_id: str | None = None
    ) -> list[EquipmentSummary]:
        return [item for item in self.items.get(user_id, []) if item.id != exclude_id]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    touched: list[str] = field(default_factory=list)

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def touch_last_login(self, user_id: str) -> None:
        self.touched.append(user_id)


@dataclass
class InMemoryScheduleItemRepository(ScheduleItemRepository):
    """Schedule items stored as table rows, shareable with the snapshot sources."""

    rows: list[dict[str, object]] = field(default_factory=list)

    def list_items(
        self,
        user_id: str,
        item_type: str | None,
        is_active: bool | None,
        limit: int,
    ) -> list[ScheduleItem]:
        matching = [
            row
            for row in reversed(self.rows)
            if row["user_id"] == user_id
            and (item_type is None or row["item_type"] == item_type)
            and (is_active is None or row["is_active"] is is_active)
        ]
        return [ScheduleItem.from_dict(row) for row in matching[:limit]]

    def get_item(self, user_id: str, item_id: UUID) -> ScheduleItem | None:
        row = self._find(user_id, item_id)
        return ScheduleItem.from_dict(row) if row else None

    def create_item(
        self, user_id: str, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        row = {
            **values,
            "id": str(uuid4()),
            "user_id": user_id,
            "created_at": now.isoformat(),
            "updated_at": now.isoformat(),
        }
        self.rows.append(row)
        return ScheduleItem.from_dict(row)

    def update_item(
        self, user_id: str, item_id: UUID, values: dict[str, object], now: datetime
    ) -> ScheduleItem:
        row = self._find(user_id, item_id)
        assert row is not None
        row.update(values, updated_at=now.isoformat())
        return ScheduleItem.from_dict(row)

    def delete_item(self, user_id: str, item_id: UUID) -> None:
        row = self._find(user_id, item_id)
        if row is not None:
            self.rows.remove(row)

    def _find(self, user_id: str, item_id: UUID) -> dict[str, object] | None:
        for row in self.rows:
            if row["id"] == str(item_id) and row["user_id"] == user_id:
                return row
        return None


@dataclass
class FakeAuthClient(AuthClient):
    """Auth client that accepts a fixed set of tokens."""

    tokens: dict[str, str] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> str | None:
        return self.tokens.get(access_token)


def supplement_row(  # noqa: PLR0913
    source_id: str = "supp-1",
    name: str = "Magnesium",
    timings: list[str] | None = None,
    is_active: bool = True,
    user_id: str = USER_ID,
    **extra: object,
) -> dict[str, object]:
    """Return a supplements table row."""
    return {
        "id": source_id,
        "user_id": user_id,
        "name": name,
        "timings": ["am"] if timings is None else timings,
        "frequency": "daily",
        "frequency_days": None,
        "category": "mineral",
        "intake_quantity": 1,
        "intake_form": "capsule",
        "is_active": is_active,
        **extra,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        environment="test",
    )


@pytest.fixture
def source_repository() -> InMemoryRoutineSourceRepository:
    return InMemoryRoutineSourceRepository()


@pytest.fixture
def version_repository() -> InMemoryRoutineVersionRepository:
    return InMemoryRoutineVersionRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository(
        users={
            USER_ID: UserRecord(id=USER_ID, email="user@example.com"),
            OTHER_USER_ID: UserRecord(id=OTHER_USER_ID, email="other@example.com"),
        }
    )


@pytest.fixture
def equipment_repository() -> InMemoryEquipmentRepository:
    return InMemoryEquipmentRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    source_repository: InMemoryRoutineSourceRepository,
    version_repository: InMemoryRoutineVersionRepository,
    user_repository: InMemoryUserRepository,
    equipment_repository: InMemoryEquipmentRepository,
) -> AppContainer:
    user_service = UserService(
        auth_client=FakeAuthClient(
            tokens={VALID_TOKEN: USER_ID, "other-token": OTHER_USER_ID}
        ),
        repository=user_repository,
    )
    routine_version_service = RoutineVersionService(
        snapshot_builder=SnapshotBuilder(source_repository),
        repository=version_repository,
        max_attempts=settings.routine_version_max_attempts,
    )
    return AppContainer(
        settings=settings,
        user_service=user_service,
        routine_version_service=routine_version_service,
        diet_service=DietService(InMemoryDietRepository()),
        equipment_duplicate_service=EquipmentDuplicateService(equipment_repository),
        schedule_item_service=ScheduleItemService(
            InMemoryScheduleItemRepository(rows=source_repository.schedule_items)
        ),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
