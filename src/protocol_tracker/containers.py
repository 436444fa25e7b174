"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from protocol_tracker.adapters.supabase_auth_client import SupabaseAuthClient
from protocol_tracker.adapters.supabase_diet_repository import SupabaseDietRepository
from protocol_tracker.adapters.supabase_equipment_repository import (
    SupabaseEquipmentRepository,
)
from protocol_tracker.adapters.supabase_routine_source_repository import (
    SupabaseRoutineSourceRepository,
)
from protocol_tracker.adapters.supabase_routine_version_repository import (
    SupabaseRoutineVersionRepository,
)
from protocol_tracker.adapters.supabase_schedule_item_repository import (
    SupabaseScheduleItemRepository,
)
from protocol_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from protocol_tracker.config import Settings
from protocol_tracker.services.diet import DietService
from protocol_tracker.services.equipment import EquipmentDuplicateService
from protocol_tracker.services.schedule_items import ScheduleItemService
from protocol_tracker.services.snapshots import SnapshotBuilder
from protocol_tracker.services.users import UserService
from protocol_tracker.services.versions import RoutineVersionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    routine_version_service: RoutineVersionService
    diet_service: DietService
    equipment_duplicate_service: EquipmentDuplicateService
    schedule_item_service: ScheduleItemService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = (
        create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_anon_key
        )
        if resolved_settings.supabase_anon_key
        else supabase_client
    )
    user_service = UserService(
        auth_client=SupabaseAuthClient(auth_client),
        repository=SupabaseUserRepository(supabase_client),
    )
    routine_version_service = RoutineVersionService(
        snapshot_builder=SnapshotBuilder(
            SupabaseRoutineSourceRepository(supabase_client)
        ),
        repository=SupabaseRoutineVersionRepository(supabase_client),
        max_attempts=resolved_settings.routine_version_max_attempts,
    )
    diet_service = DietService(SupabaseDietRepository(supabase_client))
    equipment_duplicate_service = EquipmentDuplicateService(
        SupabaseEquipmentRepository(supabase_client)
    )
    schedule_item_service = ScheduleItemService(
        SupabaseScheduleItemRepository(supabase_client)
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        routine_version_service=routine_version_service,
        diet_service=diet_service,
        equipment_duplicate_service=equipment_duplicate_service,
        schedule_item_service=schedule_item_service,
    )
