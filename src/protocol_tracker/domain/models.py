"""Domain models for the protocol tracker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents an application user backed by a Supabase auth account."""

    id: str
    email: str | None
    is_active: bool = True
