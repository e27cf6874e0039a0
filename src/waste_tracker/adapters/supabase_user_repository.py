"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from waste_tracker.adapters.supabase_rows import PAGE_SIZE, fetch_all_rows
from waste_tracker.domain.enums import Theme, UserMode, UserRole
from waste_tracker.domain.models import UserPreferences, UserProfile
from waste_tracker.services.users import UserRepository

_COLUMNS = "user_id, name, role, mode, total_points, level, preferences"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for profile persistence."""

    client: Client
    page_size: int = PAGE_SIZE

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("user_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return parse_profile(response.data[0])
        return None

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create a profile row and return it."""
        response = (
            self.client.table("user_profiles")
            .insert(
                {
                    "user_id": str(profile.user_id),
                    "name": profile.name,
                    "role": profile.role.value,
                    "mode": profile.mode.value,
                    "total_points": profile.total_points,
                    "level": profile.level,
                    "preferences": _preferences_payload(profile.preferences),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user profile in Supabase")
        return parse_profile(response.data[0])

    def list_profiles(self) -> list[UserProfile]:
        """Return all profiles, reading past the per-request row cap."""
        rows = fetch_all_rows(
            lambda: (
                self.client.table("user_profiles")
                .select(_COLUMNS)
                .order("user_id", desc=False)
            ),
            self.page_size,
        )
        return [parse_profile(row) for row in rows]

    def update_mode(self, user_id: UUID, mode: UserMode) -> UserProfile:
        """Persist a new presentation mode."""
        return self._update(user_id, {"mode": mode.value})

    def update_preferences(
        self, user_id: UUID, preferences: UserPreferences
    ) -> UserProfile:
        """Persist new preferences."""
        return self._update(
            user_id, {"preferences": _preferences_payload(preferences)}
        )

    def _update(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        response = (
            self.client.table("user_profiles")
            .update(payload)
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user profile")
        return parse_profile(response.data[0])


def _preferences_payload(preferences: UserPreferences) -> dict[str, object]:
    return {
        "notifications": preferences.notifications,
        "theme": preferences.theme.value,
    }


def parse_profile(row: dict[str, object]) -> UserProfile:
    """Build a profile from a user_profiles row."""
    preferences = row.get("preferences") or {}
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        role=UserRole(row.get("role", UserRole.RESIDENT.value)),
        mode=UserMode(row.get("mode", UserMode.ADULT.value)),
        total_points=int(row.get("total_points", 0)),
        level=int(row.get("level", 1)),
        preferences=UserPreferences(
            notifications=bool(preferences.get("notifications", True)),
            theme=Theme(preferences.get("theme", Theme.LIGHT.value)),
        ),
    )
