"""User profile business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from waste_tracker.domain.enums import Theme, UserMode
from waste_tracker.domain.errors import InvalidInput, NotFound, Unauthorized
from waste_tracker.domain.models import UserPreferences, UserProfile


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create and return a new profile."""

    def list_profiles(self) -> list[UserProfile]:
        """Return all profiles."""

    def update_mode(self, user_id: UUID, mode: UserMode) -> UserProfile:
        """Persist a new presentation mode."""

    def update_preferences(
        self, user_id: UUID, preferences: UserPreferences
    ) -> UserProfile:
        """Persist new preferences."""


@dataclass
class UserService:
    """Application service for profile lifecycle actions."""

    repository: UserRepository

    def ensure_profile(self, user_id: UUID, name: str | None = None) -> UserProfile:
        """Ensure a profile exists for the user and return it."""
        existing = self.repository.get_profile(user_id)
        if existing:
            return existing
        return self.repository.create_profile(
            UserProfile(user_id=user_id, name=name or "Eco Hero")
        )

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the profile or raise NotFound."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFound(f"User {user_id} not found")
        return profile

    def set_mode(self, user_id: UUID, mode: UserMode | str) -> UserProfile:
        """Switch between adult and child mode."""
        self.get_profile(user_id)
        try:
            resolved = UserMode(mode)
        except ValueError as exc:
            raise InvalidInput(f"Unknown mode: {mode!r}") from exc
        return self.repository.update_mode(user_id, resolved)

    def update_preferences(
        self,
        user_id: UUID,
        notifications: bool | None = None,
        theme: Theme | str | None = None,
    ) -> UserProfile:
        """Update notification and theme preferences."""
        profile = self.get_profile(user_id)
        current = profile.preferences
        try:
            resolved_theme = Theme(theme) if theme is not None else current.theme
        except ValueError as exc:
            raise InvalidInput(f"Unknown theme: {theme!r}") from exc
        preferences = UserPreferences(
            notifications=current.notifications
            if notifications is None
            else notifications,
            theme=resolved_theme,
        )
        return self.repository.update_preferences(user_id, preferences)

    def require_admin(self, user_id: UUID) -> UserProfile:
        """Return the profile if it holds the admin role."""
        profile = self.get_profile(user_id)
        if not profile.is_admin:
            raise Unauthorized("Admin role required")
        return profile

    def list_admins(self) -> list[UserProfile]:
        """Return all admin profiles."""
        profiles = self.repository.list_profiles()
        return [profile for profile in profiles if profile.is_admin]
