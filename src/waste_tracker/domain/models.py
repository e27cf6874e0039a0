"""User profile models."""

from dataclasses import dataclass, field
from uuid import UUID

from waste_tracker.domain.enums import Theme, UserMode, UserRole

POINTS_PER_LEVEL = 500


@dataclass(frozen=True)
class UserPreferences:
    """Per-user presentation preferences."""

    notifications: bool = True
    theme: Theme = Theme.LIGHT


@dataclass(frozen=True)
class UserProfile:
    """Represents a user's profile stored in the database."""

    user_id: UUID
    name: str
    role: UserRole = UserRole.RESIDENT
    mode: UserMode = UserMode.ADULT
    total_points: int = 0
    level: int = 1
    preferences: UserPreferences = field(default_factory=UserPreferences)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def level_for_points(total_points: int) -> int:
    """Return the level reached with the given running point total."""
    return 1 + max(total_points, 0) // POINTS_PER_LEVEL
