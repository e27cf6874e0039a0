"""Domain models for rewards and notifications."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from waste_tracker.domain.enums import NotificationType, RewardCategory


@dataclass(frozen=True)
class Reward:
    """A reward unlocked by a user."""

    id: UUID
    user_id: UUID
    title: str
    description: str
    points: int
    category: RewardCategory
    claimed: bool
    created_at: datetime


@dataclass(frozen=True)
class Notification:
    """A message shown to a user."""

    id: UUID
    user_id: UUID
    title: str
    message: str
    type: NotificationType
    read: bool
    created_at: datetime
    scheduled_for: datetime | None = None


@dataclass(frozen=True)
class NewReward:
    """Reward data ready to be persisted."""

    user_id: UUID
    title: str
    description: str
    points: int
    category: RewardCategory


@dataclass(frozen=True)
class NewNotification:
    """Notification data ready to be persisted."""

    user_id: UUID
    title: str
    message: str
    type: NotificationType
    scheduled_for: datetime | None = None


@dataclass(frozen=True)
class AchievementUnlocks:
    """Rewards and notifications created by one evaluation pass."""

    rewards: list[Reward] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
