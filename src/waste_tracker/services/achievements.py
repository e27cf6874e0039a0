"""Achievement rules and the unlock evaluator."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from waste_tracker.domain.enums import NotificationType, RewardCategory
from waste_tracker.domain.errors import NotFound
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.rewards import (
    AchievementUnlocks,
    NewNotification,
    NewReward,
    Notification,
    Reward,
)
from waste_tracker.domain.waste import WasteEntry
from waste_tracker.services.users import UserRepository

logger = logging.getLogger(__name__)

UNLOCK_NOTIFICATION_TITLE = "Achievement Unlocked!"


@dataclass(frozen=True)
class AchievementStats:
    """Aggregate figures rules are evaluated against."""

    entry_count: int
    total_weight: float
    total_points: int

    @classmethod
    def from_entries(cls, entries: Iterable[WasteEntry]) -> "AchievementStats":
        count = 0
        weight = 0.0
        points = 0
        for entry in entries:
            count += 1
            weight += entry.weight
            points += entry.points
        return cls(entry_count=count, total_weight=weight, total_points=points)


@dataclass(frozen=True)
class AchievementRule:
    """A condition over a user's history and the reward it unlocks."""

    title: str
    description: str
    points: int
    category: RewardCategory
    predicate: Callable[[AchievementStats], bool]

    def is_satisfied(self, stats: AchievementStats) -> bool:
        return self.predicate(stats)


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(
        title="First Steps",
        description="Logged your first waste entry!",
        points=50,
        category=RewardCategory.MILESTONE,
        predicate=lambda stats: stats.entry_count >= 1,
    ),
    AchievementRule(
        title="Getting Started",
        description="Logged 10 waste entries!",
        points=100,
        category=RewardCategory.MILESTONE,
        predicate=lambda stats: stats.entry_count >= 10,
    ),
    AchievementRule(
        title="Eco Warrior",
        description="Logged 50 waste entries!",
        points=250,
        category=RewardCategory.MILESTONE,
        predicate=lambda stats: stats.entry_count >= 50,
    ),
    AchievementRule(
        title="10kg Milestone",
        description="Sorted 10kg of waste!",
        points=200,
        category=RewardCategory.MILESTONE,
        predicate=lambda stats: stats.total_weight >= 10,
    ),
    AchievementRule(
        title="Point Master",
        description="Earned 1000 points!",
        points=300,
        category=RewardCategory.MILESTONE,
        predicate=lambda stats: stats.total_points >= 1000,
    ),
)


class AchievementEntryRepository(Protocol):
    """Read access to a user's full entry history."""

    def list_entries(self, user_id: UUID) -> list[WasteEntry]:
        """Return every entry logged by the user."""


class RewardRepository(Protocol):
    """Persistence interface for rewards."""

    def list_rewards(self, user_id: UUID) -> list[Reward]:
        """Return a user's rewards, newest first."""

    def get_reward(self, reward_id: UUID) -> Reward | None:
        """Return a reward by id."""

    def find_reward(self, user_id: UUID, title: str) -> Reward | None:
        """Return the user's reward with the given title, claimed or not."""

    def create_reward_with_notification(
        self, reward: NewReward, notification: NewNotification
    ) -> tuple[Reward, Notification] | None:
        """Insert both records atomically.

        Returns None without writing anything when the user already holds a
        reward with the same title.
        """

    def claim_reward(self, reward_id: UUID) -> UserProfile | None:
        """Mark the reward claimed and credit its points in one transaction.

        Returns the updated profile, or None without writing anything when the
        reward was already claimed.
        """


@dataclass
class AchievementService:
    """Evaluates the rule table and records newly earned rewards."""

    entry_repository: AchievementEntryRepository
    reward_repository: RewardRepository
    user_repository: UserRepository
    rules: tuple[AchievementRule, ...] = ACHIEVEMENT_RULES

    def evaluate(self, user_id: UUID) -> AchievementUnlocks:
        """Unlock every satisfied rule the user does not hold yet."""
        if self.user_repository.get_profile(user_id) is None:
            raise NotFound(f"User {user_id} not found")
        stats = AchievementStats.from_entries(
            self.entry_repository.list_entries(user_id)
        )
        unlocks = AchievementUnlocks()
        for rule in self.rules:
            if not rule.is_satisfied(stats):
                continue
            if self.reward_repository.find_reward(user_id, rule.title) is not None:
                continue
            created = self.reward_repository.create_reward_with_notification(
                _reward_for(user_id, rule), _notification_for(user_id, rule)
            )
            if created is None:
                # Another evaluation won the race for this title.
                continue
            reward, notification = created
            unlocks.rewards.append(reward)
            unlocks.notifications.append(notification)
            logger.info(
                "Achievement unlocked",
                extra={"user_id": str(user_id), "title": rule.title},
            )
        return unlocks


def _reward_for(user_id: UUID, rule: AchievementRule) -> NewReward:
    return NewReward(
        user_id=user_id,
        title=rule.title,
        description=rule.description,
        points=rule.points,
        category=rule.category,
    )


def _notification_for(user_id: UUID, rule: AchievementRule) -> NewNotification:
    return NewNotification(
        user_id=user_id,
        title=UNLOCK_NOTIFICATION_TITLE,
        message=f'You earned "{rule.title}" - {rule.description}',
        type=NotificationType.ACHIEVEMENT,
    )
