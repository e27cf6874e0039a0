"""Reward listing and claiming."""

import logging
from dataclasses import dataclass
from uuid import UUID

from waste_tracker.domain.errors import Conflict, NotFound
from waste_tracker.domain.rewards import Reward
from waste_tracker.services.achievements import RewardRepository

logger = logging.getLogger(__name__)


@dataclass
class RewardService:
    """Application service for a user's rewards."""

    repository: RewardRepository

    def list_rewards(self, user_id: UUID) -> list[Reward]:
        """Return the user's rewards, newest first."""
        return self.repository.list_rewards(user_id)

    def claim(self, user_id: UUID, reward_id: UUID) -> Reward:
        """Claim a reward once and credit its points to the profile."""
        reward = self.repository.get_reward(reward_id)
        if reward is None or reward.user_id != user_id:
            raise NotFound("Reward not found")
        if reward.claimed or self.repository.claim_reward(reward_id) is None:
            raise Conflict("Reward already claimed")
        logger.info(
            "Reward claimed",
            extra={"user_id": str(user_id), "reward_id": str(reward_id)},
        )
        return Reward(
            id=reward.id,
            user_id=reward.user_id,
            title=reward.title,
            description=reward.description,
            points=reward.points,
            category=reward.category,
            claimed=True,
            created_at=reward.created_at,
        )
