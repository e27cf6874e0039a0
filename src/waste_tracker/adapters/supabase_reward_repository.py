"""Supabase repository for rewards."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from waste_tracker.adapters.supabase_notification_repository import (
    parse_notification,
)
from waste_tracker.adapters.supabase_rows import as_rows, parse_timestamp
from waste_tracker.adapters.supabase_user_repository import parse_profile
from waste_tracker.domain.enums import RewardCategory
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.rewards import (
    NewNotification,
    NewReward,
    Notification,
    Reward,
)
from waste_tracker.services.achievements import RewardRepository

_COLUMNS = "id, user_id, title, description, points, category, claimed, created_at"


@dataclass
class SupabaseRewardRepository(RewardRepository):
    """Supabase implementation for rewards."""

    client: Client

    def list_rewards(self, user_id: UUID) -> list[Reward]:
        """Return a user's rewards, newest first."""
        response = (
            self.client.table("rewards")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_reward(row) for row in response.data or []]

    def get_reward(self, reward_id: UUID) -> Reward | None:
        """Return a reward by id."""
        response = (
            self.client.table("rewards")
            .select(_COLUMNS)
            .eq("id", str(reward_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_reward(response.data[0])

    def find_reward(self, user_id: UUID, title: str) -> Reward | None:
        """Return the user's reward with the given title."""
        response = (
            self.client.table("rewards")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("title", title)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_reward(response.data[0])

    def create_reward_with_notification(
        self, reward: NewReward, notification: NewNotification
    ) -> tuple[Reward, Notification] | None:
        """Insert reward and notification in one database transaction."""
        response = self.client.rpc(
            "unlock_achievement",
            {
                "p_user_id": str(reward.user_id),
                "p_title": reward.title,
                "p_description": reward.description,
                "p_points": reward.points,
                "p_category": reward.category.value,
                "p_notification_title": notification.title,
                "p_notification_message": notification.message,
                "p_notification_type": notification.type.value,
            },
        ).execute()
        payload = response.data
        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if not payload or not payload.get("reward"):
            return None
        return (
            _parse_reward(payload["reward"]),
            parse_notification(payload["notification"]),
        )

    def claim_reward(self, reward_id: UUID) -> UserProfile | None:
        """Flip claimed and credit the reward's points in one transaction."""
        response = self.client.rpc(
            "claim_reward", {"p_reward_id": str(reward_id)}
        ).execute()
        rows = as_rows(response.data)
        if not rows:
            return None
        return parse_profile(rows[0])


def _parse_reward(row: dict[str, object]) -> Reward:
    return Reward(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        description=str(row.get("description", "")),
        points=int(row.get("points", 0)),
        category=RewardCategory(row.get("category", RewardCategory.MILESTONE.value)),
        claimed=bool(row.get("claimed", False)),
        created_at=parse_timestamp(row.get("created_at")),
    )
