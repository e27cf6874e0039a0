"""Tests for reward claiming."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from tests.conftest import (
    InMemoryRewardRepository,
    InMemoryUserRepository,
    InMemoryWasteEntryRepository,
    make_entry,
    make_profile,
)
from waste_tracker.domain.errors import Conflict, NotFound
from waste_tracker.services.achievements import AchievementService
from waste_tracker.services.rewards import RewardService


@pytest.fixture
def reward_service(reward_repository: InMemoryRewardRepository) -> RewardService:
    return RewardService(reward_repository)


def _unlock_first_steps(
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
):
    profile = user_repository.create_profile(make_profile())
    entry_repository.entries.append(make_entry(profile.user_id, datetime.now(tz=UTC)))
    reward = achievement_service.evaluate(profile.user_id).rewards[0]
    return profile, reward


def test_claim_sets_claimed_and_credits_points(
    reward_service: RewardService,
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
    reward_repository: InMemoryRewardRepository,
) -> None:
    profile, reward = _unlock_first_steps(
        achievement_service, user_repository, entry_repository
    )

    claimed = reward_service.claim(profile.user_id, reward.id)

    assert claimed.claimed
    assert reward_repository.rewards[reward.id].claimed
    assert user_repository.profiles[profile.user_id].total_points == 50


def test_second_claim_conflicts(
    reward_service: RewardService,
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    profile, reward = _unlock_first_steps(
        achievement_service, user_repository, entry_repository
    )
    reward_service.claim(profile.user_id, reward.id)

    with pytest.raises(Conflict):
        reward_service.claim(profile.user_id, reward.id)

    assert user_repository.profiles[profile.user_id].total_points == 50


def test_claim_of_foreign_reward_is_not_found(
    reward_service: RewardService,
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    _, reward = _unlock_first_steps(
        achievement_service, user_repository, entry_repository
    )

    with pytest.raises(NotFound):
        reward_service.claim(uuid4(), reward.id)


def test_claim_of_missing_reward_is_not_found(reward_service: RewardService) -> None:
    with pytest.raises(NotFound):
        reward_service.claim(uuid4(), uuid4())


def test_list_rewards_newest_first(
    reward_service: RewardService,
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    profile = user_repository.create_profile(make_profile())
    now = datetime.now(tz=UTC)
    entry_repository.entries.extend(
        make_entry(profile.user_id, now, weight=0.5) for _ in range(10)
    )
    achievement_service.evaluate(profile.user_id)

    titles = [reward.title for reward in reward_service.list_rewards(profile.user_id)]

    assert titles == ["Getting Started", "First Steps"]


def test_failed_point_credit_keeps_reward_claimable(
    reward_service: RewardService,
    achievement_service: AchievementService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
    reward_repository: InMemoryRewardRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    profile, reward = _unlock_first_steps(
        achievement_service, user_repository, entry_repository
    )

    def fail(user_id, points):  # type: ignore[no-untyped-def]
        raise RuntimeError("connection reset")

    monkeypatch.setattr(user_repository, "add_points", fail)
    with pytest.raises(RuntimeError):
        reward_service.claim(profile.user_id, reward.id)

    assert not reward_repository.rewards[reward.id].claimed
    assert user_repository.profiles[profile.user_id].total_points == 0

    monkeypatch.undo()
    claimed = reward_service.claim(profile.user_id, reward.id)

    assert claimed.claimed
    assert user_repository.profiles[profile.user_id].total_points == 50
