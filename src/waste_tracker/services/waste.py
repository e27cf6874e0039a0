"""Waste logging service."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from waste_tracker.domain.enums import WasteType
from waste_tracker.domain.errors import InvalidInput
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.rewards import AchievementUnlocks
from waste_tracker.domain.waste import NewWasteEntry, WasteEntry
from waste_tracker.services.achievements import AchievementService
from waste_tracker.services.impact import compute_impact, parse_waste_type
from waste_tracker.services.users import UserService

logger = logging.getLogger(__name__)


class WasteEntryRepository(Protocol):
    """Persistence interface for waste entries."""

    def record_entry(self, entry: NewWasteEntry) -> tuple[WasteEntry, UserProfile]:
        """Store an entry and credit its points in one transaction.

        Nothing is written when either step fails.
        """

    def list_entries(self, user_id: UUID) -> list[WasteEntry]:
        """Return every entry logged by the user, oldest first."""

    def list_entries_between(
        self, user_id: UUID | None, start: datetime, end: datetime
    ) -> list[WasteEntry]:
        """Return entries in [start, end]; all users when user_id is None."""

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[WasteEntry]:
        """Return the newest entries for a user."""


@dataclass(frozen=True)
class LoggedWaste:
    """Outcome of logging a waste entry."""

    entry: WasteEntry
    profile: UserProfile
    unlocks: AchievementUnlocks


@dataclass
class WasteLogService:
    """Scores, stores and follows up on waste entries."""

    repository: WasteEntryRepository
    user_service: UserService
    achievement_service: AchievementService

    def log_waste(  # noqa: PLR0913
        self,
        user_id: UUID,
        waste_type: WasteType | str,
        weight: float,
        location: str | None = None,
        ai_classified: bool = False,
        ai_confidence: float | None = None,
    ) -> LoggedWaste:
        """Persist an entry, credit its points and unlock achievements."""
        resolved_type = parse_waste_type(waste_type)
        impact = compute_impact(resolved_type, weight)
        if ai_confidence is not None and (
            not math.isfinite(ai_confidence) or not 0 <= ai_confidence <= 1
        ):
            raise InvalidInput("AI confidence must be between 0 and 1")
        self.user_service.get_profile(user_id)

        entry, profile = self.repository.record_entry(
            NewWasteEntry(
                user_id=user_id,
                waste_type=resolved_type,
                weight=float(weight),
                impact=impact,
                ai_classified=ai_classified,
                ai_confidence=ai_confidence,
                location=(location or "").strip() or None,
            )
        )
        logger.info(
            "Waste logged",
            extra={
                "user_id": str(user_id),
                "waste_type": resolved_type.value,
                "points": impact.points,
            },
        )
        unlocks = self.achievement_service.evaluate(user_id)
        return LoggedWaste(entry=entry, profile=profile, unlocks=unlocks)

    def list_entries(self, user_id: UUID, limit: int = 20) -> list[WasteEntry]:
        """Return the newest entries for a user."""
        return self.repository.list_recent_entries(user_id, limit)
