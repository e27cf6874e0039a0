"""Notification service."""

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from waste_tracker.domain.enums import NotificationType
from waste_tracker.domain.errors import NotFound
from waste_tracker.domain.rewards import NewNotification, Notification
from waste_tracker.services.users import UserRepository

logger = logging.getLogger(__name__)

DAILY_REMINDERS = (
    "Don't forget to segregate your waste today!",
    "Today is a great day to make a difference - log your waste!",
    "Remember: Every piece of waste sorted helps our planet!",
)


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(self, notification: NewNotification) -> Notification:
        """Create a notification and return it."""

    def get_notification(self, notification_id: UUID) -> Notification | None:
        """Return a notification by id."""

    def list_notifications(self, user_id: UUID, limit: int) -> list[Notification]:
        """Return the newest notifications for a user."""

    def mark_read(self, notification_id: UUID) -> None:
        """Set the read flag on a notification."""


@dataclass
class NotificationService:
    """Service for creating and reading notifications."""

    repository: NotificationRepository
    user_repository: UserRepository
    rng: random.Random = field(default_factory=random.Random)

    def create(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType,
    ) -> Notification:
        """Create an unread notification."""
        return self.repository.create_notification(
            NewNotification(
                user_id=user_id,
                title=title,
                message=message,
                type=notification_type,
            )
        )

    def list_notifications(self, user_id: UUID, limit: int = 20) -> list[Notification]:
        """Return recent notifications, newest first."""
        return self.repository.list_notifications(user_id, limit)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """Mark one of the user's notifications as read."""
        notification = self.repository.get_notification(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFound("Notification not found")
        if notification.read:
            return
        self.repository.mark_read(notification_id)

    def send_daily_reminders(self) -> list[Notification]:
        """Send a reminder to every user who has notifications enabled."""
        sent = []
        for profile in self.user_repository.list_profiles():
            if not profile.preferences.notifications:
                continue
            sent.append(
                self.create(
                    profile.user_id,
                    "Daily Reminder",
                    self.rng.choice(DAILY_REMINDERS),
                    NotificationType.REMINDER,
                )
            )
        logger.info("Daily reminders sent", extra={"count": len(sent)})
        return sent
