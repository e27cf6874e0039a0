"""Supabase repository for notifications."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from waste_tracker.adapters.supabase_rows import (
    parse_optional_timestamp,
    parse_timestamp,
)
from waste_tracker.domain.enums import NotificationType
from waste_tracker.domain.rewards import NewNotification, Notification
from waste_tracker.services.notifications import NotificationRepository

_COLUMNS = "id, user_id, title, message, type, read, created_at, scheduled_for"


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for notifications."""

    client: Client

    def create_notification(self, notification: NewNotification) -> Notification:
        """Create a notification row and return it."""
        response = (
            self.client.table("notifications")
            .insert(
                {
                    "user_id": str(notification.user_id),
                    "title": notification.title,
                    "message": notification.message,
                    "type": notification.type.value,
                    "read": False,
                    "scheduled_for": notification.scheduled_for.isoformat()
                    if notification.scheduled_for
                    else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return parse_notification(response.data[0])

    def get_notification(self, notification_id: UUID) -> Notification | None:
        """Return a notification by id."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("id", str(notification_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_notification(response.data[0])

    def list_notifications(self, user_id: UUID, limit: int) -> list[Notification]:
        """Return the newest notifications for a user."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_notification(row) for row in response.data or []]

    def mark_read(self, notification_id: UUID) -> None:
        """Set the read flag."""
        self.client.table("notifications").update({"read": True}).eq(
            "id", str(notification_id)
        ).execute()


def parse_notification(row: dict[str, object]) -> Notification:
    """Build a notification from a row payload."""
    return Notification(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        message=str(row.get("message", "")),
        type=NotificationType(row.get("type", NotificationType.TIP.value)),
        read=bool(row.get("read", False)),
        created_at=parse_timestamp(row.get("created_at")),
        scheduled_for=parse_optional_timestamp(row.get("scheduled_for")),
    )
