"""Closed enumerations shared across the waste tracker."""

from enum import StrEnum


class WasteType(StrEnum):
    """Kinds of sorted waste."""

    PLASTIC = "plastic"
    ORGANIC = "organic"
    PAPER = "paper"
    GLASS = "glass"
    METAL = "metal"
    ELECTRONIC = "electronic"


class BinStatus(StrEnum):
    """Fill-level classification of a collection bin."""

    NORMAL = "normal"
    WARNING = "warning"
    FULL = "full"
    MAINTENANCE = "maintenance"


class RewardCategory(StrEnum):
    """Grouping used to present rewards."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MILESTONE = "milestone"
    SPECIAL = "special"


class NotificationType(StrEnum):
    """Kinds of user notifications."""

    REMINDER = "reminder"
    ACHIEVEMENT = "achievement"
    ALERT = "alert"
    TIP = "tip"


class UserRole(StrEnum):
    """Roles a profile can hold."""

    RESIDENT = "resident"
    ADMIN = "admin"


class UserMode(StrEnum):
    """Presentation mode selected by the user."""

    ADULT = "adult"
    CHILD = "child"


class Theme(StrEnum):
    """UI theme preference."""

    LIGHT = "light"
    DARK = "dark"


class AnalyticsPeriod(StrEnum):
    """Lookback windows for analytics and leaderboards."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        """Number of calendar days covered by the period."""
        return _PERIOD_DAYS[self]


_PERIOD_DAYS = {
    AnalyticsPeriod.WEEK: 7,
    AnalyticsPeriod.MONTH: 30,
    AnalyticsPeriod.YEAR: 365,
}


class Trend(StrEnum):
    """Direction of a waste-generation series."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class EcoFactCategory(StrEnum):
    """Topics eco facts are filed under."""

    PLASTIC = "plastic"
    ORGANIC = "organic"
    PAPER = "paper"
    GLASS = "glass"
    METAL = "metal"
    GENERAL = "general"
