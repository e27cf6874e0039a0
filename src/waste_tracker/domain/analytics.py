"""Domain models for analytics, leaderboards and forecasts."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from waste_tracker.domain.enums import AnalyticsPeriod, Trend, WasteType


@dataclass(frozen=True)
class TypeTotals:
    """Summed impact for one waste type."""

    weight: float
    points: int
    co2_saved: float
    landfill_reduced: float
    entries: int


@dataclass(frozen=True)
class DailyPoint:
    """Totals for a single UTC calendar day."""

    day: date
    weight: float
    points: int
    co2_saved: float


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Aggregated view of entries within a period."""

    period: AnalyticsPeriod
    by_type: dict[WasteType, TypeTotals]
    total_weight: float
    total_points: int
    total_co2_saved: float
    total_landfill_reduced: float
    total_entries: int
    daily_data: list[DailyPoint]


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked user with their totals for the period."""

    rank: int
    user_id: UUID
    name: str
    level: int
    points: int
    weight: float
    co2_saved: float


@dataclass(frozen=True)
class TrendForecast:
    """Forecast for one waste type."""

    next_week: float
    trend: Trend
    confidence: int
    data_points: int


@dataclass(frozen=True)
class Insights:
    """Short observations and tips derived from a user's history."""

    insights: list[str]
    tips: list[str]
