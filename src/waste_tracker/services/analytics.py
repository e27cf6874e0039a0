"""Analytics aggregation, leaderboards and insights."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID

from waste_tracker.domain.analytics import (
    AnalyticsSnapshot,
    DailyPoint,
    Insights,
    LeaderboardEntry,
    TrendForecast,
    TypeTotals,
)
from waste_tracker.domain.enums import AnalyticsPeriod, WasteType
from waste_tracker.domain.errors import InvalidInput
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.waste import WasteEntry
from waste_tracker.services.trends import TREND_WINDOW_DAYS, predict_trend
from waste_tracker.services.users import UserRepository
from waste_tracker.services.waste import WasteEntryRepository

INSIGHT_ENTRY_LIMIT = 100

STARTER_INSIGHTS = [
    "Start logging your waste to get personalized insights!",
    "Every small action counts towards a greener planet.",
]
STARTER_TIPS = [
    "Try to reduce plastic usage by using reusable bags",
    "Compost organic waste to create nutrient-rich soil",
]
GENERAL_TIPS = [
    "Consider reducing single-use plastics to lower your environmental impact",
    "Organic waste can be composted to create valuable fertilizer",
    "Recycling paper saves trees and reduces landfill waste",
]


def parse_period(value: AnalyticsPeriod | str) -> AnalyticsPeriod:
    """Coerce a raw value to a period or raise InvalidInput."""
    try:
        return AnalyticsPeriod(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown period: {value!r}") from exc


def window_bounds(period: AnalyticsPeriod, now: datetime) -> tuple[datetime, datetime]:
    """Return the UTC window covering ``period.days`` calendar days up to now."""
    end = now.astimezone(UTC)
    first_day = end.date() - timedelta(days=period.days - 1)
    return datetime.combine(first_day, time.min, tzinfo=UTC), end


def aggregate(
    entries: Iterable[WasteEntry], period: AnalyticsPeriod, now: datetime
) -> AnalyticsSnapshot:
    """Bucket entries by UTC day and waste type within the period window.

    Days without entries appear in ``daily_data`` with zero values, so the
    sequence always holds exactly ``period.days`` points.
    """
    start, end = window_bounds(period, now)
    in_window = [entry for entry in entries if _within(entry, start, end)]

    daily: dict[date, list[WasteEntry]] = defaultdict(list)
    by_type: dict[WasteType, list[WasteEntry]] = defaultdict(list)
    for entry in in_window:
        daily[entry.created_at.astimezone(UTC).date()].append(entry)
        by_type[entry.waste_type].append(entry)

    daily_data = []
    for offset in range(period.days):
        day = start.date() + timedelta(days=offset)
        bucket = daily.get(day, [])
        daily_data.append(
            DailyPoint(
                day=day,
                weight=sum(entry.weight for entry in bucket),
                points=sum(entry.points for entry in bucket),
                co2_saved=sum(entry.co2_saved for entry in bucket),
            )
        )

    return AnalyticsSnapshot(
        period=period,
        by_type={
            waste_type: _type_totals(typed)
            for waste_type, typed in sorted(by_type.items())
        },
        total_weight=sum(entry.weight for entry in in_window),
        total_points=sum(entry.points for entry in in_window),
        total_co2_saved=sum(entry.co2_saved for entry in in_window),
        total_landfill_reduced=sum(entry.landfill_reduced for entry in in_window),
        total_entries=len(in_window),
        daily_data=daily_data,
    )


def rank(
    users: Iterable[UserProfile],
    entries: Iterable[WasteEntry],
    period: AnalyticsPeriod,
    limit: int,
    now: datetime,
) -> list[LeaderboardEntry]:
    """Rank users by points earned in the period.

    Ties are broken by weight (descending), then by user id (ascending).
    """
    if limit < 1:
        raise InvalidInput("Leaderboard limit must be at least 1")
    start, end = window_bounds(period, now)
    totals: dict[UUID, list[float]] = {}
    for entry in entries:
        if not _within(entry, start, end):
            continue
        points, weight, co2 = totals.get(entry.user_id, [0, 0.0, 0.0])
        totals[entry.user_id] = [
            points + entry.points,
            weight + entry.weight,
            co2 + entry.co2_saved,
        ]

    rows = []
    for user in users:
        points, weight, co2 = totals.get(user.user_id, [0, 0.0, 0.0])
        rows.append((user, int(points), weight, co2))
    rows.sort(key=lambda row: (-row[1], -row[2], str(row[0].user_id)))

    return [
        LeaderboardEntry(
            rank=position,
            user_id=user.user_id,
            name=user.name,
            level=user.level,
            points=points,
            weight=weight,
            co2_saved=co2,
        )
        for position, (user, points, weight, co2) in enumerate(rows[:limit], start=1)
    ]


def daily_series_per_type(
    entries: Iterable[WasteEntry], now: datetime, days: int = TREND_WINDOW_DAYS
) -> dict[WasteType, list[float]]:
    """Build zero-filled daily weight series per type over the last ``days``.

    A type's series starts on the first day it appears in the window, so a
    type logged only today yields a single value.
    """
    today = now.astimezone(UTC).date()
    first_day = today - timedelta(days=days - 1)
    weights: dict[WasteType, dict[date, float]] = defaultdict(dict)
    for entry in entries:
        day = entry.created_at.astimezone(UTC).date()
        if not first_day <= day <= today:
            continue
        per_day = weights[entry.waste_type]
        per_day[day] = per_day.get(day, 0.0) + entry.weight

    series = {}
    for waste_type, per_day in weights.items():
        start = min(per_day)
        span = (today - start).days + 1
        series[waste_type] = [
            per_day.get(start + timedelta(days=offset), 0.0) for offset in range(span)
        ]
    return series


@dataclass
class AnalyticsService:
    """Read-side service over stored waste entries."""

    repository: WasteEntryRepository
    user_repository: UserRepository

    def get_analytics(
        self,
        user_id: UUID | None,
        period: AnalyticsPeriod | str,
        now: datetime | None = None,
    ) -> AnalyticsSnapshot:
        """Aggregate one user's entries, or everyone's when user_id is None."""
        resolved = parse_period(period)
        current = now or datetime.now(tz=UTC)
        start, end = window_bounds(resolved, current)
        entries = self.repository.list_entries_between(user_id, start, end)
        return aggregate(entries, resolved, current)

    def get_leaderboard(
        self,
        period: AnalyticsPeriod | str,
        limit: int = 5,
        now: datetime | None = None,
    ) -> list[LeaderboardEntry]:
        """Return the top users for the period."""
        resolved = parse_period(period)
        current = now or datetime.now(tz=UTC)
        start, end = window_bounds(resolved, current)
        entries = self.repository.list_entries_between(None, start, end)
        return rank(
            self.user_repository.list_profiles(), entries, resolved, limit, current
        )

    def get_predictions(
        self, user_id: UUID, now: datetime | None = None
    ) -> dict[WasteType, TrendForecast]:
        """Forecast next week's weight per waste type from the last two weeks."""
        current = now or datetime.now(tz=UTC)
        today = current.astimezone(UTC).date()
        start = datetime.combine(
            today - timedelta(days=TREND_WINDOW_DAYS - 1), time.min, tzinfo=UTC
        )
        entries = self.repository.list_entries_between(user_id, start, current)
        return predict_trend(daily_series_per_type(entries, current))

    def generate_insights(self, user_id: UUID) -> Insights:
        """Summarize the user's recent history in a few sentences.

        When two types are logged equally often, the one logged most recently
        is reported as the most logged.
        """
        entries = self.repository.list_recent_entries(user_id, INSIGHT_ENTRY_LIMIT)
        if not entries:
            return Insights(insights=list(STARTER_INSIGHTS), tips=list(STARTER_TIPS))
        total_weight = sum(entry.weight for entry in entries)
        total_co2 = sum(entry.co2_saved for entry in entries)
        # Entries arrive newest first and Counter keeps first-seen order on ties.
        counts = Counter(entry.waste_type for entry in entries)
        top_type = counts.most_common(1)[0][0]
        return Insights(
            insights=[
                f"You've logged {total_weight:.1f}kg of waste - great job tracking!",
                f"Your efforts have saved {total_co2:.1f}kg of CO2 emissions",
                f"Your most logged waste type is {top_type.value}",
            ],
            tips=list(GENERAL_TIPS),
        )


def _within(entry: WasteEntry, start: datetime, end: datetime) -> bool:
    return start <= entry.created_at <= end


def _type_totals(entries: list[WasteEntry]) -> TypeTotals:
    return TypeTotals(
        weight=sum(entry.weight for entry in entries),
        points=sum(entry.points for entry in entries),
        co2_saved=sum(entry.co2_saved for entry in entries),
        landfill_reduced=sum(entry.landfill_reduced for entry in entries),
        entries=len(entries),
    )
