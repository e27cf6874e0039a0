"""Tests for analytics aggregation, leaderboards and insights."""

from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID

import pytest

from tests.conftest import (
    InMemoryUserRepository,
    InMemoryWasteEntryRepository,
    make_entry,
    make_profile,
)
from waste_tracker.domain.enums import AnalyticsPeriod, Trend, WasteType
from waste_tracker.domain.errors import InvalidInput
from waste_tracker.domain.waste import WasteEntry
from waste_tracker.services.analytics import (
    STARTER_INSIGHTS,
    STARTER_TIPS,
    AnalyticsService,
    aggregate,
    daily_series_per_type,
    rank,
    window_bounds,
)

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def analytics_service(
    entry_repository: InMemoryWasteEntryRepository,
    user_repository: InMemoryUserRepository,
) -> AnalyticsService:
    return AnalyticsService(entry_repository, user_repository)


def test_window_bounds_start_at_utc_midnight() -> None:
    start, end = window_bounds(AnalyticsPeriod.WEEK, NOW)

    assert start == datetime(2024, 5, 4, tzinfo=UTC)
    assert end == NOW


def test_aggregate_fills_every_day_of_the_week() -> None:
    user_id = make_profile().user_id
    entries = [
        make_entry(user_id, datetime(2024, 5, 4, 0, 0, tzinfo=UTC), 1.0),
        make_entry(
            user_id, datetime(2024, 5, 7, 9, 0, tzinfo=UTC), 2.0, WasteType.PAPER
        ),
        make_entry(
            user_id, datetime(2024, 5, 10, 11, 0, tzinfo=UTC), 0.5, WasteType.GLASS
        ),
    ]

    snapshot = aggregate(entries, AnalyticsPeriod.WEEK, NOW)

    assert len(snapshot.daily_data) == 7
    assert [point.day for point in snapshot.daily_data] == [
        date(2024, 5, 4) + timedelta(days=offset) for offset in range(7)
    ]
    assert [point.weight for point in snapshot.daily_data] == [
        1.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.5,
    ]
    assert snapshot.total_weight == 3.5
    assert snapshot.total_points == 35
    assert snapshot.total_entries == 3
    assert snapshot.by_type[WasteType.PAPER].weight == 2.0
    assert snapshot.by_type[WasteType.PAPER].entries == 1
    assert WasteType.METAL not in snapshot.by_type


def test_aggregate_excludes_entries_outside_window() -> None:
    user_id = make_profile().user_id
    entries = [
        make_entry(user_id, datetime(2024, 5, 3, 23, 59, tzinfo=UTC), 4.0),
        make_entry(user_id, datetime(2024, 5, 10, 13, 0, tzinfo=UTC), 4.0),
        make_entry(user_id, datetime(2024, 5, 5, 10, 0, tzinfo=UTC), 1.5),
    ]

    snapshot = aggregate(entries, AnalyticsPeriod.WEEK, NOW)

    assert snapshot.total_weight == 1.5
    assert sum(point.weight for point in snapshot.daily_data) == 1.5


def test_aggregate_of_nothing_is_all_zeros() -> None:
    snapshot = aggregate([], AnalyticsPeriod.MONTH, NOW)

    assert snapshot.total_weight == 0
    assert snapshot.total_points == 0
    assert snapshot.by_type == {}
    assert len(snapshot.daily_data) == 30
    assert all(point.weight == 0 for point in snapshot.daily_data)


def test_rank_breaks_ties_by_weight_then_user_id() -> None:
    heavy = make_profile("Heavy")
    light = make_profile("Light")
    idle_a = make_profile("Idle A")
    idle_b = make_profile("Idle B")
    when = datetime(2024, 5, 9, tzinfo=UTC)
    entries = [
        make_entry(heavy.user_id, when, 3.0),
        make_entry(light.user_id, when, 2.96),
    ]

    board = rank(
        [idle_b, light, idle_a, heavy], entries, AnalyticsPeriod.WEEK, 10, NOW
    )

    idle = sorted([idle_a, idle_b], key=lambda profile: str(profile.user_id))
    assert [row.user_id for row in board] == [
        heavy.user_id,
        light.user_id,
        idle[0].user_id,
        idle[1].user_id,
    ]
    assert [row.rank for row in board] == [1, 2, 3, 4]
    assert board[0].points == board[1].points == 30
    assert board[2].points == 0


def test_rank_applies_limit() -> None:
    profiles = [make_profile(f"User {index}") for index in range(6)]

    board = rank(profiles, [], AnalyticsPeriod.WEEK, 5, NOW)

    assert len(board) == 5


@pytest.mark.parametrize("limit", [0, -1])
def test_rank_rejects_limit_below_one(limit: int) -> None:
    with pytest.raises(InvalidInput):
        rank([make_profile()], [], AnalyticsPeriod.WEEK, limit, NOW)


def test_get_analytics_scopes_to_user_or_everyone(
    analytics_service: AnalyticsService,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    first = make_profile().user_id
    second = make_profile().user_id
    entry_repository.entries.extend(
        [
            make_entry(first, datetime(2024, 5, 9, tzinfo=UTC), 1.0),
            make_entry(second, datetime(2024, 5, 9, tzinfo=UTC), 2.0),
        ]
    )

    own = analytics_service.get_analytics(first, "week", now=NOW)
    everyone = analytics_service.get_analytics(None, "week", now=NOW)

    assert own.total_weight == 1.0
    assert everyone.total_weight == 3.0


def test_get_analytics_rejects_unknown_period(
    analytics_service: AnalyticsService,
) -> None:
    with pytest.raises(InvalidInput):
        analytics_service.get_analytics(make_profile().user_id, "decade", now=NOW)


def test_get_leaderboard_includes_users_without_entries(
    analytics_service: AnalyticsService,
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    active = user_repository.create_profile(make_profile("Active"))
    idle = user_repository.create_profile(make_profile("Idle"))
    entry_repository.entries.append(
        make_entry(active.user_id, datetime(2024, 5, 9, tzinfo=UTC), 1.0)
    )

    board = analytics_service.get_leaderboard("week", limit=5, now=NOW)

    assert [row.name for row in board] == ["Active", "Idle"]
    assert board[1].user_id == idle.user_id


def _increasing_history(user_id: UUID) -> list[WasteEntry]:
    today = NOW.date()
    return [
        make_entry(
            user_id,
            datetime.combine(today - timedelta(days=13 - offset), time(8), tzinfo=UTC),
            float(offset + 1),
        )
        for offset in range(14)
    ]


def test_daily_series_starts_at_first_logged_day() -> None:
    user_id = make_profile().user_id
    entries = [
        make_entry(user_id, datetime(2024, 5, 8, 9, tzinfo=UTC), 1.0),
        make_entry(user_id, datetime(2024, 5, 10, 9, tzinfo=UTC), 2.0),
        make_entry(user_id, datetime(2024, 5, 10, 10, tzinfo=UTC), 0.5),
        make_entry(user_id, datetime(2024, 5, 10, 8, tzinfo=UTC), 1.0, WasteType.GLASS),
    ]

    series = daily_series_per_type(entries, NOW)

    assert series[WasteType.PLASTIC] == [1.0, 0.0, 2.5]
    assert series[WasteType.GLASS] == [1.0]


def test_get_predictions_forecasts_rising_type(
    analytics_service: AnalyticsService,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    user_id = make_profile().user_id
    entry_repository.entries.extend(_increasing_history(user_id))
    entry_repository.entries.append(
        make_entry(user_id, datetime(2024, 5, 10, 9, tzinfo=UTC), 1.0, WasteType.GLASS)
    )
    entry_repository.entries.append(
        make_entry(user_id, datetime(2024, 4, 20, 9, tzinfo=UTC), 50.0, WasteType.METAL)
    )

    predictions = analytics_service.get_predictions(user_id, now=NOW)

    assert set(predictions) == {WasteType.PLASTIC}
    forecast = predictions[WasteType.PLASTIC]
    assert forecast.trend is Trend.INCREASING
    assert forecast.data_points == 14
    assert forecast.next_week == pytest.approx(126.0)
    assert 40 <= forecast.confidence <= 95


def test_insights_for_new_user(analytics_service: AnalyticsService) -> None:
    insights = analytics_service.generate_insights(make_profile().user_id)

    assert insights.insights == STARTER_INSIGHTS
    assert insights.tips == STARTER_TIPS


def test_insights_summarize_history(
    analytics_service: AnalyticsService,
    entry_repository: InMemoryWasteEntryRepository,
) -> None:
    user_id = make_profile().user_id
    when = datetime(2024, 5, 9, tzinfo=UTC)
    entry_repository.entries.extend(
        [
            make_entry(user_id, when, 1.0),
            make_entry(user_id, when, 1.0),
            make_entry(user_id, when, 2.0, WasteType.PAPER),
        ]
    )

    insights = analytics_service.generate_insights(user_id)

    assert insights.insights == [
        "You've logged 4.0kg of waste - great job tracking!",
        "Your efforts have saved 8.6kg of CO2 emissions",
        "Your most logged waste type is plastic",
    ]
    assert len(insights.tips) == 3


@pytest.mark.parametrize(
    ("older", "newer"),
    [(WasteType.PLASTIC, WasteType.PAPER), (WasteType.METAL, WasteType.GLASS)],
)
def test_insights_tie_goes_to_most_recent_type(
    analytics_service: AnalyticsService,
    entry_repository: InMemoryWasteEntryRepository,
    older: WasteType,
    newer: WasteType,
) -> None:
    user_id = make_profile().user_id
    entry_repository.entries.extend(
        [
            make_entry(user_id, datetime(2024, 5, 8, tzinfo=UTC), 1.0, older),
            make_entry(user_id, datetime(2024, 5, 9, tzinfo=UTC), 1.0, newer),
        ]
    )

    insights = analytics_service.generate_insights(user_id)

    assert insights.insights[2] == f"Your most logged waste type is {newer.value}"
