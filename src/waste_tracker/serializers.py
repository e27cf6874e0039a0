"""JSON-friendly views of domain records."""

from waste_tracker.domain.analytics import (
    AnalyticsSnapshot,
    Insights,
    LeaderboardEntry,
    TrendForecast,
)
from waste_tracker.domain.bins import Bin, BinLevelUpdate
from waste_tracker.domain.enums import WasteType
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.rewards import AchievementUnlocks, Notification, Reward
from waste_tracker.domain.waste import WasteEntry
from waste_tracker.services.eco_facts import EcoFact


def serialize_profile(profile: UserProfile) -> dict[str, object]:
    return {
        "user_id": str(profile.user_id),
        "name": profile.name,
        "role": profile.role.value,
        "mode": profile.mode.value,
        "total_points": profile.total_points,
        "level": profile.level,
        "preferences": {
            "notifications": profile.preferences.notifications,
            "theme": profile.preferences.theme.value,
        },
    }


def serialize_entry(entry: WasteEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "waste_type": entry.waste_type.value,
        "weight": entry.weight,
        "points": entry.points,
        "co2_saved": entry.co2_saved,
        "landfill_reduced": entry.landfill_reduced,
        "ai_classified": entry.ai_classified,
        "ai_confidence": entry.ai_confidence,
        "location": entry.location,
        "created_at": entry.created_at.isoformat(),
    }


def serialize_reward(reward: Reward) -> dict[str, object]:
    return {
        "id": str(reward.id),
        "title": reward.title,
        "description": reward.description,
        "points": reward.points,
        "category": reward.category.value,
        "claimed": reward.claimed,
        "created_at": reward.created_at.isoformat(),
    }


def serialize_notification(notification: Notification) -> dict[str, object]:
    return {
        "id": str(notification.id),
        "title": notification.title,
        "message": notification.message,
        "type": notification.type.value,
        "read": notification.read,
        "created_at": notification.created_at.isoformat(),
    }


def serialize_unlocks(unlocks: AchievementUnlocks) -> dict[str, object]:
    return {
        "rewards": [serialize_reward(reward) for reward in unlocks.rewards],
        "notifications": [
            serialize_notification(notification)
            for notification in unlocks.notifications
        ],
    }


def serialize_bin(item: Bin) -> dict[str, object]:
    return {
        "id": str(item.id),
        "location": item.location,
        "waste_type": item.waste_type.value,
        "capacity": item.capacity,
        "current_level": item.current_level,
        "percentage": round(item.percentage, 1),
        "last_collection": item.last_collection.isoformat(),
        "sensor_id": item.sensor_id,
        "status": item.status.value,
    }


def serialize_bin_update(update: BinLevelUpdate) -> dict[str, object]:
    return {
        "bin": serialize_bin(update.bin),
        "status": update.bin.status.value,
        "percentage": round(update.percentage, 1),
        "alert_emitted": update.alert_emitted,
    }


def serialize_snapshot(snapshot: AnalyticsSnapshot) -> dict[str, object]:
    return {
        "period": snapshot.period.value,
        "by_type": {
            waste_type.value: {
                "weight": totals.weight,
                "points": totals.points,
                "co2_saved": totals.co2_saved,
                "landfill_reduced": totals.landfill_reduced,
                "entries": totals.entries,
            }
            for waste_type, totals in snapshot.by_type.items()
        },
        "total_weight": snapshot.total_weight,
        "total_points": snapshot.total_points,
        "total_co2_saved": snapshot.total_co2_saved,
        "total_landfill_reduced": snapshot.total_landfill_reduced,
        "total_entries": snapshot.total_entries,
        "daily_data": [
            {
                "date": point.day.isoformat(),
                "weight": point.weight,
                "points": point.points,
                "co2_saved": point.co2_saved,
            }
            for point in snapshot.daily_data
        ],
    }


def serialize_leaderboard_entry(row: LeaderboardEntry) -> dict[str, object]:
    return {
        "rank": row.rank,
        "user_id": str(row.user_id),
        "name": row.name,
        "level": row.level,
        "points": row.points,
        "weight": round(row.weight, 3),
        "co2_saved": round(row.co2_saved, 3),
    }


def serialize_predictions(
    predictions: dict[WasteType, TrendForecast],
) -> dict[str, object]:
    return {
        waste_type.value: {
            "next_week": forecast.next_week,
            "trend": forecast.trend.value,
            "confidence": forecast.confidence,
            "data_points": forecast.data_points,
        }
        for waste_type, forecast in predictions.items()
    }


def serialize_insights(insights: Insights) -> dict[str, object]:
    return {"insights": insights.insights, "tips": insights.tips}


def serialize_eco_fact(fact: EcoFact) -> dict[str, object]:
    return {
        "fact": fact.fact,
        "category": fact.category.value,
        "for_children": fact.for_children,
        "icon": fact.icon,
    }
