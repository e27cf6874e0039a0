"""Admin service for reporting."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from waste_tracker.domain.enums import AnalyticsPeriod, BinStatus
from waste_tracker.serializers import serialize_bin, serialize_leaderboard_entry
from waste_tracker.services.analytics import AnalyticsService
from waste_tracker.services.bins import BinRepository
from waste_tracker.services.users import UserRepository
from waste_tracker.services.waste import WasteEntryRepository

OVERVIEW_LEADERBOARD_LIMIT = 10


@dataclass
class AdminService:
    """Service for admin dashboards."""

    user_repository: UserRepository
    entry_repository: WasteEntryRepository
    bin_repository: BinRepository
    analytics_service: AnalyticsService

    def get_overview(self) -> dict[str, object]:
        """Return user, bin and leaderboard summaries."""
        profiles = self.user_repository.list_profiles()
        bins = self.bin_repository.list_bins()
        by_status = {status.value: 0 for status in BinStatus}
        for item in bins:
            by_status[item.status.value] += 1
        leaderboard = self.analytics_service.get_leaderboard(
            AnalyticsPeriod.MONTH, limit=OVERVIEW_LEADERBOARD_LIMIT
        )
        return {
            "total_users": len(profiles),
            "total_bins": len(bins),
            "bins_by_status": by_status,
            "full_bins": [
                serialize_bin(item) for item in bins if item.status is BinStatus.FULL
            ],
            "leaderboard": [serialize_leaderboard_entry(row) for row in leaderboard],
        }

    def list_users(self) -> list[dict[str, object]]:
        """Return users with activity summaries."""
        now = datetime.now(tz=UTC)
        start_7d = now - timedelta(days=7)
        start_30d = now - timedelta(days=30)
        summaries = []
        for profile in self.user_repository.list_profiles():
            entries_30d = self.entry_repository.list_entries_between(
                profile.user_id, start_30d, now
            )
            entries_7d = [
                entry for entry in entries_30d if entry.created_at >= start_7d
            ]
            summaries.append(
                {
                    "user_id": str(profile.user_id),
                    "name": profile.name,
                    "role": profile.role.value,
                    "mode": profile.mode.value,
                    "total_points": profile.total_points,
                    "level": profile.level,
                    "entries_last_7d": len(entries_7d),
                    "entries_last_30d": len(entries_30d),
                    "points_last_7d": sum(entry.points for entry in entries_7d),
                    "points_last_30d": sum(entry.points for entry in entries_30d),
                }
            )
        return summaries

