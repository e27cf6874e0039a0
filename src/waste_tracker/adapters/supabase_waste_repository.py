"""Supabase repository for waste entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from waste_tracker.adapters.supabase_rows import (
    PAGE_SIZE,
    as_rows,
    fetch_all_rows,
    parse_timestamp,
)
from waste_tracker.adapters.supabase_user_repository import parse_profile
from waste_tracker.domain.enums import WasteType
from waste_tracker.domain.models import UserProfile
from waste_tracker.domain.waste import NewWasteEntry, WasteEntry
from waste_tracker.services.achievements import AchievementEntryRepository
from waste_tracker.services.waste import WasteEntryRepository

_COLUMNS = (
    "id, user_id, waste_type, weight, points, co2_saved, landfill_reduced, "
    "ai_classified, ai_confidence, location, created_at"
)


@dataclass
class SupabaseWasteEntryRepository(WasteEntryRepository, AchievementEntryRepository):
    """Supabase implementation for waste entries."""

    client: Client
    page_size: int = PAGE_SIZE

    def record_entry(self, entry: NewWasteEntry) -> tuple[WasteEntry, UserProfile]:
        """Insert the entry and credit its points in one database transaction."""
        response = self.client.rpc(
            "log_waste_entry",
            {
                "p_user_id": str(entry.user_id),
                "p_waste_type": entry.waste_type.value,
                "p_weight": entry.weight,
                "p_points": entry.impact.points,
                "p_co2_saved": entry.impact.co2_saved,
                "p_landfill_reduced": entry.impact.landfill_reduced,
                "p_ai_classified": entry.ai_classified,
                "p_ai_confidence": entry.ai_confidence,
                "p_location": entry.location,
            },
        ).execute()
        rows = as_rows(response.data)
        if not rows or not rows[0].get("entry"):
            raise RuntimeError("Failed to log waste entry")
        return _parse_entry(rows[0]["entry"]), parse_profile(rows[0]["profile"])

    def list_entries(self, user_id: UUID) -> list[WasteEntry]:
        """Return every entry for a user, oldest first."""
        rows = fetch_all_rows(
            lambda: (
                self.client.table("waste_entries")
                .select(_COLUMNS)
                .eq("user_id", str(user_id))
                .order("created_at", desc=False)
                .order("id", desc=False)
            ),
            self.page_size,
        )
        return [_parse_entry(row) for row in rows]

    def list_entries_between(
        self, user_id: UUID | None, start: datetime, end: datetime
    ) -> list[WasteEntry]:
        """Return entries in the time range, optionally for one user."""

        def build_query():
            query = (
                self.client.table("waste_entries")
                .select(_COLUMNS)
                .gte("created_at", start.isoformat())
                .lte("created_at", end.isoformat())
            )
            if user_id is not None:
                query = query.eq("user_id", str(user_id))
            return query.order("created_at", desc=False).order("id", desc=False)

        rows = fetch_all_rows(build_query, self.page_size)
        return [_parse_entry(row) for row in rows]

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[WasteEntry]:
        """Return the newest entries for a user."""
        response = (
            self.client.table("waste_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> WasteEntry:
    confidence = row.get("ai_confidence")
    return WasteEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        waste_type=WasteType(row["waste_type"]),
        weight=float(row.get("weight", 0.0)),
        points=int(row.get("points", 0)),
        co2_saved=float(row.get("co2_saved", 0.0)),
        landfill_reduced=float(row.get("landfill_reduced", 0.0)),
        ai_classified=bool(row.get("ai_classified", False)),
        ai_confidence=float(confidence) if confidence is not None else None,
        location=row.get("location"),
        created_at=parse_timestamp(row.get("created_at")),
    )
