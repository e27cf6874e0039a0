"""Supabase repository for collection bins."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from waste_tracker.adapters.supabase_rows import parse_timestamp
from waste_tracker.domain.bins import Bin, NewBin
from waste_tracker.domain.enums import BinStatus, WasteType
from waste_tracker.services.bins import BinRepository

_COLUMNS = (
    "id, location, waste_type, capacity, current_level, last_collection, "
    "sensor_id, status"
)


@dataclass
class SupabaseBinRepository(BinRepository):
    """Supabase implementation for bins."""

    client: Client

    def list_bins(self) -> list[Bin]:
        """Return all bins ordered by location."""
        response = (
            self.client.table("bins")
            .select(_COLUMNS)
            .order("location", desc=False)
            .execute()
        )
        return [_parse_bin(row) for row in response.data or []]

    def get_bin(self, bin_id: UUID) -> Bin | None:
        """Return a bin by id."""
        response = (
            self.client.table("bins")
            .select(_COLUMNS)
            .eq("id", str(bin_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_bin(response.data[0])

    def create_bins(self, bins: list[NewBin]) -> list[Bin]:
        """Create bin rows in one insert."""
        if not bins:
            return []
        payload = [
            {
                "location": item.location,
                "waste_type": item.waste_type.value,
                "capacity": item.capacity,
                "current_level": item.current_level,
                "last_collection": item.last_collection.isoformat(),
                "sensor_id": item.sensor_id,
                "status": item.status.value,
            }
            for item in bins
        ]
        response = self.client.table("bins").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create bins")
        return [_parse_bin(row) for row in response.data]

    def update_bin(
        self,
        bin_id: UUID,
        current_level: float,
        status: BinStatus,
        last_collection: datetime | None = None,
    ) -> Bin:
        """Update level and status of a bin."""
        payload: dict[str, object] = {
            "current_level": current_level,
            "status": status.value,
        }
        if last_collection is not None:
            payload["last_collection"] = last_collection.isoformat()
        response = (
            self.client.table("bins").update(payload).eq("id", str(bin_id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update bin")
        return _parse_bin(response.data[0])


def _parse_bin(row: dict[str, object]) -> Bin:
    return Bin(
        id=UUID(str(row["id"])),
        location=str(row.get("location", "")),
        waste_type=WasteType(row["waste_type"]),
        capacity=float(row.get("capacity", 0.0)),
        current_level=float(row.get("current_level", 0.0)),
        last_collection=parse_timestamp(row.get("last_collection")),
        sensor_id=str(row.get("sensor_id", "")),
        status=BinStatus(row.get("status", BinStatus.NORMAL.value)),
    )
