"""Domain models for waste logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from waste_tracker.domain.enums import WasteType


@dataclass(frozen=True)
class Impact:
    """Environmental impact attributed to a single entry."""

    points: int
    co2_saved: float
    landfill_reduced: float


@dataclass(frozen=True)
class NewWasteEntry:
    """Entry data ready to be persisted."""

    user_id: UUID
    waste_type: WasteType
    weight: float
    impact: Impact
    ai_classified: bool = False
    ai_confidence: float | None = None
    location: str | None = None


@dataclass(frozen=True)
class WasteEntry:
    """A logged disposal event. Never updated after creation."""

    id: UUID
    user_id: UUID
    waste_type: WasteType
    weight: float
    points: int
    co2_saved: float
    landfill_reduced: float
    ai_classified: bool
    ai_confidence: float | None
    location: str | None
    created_at: datetime
