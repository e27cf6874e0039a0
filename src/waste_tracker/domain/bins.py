"""Domain models for collection bins."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from waste_tracker.domain.enums import BinStatus, WasteType


@dataclass(frozen=True)
class NewBin:
    """Bin data ready to be persisted."""

    location: str
    waste_type: WasteType
    capacity: float
    current_level: float
    last_collection: datetime
    sensor_id: str
    status: BinStatus


@dataclass(frozen=True)
class Bin:
    """A physical collection bin with its last reported level."""

    id: UUID
    location: str
    waste_type: WasteType
    capacity: float
    current_level: float
    last_collection: datetime
    sensor_id: str
    status: BinStatus

    @property
    def percentage(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.current_level / self.capacity * 100


@dataclass(frozen=True)
class BinAlert:
    """Signal raised when a bin becomes full."""

    bin_id: UUID
    location: str
    waste_type: WasteType
    percentage: float


@dataclass(frozen=True)
class BinLevelUpdate:
    """Result of applying a level reading to a bin."""

    bin: Bin
    percentage: float
    alert_emitted: bool
