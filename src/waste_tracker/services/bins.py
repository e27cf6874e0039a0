"""Bin fill-level status engine and bin operations."""

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from waste_tracker.domain.bins import Bin, BinAlert, BinLevelUpdate, NewBin
from waste_tracker.domain.enums import BinStatus, NotificationType, WasteType
from waste_tracker.domain.errors import InvalidConfiguration, InvalidInput, NotFound
from waste_tracker.services.notifications import NotificationService
from waste_tracker.services.users import UserService

logger = logging.getLogger(__name__)

FULL_THRESHOLD_PERCENT = 90
WARNING_THRESHOLD_PERCENT = 75

SEED_LOCATIONS = (
    "Main Street Park",
    "Community Center",
    "Shopping Mall",
    "Residential Area A",
    "Residential Area B",
    "School Campus",
)
SEED_WASTE_TYPES = (
    WasteType.PLASTIC,
    WasteType.ORGANIC,
    WasteType.PAPER,
    WasteType.GLASS,
    WasteType.METAL,
)
SEED_CAPACITY = 100.0
SEED_MAX_LEVEL = 60


def transition_bin_status(
    current_level: float,
    capacity: float,
    current_status: BinStatus | None = None,
) -> BinStatus:
    """Return the status for a level reading.

    Maintenance is set and cleared by operators, so a bin in maintenance stays
    there regardless of the reading. Levels above capacity are full; they are
    never clamped.
    """
    if not math.isfinite(capacity) or capacity <= 0:
        raise InvalidConfiguration(f"Bin capacity must be positive, got {capacity}")
    if current_status is BinStatus.MAINTENANCE:
        return BinStatus.MAINTENANCE
    percentage = current_level / capacity * 100
    if percentage >= FULL_THRESHOLD_PERCENT:
        return BinStatus.FULL
    if percentage >= WARNING_THRESHOLD_PERCENT:
        return BinStatus.WARNING
    return BinStatus.NORMAL


class BinRepository(Protocol):
    """Persistence interface for bins."""

    def list_bins(self) -> list[Bin]:
        """Return all bins."""

    def get_bin(self, bin_id: UUID) -> Bin | None:
        """Return a bin by id."""

    def create_bins(self, bins: list[NewBin]) -> list[Bin]:
        """Create bins and return them."""

    def update_bin(
        self,
        bin_id: UUID,
        current_level: float,
        status: BinStatus,
        last_collection: datetime | None = None,
    ) -> Bin:
        """Persist a level, status and optional collection time."""


class BinAlertSink(Protocol):
    """Consumer of full-bin alerts."""

    def emit(self, alert: BinAlert) -> None:
        """Deliver a full-bin alert."""


@dataclass
class AdminNotificationAlertSink(BinAlertSink):
    """Logs alerts and notifies every admin profile."""

    notification_service: NotificationService
    user_service: UserService

    def emit(self, alert: BinAlert) -> None:
        """Record an alert notification for each admin."""
        logger.warning(
            "Bin is full and needs collection",
            extra={"bin_id": str(alert.bin_id), "location": alert.location},
        )
        for admin in self.user_service.list_admins():
            self.notification_service.create(
                admin.user_id,
                "Bin Full",
                f"{alert.waste_type.value.capitalize()} bin at {alert.location} "
                f"is {alert.percentage:.0f}% full and needs collection",
                NotificationType.ALERT,
            )


@dataclass
class BinService:
    """Service applying level readings and operator actions to bins."""

    repository: BinRepository
    alert_sink: BinAlertSink
    user_service: UserService
    rng: random.Random = field(default_factory=random.Random)

    def list_bins(self) -> list[Bin]:
        """Return all bins."""
        return self.repository.list_bins()

    def update_level(self, bin_id: UUID, current_level: float) -> BinLevelUpdate:
        """Apply a level reading and emit an alert when the bin becomes full."""
        if not math.isfinite(current_level) or current_level < 0:
            raise InvalidInput("Bin level must be a non-negative number")
        current = self._get(bin_id)
        status = transition_bin_status(current_level, current.capacity, current.status)
        updated = self.repository.update_bin(bin_id, current_level, status)
        alert_emitted = self._maybe_alert(current.status, updated)
        return BinLevelUpdate(
            bin=updated,
            percentage=updated.percentage,
            alert_emitted=alert_emitted,
        )

    def set_maintenance(self, bin_id: UUID) -> Bin:
        """Put a bin into maintenance."""
        current = self._get(bin_id)
        logger.info("Bin set to maintenance", extra={"bin_id": str(bin_id)})
        return self.repository.update_bin(
            bin_id, current.current_level, BinStatus.MAINTENANCE
        )

    def clear_maintenance(self, bin_id: UUID) -> Bin:
        """Leave maintenance and resume level-driven status."""
        current = self._get(bin_id)
        if current.status is not BinStatus.MAINTENANCE:
            return current
        status = transition_bin_status(current.current_level, current.capacity)
        updated = self.repository.update_bin(bin_id, current.current_level, status)
        self._maybe_alert(current.status, updated)
        return updated

    def record_collection(self, bin_id: UUID) -> Bin:
        """Empty a bin and stamp the collection time."""
        current = self._get(bin_id)
        status = transition_bin_status(0.0, current.capacity, current.status)
        return self.repository.update_bin(
            bin_id, 0.0, status, last_collection=datetime.now(tz=UTC)
        )

    def initialize_bins(self, caller_id: UUID) -> list[Bin]:
        """Seed the default bin network. Admin only, no-op once bins exist."""
        self.user_service.require_admin(caller_id)
        existing = self.repository.list_bins()
        if existing:
            return existing
        now = datetime.now(tz=UTC)
        seeds = []
        for location in SEED_LOCATIONS:
            for waste_type in SEED_WASTE_TYPES:
                level = float(self.rng.randrange(SEED_MAX_LEVEL))
                seeds.append(
                    NewBin(
                        location=location,
                        waste_type=waste_type,
                        capacity=SEED_CAPACITY,
                        current_level=level,
                        last_collection=now
                        - timedelta(seconds=self.rng.random() * 7 * 24 * 3600),
                        sensor_id=f"{'_'.join(location.split())}_{waste_type.value}",
                        status=transition_bin_status(level, SEED_CAPACITY),
                    )
                )
        created = self.repository.create_bins(seeds)
        logger.info("Bins initialized", extra={"count": len(created)})
        return created

    def _get(self, bin_id: UUID) -> Bin:
        current = self.repository.get_bin(bin_id)
        if current is None:
            raise NotFound(f"Bin {bin_id} not found")
        return current

    def _maybe_alert(self, previous: BinStatus, updated: Bin) -> bool:
        if updated.status is not BinStatus.FULL or previous is BinStatus.FULL:
            return False
        self.alert_sink.emit(
            BinAlert(
                bin_id=updated.id,
                location=updated.location,
                waste_type=updated.waste_type,
                percentage=updated.percentage,
            )
        )
        return True
