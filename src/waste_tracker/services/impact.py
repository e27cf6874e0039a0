"""Environmental impact scoring for waste entries."""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from waste_tracker.domain.enums import WasteType
from waste_tracker.domain.errors import InvalidInput
from waste_tracker.domain.waste import Impact

IMPACT_COEFFICIENTS_VERSION = "2024-1"
POINTS_PER_KG = 10
# Largest single entry accepted; keeps points within the integer column.
MAX_WEIGHT_KG = 1000


@dataclass(frozen=True)
class ImpactCoefficients:
    """Per-kilogram savings for a waste type."""

    co2_per_kg: float
    landfill_per_kg: float


IMPACT_COEFFICIENTS: dict[WasteType, ImpactCoefficients] = {
    WasteType.PLASTIC: ImpactCoefficients(co2_per_kg=2.5, landfill_per_kg=1.0),
    WasteType.ORGANIC: ImpactCoefficients(co2_per_kg=0.5, landfill_per_kg=0.9),
    WasteType.PAPER: ImpactCoefficients(co2_per_kg=1.8, landfill_per_kg=1.0),
    WasteType.GLASS: ImpactCoefficients(co2_per_kg=0.3, landfill_per_kg=1.0),
    WasteType.METAL: ImpactCoefficients(co2_per_kg=4.0, landfill_per_kg=1.0),
    WasteType.ELECTRONIC: ImpactCoefficients(co2_per_kg=6.0, landfill_per_kg=0.8),
}


def compute_impact(waste_type: WasteType | str, weight: float) -> Impact:
    """Return points, CO2 saved and landfill reduced for an entry."""
    resolved_type = parse_waste_type(waste_type)
    resolved_weight = _validate_weight(weight)
    coefficients = IMPACT_COEFFICIENTS[resolved_type]
    return Impact(
        points=_round_half_up(resolved_weight * POINTS_PER_KG),
        co2_saved=round(resolved_weight * coefficients.co2_per_kg, 3),
        landfill_reduced=round(resolved_weight * coefficients.landfill_per_kg, 3),
    )


def parse_waste_type(value: WasteType | str) -> WasteType:
    """Coerce a raw value to a waste type or raise InvalidInput."""
    if isinstance(value, WasteType):
        return value
    try:
        return WasteType(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown waste type: {value!r}") from exc


def _validate_weight(weight: float) -> float:
    if isinstance(weight, bool) or not isinstance(weight, int | float):
        raise InvalidInput("Weight must be a number")
    value = float(weight)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInput("Weight must be greater than 0")
    if value > MAX_WEIGHT_KG:
        raise InvalidInput(f"Weight must not exceed {MAX_WEIGHT_KG} kg")
    return value


def _round_half_up(value: float) -> int:
    # Half-up, not banker's rounding: 0.25 kg scores 3 points.
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
