"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from waste_tracker.domain.enums import Theme, UserMode, WasteType
from waste_tracker.services.impact import MAX_WEIGHT_KG


class LogWasteRequest(BaseModel):
    """Payload for logging a waste entry."""

    waste_type: WasteType
    weight: float = Field(gt=0, le=MAX_WEIGHT_KG)
    location: str | None = Field(default=None, max_length=200)
    ai_classified: bool = False
    ai_confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class ModeRequest(BaseModel):
    """Payload for switching presentation mode."""

    mode: UserMode


class PreferencesRequest(BaseModel):
    """Payload for updating preferences."""

    notifications: bool | None = None
    theme: Theme | None = None


class BinLevelRequest(BaseModel):
    """Level reading reported for a bin."""

    current_level: float = Field(ge=0)
