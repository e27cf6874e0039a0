"""Models for waste image classification results."""

from pydantic import BaseModel, Field

from waste_tracker.domain.enums import WasteType


class ClassificationResult(BaseModel):
    """Structured output of a waste classifier."""

    waste_type: WasteType
    confidence: float = Field(ge=0.0, le=1.0)
    suggestions: list[str] = Field(default_factory=list)
