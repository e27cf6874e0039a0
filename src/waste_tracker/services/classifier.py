"""Waste image classification boundary."""

import random
from dataclasses import dataclass, field
from typing import Protocol

from waste_tracker.domain.classification import ClassificationResult
from waste_tracker.domain.enums import WasteType
from waste_tracker.domain.errors import InvalidInput


class WasteClassifier(Protocol):
    """Interface for anything that can label a waste photo."""

    def classify(self, image: bytes) -> ClassificationResult:
        """Return the detected waste type and a confidence in [0, 1]."""


@dataclass
class RandomWasteClassifier(WasteClassifier):
    """Demo classifier that picks a random type with 70-95% confidence."""

    rng: random.Random = field(default_factory=random.Random)

    def classify(self, image: bytes) -> ClassificationResult:
        """Return a random label for the image."""
        waste_type = self.rng.choice(list(WasteType))
        confidence = round(0.7 + self.rng.random() * 0.25, 2)
        return ClassificationResult(
            waste_type=waste_type,
            confidence=confidence,
            suggestions=[
                f"This appears to be {waste_type.value} waste",
                f"Confidence: {round(confidence * 100)}%",
                "Please verify the classification before logging",
            ],
        )


@dataclass
class ClassifierService:
    """Validates images and delegates to the configured classifier."""

    classifier: WasteClassifier

    def classify(self, image: bytes) -> ClassificationResult:
        """Classify a photo of waste."""
        if not image:
            raise InvalidInput("Image is empty")
        return ClassificationResult.model_validate(
            self.classifier.classify(image).model_dump()
        )
