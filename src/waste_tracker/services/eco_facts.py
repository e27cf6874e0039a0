"""Catalog of eco facts shown on the dashboard."""

import random
from dataclasses import dataclass

from waste_tracker.domain.enums import EcoFactCategory


@dataclass(frozen=True)
class EcoFact:
    """A short fact about recycling."""

    fact: str
    category: EcoFactCategory
    for_children: bool
    icon: str


ECO_FACTS: tuple[EcoFact, ...] = (
    EcoFact(
        fact="Recycling one aluminum can saves enough energy to power a TV "
        "for 3 hours",
        category=EcoFactCategory.METAL,
        for_children=False,
        icon="⚡",
    ),
    EcoFact(
        fact="It takes 450 years for a plastic bottle to decompose in a landfill",
        category=EcoFactCategory.PLASTIC,
        for_children=False,
        icon="🍾",
    ),
    EcoFact(
        fact="Composting organic waste can reduce methane emissions by up to 50%",
        category=EcoFactCategory.ORGANIC,
        for_children=False,
        icon="🌱",
    ),
    EcoFact(
        fact="Recycling one ton of paper saves 17 trees and 7,000 gallons of water",
        category=EcoFactCategory.PAPER,
        for_children=False,
        icon="🌳",
    ),
    EcoFact(
        fact="Glass can be recycled infinitely without losing quality",
        category=EcoFactCategory.GLASS,
        for_children=False,
        icon="♻️",
    ),
    EcoFact(
        fact="Recycling 1 plastic bottle saves enough energy to power a light "
        "bulb for 3 hours!",
        category=EcoFactCategory.PLASTIC,
        for_children=True,
        icon="💡",
    ),
    EcoFact(
        fact="Banana peels and apple cores can become super soil for plants!",
        category=EcoFactCategory.ORGANIC,
        for_children=True,
        icon="🌱",
    ),
    EcoFact(
        fact="Old newspapers can become new books and notebooks!",
        category=EcoFactCategory.PAPER,
        for_children=True,
        icon="📚",
    ),
    EcoFact(
        fact="Glass jars can be melted and made into new jars forever!",
        category=EcoFactCategory.GLASS,
        for_children=True,
        icon="✨",
    ),
    EcoFact(
        fact="Aluminum cans can become new cans in just 60 days!",
        category=EcoFactCategory.METAL,
        for_children=True,
        icon="🥤",
    ),
    EcoFact(
        fact="Every piece of trash you sort helps save animals and their homes!",
        category=EcoFactCategory.GENERAL,
        for_children=True,
        icon="🐻",
    ),
    EcoFact(
        fact="When you recycle, you're like a superhero saving the planet!",
        category=EcoFactCategory.GENERAL,
        for_children=True,
        icon="🦸",
    ),
)


def random_eco_fact(
    for_children: bool | None = None,
    category: EcoFactCategory | None = None,
    rng: random.Random | None = None,
) -> EcoFact | None:
    """Return a random fact matching the filters, or None if nothing matches."""
    candidates = [
        fact
        for fact in ECO_FACTS
        if (for_children is None or fact.for_children == for_children)
        and (category is None or fact.category is category)
    ]
    if not candidates:
        return None
    return (rng or random).choice(candidates)
