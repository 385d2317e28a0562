from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CORE_THRESHOLD = 2.0
SECONDARY_THRESHOLD = 1.0


class Tier(str, Enum):
    core = "core"
    secondary = "secondary"
    reference = "reference"


# Category labels used by the keyword configuration file.
_CATEGORY_TIERS: dict[str, Tier] = {
    "core": Tier.core,
    "secondary": Tier.secondary,
    "additional": Tier.reference,
}

# Legacy numeric tiers (1/2/3); only used when reading or writing files.
_NUMBER_TIERS: dict[int, Tier] = {
    1: Tier.core,
    2: Tier.secondary,
    3: Tier.reference,
}
_TIER_NUMBERS: dict[Tier, int] = {t: n for n, t in _NUMBER_TIERS.items()}


def tier_of(weight: float) -> Tier:
    """Classify a weight: >= 2.0 is CORE, >= 1.0 is SECONDARY, otherwise REFERENCE."""
    if weight >= CORE_THRESHOLD:
        return Tier.core
    if weight >= SECONDARY_THRESHOLD:
        return Tier.secondary
    return Tier.reference


def tier_from_category(category: str | int | None) -> Tier:
    """Map a category label (or legacy tier number) to a tier.

    Unrecognised values degrade to REFERENCE instead of failing.
    """
    if category is None or isinstance(category, bool):
        return Tier.reference
    if isinstance(category, int):
        return _NUMBER_TIERS.get(category, Tier.reference)
    label = str(category).strip().lower()
    if label.isdigit():
        return _NUMBER_TIERS.get(int(label), Tier.reference)
    return _CATEGORY_TIERS.get(label, Tier.reference)


def tier_to_number(tier: Tier) -> int:
    return _TIER_NUMBERS[tier]


@dataclass(frozen=True)
class Keyword:
    """A weighted search term.

    ``original_weight`` is fixed at load time. Per-query boosts are never
    written back here; see ``scoring.weights``.
    """

    name: str
    original_weight: float
    tier: Tier | None = None

    def __post_init__(self) -> None:
        if self.tier is None:
            object.__setattr__(self, "tier", tier_of(self.original_weight))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "weight": self.original_weight,
            "tier": self.tier.value,
            "tier_number": tier_to_number(self.tier),
        }
