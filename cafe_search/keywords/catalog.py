from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from .models import Keyword, Tier, tier_from_category, tier_of

logger = logging.getLogger(__name__)

_LEGACY_GROUPS: list[tuple[str, int]] = [("tier1", 1), ("tier2", 2), ("tier3", 3)]
_MAX_SUGGESTIONS = 10

# Used when the keyword file is missing or unreadable.
DEFAULT_ENTRIES: list[dict[str, Any]] = [
    {"term": "不限時", "category": "core", "weight": 3.0},
    {"term": "讀書", "category": "core", "weight": 2.5},
    {"term": "工作", "category": "core", "weight": 2.5},
    {"term": "安靜", "category": "core", "weight": 2.5},
    {"term": "插座", "category": "core", "weight": 2.5},
    {"term": "wifi", "category": "secondary", "weight": 1.5},
    {"term": "舒適", "category": "secondary", "weight": 1.5},
    {"term": "寬敞", "category": "secondary", "weight": 1.5},
    {"term": "明亮", "category": "secondary", "weight": 1.5},
    {"term": "咖啡", "category": "additional", "weight": 0.8},
    {"term": "座位", "category": "additional", "weight": 0.8},
    {"term": "環境", "category": "additional", "weight": 0.8},
]


class KeywordCatalog:
    """Read-only, ordered collection of keywords.

    Iteration order is the load order and is used for tie-breaking by the
    scorer and the hashtag generator. A catalog is never modified after
    construction; reloading builds a new one.
    """

    def __init__(self, keywords: Iterable[Keyword] = ()) -> None:
        by_lower: dict[str, Keyword] = {}
        for kw in keywords:
            key = kw.name.lower()
            first = by_lower.get(key)
            # Terms are matched case-insensitively, so "WiFi" repeats "wifi":
            # the first spelling and position stay, the later weight and tier win.
            if first is not None and first.name != kw.name:
                kw = Keyword(name=first.name, original_weight=kw.original_weight, tier=kw.tier)
            by_lower[key] = kw
        self._by_lower = by_lower
        self._ordered: tuple[Keyword, ...] = tuple(by_lower.values())

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[Keyword]:
        return iter(self._ordered)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_lower

    def all(self) -> tuple[Keyword, ...]:
        return self._ordered

    def find(self, name: str) -> Keyword | None:
        if not name:
            return None
        return self._by_lower.get(name.lower())

    def get_weight(self, name: str) -> float:
        """Base weight of *name*, or 0.0 when the term is unknown."""
        kw = self.find(name)
        return kw.original_weight if kw else 0.0

    @staticmethod
    def tier_of(weight: float) -> Tier:
        return tier_of(weight)

    def by_tier(self, tier: Tier) -> list[Keyword]:
        return [kw for kw in self._ordered if kw.tier is tier]

    def core(self) -> list[Keyword]:
        return self.by_tier(Tier.core)

    def suggest(self, partial: str, limit: int = _MAX_SUGGESTIONS) -> list[str]:
        """Keyword names containing *partial* (case-insensitive), in catalog order."""
        needle = (partial or "").strip().lower()
        if not needle:
            return []
        matches = [kw.name for kw in self._ordered if needle in kw.name.lower()]
        return matches[:limit]

    @classmethod
    def from_entries(cls, entries: Iterable[dict[str, Any]]) -> KeywordCatalog:
        """Build a catalog from ``{term, category, weight}`` entries.

        ``category`` may be ``core|secondary|additional`` or a legacy tier
        number; anything else maps to REFERENCE. Entries without a term or
        with a non-numeric weight are skipped.
        """
        keywords: list[Keyword] = []
        for entry in entries:
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed keyword entry: %r", entry)
                continue
            keyword = _entry_to_keyword(entry)
            if keyword is not None:
                keywords.append(keyword)
        return cls(keywords)

    @classmethod
    def from_legacy(cls, data: dict[str, Any]) -> KeywordCatalog:
        """Build a catalog from the ``tier1/tier2/tier3`` grouped format."""
        entries: list[dict[str, Any]] = []
        for group_key, tier_number in _LEGACY_GROUPS:
            group = data.get(group_key)
            if not isinstance(group, dict):
                continue
            weight = group.get("weight")
            for term in group.get("keywords", []) or []:
                entries.append({"term": term, "category": tier_number, "weight": weight})
        return cls.from_entries(entries)

    @classmethod
    def from_data(cls, data: Any) -> KeywordCatalog:
        if isinstance(data, list):
            return cls.from_entries(data)
        if isinstance(data, dict) and "keywords" in data:
            return cls.from_entries(data["keywords"] or [])
        if isinstance(data, dict):
            return cls.from_legacy(data)
        raise ValueError(f"Unsupported keyword configuration of type {type(data).__name__}")

    @classmethod
    def default(cls) -> KeywordCatalog:
        return cls.from_entries(DEFAULT_ENTRIES)


def _entry_to_keyword(entry: dict[str, Any]) -> Keyword | None:
    term = str(entry.get("term") or entry.get("name") or "").strip()
    if not term:
        logger.warning("Skipping keyword entry without a term: %r", entry)
        return None
    try:
        weight = float(entry.get("weight"))
    except (TypeError, ValueError):
        logger.warning("Skipping keyword %r with invalid weight %r", term, entry.get("weight"))
        return None
    category = entry.get("category", entry.get("tier"))
    tier = tier_from_category(category) if category is not None else None
    return Keyword(name=term, original_weight=weight, tier=tier)


def load_catalog(path: Path | str) -> KeywordCatalog:
    """Load the keyword file at *path*, falling back to the default vocabulary."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        catalog = KeywordCatalog.from_data(data)
    except (OSError, ValueError):
        logger.warning("Could not load keywords from %s, using defaults", path, exc_info=True)
        return KeywordCatalog.default()

    logger.info(
        "Loaded %d keywords (%d core) from %s", len(catalog), len(catalog.core()), path,
    )
    return catalog
