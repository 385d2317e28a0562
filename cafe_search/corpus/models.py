from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Record:
    id: str
    name: str
    district: str = ""
    address: str = ""
    url: str = ""
    description: str = ""
    features: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    rating: float | None = None
    searchable_text: str = ""
    site_score: float = 0.0
    baseline_score: float = 0.0

    def with_baseline(self, score: float) -> Record:
        return replace(self, baseline_score=score)
