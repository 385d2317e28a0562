from __future__ import annotations

from typing import Callable, Iterable, Sequence

import numpy as np

from ..keywords.catalog import KeywordCatalog
from ..keywords.models import CORE_THRESHOLD, Keyword
from .counter import count

WeightFn = Callable[[Keyword], float]

EQUAL_SCORE = 50.0


def base_weight(keyword: Keyword) -> float:
    return keyword.original_weight


def weighted_score(
    text: str | None,
    keywords: Iterable[Keyword],
    weight_of: WeightFn = base_weight,
) -> float:
    """Sum of ``count(text, k.name) * weight_of(k)`` over *keywords*."""
    if not text:
        return 0.0
    total = 0.0
    for kw in keywords:
        occurrences = count(text, kw.name)
        if occurrences:
            total += occurrences * weight_of(kw)
    return total


def baseline_score(text: str | None, catalog: Iterable[Keyword]) -> float:
    """Query-independent score over keywords whose original weight is CORE-level."""
    core = [kw for kw in catalog if kw.original_weight >= CORE_THRESHOLD]
    return weighted_score(text, core, base_weight)


def keyword_contributions(
    text: str | None,
    keywords: Iterable[Keyword],
    weight_of: WeightFn = base_weight,
) -> dict[str, float]:
    """Per-keyword ``count * weight`` for every keyword present in *text*, in catalog order."""
    contributions: dict[str, float] = {}
    if not text:
        return contributions
    for kw in keywords:
        occurrences = count(text, kw.name)
        if occurrences:
            contributions[kw.name] = occurrences * weight_of(kw)
    return contributions


def matched_keywords(
    text: str | None,
    keywords: Iterable[Keyword],
    weight_of: WeightFn = base_weight,
    limit: int | None = None,
) -> list[str]:
    """Names of keywords found in *text*, highest contribution first."""
    contributions = keyword_contributions(text, keywords, weight_of)
    # sorted() is stable, so equal contributions keep catalog order.
    ranked = sorted(contributions, key=lambda name: contributions[name], reverse=True)
    return ranked if limit is None else ranked[:limit]


def top_keywords(
    text: str | None,
    catalog: KeywordCatalog | Iterable[Keyword],
    top_n: int,
) -> list[Keyword]:
    """The *top_n* keywords by occurrence count in *text*.

    Keywords that do not occur are excluded; ties keep catalog order.
    """
    if not text or top_n <= 0:
        return []
    counted = [(kw, count(text, kw.name)) for kw in catalog]
    present = [pair for pair in counted if pair[1] > 0]
    present.sort(key=lambda pair: pair[1], reverse=True)
    return [kw for kw, _ in present[:top_n]]


def min_max_normalize(values: Sequence[float]) -> list[float]:
    """Rescale *values* to [0, 100].

    When every value is equal the result is a constant 50.0 for each entry.
    """
    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=float)
    low = float(arr.min())
    high = float(arr.max())
    if high == low:
        return [EQUAL_SCORE] * len(arr)
    scaled = (arr - low) / (high - low) * 100.0
    return [float(v) for v in scaled]
