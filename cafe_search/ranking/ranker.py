from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

import numpy as np

from ..corpus.models import Record
from ..keywords.catalog import KeywordCatalog
from ..scoring.scorer import WeightFn, min_max_normalize, weighted_score
from ..scoring.weights import effective_weights, weight_function
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .matching import canonical_key, name_match_boost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredResult:
    record: Record
    score: float
    canonical_key: str


def query_weight_function(
    query: str | None,
    catalog: KeywordCatalog,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> WeightFn:
    """Effective keyword weights for one request; an empty query keeps base weights."""
    return weight_function(effective_weights(query, catalog.all(), config.query_boost))


def rank(
    query: str | None,
    candidates: Iterable[Record],
    catalog: KeywordCatalog,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[ScoredResult]:
    """Score, boost, de-duplicate, filter and sort *candidates* for *query*.

    1. Keyword weights are boosted for terms the query mentions.
    2. Each record's searchable text is scored with those weights.
    3. A name-match bonus is added when the query is non-empty.
    4. Records sharing a canonical key collapse to the best-scoring one
       (the first seen wins ties).
    5. Results scoring zero or less are dropped.
    6. The rest are sorted by score, highest first; the sort is stable.
    """
    query = query or ""
    has_query = bool(query.strip())
    keywords = catalog.all()
    weight_of = query_weight_function(query if has_query else None, catalog, config)

    best: dict[str, ScoredResult] = {}
    for record in candidates:
        score = weighted_score(record.searchable_text, keywords, weight_of)
        if has_query:
            score += name_match_boost(
                query,
                record.name,
                exact=config.exact_name_boost,
                substring=config.substring_name_boost,
                tokens=config.token_name_boost,
            )
        result = ScoredResult(record=record, score=score, canonical_key=canonical_key(record))

        existing = best.get(result.canonical_key)
        if existing is None:
            best[result.canonical_key] = result
        elif result.score > existing.score:
            logger.debug(
                "Duplicate %s: replacing %s (%.2f) with %s (%.2f)",
                result.canonical_key, existing.record.name, existing.score,
                record.name, result.score,
            )
            best[result.canonical_key] = result
        else:
            logger.debug("Duplicate %s: keeping %s", result.canonical_key, existing.record.name)

    ranked = [r for r in best.values() if r.score > 0]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked


def normalize_scores(results: Sequence[ScoredResult]) -> list[ScoredResult]:
    """Rescale already-ranked scores to [0, 100] for display without reordering."""
    scaled = min_max_normalize([r.score for r in results])
    return [replace(r, score=s) for r, s in zip(results, scaled)]


def score_distribution(results: Sequence[ScoredResult]) -> dict[str, Any]:
    if not results:
        return {"count": 0, "min": 0.0, "max": 0.0, "average": 0.0, "median": 0.0}
    scores = np.asarray([r.score for r in results], dtype=float)
    return {
        "count": int(scores.size),
        "min": round(float(scores.min()), 4),
        "max": round(float(scores.max()), 4),
        "average": round(float(scores.mean()), 4),
        "median": round(float(np.median(scores)), 4),
    }
