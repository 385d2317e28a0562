from __future__ import annotations

import logging
import time
from typing import Sequence

from ..analytics.store import record_event
from ..corpus.filters import filter_records
from ..corpus.models import Record
from ..corpus.store import get_corpus, reload_corpus
from ..hashtags.generator import format_hashtags, generate_hashtags, select_hashtags
from ..scoring.scorer import matched_keywords
from .cache import cache_get, cache_set, clear_cache
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import (
    CafeOut,
    HashtagResponse,
    RecommendationItem,
    RecommendationResponse,
    ScoreDistribution,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)
from .ranker import normalize_scores, query_weight_function, rank, score_distribution

logger = logging.getLogger(__name__)


def _to_cafe_out(record: Record) -> CafeOut:
    return CafeOut(
        id=record.id,
        name=record.name,
        district=record.district,
        address=record.address,
        url=record.url,
        description=record.description,
        features=list(record.features),
        tags=list(record.tags),
        rating=record.rating,
        site_score=round(record.site_score, 4),
    )


def _log_search(
    request: SearchRequest,
    response: SearchResponse,
    start_time: float,
    cache_hit: bool,
) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "query": request.query,
        "districts": request.districts,
        "features": request.features,
        "total_candidates": response.total_candidates,
        "total_results": response.total_results,
        "results_returned": len(response.results),
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })


def search(
    request: SearchRequest,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> SearchResponse:
    start_time = time.time()
    # One snapshot for the whole request, even if a reload swaps it meanwhile.
    corpus = get_corpus()

    request_dict = request.model_dump()
    request_dict["_snapshot"] = corpus.loaded_at
    cached = cache_get(request_dict, config.cache_ttl)
    if cached is not None:
        _log_search(request, cached, start_time, cache_hit=True)
        return cached

    candidates = filter_records(corpus.records, request.districts, request.features)
    ranked = rank(request.query, candidates, corpus.catalog, config)
    shown = normalize_scores(ranked) if request.normalize else ranked
    page = shown[request.offset: request.offset + request.limit]

    keywords = corpus.catalog.all()
    weight_of = query_weight_function(request.query, corpus.catalog, config)
    items = []
    for result in page:
        text = result.record.searchable_text
        items.append(SearchResultItem(
            cafe=_to_cafe_out(result.record),
            score=round(result.score, 4),
            matched_keywords=matched_keywords(
                text, keywords, weight_of, limit=config.matched_keywords_limit
            ),
            hashtags=(
                generate_hashtags(text, keywords, request.query)
                if request.include_hashtags else ""
            ),
        ))

    response = SearchResponse(
        query=request.query,
        results=items,
        total_candidates=len(candidates),
        total_results=len(ranked),
        score_distribution=ScoreDistribution(**score_distribution(ranked)),
    )
    logger.debug(
        "Search %r: %d candidates, %d ranked, %d returned",
        request.query, len(candidates), len(ranked), len(items),
    )
    cache_set(request_dict, response)
    _log_search(request, response, start_time, cache_hit=False)
    return response


def recommend(
    limit: int = DEFAULT_RANKING_CONFIG.default_limit,
    districts: Sequence[str] | None = None,
    features: Sequence[str] | None = None,
) -> RecommendationResponse:
    """Query-independent picks ordered by normalised baseline score."""
    corpus = get_corpus()
    candidates = filter_records(corpus.records, districts, features)
    ordered = sorted(candidates, key=lambda r: r.baseline_score, reverse=True)
    keywords = corpus.catalog.all()
    items = [
        RecommendationItem(
            cafe=_to_cafe_out(r),
            baseline_score=round(r.baseline_score, 4),
            hashtags=generate_hashtags(r.searchable_text, keywords),
        )
        for r in ordered[:limit]
    ]
    record_event("recommendations", {
        "districts": list(districts or []),
        "features": list(features or []),
        "results_returned": len(items),
    })
    return RecommendationResponse(recommendations=items, total_candidates=len(candidates))


def get_cafe(cafe_id: str) -> CafeOut | None:
    record = get_corpus().get(cafe_id)
    return _to_cafe_out(record) if record else None


def hashtags_for(cafe_id: str, query: str | None = None) -> HashtagResponse | None:
    corpus = get_corpus()
    record = corpus.get(cafe_id)
    if record is None:
        return None
    tags = select_hashtags(record.searchable_text, corpus.catalog.all(), query)
    return HashtagResponse(
        cafe_id=cafe_id,
        hashtags=format_hashtags(tags),
        tags=tags,
    )


def suggest_keywords(partial: str, limit: int = 10) -> list[str]:
    return get_corpus().catalog.suggest(partial, limit)


def reload() -> dict:
    """Reload keywords and cafés from disk, then drop cached responses."""
    corpus = reload_corpus()
    clear_cache()
    logger.info("Reloaded corpus: %d cafés, %d keywords", len(corpus), len(corpus.catalog))
    return {"cafes": len(corpus), "keywords": len(corpus.catalog), "loaded_at": corpus.loaded_at}
