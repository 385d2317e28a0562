from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .corpus.store import get_corpus
from .keywords.models import Tier
from .ranking.cache import get_cache_stats
from .ranking.config import DEFAULT_RANKING_CONFIG
from .ranking.models import (
    CafeOut,
    HashtagResponse,
    RecommendationResponse,
    SearchRequest,
    SearchResponse,
)
from .ranking.service import (
    get_cafe,
    hashtags_for,
    recommend,
    reload,
    search,
    suggest_keywords,
)

app = FastAPI(title="Café Search API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    corpus = get_corpus()
    return {
        "cafes": len(corpus),
        "keywords": len(corpus.catalog),
        "districts": corpus.districts(),
        "features": corpus.features(),
    }


@app.post("/search", response_model=SearchResponse)
def search_cafes(body: SearchRequest) -> SearchResponse:
    return search(body)


@app.get("/recommendations", response_model=RecommendationResponse)
def recommendations(
    limit: int = Query(default=DEFAULT_RANKING_CONFIG.default_limit, ge=1, le=DEFAULT_RANKING_CONFIG.max_limit),
    district: list[str] | None = Query(default=None),
    feature: list[str] | None = Query(default=None),
) -> RecommendationResponse:
    return recommend(limit=limit, districts=district, features=feature)


@app.get("/cafes/{cafe_id}", response_model=CafeOut)
def cafe_detail(cafe_id: str) -> CafeOut:
    cafe = get_cafe(cafe_id)
    if cafe is None:
        raise HTTPException(status_code=404, detail=f"Unknown café: {cafe_id}")
    return cafe


@app.get("/cafes/{cafe_id}/hashtags", response_model=HashtagResponse)
def cafe_hashtags(cafe_id: str, query: str | None = None) -> HashtagResponse:
    result = hashtags_for(cafe_id, query)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Unknown café: {cafe_id}")
    return result


@app.get("/keywords")
def keywords(tier: Tier | None = None) -> dict:
    catalog = get_corpus().catalog
    selected = catalog.by_tier(tier) if tier else catalog.all()
    return {"total": len(selected), "keywords": [kw.to_dict() for kw in selected]}


@app.get("/keywords/suggestions")
def keyword_suggestions(
    q: str = Query(default="", description="Partial keyword"),
    limit: int = Query(default=10, ge=1, le=10),
) -> dict:
    return {"query": q, "suggestions": suggest_keywords(q, limit)}


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/admin/reload")
def admin_reload() -> dict:
    summary = reload()
    return {"status": "reloaded", **summary}


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
