from __future__ import annotations

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str = Field(default="", description="Free-text query, may be empty")
    districts: list[str] = Field(default_factory=list)
    features: list[str] = Field(
        default_factory=list,
        description='Features every result must have, e.g. ["wifi", "插座"]',
    )
    limit: int = Field(default=10, ge=1, le=50)
    offset: int = Field(default=0, ge=0)
    normalize: bool = Field(default=False, description="Rescale scores to 0-100 for display")
    include_hashtags: bool = True


class CafeOut(BaseModel):
    id: str
    name: str
    district: str
    address: str
    url: str
    description: str
    features: list[str]
    tags: list[str]
    rating: float | None
    site_score: float = 0.0


class SearchResultItem(BaseModel):
    cafe: CafeOut
    score: float
    matched_keywords: list[str] = Field(default_factory=list)
    hashtags: str = ""


class ScoreDistribution(BaseModel):
    count: int
    min: float
    max: float
    average: float
    median: float


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResultItem]
    total_candidates: int
    total_results: int
    score_distribution: ScoreDistribution


class RecommendationItem(BaseModel):
    cafe: CafeOut
    baseline_score: float
    hashtags: str = ""


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total_candidates: int


class HashtagResponse(BaseModel):
    cafe_id: str
    hashtags: str
    tags: list[str]
