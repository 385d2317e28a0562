from __future__ import annotations

import os
from dataclasses import dataclass

from ..scoring.weights import QUERY_BOOST
from .matching import EXACT_NAME_BOOST, SUBSTRING_NAME_BOOST, TOKEN_NAME_BOOST


@dataclass(frozen=True)
class RankingConfig:
    query_boost: float = QUERY_BOOST
    exact_name_boost: float = EXACT_NAME_BOOST
    substring_name_boost: float = SUBSTRING_NAME_BOOST
    token_name_boost: float = TOKEN_NAME_BOOST
    default_limit: int = 10
    max_limit: int = 50
    matched_keywords_limit: int = 5
    cache_ttl: float = float(os.getenv("CAFE_SEARCH_CACHE_TTL", "300"))


DEFAULT_RANKING_CONFIG = RankingConfig()
