from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CrawlConfig:
    timeout: float = float(os.getenv("CAFE_SEARCH_CRAWL_TIMEOUT", "10.0"))
    max_depth: int = 2
    max_children: int = 5
    user_agent: str = "Mozilla/5.0 (compatible; CafeSearchBot/1.0)"


DEFAULT_CRAWL_CONFIG = CrawlConfig()
