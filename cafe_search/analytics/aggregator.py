from __future__ import annotations

from collections import Counter
from typing import Any


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": c} for name, c in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top queries (blank queries are browsing, not searching)
    query_counter: Counter[str] = Counter()
    for s in searches:
        query = (s.get("query") or "").strip()
        if query:
            query_counter[query] += 1

    district_counter: Counter[str] = Counter()
    feature_counter: Counter[str] = Counter()
    for s in searches:
        for d in s.get("districts", []) or []:
            district_counter[d] += 1
        for f in s.get("features", []) or []:
            feature_counter[f] += 1

    # Filter usage rates
    filter_counts = {"query": 0, "district": 0, "feature": 0}
    for s in searches:
        if (s.get("query") or "").strip():
            filter_counts["query"] += 1
        if s.get("districts"):
            filter_counts["district"] += 1
        if s.get("features"):
            filter_counts["feature"] += 1
    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    zero_results = sum(1 for s in searches if s.get("total_results", 0) == 0)

    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_searches": total,
        "total_recommendations": sum(1 for e in events if e["type"] == "recommendations"),
        "avg_response_time_ms": avg_time,
        "top_queries": _top(query_counter),
        "top_districts": _top(district_counter),
        "top_features": _top(feature_counter),
        "filter_usage": filter_usage,
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
