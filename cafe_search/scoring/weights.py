"""
Per-query keyword weight adjustment.

A query boosts every keyword it mentions. The boost is computed into a fresh
mapping for each request; catalog keywords are immutable, so concurrent
queries never observe each other's adjustments.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from ..keywords.models import Keyword
from .scorer import WeightFn

QUERY_BOOST = 1.5


def query_contains(query: str | None, term: str) -> bool:
    """Case-insensitive substring test of *term* inside the raw query."""
    if not query or not term:
        return False
    return term.lower() in query.lower()


def effective_weights(
    query: str | None,
    keywords: Iterable[Keyword],
    multiplier: float = QUERY_BOOST,
) -> Mapping[str, float]:
    """Map keyword name to ``original_weight * multiplier`` when the query mentions it.

    Keywords the query does not mention keep their original weight. An empty
    query leaves every weight unchanged.
    """
    has_query = bool(query and query.strip())
    weights: dict[str, float] = {}
    for kw in keywords:
        boosted = has_query and query_contains(query, kw.name)
        weights[kw.name] = kw.original_weight * (multiplier if boosted else 1.0)
    return MappingProxyType(weights)


def weight_function(weights: Mapping[str, float]) -> WeightFn:
    """Adapt an effective-weight mapping to the scorer's ``weight_of`` callable."""

    def weight_of(keyword: Keyword) -> float:
        return weights.get(keyword.name, keyword.original_weight)

    return weight_of
