from __future__ import annotations

import re
from typing import Iterable

from ..keywords.models import Keyword
from ..scoring.scorer import top_keywords
from ..scoring.weights import query_contains
from .config import DEFAULT_HASHTAG_CONFIG, HashtagConfig

# CJK unified ideographs, ASCII letters and digits only.
_TAG_CHARS_RE = re.compile(r"[\u4e00-\u9fffA-Za-z0-9]+")


def is_valid_hashtag(term: str | None, config: HashtagConfig = DEFAULT_HASHTAG_CONFIG) -> bool:
    if not term:
        return False
    if not config.min_length <= len(term) <= config.max_length:
        return False
    if term.lower() in config.stopwords:
        return False
    return bool(_TAG_CHARS_RE.fullmatch(term))


def user_terms(
    query: str | None,
    keywords: Iterable[Keyword],
    top_n: int | None = None,
    config: HashtagConfig = DEFAULT_HASHTAG_CONFIG,
) -> list[str]:
    """Catalog keywords mentioned in *query*, heaviest original weight first.

    The *top_n* cut is taken before the validity filter, so an invalid
    heavy keyword uses up a slot.
    """
    if not query or not query.strip():
        return []
    top_n = config.top_user_n if top_n is None else top_n
    mentioned = [kw for kw in keywords if query_contains(query, kw.name)]
    mentioned.sort(key=lambda kw: kw.original_weight, reverse=True)
    return [kw.name for kw in mentioned[:top_n] if is_valid_hashtag(kw.name, config)]


def content_terms(
    text: str | None,
    keywords: Iterable[Keyword],
    top_n: int | None = None,
    config: HashtagConfig = DEFAULT_HASHTAG_CONFIG,
) -> list[str]:
    """Most frequent catalog keywords in *text* that make valid hashtags."""
    top_n = config.top_content_n if top_n is None else top_n
    return [kw.name for kw in top_keywords(text, keywords, top_n) if is_valid_hashtag(kw.name, config)]


def select_hashtags(
    text: str | None,
    keywords: Iterable[Keyword],
    query: str | None = None,
    top_user_n: int | None = None,
    top_content_n: int | None = None,
    config: HashtagConfig = DEFAULT_HASHTAG_CONFIG,
) -> list[str]:
    """Query terms first, then content terms, without duplicates, capped at ``max_tags``."""
    keywords = list(keywords)
    merged: dict[str, None] = {}
    for term in user_terms(query, keywords, top_user_n, config):
        merged.setdefault(term)
    for term in content_terms(text, keywords, top_content_n, config):
        merged.setdefault(term)
    return list(merged)[: config.max_tags]


def format_hashtags(terms: Iterable[str]) -> str:
    return " ".join(f"#{t}" for t in terms)


def generate_hashtags(
    text: str | None,
    keywords: Iterable[Keyword],
    query: str | None = None,
    top_user_n: int | None = None,
    top_content_n: int | None = None,
    config: HashtagConfig = DEFAULT_HASHTAG_CONFIG,
) -> str:
    """Hashtag string such as ``"#不限時 #安靜 #咖啡"``, or ``""`` when nothing qualifies."""
    return format_hashtags(
        select_hashtags(text, keywords, query, top_user_n, top_content_n, config)
    )
