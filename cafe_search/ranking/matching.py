from __future__ import annotations

import re
from typing import Callable

from ..corpus.models import Record

EXACT_NAME_BOOST = 80.0
SUBSTRING_NAME_BOOST = 50.0
TOKEN_NAME_BOOST = 30.0

# \w covers letters, digits and CJK ideographs; underscore is punctuation here.
_NON_WORD_RE = re.compile(r"[\W_]+")


def normalize_for_match(value: str | None) -> str:
    """Case-fold, turn punctuation runs into single spaces and collapse whitespace."""
    if not value:
        return ""
    cleaned = _NON_WORD_RE.sub(" ", value.casefold())
    return " ".join(cleaned.split())


def name_match_boost(
    query: str | None,
    name: str | None,
    exact: float = EXACT_NAME_BOOST,
    substring: float = SUBSTRING_NAME_BOOST,
    tokens: float = TOKEN_NAME_BOOST,
) -> float:
    """Bonus for a record whose name matches the query.

    Exact match of the normalised strings scores 80, the query appearing
    inside the name 50, every query token appearing inside the name 30.
    """
    q = normalize_for_match(query)
    n = normalize_for_match(name)
    # A punctuation-only query normalises to "", which every name would
    # "contain"; it earns no bonus.
    if not q or not n:
        return 0.0
    if n == q:
        return exact
    if q in n:
        return substring
    if all(token in n for token in q.split()):
        return tokens
    return 0.0


def _by_id(record: Record) -> str:
    rid = (record.id or "").strip()
    return f"id:{rid}" if rid else ""


def _by_name_and_address(record: Record) -> str:
    name = normalize_for_match(record.name)
    if not name:
        return ""
    return f"na:{name}|{normalize_for_match(record.address)}"


def _by_location(record: Record) -> str:
    return f"url:{(record.url or '').strip()}"


_KEY_CHAIN: tuple[Callable[[Record], str], ...] = (
    _by_id,
    _by_name_and_address,
    _by_location,
)


def canonical_key(record: Record) -> str:
    """Identity used to collapse duplicate results: the first non-empty candidate wins."""
    for candidate in _KEY_CHAIN:
        key = candidate(record)
        if key:
            return key
    return ""
