from __future__ import annotations

import re
from functools import lru_cache

_ASCII_WORD_RE = re.compile(r"[A-Za-z]+")


@lru_cache(maxsize=2048)
def _word_pattern(term: str) -> re.Pattern[str]:
    # ASCII boundaries so that a Latin term glued to CJK text ("有wifi") still counts.
    return re.compile(rf"\b{re.escape(term)}\b", re.ASCII)


def count(text: str | None, term: str | None) -> int:
    """Count case-insensitive occurrences of *term* in *text*.

    Pure ASCII-letter terms are matched on word boundaries, so "cat" is not
    found inside "category". Any other term (CJK, digits, mixed) is counted by
    non-overlapping substring scanning.
    """
    if not text or not term:
        return 0
    haystack = text.lower()
    needle = term.lower()
    if _ASCII_WORD_RE.fullmatch(needle):
        return sum(1 for _ in _word_pattern(needle).finditer(haystack))
    return haystack.count(needle)
