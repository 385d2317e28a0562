"""
Relevance scoring.

Responsibilities:
- Count keyword occurrences in a record's searchable text (CJK-safe).
- Convert counts into weighted and baseline (CORE-only) scores.
- Derive per-query effective weights without touching shared keyword state.
"""
