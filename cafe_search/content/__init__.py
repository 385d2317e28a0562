"""
Web content ingestion.

Responsibilities:
- Fetch café websites with bounded timeouts and extract plain text and links.
- Build a bounded-depth tree of linked pages and score it with depth weighting.
- Flatten the tree into plain text for a record's searchable text.

Failures never propagate: an unreachable page contributes empty text.
"""
