"""Query-time ranking of café records: scoring, name matching, de-duplication and the search service."""
