"""
Café ingestion package.

Responsibilities:
- Read raw café listings (camelCase or snake_case JSON).
- Normalize them into the canonical café schema.
- Optionally enrich each café with text crawled from its website.
- Persist the processed dataset for the corpus loader.
"""
