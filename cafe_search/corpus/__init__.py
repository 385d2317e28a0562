"""
Café corpus.

Responsibilities:
- Turn canonical café rows into immutable records with searchable text.
- Compute and normalise the query-independent baseline score per record.
- Hold the current corpus snapshot and replace it atomically on reload.
"""
