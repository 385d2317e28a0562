"""
Keyword catalog.

Responsibilities:
- Hold every weighted search term together with its tier.
- Load the vocabulary from the keyword configuration file (current and legacy formats).
- Answer weight lookups; unknown terms weigh 0.0.
"""
