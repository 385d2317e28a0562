from __future__ import annotations

from typing import Iterable, Sequence

from .models import Record


def matches_district(record: Record, districts: Sequence[str] | None) -> bool:
    if not districts:
        return True
    return record.district in districts


def has_features(record: Record, features: Sequence[str] | None) -> bool:
    """True when the record carries every requested feature."""
    if not features:
        return True
    if not record.features:
        return False
    return all(f in record.features for f in features)


def filter_records(
    records: Iterable[Record],
    districts: Sequence[str] | None = None,
    features: Sequence[str] | None = None,
) -> list[Record]:
    return [
        r for r in records
        if matches_district(r, districts) and has_features(r, features)
    ]
