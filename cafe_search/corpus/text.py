from __future__ import annotations

from typing import Iterable


def build_searchable_text(
    name: str = "",
    description: str = "",
    district: str = "",
    address: str = "",
    features: Iterable[str] = (),
    tags: Iterable[str] = (),
    page_text: str = "",
) -> str:
    """Concatenate the descriptive fields of a café into one searchable blob."""
    parts: list[str] = [name, description, district, address]
    parts.extend(features)
    parts.extend(tags)
    parts.append(page_text)
    return " ".join(p.strip() for p in parts if p and p.strip())
