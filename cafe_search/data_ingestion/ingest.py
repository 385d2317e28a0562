from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Any, Callable, List

import pandas as pd

from ..content.tree import CrawlResult, crawl_site
from ..corpus.models import Record
from ..corpus.text import build_searchable_text
from ..keywords.catalog import load_catalog
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "district",
    "address",
    "url",
    "description",
    "features",
    "tags",
    "rating",
    "page_text",
    "site_score",
]

_TEXT_COLUMNS = ["id", "name", "district", "address", "url", "description", "page_text"]
_LIST_COLUMNS = ["features", "tags"]


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, (list, tuple)) and bool(pd.isna(value)))


def _as_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    if _is_missing(value):
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _as_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value).strip()


def _as_score(value: Any) -> float:
    if _is_missing(value):
        return 0.0
    return float(value)


def load_cafes_frame(path: Path | str) -> pd.DataFrame:
    """Read a café JSON array and return it in canonical form."""
    raw = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    return canonicalize(raw)


def canonicalize(df: pd.DataFrame) -> pd.DataFrame:
    """Map raw café columns (either naming convention) onto ``CANONICAL_COLUMNS``."""

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    sources = {
        "id": _first_present(["id", "cafe_id", "cafeId"]),
        "name": _first_present(["name", "title"]),
        "district": _first_present(["district", "area"]),
        "address": _first_present(["address", "location"]),
        "url": _first_present(["url", "website", "google_map_url", "googleMapUrl"]),
        "description": _first_present(["description", "desc"]),
        "features": _first_present(["features", "featuresList", "feature"]),
        "tags": _first_present(["tags", "keywords"]),
        "rating": _first_present(["rating", "avg_rating"]),
        "page_text": _first_present(["page_text", "pageText", "content"]),
        "site_score": _first_present(["site_score", "siteScore"]),
    }

    canonical = pd.DataFrame(index=df.index)
    for column in _TEXT_COLUMNS:
        src = sources[column]
        canonical[column] = df[src].apply(_as_text) if src else ""
    for column in _LIST_COLUMNS:
        src = sources[column]
        if src:
            canonical[column] = df[src].apply(_as_list)
        else:
            canonical[column] = pd.Series([[] for _ in df.index], index=df.index, dtype=object)

    if sources["rating"]:
        canonical["rating"] = pd.to_numeric(df[sources["rating"]], errors="coerce")
    else:
        canonical["rating"] = pd.NA

    if sources["site_score"]:
        canonical["site_score"] = pd.to_numeric(df[sources["site_score"]], errors="coerce").fillna(0.0)
    else:
        canonical["site_score"] = 0.0

    return canonical[CANONICAL_COLUMNS]


def records_from_frame(df: pd.DataFrame) -> list[Record]:
    """Build immutable corpus records from a canonical frame."""
    records: list[Record] = []
    for row in df.to_dict(orient="records"):
        features = tuple(_as_list(row.get("features")))
        tags = tuple(_as_list(row.get("tags")))
        rating = row.get("rating")
        text = build_searchable_text(
            name=_as_text(row.get("name")),
            description=_as_text(row.get("description")),
            district=_as_text(row.get("district")),
            address=_as_text(row.get("address")),
            features=features,
            tags=tags,
            page_text=_as_text(row.get("page_text")),
        )
        records.append(Record(
            id=_as_text(row.get("id")),
            name=_as_text(row.get("name")),
            district=_as_text(row.get("district")),
            address=_as_text(row.get("address")),
            url=_as_text(row.get("url")),
            description=_as_text(row.get("description")),
            features=features,
            tags=tags,
            rating=float(rating) if rating is not None and pd.notna(rating) else None,
            searchable_text=text,
            site_score=_as_score(row.get("site_score")),
        ))
    return records


def run_ingestion(
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    crawl: Callable[[str], CrawlResult] | None = None,
) -> Path:
    """
    Execute the ingestion pipeline.

    Steps:
    - Read the raw café listing.
    - Map raw fields into the canonical café schema.
    - When crawling is enabled, attach the plain text and keyword score of
      each café's site.
    - Persist the canonical data as JSON for the corpus loader.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    canonical = load_cafes_frame(config.raw_path)

    if config.crawl:
        if crawl is None:
            keywords = load_catalog(config.keywords_path).all()
            crawl = partial(crawl_site, keywords=keywords)
        texts: list[str] = []
        scores: list[float] = []
        for url, text, score in zip(canonical["url"], canonical["page_text"], canonical["site_score"]):
            if url:
                result = crawl(url)
                text, score = result.text, result.score
            texts.append(text)
            scores.append(score)
        canonical["page_text"] = texts
        canonical["site_score"] = scores
        logger.info("Crawled %d café sites", int((canonical["url"] != "").sum()))

    output_path = config.processed_path
    canonical.to_json(output_path, orient="records", force_ascii=False, indent=2)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
