from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from ..data_ingestion.ingest import load_cafes_frame, records_from_frame
from ..keywords.catalog import KeywordCatalog, load_catalog
from ..scoring.scorer import baseline_score, min_max_normalize
from .config import DEFAULT_CORPUS_CONFIG, CorpusConfig
from .models import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corpus:
    """An immutable snapshot of the café records and the catalog they were scored with."""

    records: tuple[Record, ...]
    catalog: KeywordCatalog
    loaded_at: float = field(default_factory=time.time)
    by_id: Mapping[str, Record] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {r.id: r for r in self.records if r.id}
        object.__setattr__(self, "by_id", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.records)

    def get(self, record_id: str) -> Record | None:
        return self.by_id.get(record_id)

    def districts(self) -> list[str]:
        return sorted({r.district for r in self.records if r.district})

    def features(self) -> list[str]:
        return sorted({f for r in self.records for f in r.features})


def compute_raw_baselines(
    records: Iterable[Record],
    catalog: KeywordCatalog,
    cache: Mapping[str, float] | None = None,
) -> list[float]:
    """Raw baseline per record, taken from *cache* when it holds the record id."""
    cache = cache or {}
    raws: list[float] = []
    for record in records:
        if record.id and record.id in cache:
            raws.append(float(cache[record.id]))
        else:
            raws.append(baseline_score(record.searchable_text, catalog))
    return raws


def build_corpus(
    records: Iterable[Record],
    catalog: KeywordCatalog,
    baseline_cache: Mapping[str, float] | None = None,
) -> Corpus:
    """Score every record's baseline, normalise across the corpus and freeze the result."""
    records = list(records)
    raws = compute_raw_baselines(records, catalog, baseline_cache)
    normalized = min_max_normalize(raws)
    scored = tuple(r.with_baseline(s) for r, s in zip(records, normalized))
    return Corpus(records=scored, catalog=catalog)


def load_baseline_cache(path: Path | None) -> dict[str, float] | None:
    if path is None or not Path(path).is_file():
        return None
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        return {str(k): float(v) for k, v in data.items()}
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Ignoring unreadable baseline cache %s", path, exc_info=True)
        return None


def load_records(path: Path) -> list[Record]:
    try:
        return records_from_frame(load_cafes_frame(path))
    except (OSError, ValueError):
        logger.warning("Could not load cafés from %s, starting with an empty corpus", path, exc_info=True)
        return []


def load_corpus(config: CorpusConfig = DEFAULT_CORPUS_CONFIG) -> Corpus:
    catalog = load_catalog(config.keywords_path)
    records = load_records(config.cafes_path)
    cache = load_baseline_cache(config.baseline_cache_path)
    corpus = build_corpus(records, catalog, cache)
    logger.info(
        "Corpus ready: %d cafés, %d keywords (baseline cache %s)",
        len(corpus), len(catalog), "used" if cache else "not used",
    )
    return corpus


# ---------------------------------------------------------------------------
# Current snapshot
# ---------------------------------------------------------------------------
# Readers take a reference to the current snapshot and keep using it for the
# whole request. Reloads build a complete replacement before swapping it in.

_corpus: Corpus | None = None
_lock = threading.Lock()


def get_corpus() -> Corpus:
    """Return the current corpus snapshot, loading it on first call."""
    global _corpus
    corpus = _corpus
    if corpus is None:
        with _lock:
            if _corpus is None:
                _corpus = load_corpus()
            corpus = _corpus
    return corpus


def reload_corpus(config: CorpusConfig = DEFAULT_CORPUS_CONFIG) -> Corpus:
    """Rebuild keywords and records from disk and atomically replace the snapshot."""
    global _corpus
    with _lock:
        corpus = load_corpus(config)
        _corpus = corpus
    return corpus


def set_corpus(corpus: Corpus | None) -> None:
    """Install *corpus* as the current snapshot (``None`` forces a lazy reload)."""
    global _corpus
    with _lock:
        _corpus = corpus
