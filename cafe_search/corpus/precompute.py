"""
Offline script to precompute raw café baseline scores.

Usage:
    python -m cafe_search.corpus.precompute
"""
from __future__ import annotations

import json
from pathlib import Path

from ..keywords.catalog import load_catalog
from .config import DEFAULT_CORPUS_CONFIG, CorpusConfig
from .store import compute_raw_baselines, load_records


def run_precompute(config: CorpusConfig = DEFAULT_CORPUS_CONFIG) -> Path:
    catalog = load_catalog(config.keywords_path)
    records = load_records(config.cafes_path)

    print(f"Scoring {len(records)} cafés against {len(catalog.core())} core keywords ...")
    raws = compute_raw_baselines(records, catalog)
    scores = {r.id: round(s, 4) for r, s in zip(records, raws) if r.id}

    out_path = config.baseline_cache_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as fh:
        json.dump(scores, fh, ensure_ascii=False, indent=2)
    print(f"Saved {len(scores)} baseline scores to {out_path}")
    return out_path


if __name__ == "__main__":
    run_precompute()
