from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CorpusConfig:
    cafes_path: Path = Path(os.getenv("CAFE_SEARCH_CAFES_PATH", str(_DATA_DIR / "cafes.json")))
    keywords_path: Path = Path(
        os.getenv("CAFE_SEARCH_KEYWORDS_PATH", str(_DATA_DIR / "keywords.json"))
    )
    baseline_cache_path: Path = Path(
        os.getenv("CAFE_SEARCH_BASELINE_CACHE", str(_DATA_DIR / "baseline_scores.json"))
    )


DEFAULT_CORPUS_CONFIG = CorpusConfig()
