"""
Configuration for the café ingestion pipeline.
"""

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Where raw café listings are read from and where the canonical file is written.

    ``keywords_path`` is the vocabulary used to score crawled sites.
    """

    raw_path: Path = _DATA_DIR / "raw" / "cafes.json"
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "cafes.json"
    keywords_path: Path = _DATA_DIR / "keywords.json"
    crawl: bool = False

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
