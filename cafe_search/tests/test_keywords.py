from __future__ import annotations

import json
from pathlib import Path

import pytest

from cafe_search.keywords.catalog import KeywordCatalog, load_catalog
from cafe_search.keywords.models import Keyword, Tier, tier_from_category, tier_of, tier_to_number
from cafe_search.scoring.scorer import weighted_score


class TestTiers:
    @pytest.mark.parametrize(
        "weight, expected",
        [(3.0, Tier.core), (2.0, Tier.core), (1.999, Tier.secondary), (1.0, Tier.secondary), (0.999, Tier.reference), (0.0, Tier.reference)],
    )
    def test_tier_of_weight(self, weight, expected):
        assert tier_of(weight) is expected

    def test_category_labels(self):
        assert tier_from_category("core") is Tier.core
        assert tier_from_category("Secondary") is Tier.secondary
        assert tier_from_category("additional") is Tier.reference

    def test_unknown_category_degrades_to_reference(self):
        assert tier_from_category("bogus") is Tier.reference
        assert tier_from_category(None) is Tier.reference

    def test_legacy_numbers(self):
        assert tier_from_category(1) is Tier.core
        assert tier_from_category("2") is Tier.secondary
        assert tier_from_category(3) is Tier.reference
        assert tier_to_number(Tier.secondary) == 2

    def test_keyword_without_tier_derives_it(self):
        assert Keyword("咖啡", 0.8).tier is Tier.reference
        assert Keyword("安靜", 2.5).tier is Tier.core


def test_get_weight_and_unknown_term():
    catalog = KeywordCatalog.default()
    assert catalog.get_weight("不限時") == 3.0
    assert catalog.get_weight("WIFI") == 1.5
    assert catalog.get_weight("not-a-keyword") == 0.0


def test_from_entries_skips_malformed():
    catalog = KeywordCatalog.from_entries([
        {"term": "安靜", "category": "core", "weight": 2.5},
        {"term": "", "weight": 1.0},
        {"term": "插座", "weight": "heavy"},
        "not a dict",
        {"term": "甜點", "weight": 1.2},
    ])
    assert [kw.name for kw in catalog] == ["安靜", "甜點"]
    assert catalog.find("甜點").tier is Tier.secondary


def test_duplicate_term_keeps_position_takes_later_weight():
    catalog = KeywordCatalog.from_entries([
        {"term": "wifi", "weight": 1.5},
        {"term": "咖啡", "weight": 0.8},
        {"term": "wifi", "weight": 2.0},
    ])
    assert [kw.name for kw in catalog] == ["wifi", "咖啡"]
    assert catalog.get_weight("wifi") == 2.0


def test_duplicate_term_differing_in_case_is_one_keyword():
    catalog = KeywordCatalog.from_entries([
        {"term": "wifi", "weight": 1.5},
        {"term": "咖啡", "weight": 0.8},
        {"term": "WiFi", "weight": 2.0},
    ])
    assert [kw.name for kw in catalog] == ["wifi", "咖啡"]
    assert catalog.get_weight("WIFI") == 2.0
    assert catalog.find("wifi").tier is Tier.core
    assert weighted_score("fast wifi", catalog.all()) == 2.0


def test_legacy_format():
    catalog = KeywordCatalog.from_data({
        "tier1": {"keywords": ["不限時", "插座"], "weight": 3.0},
        "tier2": {"keywords": ["wifi"], "weight": 1.5},
        "tier3": {"keywords": ["咖啡"], "weight": 0.5},
    })
    assert [kw.name for kw in catalog.core()] == ["不限時", "插座"]
    assert catalog.find("wifi").tier is Tier.secondary
    assert catalog.find("咖啡").tier is Tier.reference


def test_by_tier_and_suggest():
    catalog = KeywordCatalog.default()
    assert len(catalog.by_tier(Tier.core)) == 5
    assert catalog.suggest("WI") == ["wifi"]
    assert catalog.suggest("") == []


def test_suggest_caps_at_ten():
    catalog = KeywordCatalog.from_entries(
        [{"term": f"咖啡{i}", "weight": 1.0} for i in range(15)]
    )
    suggestions = catalog.suggest("咖啡")
    assert len(suggestions) == 10
    assert suggestions[0] == "咖啡0"


def test_load_catalog_from_file(tmp_path: Path):
    path = tmp_path / "keywords.json"
    path.write_text(
        json.dumps({"keywords": [{"term": "手沖", "category": "secondary", "weight": 1.2}]}),
        encoding="utf-8",
    )
    catalog = load_catalog(path)
    assert len(catalog) == 1
    assert "手沖" in catalog


def test_load_catalog_missing_file_uses_defaults(tmp_path: Path):
    catalog = load_catalog(tmp_path / "missing.json")
    assert len(catalog) == len(KeywordCatalog.default())
    assert "不限時" in catalog


def test_load_catalog_malformed_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "keywords.json"
    path.write_text("{not json", encoding="utf-8")
    assert "安靜" in load_catalog(path)


def test_bundled_keyword_file_loads():
    path = Path(__file__).resolve().parent.parent / "data" / "keywords.json"
    catalog = load_catalog(path)
    assert catalog.get_weight("不限時") == 3.0
    assert catalog.find("咖啡").tier is Tier.reference
