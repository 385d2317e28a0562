from __future__ import annotations

import pytest

from cafe_search.keywords.catalog import KeywordCatalog
from cafe_search.keywords.models import Keyword
from cafe_search.scoring.counter import count
from cafe_search.scoring.scorer import (
    baseline_score,
    keyword_contributions,
    matched_keywords,
    min_max_normalize,
    top_keywords,
    weighted_score,
)
from cafe_search.scoring.weights import effective_weights, query_contains, weight_function

TEXT = "安靜 安靜 插座 咖啡"


def _catalog() -> KeywordCatalog:
    return KeywordCatalog([
        Keyword("安靜", 2.5),
        Keyword("插座", 2.5),
        Keyword("咖啡", 0.8),
    ])


class TestCount:
    def test_empty_term_or_text(self):
        assert count("咖啡", "") == 0
        assert count("", "咖啡") == 0
        assert count(None, "咖啡") == 0

    def test_cjk_substring(self):
        assert count("安靜安靜的咖啡廳，很安靜", "安靜") == 3

    def test_non_overlapping(self):
        assert count("1111", "11") == 2
        assert count("aaaa", "aa") == 0
        assert count("咖咖咖", "咖咖") == 1

    def test_ascii_word_boundary(self):
        assert count("category cat", "cat") == 1
        assert count("Cat, CAT and cats", "cat") == 2

    def test_ascii_term_next_to_cjk(self):
        assert count("有wifi，wifi很快", "WiFi") == 2

    def test_mixed_term_uses_substring(self):
        assert count("5g5g訊號", "5g") == 2


class TestScores:
    def test_weighted_and_baseline(self):
        catalog = _catalog()
        assert baseline_score(TEXT, catalog) == pytest.approx(7.5)
        assert weighted_score(TEXT, catalog.all()) == pytest.approx(8.3)

    def test_query_boost_does_not_leak(self):
        catalog = _catalog()
        boosted = weight_function(effective_weights("安靜", catalog.all()))
        assert weighted_score(TEXT, catalog.all(), boosted) == pytest.approx(10.8)

        unrelated = weight_function(effective_weights("甜點", catalog.all()))
        assert weighted_score(TEXT, catalog.all(), unrelated) == pytest.approx(8.3)
        assert catalog.get_weight("安靜") == 2.5

    def test_empty_text_scores_zero(self):
        assert weighted_score("", _catalog().all()) == 0.0

    def test_contributions_and_matches(self):
        catalog = _catalog()
        assert keyword_contributions(TEXT, catalog.all()) == pytest.approx(
            {"安靜": 5.0, "插座": 2.5, "咖啡": 0.8}
        )
        assert matched_keywords(TEXT, catalog.all(), limit=2) == ["安靜", "插座"]

    def test_top_keywords_ties_keep_catalog_order(self):
        catalog = _catalog()
        names = [kw.name for kw in top_keywords("咖啡 插座", catalog, 3)]
        assert names == ["插座", "咖啡"]

    def test_top_keywords_by_count(self):
        names = [kw.name for kw in top_keywords(TEXT, _catalog(), 2)]
        assert names == ["安靜", "插座"]

    def test_top_keywords_excludes_absent(self):
        assert top_keywords("沒有相關字", _catalog(), 3) == []


class TestWeights:
    def test_effective_weights(self):
        catalog = _catalog()
        weights = effective_weights("想找安靜的地方", catalog.all())
        assert weights["安靜"] == pytest.approx(3.75)
        assert weights["插座"] == pytest.approx(2.5)

    def test_empty_query_keeps_base_weights(self):
        weights = effective_weights("   ", _catalog().all())
        assert weights["安靜"] == pytest.approx(2.5)

    def test_weights_are_read_only(self):
        weights = effective_weights("安靜", _catalog().all())
        with pytest.raises(TypeError):
            weights["安靜"] = 0.0

    def test_query_contains_is_case_insensitive(self):
        assert query_contains("Need WIFI", "wifi")
        assert not query_contains("", "wifi")


class TestNormalize:
    def test_all_equal(self):
        assert min_max_normalize([5, 5, 5]) == [50.0, 50.0, 50.0]

    def test_range(self):
        assert min_max_normalize([0, 5, 10]) == pytest.approx([0.0, 50.0, 100.0])

    def test_empty(self):
        assert min_max_normalize([]) == []
