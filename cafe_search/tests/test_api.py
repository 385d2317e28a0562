from fastapi.testclient import TestClient

from cafe_search.app import app

client = TestClient(app)


def _search(**body):
    resp = client.post("/search", json=body)
    assert resp.status_code == 200
    return resp.json()


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    body = client.get("/metadata").json()
    assert body["cafes"] == 8
    assert "大安區" in body["districts"]
    assert "插座" in body["features"]


def test_search_returns_sorted_results():
    body = _search(query="安靜")
    scores = [item["score"] for item in body["results"]]
    assert scores
    assert scores == sorted(scores, reverse=True)
    assert all(s > 0 for s in scores)
    assert "cafe_005" in [item["cafe"]["id"] for item in body["results"]]


def test_exact_name_match_ranks_first():
    body = _search(query="日光讀書咖啡")
    ids = [item["cafe"]["id"] for item in body["results"]]
    assert ids[:2] == ["cafe_001", "cafe_007"]


def test_search_respects_limit_and_offset():
    full = _search(query="", limit=50)
    page = _search(query="", limit=2, offset=1)
    assert len(page["results"]) == 2
    assert page["total_results"] == full["total_results"]
    assert [i["cafe"]["id"] for i in page["results"]] == [
        i["cafe"]["id"] for i in full["results"][1:3]
    ]


def test_search_filters_by_district():
    body = _search(query="咖啡", districts=["大安區"])
    assert body["results"]
    for item in body["results"]:
        assert item["cafe"]["district"] == "大安區"


def test_search_filters_by_features():
    body = _search(features=["插座", "wifi"])
    assert body["results"]
    for item in body["results"]:
        assert {"插座", "wifi"} <= set(item["cafe"]["features"])


def test_search_normalized_scores():
    body = _search(query="", normalize=True, limit=50)
    scores = [item["score"] for item in body["results"]]
    assert scores[0] == 100.0
    assert scores[-1] == 0.0


def test_search_includes_hashtags_and_matches():
    body = _search(query="不限時")
    top = body["results"][0]
    assert top["hashtags"].startswith("#不限時")
    assert len(top["hashtags"].split(" ")) <= 5
    assert "不限時" in top["matched_keywords"]


def test_search_without_hashtags():
    body = _search(query="安靜", include_hashtags=False)
    assert all(item["hashtags"] == "" for item in body["results"])


def test_search_no_matches():
    body = _search(query="zzzzqqq", districts=["不存在區"])
    assert body["total_candidates"] == 0
    assert body["results"] == []


def test_search_validation_rejects_bad_limit():
    assert client.post("/search", json={"query": "安靜", "limit": 0}).status_code == 422
    assert client.post("/search", json={"query": "安靜", "limit": 51}).status_code == 422


def test_recommendations_by_baseline():
    body = client.get("/recommendations", params={"limit": 3}).json()
    scores = [item["baseline_score"] for item in body["recommendations"]]
    assert len(scores) == 3
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 100.0


def test_recommendations_filtered():
    body = client.get("/recommendations", params={"district": "中山區"}).json()
    assert body["total_candidates"] == 2
    for item in body["recommendations"]:
        assert item["cafe"]["district"] == "中山區"


def test_cafe_detail_and_unknown():
    resp = client.get("/cafes/cafe_001")
    assert resp.status_code == 200
    assert resp.json()["name"] == "日光讀書咖啡"
    assert client.get("/cafes/nope").status_code == 404


def test_cafe_hashtags():
    resp = client.get("/cafes/cafe_005/hashtags", params={"query": "安靜"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["tags"][0] == "安靜"
    assert body["hashtags"] == " ".join(f"#{t}" for t in body["tags"])
    assert client.get("/cafes/nope/hashtags").status_code == 404


def test_keywords_by_tier():
    body = client.get("/keywords", params={"tier": "core"}).json()
    assert body["total"] > 0
    assert all(kw["tier"] == "core" and kw["tier_number"] == 1 for kw in body["keywords"])


def test_keyword_suggestions():
    body = client.get("/keywords/suggestions", params={"q": "咖"}).json()
    assert body["suggestions"] == ["咖啡"]


def test_admin_reload():
    resp = client.post("/admin/reload")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "reloaded"
    assert body["cafes"] == 8


def test_search_reports_score_distribution():
    body = _search(query="安靜", limit=2)
    dist = body["score_distribution"]
    assert dist["count"] == body["total_results"]
    assert dist["max"] == body["results"][0]["score"]
    assert dist["min"] <= dist["median"] <= dist["max"]


def test_search_distribution_empty_when_nothing_matches():
    body = _search(query="安靜", districts=["不存在區"])
    assert body["score_distribution"]["count"] == 0
