from rollup_reports.main import app
from rollup_reports.api import deps
from rollup_reports.stores import InMemoryRollupStore


def test_app_rollup_across_campaigns(client, campaign_factory):
    campaign_factory("c1", [("Show A", "Hulu", 1000, 500), ("Show B", "tiny-net", 10, 1)])
    campaign_factory("c2", [("Show A", "Hulu", 500, 500)])

    r = client.get("/api/v1/rollups/app")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["rollup_type"] == "app"
    assert body["count"] == 2
    assert body["rollup"] == [
        {"app_name": "Hulu", "impressions": 1500, "completes": 1000, "avg_vcr": 66.67, "content_count": 2},
        {"app_name": "Other", "impressions": 10, "completes": 1, "avg_vcr": 10.0, "content_count": 1},
    ]


def test_rollup_filtered_by_campaign(client, campaign_factory):
    campaign_factory("c1", [("Show A", "Hulu", 1000, 500)])
    campaign_factory("c2", [("Show A", "Tubi", 500, 500)])

    r = client.get("/api/v1/rollups/content", params={"campaign_id": "c2"})
    assert r.status_code == 200
    rollup = r.json()["rollup"]
    assert [(c["content_key"], c["content_network_name"]) for c in rollup] == [("show a", "Tubi")]
    assert "content_count" not in rollup[0]


def test_genre_rollup_uses_genre_map(client, campaign_factory, genre_factory):
    campaign_factory("c1", [("Show A", "ESPN", 300, 30), ("Show B", "Hulu", 100, 50)])
    genre_factory("ESPN", "Sports")

    r = client.get("/api/v1/rollups/genre")
    assert [(g["genre_canon"], g["impressions"]) for g in r.json()["rollup"]] == [("Sports", 300), ("Unknown", 100)]


def test_empty_rollup_is_not_an_error(client):
    r = client.get("/api/v1/rollups/app")
    assert r.status_code == 200
    assert r.json()["rollup"] == []


def test_invalid_rollup_type(client):
    r = client.get("/api/v1/rollups/network")
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_export_rollup_csv(client, campaign_factory):
    campaign_factory("c1", [("Show, \"A\"", "Hulu", 1000, 500)])

    r = client.get("/api/v1/rollups/content/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="content-rollup.csv"' in r.headers["content-disposition"]
    assert r.text.splitlines() == [
        "content_key,content_title,content_network_name,impressions,completes,avg_vcr",
        'show a,"Show, ""A""",Hulu,1000,500,50',
    ]


def test_export_with_no_rows_is_404(client):
    r = client.get("/api/v1/rollups/app/export")
    assert r.status_code == 404
    assert r.json()["message"] == "No data to export"


def test_unavailable_row_source_returns_503(client):
    app.dependency_overrides[deps.get_rollup_store] = lambda: InMemoryRollupStore(available=False)
    try:
        r = client.get("/api/v1/rollups/app", headers={"X-Request-ID": "req-503"})
    finally:
        app.dependency_overrides.pop(deps.get_rollup_store, None)

    assert r.status_code == 503
    body = r.json()
    assert body["success"] is False
    assert body["request_id"] == "req-503"
    assert r.headers["X-Request-ID"] == "req-503"


def test_fixture_store_can_replace_database(client, raw_row):
    store = InMemoryRollupStore([raw_row("Hulu", 100, 25), raw_row("Hulu", 0, 0)])
    app.dependency_overrides[deps.get_rollup_store] = lambda: store
    try:
        r = client.get("/api/v1/rollups/app")
    finally:
        app.dependency_overrides.pop(deps.get_rollup_store, None)

    assert r.json()["rollup"] == [
        {"app_name": "Hulu", "impressions": 100, "completes": 25, "avg_vcr": 25.0, "content_count": 1}
    ]
