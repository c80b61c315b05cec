from sqlalchemy.exc import OperationalError
from rollup_reports.main import app
from rollup_reports.api import deps


def test_network_alias_lifecycle(client, campaign_factory):
    campaign_factory("c1", [("Show A", "roku-ctv", 10, 5), ("Show B", "The Roku Channel", 20, 10), ("Show C", "Hulu", 100, 50)])

    r = client.get("/api/v1/mappings/content-networks")
    assert r.status_code == 200
    assert r.json()["network_names"] == ["Hulu", "The Roku Channel", "roku-ctv"]
    assert r.json()["aliases"] == []

    # before aliasing both small networks fall into Other
    names = [a["app_name"] for a in client.get("/api/v1/rollups/app").json()["rollup"]]
    assert names == ["Hulu", "Other"]

    r = client.post("/api/v1/mappings/content-networks", json={
        "alias": "Roku", "network_names": ["roku-ctv", "The Roku Channel", " ", "roku-ctv"],
    })
    assert r.status_code == 201, r.text
    assert r.json()["network_names"] == ["roku-ctv", "The Roku Channel"]

    rollup = client.get("/api/v1/rollups/app").json()["rollup"]
    assert [(a["app_name"], a["impressions"], a["content_count"]) for a in rollup] == [("Hulu", 100, 1), ("Roku", 30, 2)]

    # saving the same alias replaces its network list
    r = client.post("/api/v1/mappings/content-networks", json={"alias": "Roku", "network_names": ["roku-ctv"]})
    assert r.status_code == 201
    aliases = client.get("/api/v1/mappings/content-networks").json()["aliases"]
    assert len(aliases) == 1
    assert aliases[0]["network_names"] == ["roku-ctv"]

    r = client.delete("/api/v1/mappings/content-networks", params={"alias": "Roku"})
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert client.get("/api/v1/mappings/content-networks").json()["aliases"] == []


def test_delete_unknown_alias_is_404(client):
    r = client.delete("/api/v1/mappings/content-networks", params={"alias": "Nope"})
    assert r.status_code == 404


def test_network_alias_requires_names(client):
    r = client.post("/api/v1/mappings/content-networks", json={"alias": "Roku", "network_names": ["", "  "]})
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Request validation failed"
    assert body["details"][0]["loc"] == ["body", "network_names"]
    assert "at least one non-empty name" in body["details"][0]["msg"]


def test_genre_upsert(client, campaign_factory):
    campaign_factory("c1", [("Show A", "ESPN", 300, 30)])

    r = client.post("/api/v1/mappings/genres", json={"raw_genre": "ESPN", "genre_canon": "Sport"})
    assert r.status_code == 200
    r = client.post("/api/v1/mappings/genres", json={"raw_genre": "ESPN", "genre_canon": "Sports"})
    assert r.json()["genre_canon"] == "Sports"

    genres = client.get("/api/v1/mappings/genres").json()
    assert [(g["raw_genre"], g["genre_canon"]) for g in genres] == [("ESPN", "Sports")]
    rollup = client.get("/api/v1/rollups/genre").json()["rollup"]
    assert rollup[0]["genre_canon"] == "Sports"


def test_content_alias_upsert_merges_titles(client, campaign_factory):
    campaign_factory("c1", [("The Show!", "Hulu", 100, 10), ("The Show (HD)", "Hulu", 50, 5)])

    for title in ("The Show", "the show hd"):
        r = client.post("/api/v1/mappings/content-aliases", json={"content_title": title, "content_key": "the-show"})
        assert r.status_code == 200, r.text

    aliases = client.get("/api/v1/mappings/content-aliases").json()
    assert [a["content_title_canon"] for a in aliases] == ["the show", "the show hd"]

    rollup = client.get("/api/v1/rollups/content").json()["rollup"]
    assert [(c["content_key"], c["content_title"], c["impressions"]) for c in rollup] == [("the-show", "The Show!", 150)]


def test_content_alias_rejects_title_without_word_characters(client):
    r = client.post("/api/v1/mappings/content-aliases", json={"content_title": "!!!", "content_key": "x"})
    assert r.status_code == 400


def test_content_networks_database_outage_is_503(client, db_session, monkeypatch):

    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "scalars", _boom)
    monkeypatch.setattr(db_session, "query", _boom)
    previous = app.dependency_overrides[deps.get_db]
    app.dependency_overrides[deps.get_db] = lambda: db_session
    try:
        r = client.get("/api/v1/mappings/content-networks")
        genres = client.get("/api/v1/mappings/genres")
    finally:
        app.dependency_overrides[deps.get_db] = previous

    assert r.status_code == 503
    assert r.json()["success"] is False
    assert genres.status_code == 503
    assert genres.json()["source"] == "database"
