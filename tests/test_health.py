def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_detailed_health_checks_database(client):
    r = client.get("/health/detailed")
    body = r.json()
    assert body["checks"]["database"] == "healthy"
    assert body["checks"]["rollups"]["other_threshold_impressions"] == 50


def test_request_id_is_echoed(client):
    r = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert r.json()["api_base"] == "/api/v1"
