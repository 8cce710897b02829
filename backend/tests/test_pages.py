"""
Tests for HTML pages, health and metrics endpoints
"""
from punchlines.models import SavedJoke


def test_index_shows_four_examples(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert r.text.count('class="card example"') == 4


def test_saved_jokes_page_redirects_anonymous(client):
    r = client.get("/jokes", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/auth/login"


def test_saved_jokes_page_lists_jokes(client, db, user, user_headers, generated_joke):
    db.add(SavedJoke(gen_joke_id=generated_joke.id, user_id=user.id, setup="S", punchline="the kicker"))
    db.commit()

    r = client.get("/jokes", headers=user_headers)
    assert r.status_code == 200
    assert "the kicker" in r.text


def test_auth_pages_render(client):
    assert client.get("/auth/login").status_code == 200
    assert client.get("/auth/register").status_code == 200


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
    assert r.json()["service"] == "punchlines.ai"


def test_health_detailed(client):
    r = client.get("/health/detailed")
    assert r.status_code == 200
    assert r.json()["components"]["database"]["status"] == "healthy"


def test_request_id_header_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["x-request-id"] == "req-123"


def test_metrics_endpoint(client):
    client.get("/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "http_requests_total" in r.text
    assert "saved_jokes_total" in r.text
