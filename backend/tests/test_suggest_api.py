"""
Tests for the suggest endpoint
"""
from punchlines.core.generation_client import GenerationError
from punchlines.models import GeneratedJoke


def test_suggest_anonymous_returns_results_without_storing(client, db, generation_client):
    r = client.post("/api/suggest", json={"prompt": "The founder of IKEA has stepped down."})

    assert r.status_code == 200
    assert r.json() == {"status": "success", "results": ["p0", "p1", "p2"], "id": None}
    assert generation_client.prompts == ["The founder of IKEA has stepped down."]
    assert db.query(GeneratedJoke).count() == 0


def test_suggest_signed_in_records_generated_joke(client, db, user, user_headers):
    r = client.post("/api/suggest", json={"prompt": "  A setup  "}, headers=user_headers)

    body = r.json()
    assert body["status"] == "success"
    joke = db.query(GeneratedJoke).one()
    assert body["id"] == str(joke.id)
    assert joke.user_id == user.id
    assert joke.setup == "A setup"
    assert joke.results == ["p0", "p1", "p2"]


def test_suggest_then_save_round_trip(client, user_headers):
    suggestion = client.post("/api/suggest", json={"prompt": "Setup"}, headers=user_headers).json()

    r = client.post(
        "/api/save-punchline",
        json={"id": suggestion["id"], "punchlineIndex": 2},
        headers=user_headers,
    )
    assert r.json()["data"]["punchline"] == "p2"
    assert r.json()["data"]["setup"] == "Setup"


def test_suggest_strips_and_drops_blank_candidates(client, generation_client):
    generation_client.results = [" one\n", "   ", "two"]
    r = client.post("/api/suggest", json={"prompt": "Setup"})
    assert r.json()["results"] == ["one", "two"]


def test_suggest_blank_prompt(client, generation_client):
    for payload in ({}, {"prompt": ""}, {"prompt": "   "}, {"prompt": None}):
        r = client.post("/api/suggest", json=payload)
        assert r.status_code == 400
        assert r.json() == {"status": "error", "reason": "Invalid prompt"}
    assert generation_client.prompts == []


def test_suggest_provider_failure(client, db, user_headers, generation_client):
    generation_client.error = GenerationError("Provider HTTP 503: overloaded")

    r = client.post("/api/suggest", json={"prompt": "Setup"}, headers=user_headers)

    assert r.status_code == 500
    assert r.json() == {"status": "error", "reason": "Error generating punchlines"}
    assert db.query(GeneratedJoke).count() == 0
