"""
Tests for the generation provider client
"""
import json

import httpx
import pytest

from punchlines.core.config import Settings
from punchlines.core.generation_client import (GenerationClient,
                                               GenerationError)


def _settings(**overrides):
    values = {
        "generation_api_url": "https://llm.test/v1",
        "generation_api_key": "sk-test",
        "generation_model": "joke-model",
        "generation_num_results": 3,
        "generation_stop": " END",
    }
    values.update(overrides)
    return Settings(**values)


def _client(handler, **overrides):
    return GenerationClient(settings=_settings(**overrides), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_sends_completion_request():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [
            {"index": 0, "text": " first"},
            {"index": 1, "text": " second"},
            {"index": 2, "text": " third"},
        ]})

    response = await _client(handler).generate("A setup")

    assert seen["url"] == "https://llm.test/v1/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "joke-model"
    assert seen["body"]["prompt"] == "A setup\n\n###\n\n"
    assert seen["body"]["n"] == 3
    assert seen["body"]["stop"] == [" END"]
    assert response.model == "joke-model"
    assert response.results == [" first", " second", " third"]


@pytest.mark.asyncio
async def test_generate_orders_by_choice_index():
    def handler(request):
        return httpx.Response(200, json={"choices": [
            {"index": 1, "text": "b"},
            {"index": 0, "text": "a"},
        ]})

    response = await _client(handler).generate("x")
    assert response.results == ["a", "b"]


@pytest.mark.asyncio
async def test_generate_without_api_key_sends_no_auth():
    def handler(request):
        assert "authorization" not in request.headers
        return httpx.Response(200, json={"choices": []})

    response = await _client(handler, generation_api_key=None).generate("x")
    assert response.results == []


@pytest.mark.asyncio
async def test_generate_http_error_status():
    def handler(request):
        return httpx.Response(503, text="overloaded")

    with pytest.raises(GenerationError, match="503"):
        await _client(handler).generate("x")


@pytest.mark.asyncio
async def test_generate_non_json_body():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(GenerationError):
        await _client(handler).generate("x")


@pytest.mark.asyncio
async def test_generate_missing_choices():
    def handler(request):
        return httpx.Response(200, json={"error": "nope"})

    with pytest.raises(GenerationError):
        await _client(handler).generate("x")


@pytest.mark.asyncio
async def test_generate_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GenerationError, match="ConnectError"):
        await _client(handler).generate("x")


def test_parse_choices_skips_non_text_entries():
    data = {"choices": [{"text": "a"}, {"text": None}, "junk", {"text": "b"}]}
    assert GenerationClient.parse_choices(data) == ["a", "b"]
