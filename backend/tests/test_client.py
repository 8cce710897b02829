"""
Tests for the prompt session client
"""
import json

import httpx
import pytest

from punchlines.client import AsyncState, AsyncValue, PromptSession


def _session(handler, **kwargs):
    return PromptSession(base_url="http://punchlines.test/", transport=httpx.MockTransport(handler), **kwargs)


def test_initial_state_is_not_started():
    session = PromptSession()
    assert session.results.is_not_started
    assert session.results.value is None


def test_async_value_states():
    assert AsyncValue.loading().state == AsyncState.LOADING
    loaded = AsyncValue.loaded(1)
    assert loaded.is_loaded and loaded.value == 1


@pytest.mark.asyncio
async def test_submit_success():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["cookie"] = request.headers.get("cookie")
        return httpx.Response(200, json={"status": "success", "results": ["a", "b"], "id": "j-1"})

    session = _session(handler, session_token="tok")
    result = await session.submit("A setup")

    assert seen["url"] == "http://punchlines.test/api/suggest"
    assert seen["body"] == {"prompt": "A setup"}
    assert seen["cookie"] == "session_token=tok"
    assert result.is_loaded
    assert result.value.ok
    assert result.value.results == ["a", "b"]
    assert result.value.id == "j-1"
    assert session.results is result


@pytest.mark.asyncio
async def test_submit_passes_server_error_reason_through():
    def handler(request):
        return httpx.Response(500, json={"status": "error", "reason": "Error generating punchlines"})

    result = await _session(handler).submit("x")
    assert result.is_loaded
    assert not result.value.ok
    assert result.value.reason == "Error generating punchlines"


@pytest.mark.asyncio
async def test_submit_error_without_reason_is_unknown():
    def handler(request):
        return httpx.Response(500, json={"status": "error"})

    result = await _session(handler).submit("x")
    assert result.value.reason == "unknown"


@pytest.mark.asyncio
async def test_submit_non_json_is_unknown():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    result = await _session(handler).submit("x")
    assert result.is_loaded
    assert result.value.status == "error"
    assert result.value.reason == "unknown"


@pytest.mark.asyncio
async def test_submit_network_error_is_unknown():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    result = await _session(handler).submit("x")
    assert result.value.reason == "unknown"


@pytest.mark.asyncio
async def test_save_sends_id_and_index():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"status": "success", "data": {"punchline": "p1"}})

    response = await _session(handler).save("j-1", 1)
    assert seen["url"] == "http://punchlines.test/api/save-punchline"
    assert seen["body"] == {"id": "j-1", "punchlineIndex": 1}
    assert response.ok
    assert response.data == {"punchline": "p1"}


@pytest.mark.asyncio
async def test_save_failure_reason():
    def handler(request):
        return httpx.Response(500, json={"status": "error", "reason": "Invalid joke"})

    response = await _session(handler).save("j-1", 0)
    assert not response.ok
    assert response.reason == "Invalid joke"
