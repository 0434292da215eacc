"""Tests for ChatCompletionsClient (mocked HTTP)."""

import json

import httpx
import pytest

from findabuilder.config import SearchConfig
from findabuilder.llm.chat_completions import ChatCompletionsClient
from tests.conftest import LLM_URL


def _reply(content: str) -> dict[str, object]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _default_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/v1/chat/completions":
        return httpx.Response(200, json=_reply('{"searchByName":false}'))
    return httpx.Response(404)


def _make_client(config: SearchConfig, handler) -> ChatCompletionsClient:
    transport = httpx.MockTransport(handler)
    return ChatCompletionsClient(config, http_client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_generate_success(config):
    client = _make_client(config, _default_handler)
    try:
        result = await client.generate("hello")
        assert result == '{"searchByName":false}'
        assert client._available is True
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_request_shape(config):
    """Bearer auth, model, system + user messages and JSON response format."""
    captured: list[httpx.Request] = []

    def capture_handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_reply("{}"))

    client = _make_client(config, capture_handler)
    try:
        await client.generate("find thescoho", system="be a parser")
    finally:
        await client.close()

    assert len(captured) == 1
    request = captured[0]
    assert str(request.url) == f"{LLM_URL}/chat/completions"
    assert request.headers["Authorization"] == "Bearer llm-key"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert body["messages"] == [
        {"role": "system", "content": "be a parser"},
        {"role": "user", "content": "find thescoho"},
    ]
    assert body["temperature"] == 0.1
    assert body["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_request_without_system_prompt(config):
    captured: list[dict[str, object]] = []

    def capture_handler(request: httpx.Request) -> httpx.Response:
        captured.append(json.loads(request.content))
        return httpx.Response(200, json=_reply("{}"))

    client = _make_client(config, capture_handler)
    try:
        await client.generate("hi")
    finally:
        await client.close()
    assert captured[0]["messages"] == [{"role": "user", "content": "hi"}]
    assert captured[0]["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_generate_http_error_returns_none(config):
    client = _make_client(config, lambda req: httpx.Response(500))
    try:
        client._available = True
        assert await client.generate("hello") is None
        assert client._available is None
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_generate_malformed_body_returns_none(config):
    client = _make_client(config, lambda req: httpx.Response(200, json={"choices": []}))
    try:
        assert await client.generate("hello") is None
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_generate_transport_error_returns_none(config):
    def raise_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _make_client(config, raise_handler)
    try:
        assert await client.generate("hello") is None
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_unavailable_without_api_key(config):
    """No request is made when the bearer token is missing."""
    calls: list[httpx.Request] = []

    def counting_handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_reply("{}"))

    no_key = SearchConfig(llm_endpoint=LLM_URL, llm_api_key="")
    client = _make_client(no_key, counting_handler)
    try:
        assert await client.is_available() is False
        assert await client.generate("hello") is None
        assert calls == []
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_close_cleans_up(config):
    client = _make_client(config, _default_handler)
    assert client._http is not None
    await client.close()
    assert client._http is None
