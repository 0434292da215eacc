"""Tests for server lifespan wiring."""

from unittest.mock import patch

import pytest
from fastmcp import FastMCP

from findabuilder.llm.anthropic import AnthropicLLMClient
from findabuilder.llm.chat_completions import ChatCompletionsClient
from findabuilder.search.pipeline import BuilderSearch
from findabuilder.server import lifespan

ENV = {
    "TALENT_API_KEY": "talent-key",
    "FAB_LLM_API_KEY": "llm-key",
    "FAB_PAGE_SIZE": "10",
}


@pytest.mark.asyncio
async def test_lifespan_yields_search_and_closes_clients():
    with patch.dict("os.environ", ENV, clear=True):
        async with lifespan(FastMCP("test")) as context:
            assert isinstance(context["search"], BuilderSearch)
            assert isinstance(context["llm"], ChatCompletionsClient)
            assert context["config"].page_size == 10
            assert context["config"].identity_api_key == "talent-key"
            passports = context["passports"]
            assert passports._http is not None
        assert passports._http is None


@pytest.mark.asyncio
async def test_lifespan_anthropic_provider():
    env = {**ENV, "FAB_LLM_PROVIDER": "anthropic"}
    with patch.dict("os.environ", env, clear=True):
        async with lifespan(FastMCP("test")) as context:
            assert isinstance(context["llm"], AnthropicLLMClient)


@pytest.mark.asyncio
async def test_lifespan_unknown_provider_has_no_llm():
    env = {**ENV, "FAB_LLM_PROVIDER": "carrier-pigeon"}
    with patch.dict("os.environ", env, clear=True):
        async with lifespan(FastMCP("test")) as context:
            assert context["llm"] is None
            assert isinstance(context["search"], BuilderSearch)
