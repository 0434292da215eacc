"""Tests for LLM provider protocol conformance and provider selection."""

from findabuilder.config import SearchConfig
from findabuilder.llm.anthropic import AnthropicLLMClient
from findabuilder.llm.chat_completions import ChatCompletionsClient
from findabuilder.llm.provider import LLMProvider, create_llm
from tests.conftest import FakeLLM


def test_fake_llm_conforms_to_protocol():
    assert isinstance(FakeLLM(), LLMProvider)


def test_chat_completions_client_conforms_to_protocol():
    assert isinstance(ChatCompletionsClient(SearchConfig()), LLMProvider)


def test_anthropic_client_conforms_to_protocol():
    assert isinstance(AnthropicLLMClient(SearchConfig()), LLMProvider)


def test_create_llm_openai():
    assert isinstance(create_llm(SearchConfig(llm_provider="openai")), ChatCompletionsClient)


def test_create_llm_anthropic():
    assert isinstance(create_llm(SearchConfig(llm_provider="anthropic")), AnthropicLLMClient)


def test_create_llm_unknown_provider():
    assert create_llm(SearchConfig(llm_provider="unknown")) is None
