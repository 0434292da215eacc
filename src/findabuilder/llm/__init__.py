"""LLM provider module."""

from findabuilder.llm.anthropic import AnthropicLLMClient
from findabuilder.llm.chat_completions import ChatCompletionsClient
from findabuilder.llm.provider import LLMProvider, create_llm

__all__ = ["AnthropicLLMClient", "ChatCompletionsClient", "LLMProvider", "create_llm"]
