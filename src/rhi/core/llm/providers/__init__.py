"""LLM provider implementations."""

from rhi.core.llm.providers.anthropic import AnthropicProvider
from rhi.core.llm.providers.gemini import GeminiProvider
from rhi.core.llm.providers.mock import MockProvider
from rhi.core.llm.providers.ollama import OllamaProvider
from rhi.core.llm.providers.openai import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "GeminiProvider",
    "MockProvider",
    "OllamaProvider",
    "OpenAIProvider",
]
