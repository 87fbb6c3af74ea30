"""LLM provider protocol — abstract interface for text-generation calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class GenerationConfig:
    """Sampling parameters sent with every generation request."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 1024


@dataclass
class ProviderResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    provider: str
    latency_ms: float
    input_tokens: int = 0
    output_tokens: int = 0


@runtime_checkable
class LLMProvider(Protocol):
    """Abstract interface for a single hosted text-generation API."""

    name: str
    model: str

    def is_configured(self) -> bool: ...

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse: ...


def create_provider(
    provider_name: str,
    *,
    api_key: str = "",
    api_keys: list[str] | None = None,
    model: str = "",
    base_url: str = "",
    timeout: float = 30.0,
) -> LLMProvider:
    """Factory function to create an LLM provider by name.

    Args:
        provider_name: "gemini", "ollama", "anthropic", "openai", or "mock"
        api_key: API key for the provider.
        api_keys: Additional keys (Gemini rotates through them on quota errors).
        model: Model identifier override.
        base_url: Endpoint override for REST providers.
        timeout: HTTP timeout in seconds for REST providers.

    Returns:
        An LLMProvider instance.
    """
    if provider_name == "gemini":
        from rhi.core.llm.providers.gemini import DEFAULT_BASE_URL, GeminiProvider

        keys = [k for k in [api_key, *(api_keys or [])] if k]
        return GeminiProvider(
            api_keys=keys,
            model=model or "gemini-2.0-flash",
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=timeout,
        )
    elif provider_name == "ollama":
        from rhi.core.llm.providers.ollama import OllamaProvider

        return OllamaProvider(base_url=base_url, model=model or "llama3.1:8b", timeout=timeout)
    elif provider_name == "anthropic":
        from rhi.core.llm.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=api_key, model=model or "claude-sonnet-4-20250514")
    elif provider_name == "openai":
        from rhi.core.llm.providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model or "gpt-4o")
    elif provider_name == "mock":
        from rhi.core.llm.providers.mock import MockProvider

        return MockProvider()
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
