"""Anthropic Claude provider."""

from __future__ import annotations

import time

from rhi.core.llm.errors import (
    NetworkError,
    NotConfiguredError,
    ProviderError,
    classify_http_error,
)
from rhi.core.llm.provider import GenerationConfig, ProviderResponse
from rhi.core.llm.system_prompt import HEALTH_DOMAIN_SYSTEM_PROMPT


class AnthropicProvider:
    """Claude provider using the Anthropic SDK."""

    name = "anthropic"

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514") -> None:
        self.model = model
        self.client = None
        if api_key:
            import anthropic

            self.client = anthropic.AsyncAnthropic(api_key=api_key)

    def is_configured(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        if self.client is None:
            raise NotConfiguredError("Anthropic API key missing", provider=self.name)

        import anthropic

        config = config or GenerationConfig()
        start = time.monotonic()
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=config.max_output_tokens,
                temperature=config.temperature,
                top_k=config.top_k,
                system=HEALTH_DOMAIN_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIConnectionError as exc:
            raise NetworkError(f"Anthropic unreachable: {exc}", provider=self.name) from exc
        except anthropic.APIStatusError as exc:
            raise classify_http_error(exc.status_code, exc.message, provider=self.name) from exc
        elapsed_ms = (time.monotonic() - start) * 1000

        if not response.content or not hasattr(response.content[0], "text"):
            raise ProviderError("Anthropic response contained no text block", provider=self.name)

        return ProviderResponse(
            content=response.content[0].text,
            model=self.model,
            provider=self.name,
            latency_ms=elapsed_ms,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
