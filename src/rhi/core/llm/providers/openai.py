"""OpenAI GPT provider."""

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


class OpenAIProvider:
    """OpenAI provider using the OpenAI SDK."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o") -> None:
        self.model = model
        self.client = None
        if api_key:
            import openai

            self.client = openai.AsyncOpenAI(api_key=api_key)

    def is_configured(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        if self.client is None:
            raise NotConfiguredError("OpenAI API key missing", provider=self.name)

        import openai

        config = config or GenerationConfig()
        start = time.monotonic()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=config.max_output_tokens,
                temperature=config.temperature,
                top_p=config.top_p,
                messages=[
                    {"role": "system", "content": HEALTH_DOMAIN_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.APIConnectionError as exc:
            raise NetworkError(f"OpenAI unreachable: {exc}", provider=self.name) from exc
        except openai.APIStatusError as exc:
            raise classify_http_error(exc.status_code, exc.message, provider=self.name) from exc
        elapsed_ms = (time.monotonic() - start) * 1000

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice else None
        if not content:
            raise ProviderError("OpenAI response contained no message content", provider=self.name)

        usage = response.usage
        return ProviderResponse(
            content=content,
            model=self.model,
            provider=self.name,
            latency_ms=elapsed_ms,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
