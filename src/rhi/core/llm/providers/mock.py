"""Mock LLM provider for testing."""

from __future__ import annotations

from rhi.core.llm.errors import LLMProviderError
from rhi.core.llm.provider import GenerationConfig, ProviderResponse


class MockProvider:
    """Mock provider for testing — returns a canned response or a scripted failure."""

    def __init__(
        self,
        response_content: str = "Mock LLM response.",
        *,
        name: str = "mock",
        configured: bool = True,
        fail_with: LLMProviderError | None = None,
    ) -> None:
        self.name = name
        self.model = "mock"
        self.response_content = response_content
        self.fail_with = fail_with
        self._configured = configured
        self.last_prompt: str = ""
        self.call_count: int = 0

    def is_configured(self) -> bool:
        return self._configured

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        self.last_prompt = prompt
        self.call_count += 1
        if self.fail_with is not None:
            raise self.fail_with
        return ProviderResponse(
            content=self.response_content,
            model=self.model,
            provider=self.name,
            latency_ms=0.0,
            input_tokens=len(prompt.split()),
            output_tokens=len(self.response_content.split()),
        )
