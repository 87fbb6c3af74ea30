"""Ollama provider — local, free models over the Ollama REST API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from rhi.core.llm.errors import (
    NetworkError,
    NotConfiguredError,
    ProviderError,
    classify_http_error,
)
from rhi.core.llm.provider import GenerationConfig, ProviderResponse
from rhi.core.llm.system_prompt import HEALTH_DOMAIN_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class OllamaProvider:
    """Provider backed by a local Ollama server (``/api/generate``)."""

    name = "ollama"

    def __init__(
        self,
        base_url: str,
        model: str = "llama3.1:8b",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._client = client
        self._configured = bool(self.base_url)

    def is_configured(self) -> bool:
        return self._configured

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        if not self._configured:
            raise NotConfiguredError("Ollama base URL not configured", provider=self.name)

        config = config or GenerationConfig()
        payload = {
            "model": self.model,
            "system": HEALTH_DOMAIN_SYSTEM_PROMPT,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": config.temperature,
                "top_k": config.top_k,
                "top_p": config.top_p,
                "num_predict": config.max_output_tokens,
            },
        }

        start = time.monotonic()
        try:
            response = await self._post(payload)
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"Ollama request timed out after {self.timeout}s", provider=self.name
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(
                f"Ollama not accessible at {self.base_url} - make sure it's running",
                provider=self.name,
            ) from exc
        elapsed_ms = (time.monotonic() - start) * 1000

        if not response.is_success:
            raise classify_http_error(
                response.status_code, _error_message(response), provider=self.name
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                "Ollama returned a non-JSON body", provider=self.name, status=response.status_code
            ) from exc

        content = data.get("response") if isinstance(data, dict) else None
        if not isinstance(content, str):
            raise ProviderError(
                "Ollama response missing 'response' text",
                provider=self.name,
                status=response.status_code,
            )

        return ProviderResponse(
            content=content,
            model=self.model,
            provider=self.name,
            latency_ms=elapsed_ms,
            input_tokens=int(data.get("prompt_eval_count", 0) or 0),
            output_tokens=int(data.get("eval_count", 0) or 0),
        )

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.endpoint, json=payload)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint, json=payload)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text or "Unknown error"
