"""Google Gemini provider (REST via httpx)."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from rhi.core.llm.errors import (
    FALLBACK_TRIGGERS,
    LLMProviderError,
    NetworkError,
    NotConfiguredError,
    ProviderError,
    classify_http_error,
)
from rhi.core.llm.provider import GenerationConfig, ProviderResponse
from rhi.core.llm.system_prompt import build_full_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProvider:
    """Gemini provider using the public ``generateContent`` REST endpoint.

    Several API keys may be configured. A quota or rate-limit answer rotates
    to the next key and retries; the error only escapes once every key has
    been tried for this call. The current key index is kept between calls.
    """

    name = "gemini"

    def __init__(
        self,
        api_keys: list[str],
        model: str = "gemini-2.0-flash",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_keys = [k for k in api_keys if k]
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.current_key_index = 0
        self._client = client
        self._configured = bool(self.api_keys)

        if self._configured:
            logger.info("Gemini configured with %d API key(s), model=%s", len(self.api_keys), model)
        else:
            logger.info("Gemini not configured (API key missing)")

    def is_configured(self) -> bool:
        return self._configured

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(
        self,
        prompt: str,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        if not self._configured:
            raise NotConfiguredError("Gemini not configured - API key missing", provider=self.name)

        config = config or GenerationConfig()
        payload = {
            "contents": [{"parts": [{"text": build_full_prompt(prompt)}]}],
            "generationConfig": {
                "temperature": config.temperature,
                "topK": config.top_k,
                "topP": config.top_p,
                "maxOutputTokens": config.max_output_tokens,
            },
        }

        last_error: LLMProviderError | None = None
        for _ in range(len(self.api_keys)):
            start = time.monotonic()
            try:
                response = await self._post(payload, self.api_keys[self.current_key_index])
            except httpx.TimeoutException as exc:
                raise NetworkError(
                    f"Gemini request timed out after {self.timeout}s", provider=self.name
                ) from exc
            except httpx.TransportError as exc:
                raise NetworkError(f"Gemini unreachable: {exc}", provider=self.name) from exc
            elapsed_ms = (time.monotonic() - start) * 1000

            if response.is_success:
                return self._parse_response(response, elapsed_ms)

            error = classify_http_error(
                response.status_code, _error_message(response), provider=self.name
            )
            if not isinstance(error, FALLBACK_TRIGGERS):
                raise error

            last_error = error
            if not self._switch_to_next_key():
                break
            logger.warning(
                "Gemini key exhausted (%s); retrying with key %d/%d",
                type(error).__name__,
                self.current_key_index + 1,
                len(self.api_keys),
            )

        assert last_error is not None
        logger.warning("All Gemini API keys exhausted")
        raise last_error

    async def _post(self, payload: dict[str, Any], api_key: str) -> httpx.Response:
        params = {"key": api_key}
        if self._client is not None:
            return await self._client.post(self.endpoint, json=payload, params=params)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint, json=payload, params=params)

    def _switch_to_next_key(self) -> bool:
        if len(self.api_keys) < 2:
            return False
        self.current_key_index = (self.current_key_index + 1) % len(self.api_keys)
        return True

    def _parse_response(self, response: httpx.Response, elapsed_ms: float) -> ProviderResponse:
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                "Gemini returned a non-JSON body", provider=self.name, status=response.status_code
            ) from exc

        try:
            content = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(
                "Gemini response missing candidates[0].content.parts[0].text",
                provider=self.name,
                status=response.status_code,
            ) from exc
        if not isinstance(content, str):
            raise ProviderError(
                f"Gemini response text has unexpected type {type(content).__name__}",
                provider=self.name,
                status=response.status_code,
            )

        usage = data.get("usageMetadata") or {}
        return ProviderResponse(
            content=content,
            model=self.model,
            provider=self.name,
            latency_ms=elapsed_ms,
            input_tokens=int(usage.get("promptTokenCount", 0) or 0),
            output_tokens=int(usage.get("candidatesTokenCount", 0) or 0),
        )

    def key_status(self) -> dict[str, Any]:
        """Key rotation state, without exposing the keys themselves."""
        return {
            "total_keys": len(self.api_keys),
            "active_key": self.current_key_index + 1 if self.api_keys else 0,
        }


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.status`` / ``error.message`` out of a Gemini error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"

    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return response.text or "Unknown error"

    message = error.get("message") or "Unknown error"
    status = error.get("status")
    return f"{status}: {message}" if status else str(message)
