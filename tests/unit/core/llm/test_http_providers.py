"""Tests for the REST providers (Gemini, Ollama) over httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from rhi.core.llm.errors import (
    NetworkError,
    NotConfiguredError,
    ProviderError,
    QuotaExceededError,
    RateLimitedError,
    classify_http_error,
)
from rhi.core.llm.provider import GenerationConfig, create_provider
from rhi.core.llm.providers.gemini import GeminiProvider
from rhi.core.llm.providers.ollama import OllamaProvider
from rhi.core.llm.system_prompt import HEALTH_DOMAIN_SYSTEM_PROMPT


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _gemini_ok(text: str) -> dict:
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}}],
        "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 34},
    }


def _gemini_error(status: str, message: str) -> dict:
    return {"error": {"status": status, "message": message}}


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

class TestClassifyHttpError:
    def test_quota_marker_wins_over_status(self):
        err = classify_http_error(403, "RESOURCE_EXHAUSTED: quota", provider="gemini")
        assert isinstance(err, QuotaExceededError)

    def test_429_without_quota_text_is_rate_limited(self):
        err = classify_http_error(429, "slow down", provider="gemini")
        assert isinstance(err, RateLimitedError)

    def test_other_status_is_provider_error(self):
        err = classify_http_error(500, "internal", provider="ollama")
        assert isinstance(err, ProviderError)
        assert err.status == 500
        assert err.provider == "ollama"


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

class TestGeminiProvider:
    def test_not_configured_without_keys(self):
        provider = GeminiProvider(api_keys=[])
        assert provider.is_configured() is False
        with pytest.raises(NotConfiguredError):
            _run(provider.generate("prompt"))

    def test_success_sends_framed_prompt_and_generation_config(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_gemini_ok("analysis text"))

        provider = GeminiProvider(api_keys=["k1"], client=_client(handler))
        config = GenerationConfig(temperature=0.2, top_k=10, top_p=0.5, max_output_tokens=256)
        response = _run(provider.generate("domain prompt", config))

        assert response.content == "analysis text"
        assert response.provider == "gemini"
        assert response.input_tokens == 12
        assert response.output_tokens == 34
        assert ":generateContent" in seen["url"]
        assert "key=k1" in seen["url"]
        text = seen["body"]["contents"][0]["parts"][0]["text"]
        assert text.startswith(HEALTH_DOMAIN_SYSTEM_PROMPT)
        assert text.endswith("domain prompt")
        assert seen["body"]["generationConfig"] == {
            "temperature": 0.2,
            "topK": 10,
            "topP": 0.5,
            "maxOutputTokens": 256,
        }

    def test_quota_with_single_key_raises_quota_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json=_gemini_error("RESOURCE_EXHAUSTED", "quota"))

        provider = GeminiProvider(api_keys=["k1"], client=_client(handler))
        with pytest.raises(QuotaExceededError):
            _run(provider.generate("prompt"))

    def test_quota_rotates_to_next_key(self):
        used_keys: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            key = request.url.params["key"]
            used_keys.append(key)
            if key == "k1":
                return httpx.Response(429, json=_gemini_error("RESOURCE_EXHAUSTED", "quota"))
            return httpx.Response(200, json=_gemini_ok("from second key"))

        provider = GeminiProvider(api_keys=["k1", "k2"], client=_client(handler))
        response = _run(provider.generate("prompt"))

        assert response.content == "from second key"
        assert used_keys == ["k1", "k2"]
        assert provider.key_status() == {"total_keys": 2, "active_key": 2}

    def test_all_keys_exhausted_raises(self):
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.params["key"])
            return httpx.Response(429, json=_gemini_error("RESOURCE_EXHAUSTED", "quota"))

        provider = GeminiProvider(api_keys=["k1", "k2"], client=_client(handler))
        with pytest.raises(QuotaExceededError):
            _run(provider.generate("prompt"))
        assert calls == ["k1", "k2"]

    def test_server_error_does_not_rotate_keys(self):
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.params["key"])
            return httpx.Response(500, json=_gemini_error("INTERNAL", "boom"))

        provider = GeminiProvider(api_keys=["k1", "k2"], client=_client(handler))
        with pytest.raises(ProviderError) as excinfo:
            _run(provider.generate("prompt"))
        assert excinfo.value.status == 500
        assert calls == ["k1"]

    def test_malformed_body_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        provider = GeminiProvider(api_keys=["k1"], client=_client(handler))
        with pytest.raises(ProviderError, match="candidates"):
            _run(provider.generate("prompt"))

    def test_transport_error_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = GeminiProvider(api_keys=["k1"], client=_client(handler))
        with pytest.raises(NetworkError):
            _run(provider.generate("prompt"))


# ---------------------------------------------------------------------------
# Ollama
# ---------------------------------------------------------------------------

class TestOllamaProvider:
    def test_not_configured_without_base_url(self):
        provider = OllamaProvider(base_url="")
        assert provider.is_configured() is False
        with pytest.raises(NotConfiguredError):
            _run(provider.generate("prompt"))

    def test_success_posts_non_streaming_request(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"response": "local analysis", "prompt_eval_count": 5, "eval_count": 7}
            )

        provider = OllamaProvider(
            base_url="http://localhost:11434/", model="llama3.1:8b", client=_client(handler)
        )
        response = _run(provider.generate("domain prompt"))

        assert response.content == "local analysis"
        assert response.provider == "ollama"
        assert response.output_tokens == 7
        assert seen["url"] == "http://localhost:11434/api/generate"
        assert seen["body"]["stream"] is False
        assert seen["body"]["model"] == "llama3.1:8b"
        assert seen["body"]["prompt"] == "domain prompt"
        assert seen["body"]["system"] == HEALTH_DOMAIN_SYSTEM_PROMPT

    def test_error_status_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "model 'x' not found"})

        provider = OllamaProvider(base_url="http://localhost:11434", client=_client(handler))
        with pytest.raises(ProviderError, match="not found"):
            _run(provider.generate("prompt"))

    def test_unreachable_server_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = OllamaProvider(base_url="http://localhost:11434", client=_client(handler))
        with pytest.raises(NetworkError, match="make sure it's running"):
            _run(provider.generate("prompt"))

    def test_missing_response_field_is_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"done": True})

        provider = OllamaProvider(base_url="http://localhost:11434", client=_client(handler))
        with pytest.raises(ProviderError):
            _run(provider.generate("prompt"))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

class TestCreateProvider:
    def test_creates_each_known_provider(self):
        assert create_provider("gemini", api_key="k").name == "gemini"
        assert create_provider("ollama", base_url="http://localhost:11434").name == "ollama"
        assert create_provider("mock").name == "mock"

    def test_hosted_providers_without_keys_are_unconfigured(self):
        assert create_provider("anthropic").is_configured() is False
        assert create_provider("openai").is_configured() is False

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_provider("nope")
