"""Tests for ProviderRegistry — ordered providers with sticky quota fallback."""

from __future__ import annotations

import asyncio

import pytest

from rhi.core.config.settings import Settings
from rhi.core.llm.errors import (
    AllProvidersFailedError,
    NetworkError,
    NotConfiguredError,
    ProviderError,
    QuotaExceededError,
    RateLimitedError,
)
from rhi.core.llm.providers.mock import MockProvider
from rhi.core.llm.registry import FallbackSession, ProviderRegistry, build_provider_registry


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _chain(*providers: MockProvider) -> ProviderRegistry:
    return ProviderRegistry(list(providers))


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestPrimaryProvider:
    def test_primary_answers_without_touching_fallback(self):
        primary = MockProvider("from gemini", name="gemini")
        secondary = MockProvider("from ollama", name="ollama")
        registry = _chain(primary, secondary)

        response = _run(registry.execute("prompt"))

        assert response.content == "from gemini"
        assert response.provider == "gemini"
        assert secondary.call_count == 0
        assert registry.active_provider().name == "gemini"

    def test_prompt_is_passed_through(self):
        primary = MockProvider(name="gemini")
        _run(_chain(primary).execute("hello provider"))
        assert primary.last_prompt == "hello provider"


# ---------------------------------------------------------------------------
# Fallback sequencing
# ---------------------------------------------------------------------------

class TestQuotaFallback:
    def test_quota_error_falls_through_to_secondary(self):
        primary = MockProvider(
            name="gemini", fail_with=QuotaExceededError("quota exceeded")
        )
        secondary = MockProvider("from ollama", name="ollama")
        registry = _chain(primary, secondary)

        response = _run(registry.execute("prompt"))

        assert response.provider == "ollama"
        assert primary.call_count == 1
        assert secondary.call_count == 1

    def test_quota_fallback_is_sticky_for_later_calls(self):
        primary = MockProvider(
            name="gemini", fail_with=QuotaExceededError("quota exceeded")
        )
        secondary = MockProvider("from ollama", name="ollama")
        registry = _chain(primary, secondary)

        _run(registry.execute("first"))
        _run(registry.execute("second"))

        assert primary.call_count == 1
        assert secondary.call_count == 2
        status = registry.status()
        assert status["active_provider"] == "ollama"
        assert status["quota_exceeded"] is True

    def test_rate_limit_also_triggers_sticky_fallback(self):
        primary = MockProvider(name="gemini", fail_with=RateLimitedError("429"))
        secondary = MockProvider(name="ollama")
        registry = _chain(primary, secondary)

        _run(registry.execute("prompt"))

        assert registry.active_provider().name == "ollama"

    def test_sessions_are_isolated(self):
        primary = MockProvider(
            name="gemini", fail_with=QuotaExceededError("quota exceeded")
        )
        secondary = MockProvider(name="ollama")
        registry = _chain(primary, secondary)
        mine = registry.new_session()
        theirs = registry.new_session()

        _run(registry.execute("prompt", session=mine))

        assert registry.active_provider(mine).name == "ollama"
        assert registry.active_provider(theirs).name == "gemini"


class TestTransientFailures:
    @pytest.mark.parametrize(
        "error",
        [NetworkError("connection refused"), ProviderError("bad payload", status=500)],
    )
    def test_non_quota_error_skips_for_this_request_only(self, error):
        primary = MockProvider(name="gemini", fail_with=error)
        secondary = MockProvider("from ollama", name="ollama")
        registry = _chain(primary, secondary)

        response = _run(registry.execute("prompt"))

        assert response.provider == "ollama"
        assert registry.active_provider().name == "gemini"
        assert registry.status()["quota_exceeded"] is False

        _run(registry.execute("again"))
        assert primary.call_count == 2

    def test_unconfigured_provider_is_skipped(self):
        primary = MockProvider(name="gemini", configured=False)
        secondary = MockProvider("from ollama", name="ollama")
        registry = _chain(primary, secondary)

        response = _run(registry.execute("prompt"))

        assert response.provider == "ollama"
        assert primary.call_count == 0

    def test_new_session_starts_at_first_configured_provider(self):
        registry = _chain(
            MockProvider(name="gemini", configured=False),
            MockProvider(name="ollama"),
        )
        assert registry.new_session().active_index == 1


# ---------------------------------------------------------------------------
# Exhaustion
# ---------------------------------------------------------------------------

class TestExhaustion:
    def test_all_failures_raise_with_every_error(self):
        registry = _chain(
            MockProvider(name="gemini", fail_with=QuotaExceededError("quota exceeded")),
            MockProvider(name="ollama", fail_with=NetworkError("refused")),
        )

        with pytest.raises(AllProvidersFailedError) as excinfo:
            _run(registry.execute("prompt"))

        errors = excinfo.value.errors
        assert [type(e) for e in errors] == [QuotaExceededError, NetworkError]
        assert [e.provider for e in errors] == ["gemini", "ollama"]

    def test_nothing_configured_raises_not_configured_errors(self):
        registry = _chain(
            MockProvider(name="gemini", configured=False),
            MockProvider(name="ollama", configured=False),
        )

        with pytest.raises(AllProvidersFailedError) as excinfo:
            _run(registry.execute("prompt"))

        assert all(isinstance(e, NotConfiguredError) for e in excinfo.value.errors)

    def test_chain_never_wraps_around(self):
        primary = MockProvider(
            name="gemini", fail_with=QuotaExceededError("quota exceeded")
        )
        secondary = MockProvider(
            name="ollama", fail_with=QuotaExceededError("quota exceeded")
        )
        registry = _chain(primary, secondary)

        with pytest.raises(AllProvidersFailedError):
            _run(registry.execute("first"))
        with pytest.raises(AllProvidersFailedError):
            _run(registry.execute("second"))

        # Second call starts at the last provider; the primary is not retried.
        assert primary.call_count == 1
        assert secondary.call_count == 2

    def test_empty_registry_raises(self):
        with pytest.raises(AllProvidersFailedError):
            _run(ProviderRegistry([]).execute("prompt"))


# ---------------------------------------------------------------------------
# Reset and status
# ---------------------------------------------------------------------------

class TestResetAndStatus:
    def test_reset_to_primary_restores_first_provider(self):
        primary = MockProvider(name="gemini", fail_with=QuotaExceededError("quota"))
        registry = _chain(primary, MockProvider(name="ollama"))
        _run(registry.execute("prompt"))

        primary.fail_with = None
        assert registry.reset_to_primary() is True

        response = _run(registry.execute("prompt"))
        assert response.provider == "gemini"
        assert registry.status()["quota_exceeded"] is False

    def test_reset_refused_when_primary_not_configured(self):
        registry = _chain(
            MockProvider(name="gemini", configured=False),
            MockProvider(name="ollama"),
        )
        session = FallbackSession(active_index=1)
        assert registry.reset_to_primary(session) is False
        assert session.active_index == 1

    def test_status_describes_every_provider(self):
        registry = _chain(
            MockProvider(name="gemini"),
            MockProvider(name="ollama", configured=False),
        )
        status = registry.status()

        assert status["active_provider"] == "gemini"
        assert status["configured"] is True
        assert [p["name"] for p in status["providers"]] == ["gemini", "ollama"]
        assert [p["active"] for p in status["providers"]] == [True, False]
        assert [p["configured"] for p in status["providers"]] == [True, False]

    def test_health_check_makes_no_calls(self):
        primary = MockProvider(name="gemini")
        report = _run(_chain(primary).health_check())
        assert report["gemini"]["configured"] is True
        assert primary.call_count == 0

    def test_duplicate_provider_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate provider"):
            _chain(MockProvider(name="gemini"), MockProvider(name="gemini"))


# ---------------------------------------------------------------------------
# Construction from settings
# ---------------------------------------------------------------------------

class TestBuildFromSettings:
    def test_default_chain_is_gemini_then_ollama(self):
        registry = build_provider_registry(Settings(gemini_api_key="k1"))
        assert [p.name for p in registry.providers] == ["gemini", "ollama"]
        assert registry.active_provider().name == "gemini"

    def test_missing_gemini_key_starts_on_ollama(self):
        registry = build_provider_registry(
            Settings(gemini_api_key="", ollama_base_url="http://localhost:11434")
        )
        assert registry.active_provider().name == "ollama"

    def test_custom_order(self):
        registry = build_provider_registry(
            Settings(llm_providers="ollama, openai", ollama_base_url="http://localhost:11434")
        )
        assert [p.name for p in registry.providers] == ["ollama", "openai"]

    def test_extra_gemini_keys_are_rotated(self):
        registry = build_provider_registry(
            Settings(gemini_api_key="k1", gemini_api_keys="k2, k3")
        )
        gemini = registry.providers[0]
        assert gemini.key_status() == {"total_keys": 3, "active_key": 1}
