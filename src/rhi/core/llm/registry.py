"""Provider registry — ordered providers with a sticky fallback pointer.

Fallback state lives in a ``FallbackSession`` rather than on the registry, so
callers that need isolation (one session per user, per request, ...) pass
their own. Callers that pass nothing share the registry's default session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rhi.core.llm.errors import (
    FALLBACK_TRIGGERS,
    AllProvidersFailedError,
    LLMProviderError,
    NotConfiguredError,
)
from rhi.core.llm.provider import GenerationConfig, LLMProvider, ProviderResponse, create_provider

if TYPE_CHECKING:
    from rhi.core.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class FallbackSession:
    """Mutable fallback state: index of the provider calls start from."""

    active_index: int = 0
    quota_exceeded: bool = False


@dataclass
class ProviderDescriptor:
    """Read-only view of one registered provider."""

    name: str
    model: str
    configured: bool
    active: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "model": self.model,
            "configured": self.configured,
            "active": self.active,
        }


class ProviderRegistry:
    """Executes prompts against an ordered provider list with fallback.

    Quota and rate-limit failures move the session's active provider forward
    (sticky for later calls). Any other failure only skips to the next
    provider for the current request. The chain never wraps around.
    """

    def __init__(self, providers: list[LLMProvider]) -> None:
        names = [p.name for p in providers]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate provider names registered: {names}")
        self._providers = list(providers)
        self.default_session = self.new_session()

    @property
    def providers(self) -> list[LLMProvider]:
        return list(self._providers)

    def new_session(self) -> FallbackSession:
        """Create a session starting at the first configured provider."""
        for index, provider in enumerate(self._providers):
            if provider.is_configured():
                return FallbackSession(active_index=index)
        return FallbackSession(active_index=0)

    def active_provider(self, session: FallbackSession | None = None) -> LLMProvider | None:
        session = session or self.default_session
        if 0 <= session.active_index < len(self._providers):
            return self._providers[session.active_index]
        return None

    async def execute(
        self,
        prompt: str,
        *,
        session: FallbackSession | None = None,
        config: GenerationConfig | None = None,
    ) -> ProviderResponse:
        """Run ``prompt`` against the active provider, falling back down the list.

        Raises:
            AllProvidersFailedError: no provider from the active one onwards succeeded.
        """
        session = session or self.default_session
        errors: list[LLMProviderError] = []

        for index in range(session.active_index, len(self._providers)):
            provider = self._providers[index]

            if not provider.is_configured():
                errors.append(
                    NotConfiguredError(f"{provider.name} is not configured", provider=provider.name)
                )
                logger.info("Skipping unconfigured provider %s", provider.name)
                continue

            try:
                response = await provider.generate(prompt, config)
            except FALLBACK_TRIGGERS as exc:
                exc.provider = exc.provider or provider.name
                errors.append(exc)
                if index + 1 < len(self._providers):
                    session.active_index = index + 1
                    session.quota_exceeded = True
                    logger.warning(
                        "Provider %s exhausted (%s); switching to %s for this session",
                        provider.name,
                        type(exc).__name__,
                        self._providers[index + 1].name,
                    )
                continue
            except LLMProviderError as exc:
                exc.provider = exc.provider or provider.name
                errors.append(exc)
                logger.warning(
                    "Provider %s failed (%s: %s); trying next provider for this request",
                    provider.name,
                    type(exc).__name__,
                    exc.message,
                )
                continue

            logger.info(
                "LLM call: provider=%s, model=%s, prompt_chars=%d, tokens=%d+%d, latency=%.0fms",
                provider.name,
                response.model,
                len(prompt),
                response.input_tokens,
                response.output_tokens,
                response.latency_ms,
            )
            return response

        raise AllProvidersFailedError(errors)

    def reset_to_primary(self, session: FallbackSession | None = None) -> bool:
        """Point the session back at the first provider, if it is configured."""
        session = session or self.default_session
        if not self._providers or not self._providers[0].is_configured():
            logger.warning("Cannot reset to primary provider: not configured")
            return False
        session.active_index = 0
        session.quota_exceeded = False
        logger.info("Reset to primary provider (%s)", self._providers[0].name)
        return True

    def describe(self, session: FallbackSession | None = None) -> list[ProviderDescriptor]:
        session = session or self.default_session
        return [
            ProviderDescriptor(
                name=p.name,
                model=getattr(p, "model", ""),
                configured=p.is_configured(),
                active=index == session.active_index,
            )
            for index, p in enumerate(self._providers)
        ]

    def status(self, session: FallbackSession | None = None) -> dict[str, Any]:
        session = session or self.default_session
        active = self.active_provider(session)
        return {
            "active_provider": active.name if active else None,
            "quota_exceeded": session.quota_exceeded,
            "configured": any(p.is_configured() for p in self._providers),
            "providers": [d.as_dict() for d in self.describe(session)],
        }

    async def health_check(self) -> dict[str, Any]:
        """Report configuration of every provider without making API calls."""
        report: dict[str, Any] = {}
        for provider in self._providers:
            entry: dict[str, Any] = {
                "configured": provider.is_configured(),
                "model": getattr(provider, "model", ""),
            }
            key_status = getattr(provider, "key_status", None)
            if callable(key_status):
                entry.update(key_status())
            report[provider.name] = entry
        return report


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    """Create the provider chain named by ``settings.llm_providers``."""
    providers: list[LLMProvider] = []
    for name in settings.provider_order:
        if name == "gemini":
            provider = create_provider(
                "gemini",
                api_key=settings.gemini_api_key,
                api_keys=settings.extra_gemini_keys,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
                timeout=settings.llm_timeout_seconds,
            )
        elif name == "ollama":
            provider = create_provider(
                "ollama",
                model=settings.ollama_model,
                base_url=settings.ollama_base_url,
                timeout=settings.llm_timeout_seconds,
            )
        elif name == "anthropic":
            provider = create_provider(
                "anthropic", api_key=settings.anthropic_api_key, model=settings.anthropic_model
            )
        elif name == "openai":
            provider = create_provider(
                "openai", api_key=settings.openai_api_key, model=settings.openai_model
            )
        else:
            provider = create_provider(name)
        providers.append(provider)

    registry = ProviderRegistry(providers)
    logger.info(
        "Provider chain: %s (active: %s)",
        " -> ".join(p.name for p in providers) or "<empty>",
        registry.active_provider().name if registry.active_provider() else None,
    )
    return registry
