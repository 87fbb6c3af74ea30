"""Provider error taxonomy.

Every provider translates its transport or SDK failures into one of these
types at the boundary, so the fallback registry only ever reasons about
``LLMProviderError`` subclasses.
"""

from __future__ import annotations


class LLMProviderError(Exception):
    """Base exception for provider failures."""

    def __init__(self, message: str, *, provider: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider


class NotConfiguredError(LLMProviderError):
    """The provider has no credential or endpoint configured."""


class QuotaExceededError(LLMProviderError):
    """The provider reported an exhausted quota (triggers fallback)."""


class RateLimitedError(LLMProviderError):
    """The provider throttled the request (triggers fallback)."""


class ProviderError(LLMProviderError):
    """The provider answered with an error status or an unusable payload."""

    def __init__(self, message: str, *, provider: str = "", status: int | None = None) -> None:
        super().__init__(message, provider=provider)
        self.status = status


class NetworkError(LLMProviderError):
    """The provider could not be reached."""


class AllProvidersFailedError(LLMProviderError):
    """Every provider in the fallback chain failed for one request."""

    def __init__(self, errors: list[LLMProviderError]) -> None:
        detail = "; ".join(
            f"{e.provider or 'unknown'}: {type(e).__name__}: {e.message}" for e in errors
        )
        super().__init__(f"All providers failed ({detail or 'no providers registered'})")
        self.errors = list(errors)


FALLBACK_TRIGGERS: tuple[type[LLMProviderError], ...] = (QuotaExceededError, RateLimitedError)

_QUOTA_MARKERS = ("quota", "RESOURCE_EXHAUSTED", "exceeded")
_RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "Too Many Requests")


def classify_http_error(
    status: int, message: str, *, provider: str
) -> LLMProviderError:
    """Map an HTTP error status and payload message onto the taxonomy."""
    if any(marker in message for marker in _QUOTA_MARKERS):
        return QuotaExceededError(f"Quota exceeded ({status}): {message}", provider=provider)
    if status == 429 or any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return RateLimitedError(f"Rate limited ({status}): {message}", provider=provider)
    return ProviderError(
        f"{provider} API error: {status} - {message}", provider=provider, status=status
    )
