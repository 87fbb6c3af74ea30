"""MCP tools for reproductive health insight generation."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from rhi.core.insights.engine import InsightEngine
    from rhi.core.llm.registry import FallbackSession

from rhi.core.insights.registry import DomainNotFoundError
from rhi.core.prompt.fields import parse_date

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _validate_today(value: str | None) -> date | None:
    """Parse the optional ``today`` override (ISO 8601 date)."""
    if value in (None, ""):
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"today must be an ISO 8601 date (YYYY-MM-DD), got {value!r}")
    return parsed


def _validate_record(record: list[dict[str, Any]] | None, name: str) -> list[dict[str, Any]]:
    if record is None:
        return []
    if not all(isinstance(entry, dict) for entry in record):
        raise ValueError(f"{name} must be a list of objects")
    return record


def register_insight_tools(
    mcp: FastMCP,
    engine: InsightEngine,
    session: FallbackSession,
) -> None:
    """Register insight generation and provider management tools on the MCP server.

    All tools share ``session``, so a quota fallback triggered by one call
    stays in effect for the following calls until ``reset_to_primary``.
    """

    def _domain_error(exc: DomainNotFoundError) -> ValueError:
        available = ", ".join(engine.domains.ids()) or "none"
        return ValueError(f"{exc} (available: {available})")

    @mcp.tool
    async def generate_insights(
        ctx: Context,
        domain: str,
        record: list[dict[str, Any]] | None = None,
        profile: dict[str, Any] | None = None,
        today: str = "",
        cycle_history: list[dict[str, Any]] | None = None,
    ) -> str:
        """Generate structured health insights for one tracking domain.

        Runs the deterministic quick check and rule-based tips, asks the
        inner LLM for a holistic analysis, and merges both. When no LLM
        provider is reachable the same structure comes back with a static
        analysis and status 'unavailable'.

        Args:
            domain: One of 'fertility', 'cycle', 'menopause', 'pregnancy',
                'sexual_health', 'hormonal', 'condition', 'breast_health'.
            record: Tracking entries, oldest first (the last entry is the latest).
            profile: Optional user profile (age, medical history, lifestyle).
            today: Reference date (ISO 8601). Defaults to the server's current date.
            cycle_history: Optional cycle entries used for fertility date math.
        """
        as_of = _validate_today(today)
        entries = _validate_record(record, "record")
        history = _validate_record(cycle_history, "cycle_history") if cycle_history else None

        try:
            result = await engine.generate_insights(
                domain,
                entries,
                profile or {},
                session=session,
                today=as_of,
                cycle_history=history,
            )
        except DomainNotFoundError as exc:
            raise _domain_error(exc) from None

        logger.info(
            "Insights generated: domain=%s, entries=%d, status=%s, provider=%s",
            domain,
            len(entries),
            result.ai_analysis.status,
            result.ai_analysis.provider,
        )
        if result.is_fallback:
            await ctx.warning("No LLM provider reachable; returning fallback insights")
        return json.dumps({"domain": domain, **result.to_dict()}, indent=2, default=str)

    @mcp.tool
    def preview_prompt(
        domain: str,
        record: list[dict[str, Any]] | None = None,
        profile: dict[str, Any] | None = None,
        today: str = "",
        cycle_history: list[dict[str, Any]] | None = None,
    ) -> str:
        """Render the consultation prompt for a domain without calling any LLM.

        Args:
            domain: Domain id, as for generate_insights.
            record: Tracking entries, oldest first.
            profile: Optional user profile.
            today: Reference date (ISO 8601). Defaults to the server's current date.
            cycle_history: Optional cycle entries used for fertility date math.
        """
        history = _validate_record(cycle_history, "cycle_history") if cycle_history else None
        try:
            return engine.build_prompt(
                domain,
                _validate_record(record, "record"),
                profile or {},
                today=_validate_today(today),
                cycle_history=history,
            )
        except DomainNotFoundError as exc:
            raise _domain_error(exc) from None

    @mcp.tool
    def provider_status() -> str:
        """Show the LLM provider chain and which provider calls currently start from."""
        return json.dumps(engine.providers.status(session), indent=2)

    @mcp.tool
    def reset_to_primary() -> str:
        """Point the provider chain back at the primary provider after a quota fallback."""
        reset = engine.providers.reset_to_primary(session)
        status = engine.providers.status(session)
        return json.dumps({"reset": reset, **status}, indent=2)
