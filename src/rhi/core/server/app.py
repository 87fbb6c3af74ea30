"""Reproductive Health Insights MCP Server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery (`fastmcp run src/rhi/core/server/app.py:mcp`)
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from rhi.core.config.settings import get_settings
from rhi.core.insights.engine import InsightEngine
from rhi.core.insights.registry import DomainRegistry
from rhi.core.llm.provider import GenerationConfig
from rhi.core.llm.registry import ProviderRegistry, build_provider_registry
from rhi.domains.reproductive.catalog import build_reproductive_domains
from rhi.domains.reproductive.prompts.journeys import register_reproductive_prompts
from rhi.domains.reproductive.resources.schemas import register_schema_resources
from rhi.domains.reproductive.tools.insight_tools import register_insight_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Reproductive Health Insights"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    providers_override: ProviderRegistry | None = None,
    domains_override: DomainRegistry | None = None,
) -> FastMCP:
    """Create and configure the reproductive health insight MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the insight domains (YAML schemas + Python logic)
    3. Builds the LLM provider chain and its fallback session
    4. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Reproductive health insight server. Turns fertility, cycle, menopause, "
            "pregnancy, sexual health, hormonal, condition and breast health tracking "
            "records into structured insights: "
            "deterministic quick checks and tips merged with a holistic analysis "
            "from an inner LLM, with automatic provider fallback."
        ),
    )

    # --- Insight domains ---
    if domains_override is not None:
        domains = domains_override
    else:
        domains = build_reproductive_domains(settings.schema_dir or None)

    # --- LLM provider chain ---
    if providers_override is not None:
        providers = providers_override
    else:
        providers = build_provider_registry(settings)
    if not any(p.is_configured() for p in providers.providers):
        logger.warning(
            "No LLM provider is configured; every request will return fallback insights"
        )

    # One fallback session for the whole server.
    session = providers.new_session()

    engine = InsightEngine(
        domains,
        providers,
        generation_config=GenerationConfig(
            temperature=settings.llm_temperature,
            top_k=settings.llm_top_k,
            top_p=settings.llm_top_p,
            max_output_tokens=settings.llm_max_output_tokens,
        ),
    )

    # --- Register tools ---
    @server.tool
    async def health_check() -> dict:
        """Check server health and return basic status information."""
        active = providers.active_provider(session)
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "domains_loaded": domains.ids(),
            "active_provider": active.name if active else None,
            "providers": await providers.health_check(),
        }

    register_insight_tools(server, engine, session)
    logger.info("Insight tools registered for %d domains", len(domains))

    # --- Register resources ---
    register_schema_resources(server, domains)

    # --- Register prompts ---
    register_reproductive_prompts(server)

    return server


# Module-level instance for FastMCP discovery (`fastmcp run ...app.py:mcp`).
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
