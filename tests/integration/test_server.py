"""Integration tests for the Reproductive Health Insights MCP server."""

from __future__ import annotations

import asyncio
import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from rhi.core.llm.errors import QuotaExceededError
from rhi.core.llm.providers.mock import MockProvider
from rhi.core.llm.registry import ProviderRegistry
from rhi.core.server.app import create_app


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _json(result) -> dict:
    return json.loads(result.content[0].text)


ALL_EXPECTED_TOOLS = [
    "health_check",
    "generate_insights",
    "preview_prompt",
    "provider_status",
    "reset_to_primary",
]


@pytest.fixture
def client(domains, live_providers):
    """Create an MCP client connected to a server with a healthy mock provider."""
    mcp = create_app(providers_override=live_providers, domains_override=domains)
    return Client(mcp)


@pytest.fixture
def offline_client(domains, failing_providers):
    """Create an MCP client connected to a server with no usable provider."""
    mcp = create_app(providers_override=failing_providers, domains_override=domains)
    return Client(mcp)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    """health_check tool should return status ok with the loaded domains."""
    async def _check():
        async with client:
            result = await client.call_tool("health_check", {})
            payload = _json(result)
            assert payload["status"] == "ok"
            assert payload["active_provider"] == "gemini"
            assert len(payload["domains_loaded"]) == 8
    _run(_check())


def test_schema_registry_resource(client):
    """The schema registry resource lists every domain and its sections."""
    async def _check():
        async with client:
            contents = await client.read_resource("schema://reproductive/registry")
            payload = json.loads(contents[0].text)
            assert payload["domain_count"] == 8
            fertility = next(d for d in payload["domains"] if d["id"] == "fertility")
            assert "personalizedTips" in fertility["sections"]
    _run(_check())


def test_journey_prompts_listed(client):
    async def _check():
        async with client:
            prompts = await client.list_prompts()
            names = {p.name for p in prompts}
            assert "cycle_review_prompt" in names
    _run(_check())


# ---------------------------------------------------------------------------
# generate_insights
# ---------------------------------------------------------------------------

class TestGenerateInsights:
    def test_live_result(self, client, fertility_record, profile):
        async def _check():
            async with client:
                result = await client.call_tool(
                    "generate_insights",
                    {
                        "domain": "fertility",
                        "record": fertility_record,
                        "profile": profile,
                        "today": "2024-03-15",
                    },
                )
                payload = _json(result)
                assert payload["domain"] == "fertility"
                assert payload["aiAnalysis"]["status"] == "live"
                assert payload["quickCheck"]["overallFertility"] == "High"
                assert "Stress affecting fertility" in payload["riskAssessment"]
        _run(_check())

    def test_fallback_result(self, offline_client, fertility_record):
        async def _check():
            async with offline_client:
                result = await offline_client.call_tool(
                    "generate_insights",
                    {"domain": "fertility", "record": fertility_record, "today": "2024-03-15"},
                )
                payload = _json(result)
                assert payload["aiAnalysis"]["status"] == "unavailable"
                assert "temporarily unavailable" in payload["aiAnalysis"]["content"]
                assert payload["personalizedTips"]
        _run(_check())

    def test_unknown_domain_is_a_tool_error(self, client):
        async def _check():
            async with client:
                with pytest.raises(ToolError, match="available: "):
                    await client.call_tool("generate_insights", {"domain": "dermatology"})
        _run(_check())

    def test_invalid_today_is_a_tool_error(self, client):
        async def _check():
            async with client:
                with pytest.raises(ToolError, match="ISO 8601"):
                    await client.call_tool(
                        "generate_insights", {"domain": "cycle", "today": "next tuesday"}
                    )
        _run(_check())


def test_preview_prompt_contains_patient_data(client, make_entry):
    async def _check():
        async with client:
            result = await client.call_tool(
                "preview_prompt",
                {"domain": "fertility", "record": [make_entry()], "today": "2024-03-15"},
            )
            text = result.content[0].text
            assert "- Fertile Window: 2024-03-10 to 2024-03-16" in text
    _run(_check())


# ---------------------------------------------------------------------------
# Provider fallback across calls
# ---------------------------------------------------------------------------

def test_quota_fallback_is_sticky_until_reset(domains):
    providers = ProviderRegistry([
        MockProvider(name="gemini", fail_with=QuotaExceededError("quota exceeded")),
        MockProvider("Plain answer.", name="ollama"),
    ])
    client = Client(create_app(providers_override=providers, domains_override=domains))

    async def _check():
        async with client:
            await client.call_tool("generate_insights", {"domain": "cycle"})

            status = _json(await client.call_tool("provider_status", {}))
            assert status["active_provider"] == "ollama"
            assert status["quota_exceeded"] is True

            reset = _json(await client.call_tool("reset_to_primary", {}))
            assert reset["reset"] is True
            assert reset["active_provider"] == "gemini"
    _run(_check())
