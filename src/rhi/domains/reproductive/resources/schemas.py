"""MCP Resources for insight domain discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from rhi.core.insights.registry import DomainRegistry


def register_schema_resources(mcp: FastMCP, registry: DomainRegistry) -> None:
    """Register insight schema discovery resources on the MCP server."""

    @mcp.resource("schema://reproductive/registry")
    def reproductive_schema_registry_resource() -> str:
        """Discover all available reproductive health insight domains."""
        domains = registry.find_by_tag("reproductive")
        return json.dumps(
            {
                "domain": "reproductive_health",
                "domain_count": len(domains),
                "domains": [
                    {
                        "id": d.schema.id,
                        "version": d.schema.version,
                        "display_name": d.schema.display_name,
                        "description": d.schema.description,
                        "analysis_title": d.schema.analysis_title,
                        "sections": [s.key for s in d.schema.sections],
                        "section_headers": {s.key: s.header for s in d.schema.sections},
                        "rule_counts": {
                            "risk": len(d.schema.risk_rules.rules),
                            "recommendations": len(d.schema.recommendation_rules.rules),
                            "alerts": len(d.schema.alert_rules.rules),
                        },
                        "tags": d.schema.tags,
                    }
                    for d in domains
                ],
            },
            indent=2,
        )
