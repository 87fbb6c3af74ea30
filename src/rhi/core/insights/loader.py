"""Insight schema loader — reads YAML domain schemas from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from rhi.core.insights.models import (
    DEFAULT_MIN_SECTION_LENGTH,
    DEFAULT_PLACEHOLDER_MARKERS,
    InsightSchema,
    KeywordRule,
    RuleTable,
    SectionSpec,
)

logger = logging.getLogger(__name__)


def load_schema_directory(directory: str | Path) -> dict[str, InsightSchema]:
    """Load all YAML schema definitions from a directory (recursively).

    Returns a mapping of schema id to schema.
    Skips files starting with underscore (like _template.yaml).
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Schema directory does not exist: %s", directory)
        return {}

    schemas: dict[str, InsightSchema] = {}
    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        try:
            schema = load_schema_file(path)
        except (OSError, yaml.YAMLError, KeyError, TypeError, AttributeError):
            logger.exception("Failed to load schema from %s", path)
            continue
        if schema.id in schemas:
            logger.error("Duplicate schema id %r in %s; keeping the first", schema.id, path)
            continue
        schemas[schema.id] = schema
        logger.info("Loaded schema: %s (v%s)", schema.id, schema.version)
    return schemas


def load_schema_file(path: Path) -> InsightSchema:
    """Parse a YAML file into an InsightSchema instance."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f)

    analysis_data = data.get("analysis", {})
    rules_data = data.get("rules", {})
    fallback_data = data.get("fallback", {})
    extraction_data = data.get("extraction", {})

    return InsightSchema(
        id=data["id"],
        version=str(data["version"]),
        display_name=data["display_name"],
        description=data["description"].strip(),
        analysis_title=analysis_data.get("title", ""),
        analysis_subtitle=analysis_data.get("subtitle", ""),
        framing=data.get("framing", "").strip(),
        sections=[_section(s) for s in data.get("sections", [])],
        closing_instructions=data.get("closing_instructions", "").strip(),
        risk_rules=_rule_table(rules_data.get("risk", {})),
        recommendation_rules=_rule_table(rules_data.get("recommendations", {})),
        alert_rules=_rule_table(rules_data.get("alerts", {})),
        fallback_analysis=fallback_data.get("analysis", "").strip(),
        fallback_recommendations=fallback_data.get("recommendations", []),
        min_section_length=extraction_data.get("min_section_length", DEFAULT_MIN_SECTION_LENGTH),
        placeholder_markers=extraction_data.get(
            "placeholder_markers", list(DEFAULT_PLACEHOLDER_MARKERS)
        ),
        tags=data.get("tags", []),
    )


def _section(data: dict[str, Any]) -> SectionSpec:
    return SectionSpec(
        key=data["key"],
        header=data["header"],
        aliases=data.get("aliases", []),
        instructions=data.get("instructions", "").strip(),
    )


def _rule_table(data: dict[str, Any]) -> RuleTable:
    return RuleTable(
        source_sections=data.get("source_sections", []),
        rules=[
            KeywordRule(
                flag=r["flag"],
                any_of=r.get("any", []),
                all_of=r.get("all", []),
            )
            for r in data.get("rules", [])
        ],
    )
