"""Reproductive health domain catalog — YAML schemas joined with their Python logic."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from types import ModuleType
from typing import Callable

from rhi.core.insights.loader import load_schema_directory
from rhi.core.insights.models import InsightDomain, InsightSchema
from rhi.core.insights.registry import DomainRegistry
from rhi.core.insights.validator import validate_schema
from rhi.domains.reproductive.domain_logic import (
    breast_health,
    condition,
    cycle,
    fertility,
    hormonal,
    menopause,
    pregnancy,
    sexual_health,
)
from rhi.domains.reproductive.prompts.breast_health import build_breast_health_prompt
from rhi.domains.reproductive.prompts.condition import build_condition_prompt
from rhi.domains.reproductive.prompts.cycle import build_cycle_prompt
from rhi.domains.reproductive.prompts.fertility import build_fertility_prompt
from rhi.domains.reproductive.prompts.hormonal import build_hormonal_prompt
from rhi.domains.reproductive.prompts.menopause import build_menopause_prompt
from rhi.domains.reproductive.prompts.pregnancy import build_pregnancy_prompt
from rhi.domains.reproductive.prompts.sexual_health import build_sexual_health_prompt

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

# domain id -> (prompt builder taking the schema first, rule module)
_DOMAIN_LOGIC: dict[str, tuple[Callable[..., str], ModuleType]] = {
    "fertility": (build_fertility_prompt, fertility),
    "cycle": (build_cycle_prompt, cycle),
    "menopause": (build_menopause_prompt, menopause),
    "pregnancy": (build_pregnancy_prompt, pregnancy),
    "sexual_health": (build_sexual_health_prompt, sexual_health),
    "hormonal": (build_hormonal_prompt, hormonal),
    "condition": (build_condition_prompt, condition),
    "breast_health": (build_breast_health_prompt, breast_health),
}

DOMAIN_IDS = tuple(_DOMAIN_LOGIC)


def make_domain(schema: InsightSchema) -> InsightDomain:
    """Bind a loaded schema to the prompt builder and rule generators of its domain.

    Raises:
        KeyError: the schema id has no Python logic behind it.
    """
    builder, logic = _DOMAIN_LOGIC[schema.id]
    return InsightDomain(
        schema=schema,
        build_prompt=partial(builder, schema),
        quick_check=logic.quick_check,
        personalized_tips=logic.personalized_tips,
        gentle_reminders=logic.gentle_reminders,
    )


def build_reproductive_domains(schema_dir: str | Path | None = None) -> DomainRegistry:
    """Load the domain schemas and register every domain that validates.

    Schemas that fail validation, or that name a domain without logic, are
    logged and left out rather than aborting startup.
    """
    directory = Path(schema_dir) if schema_dir else SCHEMA_DIR
    schemas = load_schema_directory(directory)

    registry = DomainRegistry()
    for schema_id, schema in schemas.items():
        if schema_id not in _DOMAIN_LOGIC:
            logger.warning("Schema %r has no domain logic; skipping", schema_id)
            continue
        errors = validate_schema(schema, schema_id)
        if errors:
            for error in errors:
                logger.error("Invalid schema: %s", error)
            continue
        registry.register(make_domain(schema))

    missing = [d for d in DOMAIN_IDS if d not in registry]
    if missing:
        logger.warning("No schema loaded for domains: %s", ", ".join(missing))
    logger.info("Registered %d insight domains from %s", len(registry), directory)
    return registry
