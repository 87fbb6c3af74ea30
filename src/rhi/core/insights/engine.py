"""Insight engine — prompt, provider chain, extraction and assembly for one request."""

from __future__ import annotations

import logging
from datetime import date, datetime

from rhi.core.insights.assembler import assemble, build_fallback_result
from rhi.core.insights.extractor import extract_sections
from rhi.core.insights.models import HealthRecord, InsightDomain, InsightResult, UserProfile
from rhi.core.insights.registry import DomainNotFoundError, DomainRegistry
from rhi.core.llm.errors import AllProvidersFailedError
from rhi.core.llm.provider import GenerationConfig
from rhi.core.llm.registry import FallbackSession, ProviderRegistry

logger = logging.getLogger(__name__)

__all__ = ["DomainNotFoundError", "InsightEngine"]


class InsightEngine:
    """Generates structured insights for any registered domain.

    Provider failures never escape: when the whole chain is exhausted the
    domain's static fallback result is returned instead.
    """

    def __init__(
        self,
        domains: DomainRegistry,
        providers: ProviderRegistry,
        *,
        generation_config: GenerationConfig | None = None,
    ) -> None:
        self.domains = domains
        self.providers = providers
        self.generation_config = generation_config

    def build_prompt(
        self,
        domain_id: str,
        record: HealthRecord,
        profile: UserProfile | None = None,
        *,
        today: date | None = None,
        cycle_history: HealthRecord | None = None,
    ) -> str:
        domain = self.domains.get(domain_id)
        return domain.build_prompt(
            record or [],
            profile or {},
            today=today or date.today(),
            cycle_history=cycle_history,
        )

    async def generate_insights(
        self,
        domain_id: str,
        record: HealthRecord,
        profile: UserProfile | None = None,
        *,
        session: FallbackSession | None = None,
        today: date | None = None,
        cycle_history: HealthRecord | None = None,
        now: datetime | None = None,
    ) -> InsightResult:
        """Run the full pipeline for one domain.

        Raises:
            DomainNotFoundError: ``domain_id`` is not registered.
        """
        domain: InsightDomain = self.domains.get(domain_id)
        record = record or []
        profile = profile or {}
        now = now or datetime.now()
        today = today or now.date()

        prompt = domain.build_prompt(record, profile, today=today, cycle_history=cycle_history)
        logger.info("Generating %s insights (prompt_chars=%d)", domain_id, len(prompt))

        try:
            response = await self.providers.execute(
                prompt, session=session, config=self.generation_config
            )
        except AllProvidersFailedError as exc:
            logger.warning(
                "All providers failed for %s; using fallback insights: %s", domain_id, exc
            )
            return build_fallback_result(domain, record, profile, now=now, today=today)

        schema = domain.schema
        sections = extract_sections(
            response.content,
            schema.sections,
            min_length=schema.min_section_length,
            placeholder_markers=schema.placeholder_markers,
        )
        return assemble(
            domain,
            sections,
            response.content,
            record,
            profile,
            now=now,
            provider=response.provider,
            today=today,
        )
