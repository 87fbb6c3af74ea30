"""Insight assembler — combines extracted sections and rule output into an InsightResult."""

from __future__ import annotations

import logging
from datetime import date, datetime

from rhi.core.insights.models import (
    AIAnalysis,
    HealthRecord,
    InsightDomain,
    InsightResult,
    SectionMap,
    UserProfile,
)
from rhi.core.insights.rules import apply_rules

logger = logging.getLogger(__name__)

STATUS_LIVE = "live"
STATUS_UNAVAILABLE = "unavailable"


def _record_rules(
    domain: InsightDomain, record: HealthRecord, profile: UserProfile, today: date
):
    return (
        domain.quick_check(record, profile, today=today),
        tuple(domain.personalized_tips(record, profile, today=today)),
        tuple(domain.gentle_reminders(record, profile, today=today)),
    )


def assemble(
    domain: InsightDomain,
    section_map: SectionMap,
    raw_text: str,
    record: HealthRecord,
    profile: UserProfile,
    *,
    now: datetime,
    provider: str | None = None,
    today: date | None = None,
) -> InsightResult:
    """Build the live-path result from a model response."""
    schema = domain.schema
    quick_check, tips, reminders = _record_rules(domain, record, profile, today or now.date())

    analysis = AIAnalysis(
        title=schema.analysis_title,
        subtitle=schema.analysis_subtitle,
        content=raw_text,
        sections=dict(section_map),
        status=STATUS_LIVE,
        provider=provider,
        timestamp=now.isoformat(),
    )

    result = InsightResult(
        quick_check=quick_check,
        ai_analysis=analysis,
        risk_assessment=tuple(apply_rules(schema.risk_rules, section_map, raw_text)),
        recommendations=tuple(apply_rules(schema.recommendation_rules, section_map, raw_text)),
        medical_alerts=tuple(apply_rules(schema.alert_rules, section_map, raw_text)),
        personalized_tips=tips,
        gentle_reminders=reminders,
    )
    logger.debug(
        "Assembled %s insight: %d sections, %d risks, %d recommendations, %d alerts",
        schema.id,
        len(section_map),
        len(result.risk_assessment),
        len(result.recommendations),
        len(result.medical_alerts),
    )
    return result


def build_fallback_result(
    domain: InsightDomain,
    record: HealthRecord,
    profile: UserProfile,
    *,
    now: datetime,
    today: date | None = None,
) -> InsightResult:
    """Build the static result used when no provider could answer.

    Same shape as the live result; risk and alert lists stay empty since
    there is no model text to scan.
    """
    schema = domain.schema
    quick_check, tips, reminders = _record_rules(domain, record, profile, today or now.date())

    analysis = AIAnalysis(
        title=schema.analysis_title,
        subtitle=schema.analysis_subtitle,
        content=schema.fallback_analysis,
        sections={},
        status=STATUS_UNAVAILABLE,
        provider=None,
        timestamp=now.isoformat(),
    )
    return InsightResult(
        quick_check=quick_check,
        ai_analysis=analysis,
        risk_assessment=(),
        recommendations=tuple(schema.fallback_recommendations),
        medical_alerts=(),
        personalized_tips=tips,
        gentle_reminders=reminders,
    )
