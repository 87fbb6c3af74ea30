"""Breast health prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.breast_health import (
    family_history_risk,
    screening_guidance,
    warning_signs,
)
from rhi.domains.reproductive.prompts.common import profile_block


def breast_health_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    return [
        profile_block(profile),
        PromptBlock("CURRENT BREAST HEALTH DATA")
        .add("Self-Exam Performed", f.yes_no(entry, "selfExamPerformed"))
        .add("Exam Findings", f.joined(entry, "examFindings", "None reported"))
        .add("Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Screening Type", f.text(entry, "screeningType", "Not performed"))
        .add("Screening Results", f.text(entry, "screeningResults", "Not available"))
        .add("Family History", f.joined(entry, "familyHistory", "None reported"))
        .add("Lifestyle Factors", f.joined(entry, "lifestyle"))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        PromptBlock("RISK CONTEXT")
        .add("Warning Signs Reported", ", ".join(warning_signs(entry)) or f.NONE)
        .add("Family History Risk", family_history_risk(entry))
        .add("Age-Appropriate Screening", screening_guidance(f.number(profile, "age"))),
        render_history(
            "HISTORICAL BREAST HEALTH DATA",
            record,
            [
                ("Date", lambda e: f.text(e, "date")),
                ("Self-Exam", lambda e: f.yes_no(e, "selfExamPerformed")),
                ("Findings", lambda e: f.joined(e, "examFindings")),
                ("Screening", lambda e: f.text(e, "screeningType", "Not performed")),
            ],
        ),
    ]


def build_breast_health_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=breast_health_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
