"""Reproductive condition management prompt (PCOS, endometriosis)."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.condition import (
    CONDITION_NAMES,
    DEFAULT_SEVERITY,
    condition_of,
)
from rhi.domains.reproductive.prompts.common import profile_block, unit


def condition_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    condition = condition_of(entry)
    return [
        profile_block(profile),
        PromptBlock("MEDICAL BACKGROUND")
        .add("Medical History", f.joined(profile, "medicalHistory", "None reported"))
        .add("Chronic Conditions", f.joined(profile, "chronicConditions", "None reported"))
        .add("Current Medications", f.joined(profile, "medications")),
        PromptBlock("CURRENT CONDITION DATA")
        .add("Condition", CONDITION_NAMES.get(condition.lower(), condition))
        .add("Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Severity", f.text(entry, "severity", DEFAULT_SEVERITY))
        .add("Medications", f.joined(entry, "medications"))
        .add("Lifestyle Modifications", f.joined(entry, "lifestyle"))
        .add("Weight", unit(entry, "weight", " lbs"))
        .add("Blood Pressure", f.text(entry, "bloodPressure", f.NOT_RECORDED))
        .add("Blood Sugar", f.text(entry, "bloodSugar", f.NOT_RECORDED))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        render_history(
            "HISTORICAL CONDITION DATA",
            record,
            [
                ("Date", lambda e: f.text(e, "date")),
                ("Symptoms", lambda e: f.joined(e, "symptoms")),
                ("Severity", lambda e: f.text(e, "severity", DEFAULT_SEVERITY)),
                ("Medications", lambda e: f.joined(e, "medications")),
            ],
        ),
    ]


def build_condition_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=condition_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
