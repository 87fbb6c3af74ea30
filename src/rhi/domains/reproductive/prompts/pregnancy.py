"""Prenatal consultation prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.cycle_math import gestational_weeks
from rhi.domains.reproductive.domain_logic.pregnancy import next_milestone, trimester_of
from rhi.domains.reproductive.prompts.common import profile_block, unit

_SYMPTOM_FIELDS = [
    ("Morning Sickness", "morningSickness"),
    ("Breast Tenderness", "breastTenderness"),
    ("Fetal Movement", "fetalMovement"),
    ("Back Pain", "backPain"),
    ("Heartburn", "heartburn"),
    ("Braxton Hicks", "braxtonHicks"),
    ("Swelling", "swelling"),
    ("Sleep & Comfort", "sleepComfort"),
]


def pregnancy_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    weeks = gestational_weeks(entry, today)

    symptoms = (
        PromptBlock("PREGNANCY SYMPTOMS")
        .add("Food Aversions", f.joined(entry, "foodAversions"))
        .add("Spotting/Bleeding", f.text(entry, "spotting", f.NONE))
    )
    for label, key in _SYMPTOM_FIELDS:
        symptoms.add(label, f.text(entry, key, "Not reported"))

    return [
        profile_block(profile),
        PromptBlock("PREGNANCY TIMELINE")
        .add("Date", f.text(entry, "date"))
        .add("Due Date", f.text(entry, "dueDate"))
        .add("Last Menstrual Period", f.text(entry, "lastMenstrualPeriod"))
        .add(
            "Gestational Age",
            f"{f.format_number(weeks)} weeks" if weeks is not None else f.NOT_CALCULATED,
        )
        .add("Trimester", str(trimester_of(entry, today)))
        .add("Next Milestone", next_milestone(weeks)),
        symptoms,
        PromptBlock("MOOD & WELLBEING")
        .add("Mood", f.scale(entry, "mood"))
        .add("Energy", f.scale(entry, "energy"))
        .add("Sleep Quality", f.scale(entry, "sleep"))
        .add("Stress Level", f.scale(entry, "stress")),
        PromptBlock("MEDICAL HISTORY & RISK FACTORS")
        .add("First Pregnancy", f.text(entry, "isFirstPregnancy"))
        .add("Previous Complications", f.joined(entry, "previousComplications"))
        .add("Chronic Conditions", f.joined(entry, "chronicConditions"))
        .add("Medications", f.joined(entry, "medications"))
        .add("Supplements", f.joined(entry, "supplements"))
        .add("Family History", f.joined(entry, "familyHistory", "None reported")),
        PromptBlock("LIFESTYLE & HEALTH")
        .add("Diet", f.text(entry, "diet"))
        .add("Exercise", f.text(entry, "exercise"))
        .add("Weight", unit(entry, "weight", " lbs"))
        .add("Blood Pressure", f.text(entry, "bloodPressure", f.NOT_RECORDED)),
        render_history(
            "HISTORICAL PREGNANCY DATA",
            record,
            [
                ("Gestational Age", lambda e: unit(e, "gestationalAge", " weeks", "Unknown")),
                ("Weight", lambda e: unit(e, "weight", " lbs")),
                ("Symptoms", lambda e: f.joined(e, "symptoms")),
                ("Mood", lambda e: f.scale(e, "mood")),
                ("Sleep", lambda e: f.scale(e, "sleep")),
                ("Blood Pressure", lambda e: f.text(e, "bloodPressure", f.NOT_RECORDED)),
            ],
        ),
    ]


def build_pregnancy_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=pregnancy_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
