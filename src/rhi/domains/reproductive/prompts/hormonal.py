"""Men's hormonal health prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.hormonal import TRACKED_SCORES, score_trends
from rhi.domains.reproductive.prompts.common import profile_block, unit

_SCORE_LABELS = {
    "energyLevel": "Energy",
    "mood": "Mood",
    "libido": "Libido",
    "sleepQuality": "Sleep Quality",
    "stressLevel": "Stress",
}


def _trend_block(record: list[dict[str, Any]]) -> PromptBlock | str:
    trends = score_trends(record)
    if trends is None:
        return (
            "**TREND ANALYSIS:**\n"
            "Insufficient data for trend analysis (need at least 2 entries)."
        )
    block = PromptBlock("TREND ANALYSIS")
    for key in TRACKED_SCORES:
        block.add(_SCORE_LABELS[key], trends[key].replace("_", " "))
    return block


def hormonal_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    return [
        profile_block(
            profile,
            conditions=("conditions", "hormonal"),
            family_history=("familyHistory", "hormonalConditions"),
        ),
        PromptBlock("CURRENT HORMONAL HEALTH DATA")
        .add("Testosterone Level", unit(entry, "testosteroneLevel", " ng/dL", f.NOT_TESTED))
        .add("Energy Level", f.scale(entry, "energyLevel"))
        .add("Mood", f.scale(entry, "mood"))
        .add("Libido", f.scale(entry, "libido"))
        .add("Sleep Quality", f.scale(entry, "sleepQuality"))
        .add("Stress Level", f.scale(entry, "stressLevel"))
        .add("Muscle Mass", f.text(entry, "muscleMass"))
        .add("Body Fat", unit(entry, "bodyFat", "%"))
        .add("Thyroid Function", f.text(entry, "thyroidFunction", f.NOT_TESTED))
        .add("Cortisol Level", f.text(entry, "cortisolLevel", f.NOT_TESTED))
        .add("Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        PromptBlock("LIFESTYLE & HEALTH FACTORS")
        .add("Exercise", f.text(entry, "exercise"))
        .add("Diet", f.text(entry, "diet"))
        .add("Alcohol Use", f.text(entry, "alcoholUse"))
        .add("Smoking", f.text(entry, "smoking", "No"))
        .add("Medications", f.joined(entry, "medications"))
        .add("Supplements", f.joined(entry, "supplements")),
        _trend_block(record),
        render_history(
            "HISTORICAL HORMONAL DATA",
            record,
            [
                ("Date", lambda e: f.text(e, "date")),
                ("Testosterone", lambda e: unit(e, "testosteroneLevel", " ng/dL", f.NOT_TESTED)),
                ("Energy", lambda e: f.scale(e, "energyLevel")),
                ("Mood", lambda e: f.scale(e, "mood")),
                ("Libido", lambda e: f.scale(e, "libido")),
            ],
        ),
    ]


def build_hormonal_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=hormonal_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
