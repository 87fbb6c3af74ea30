"""Sexual health prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.prompts.common import profile_block

NO_DATA_NOTICE = (
    "No recent sexual health data recorded. Encourage the user to complete a "
    "sexual health assessment for personalized insights."
)


def sexual_health_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    if not entry:
        return [profile_block(profile), f"**CURRENT SEXUAL HEALTH DATA:**\n{NO_DATA_NOTICE}"]

    return [
        profile_block(profile),
        PromptBlock("CURRENT SEXUAL HEALTH DATA")
        .add("Last STI Screening", f.text(entry, "lastSTIScreening"))
        .add("Next STI Screening", f.text(entry, "nextSTIScreening", "Not scheduled"))
        .add("Sexual Activity", f.text(entry, "sexualActivity"))
        .add("Partner Gender", f.joined(entry, "partnerGender", f.NOT_SPECIFIED))
        .add("Frequency", f.text(entry, "frequency"))
        .add("Contraception", f.text(entry, "contraception"))
        .add("Emergency Contraception", f.text(entry, "emergencyContraception", "Not used"))
        .add("Condom Use", f.text(entry, "condomUse"))
        .add("STI History", f.joined(entry, "stiHistory"))
        .add("STI Treatment Completion", f.text(entry, "stiTreatmentCompletion"))
        .add("Current Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Symptom Duration", f.text(entry, "symptomDuration"))
        .add("Symptom Severity", f.text(entry, "symptomSeverity"))
        .add("Concerns", f.joined(entry, "concerns"))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        PromptBlock("COMPREHENSIVE SEXUAL HEALTH ASSESSMENT")
        .add("Relationship Status", f.text(entry, "relationshipStatus"))
        .add("Sexual Orientation", f.text(entry, "sexualOrientation"))
        .add("Sexual Satisfaction", f.text(entry, "satisfaction"))
        .add("Current Libido", f.text(entry, "libido"))
        .add("Pain During Sex", f.text(entry, "painDuringSex"))
        .add("Anxiety", f.text(entry, "anxiety"))
        .add("Self-esteem", f.text(entry, "selfEsteem"))
        .add("Relationship Impact", f.text(entry, "relationshipImpact")),
        PromptBlock("LIFESTYLE & HEALTH FACTORS")
        .add("Exercise", f.text(entry, "exercise"))
        .add("Diet", f.text(entry, "diet"))
        .add("Alcohol Use", f.text(entry, "alcoholUse"))
        .add("Smoking", f.text(entry, "smoking", "No"))
        .add("Recreational Drugs", f.text(entry, "recreationalDrugs", f.NONE))
        .add("Stress Level", f.scale(entry, "stress"))
        .add("Sleep Quality", f.scale(entry, "sleep"))
        .add("Medications", f.joined(entry, "medications"))
        .add("Supplements", f.joined(entry, "supplements")),
        render_history(
            "HISTORICAL SEXUAL HEALTH DATA",
            record,
            [
                ("Date", lambda e: f.text(e, "date")),
                ("Sexual Activity", lambda e: f.text(e, "sexualActivity")),
                ("Contraception", lambda e: f.text(e, "contraception")),
                ("Symptoms", lambda e: f.joined(e, "symptoms")),
                ("Concerns", lambda e: f.joined(e, "concerns")),
            ],
        ),
    ]


def build_sexual_health_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=sexual_health_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
