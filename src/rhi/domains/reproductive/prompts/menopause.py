"""Menopause support prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.menopause import DEFAULT_STAGE
from rhi.domains.reproductive.prompts.common import profile_block, unit

# (label, record key) pairs listed under SYMPTOM DETAILS.
_SYMPTOM_FIELDS = [
    ("Sleep Disturbances", "sleepDisturbances"),
    ("Mood Changes", "moodChanges"),
    ("Vaginal Dryness", "vaginalDryness"),
    ("Decreased Libido", "decreasedLibido"),
    ("Weight Gain", "weightGain"),
    ("Memory Problems", "memoryProblems"),
    ("Anxiety", "anxiety"),
    ("Depression", "depression"),
    ("Irritability", "irritability"),
    ("Fatigue", "fatigue"),
    ("Headaches", "headaches"),
    ("Joint Pain", "jointPain"),
    ("Hair Thinning", "hairThinning"),
    ("Dry Skin", "drySkin"),
    ("Breast Tenderness", "breastTenderness"),
    ("Bloating", "bloating"),
]


def _with_frequency(entry: dict[str, Any], key: str, frequency_key: str) -> str:
    return f"{f.text(entry, key, f.NONE)} ({f.text(entry, frequency_key)} frequency)"


def menopause_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)

    symptoms = (
        PromptBlock("SYMPTOM DETAILS")
        .add("Hot Flashes", _with_frequency(entry, "hotFlashes", "hotFlashFrequency"))
        .add("Night Sweats", _with_frequency(entry, "nightSweats", "nightSweatFrequency"))
    )
    for label, key in _SYMPTOM_FIELDS:
        symptoms.add(label, f.text(entry, key, f.NONE))

    return [
        profile_block(profile),
        PromptBlock("CURRENT MENOPAUSE DATA")
        .add("Last Period", f.text(entry, "lastPeriod"))
        .add("Menopause Stage", f.text(entry, "menopauseStage", DEFAULT_STAGE))
        .add("Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Severity", f.text(entry, "severity", "mild"))
        .add("Treatments", f.joined(entry, "treatments"))
        .add("Mood", f.text(entry, "mood", "neutral"))
        .add("Sleep", f.scale(entry, "sleep"))
        .add("Energy", f.scale(entry, "energy"))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        PromptBlock("COMPREHENSIVE MENOPAUSE ASSESSMENT")
        .add("Age at First Period", f.text(entry, "ageAtFirstPeriod"))
        .add("Age at Last Period", f.text(entry, "ageAtLastPeriod"))
        .add("Years Since Last Period", f.text(entry, "yearsSinceLastPeriod", f.NOT_CALCULATED))
        .add("Hormone Levels", f.text(entry, "hormoneLevels", f.NOT_TESTED))
        .add("Bone Density", f.text(entry, "boneDensity", f.NOT_TESTED))
        .add("Weight", unit(entry, "weight", " lbs"))
        .add("Blood Pressure", f.text(entry, "bloodPressure", f.NOT_RECORDED))
        .add("Heart Rate", f.text(entry, "heartRate", f.NOT_RECORDED)),
        symptoms,
        PromptBlock("LIFESTYLE & HEALTH FACTORS")
        .add("Exercise", f.text(entry, "exercise"))
        .add("Diet", f.text(entry, "diet"))
        .add("Alcohol Use", f.text(entry, "alcoholUse"))
        .add("Smoking", f.text(entry, "smoking", "No"))
        .add("Stress Level", f.scale(entry, "stressLevel"))
        .add("Sleep Quality", f.scale(entry, "sleepQuality"))
        .add("Mental Health", f.text(entry, "mentalHealth", "Good"))
        .add("Medications", f.joined(entry, "medications"))
        .add("Supplements", f.joined(entry, "supplements"))
        .add("Hormone Therapy", f.text(entry, "hormoneTherapy", "Not using")),
        PromptBlock("TREATMENT & MANAGEMENT")
        .add("Current Treatments", f.joined(entry, "currentTreatments"))
        .add("Treatment Effectiveness", f.text(entry, "treatmentEffectiveness"))
        .add("Side Effects", f.joined(entry, "sideEffects"))
        .add("Alternative Therapies", f.joined(entry, "alternativeTherapies"))
        .add("Lifestyle Modifications", f.joined(entry, "lifestyleModifications")),
        render_history(
            "HISTORICAL MENOPAUSE DATA",
            record,
            [
                ("Date", lambda e: f.text(e, "date")),
                ("Stage", lambda e: f.text(e, "menopauseStage", DEFAULT_STAGE)),
                ("Symptoms", lambda e: f.joined(e, "symptoms")),
                ("Severity", lambda e: f.text(e, "severity", "mild")),
                ("Treatments", lambda e: f.joined(e, "treatments")),
                ("Mood", lambda e: f.text(e, "mood", "neutral")),
                ("Sleep", lambda e: f.scale(e, "sleep")),
                ("Energy", lambda e: f.scale(e, "energy")),
            ],
        ),
    ]


def build_menopause_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=menopause_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
