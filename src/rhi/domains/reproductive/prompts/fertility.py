"""Fertility consultation prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.cycle_math import (
    HIGH_FERTILITY,
    MODERATE_FERTILITY,
    CycleTiming,
    timing_from_history,
)
from rhi.domains.reproductive.prompts.common import profile_block, unit

_GOAL_NAMES = {
    "ttc": "Trying to Conceive",
    "nfp": "Natural Family Planning",
}

# BBT (°F) above which the reading is treated as post-ovulatory.
_POST_OVULATORY_BBT = 98.0


def _bbt_reading(entry: dict[str, Any]) -> str | None:
    bbt = f.number(entry, "bbt")
    if bbt is None:
        return None
    phase = "post-ovulatory phase" if bbt > _POST_OVULATORY_BBT else "pre-ovulatory phase"
    return f"Your BBT of {f.format_number(bbt)}°F suggests {phase}"


def _mucus_reading(entry: dict[str, Any], egg_white: str, other: str) -> str | None:
    mucus = f.text(entry, "cervicalMucus", "")
    if not mucus:
        return None
    meaning = egg_white if mucus.lower() == "egg-white" else other
    return f"Your {mucus} mucus indicates {meaning}"


def goal_guidance(entry: dict[str, Any], timing: CycleTiming) -> PromptBlock:
    """Goal-specific timing facts the model should build its tips on."""
    goal = f.text(entry, "fertilityGoal", "").lower()
    days = timing.days_since_period
    current = timing.phase
    if days is not None:
        current = f"{timing.phase} - {days} days since last period"
    fertile = f.format_range(*timing.fertile_window)
    ovulation = f.format_date(timing.expected_ovulation)

    if goal == "ttc":
        return (
            PromptBlock("TTC TIMING")
            .add("Current cycle phase", current)
            .add("Optimal intercourse timing", f.format_range(*timing.ttc_window))
            .add("Peak fertility day", ovulation)
            .add("Fertile window", fertile)
            .add(
                "BBT tracking",
                _bbt_reading(entry) or "Start BBT tracking for better ovulation detection",
            )
            .add(
                "Cervical mucus",
                _mucus_reading(entry, "high fertility - perfect timing", "moderate fertility")
                or "Monitor cervical mucus changes",
            )
            .add("Intercourse frequency", "Every other day in the fertile window, daily at peak")
        )
    if goal == "nfp":
        if timing.fertility_status == HIGH_FERTILITY:
            status = "HIGH FERTILITY - avoid intercourse or use contraception"
        elif timing.fertility_status == MODERATE_FERTILITY:
            status = "MODERATE FERTILITY - use caution and contraception"
        else:
            status = "LOW FERTILITY - safer for natural family planning"
        return (
            PromptBlock("NFP TIMING")
            .add("Current cycle phase", current)
            .add("Avoid intercourse during", fertile)
            .add("Safer period", f.format_range(*timing.safe_period))
            .add("Current status", status)
            .add("BBT tracking", _bbt_reading(entry) or "Continue BBT tracking for cycle awareness")
            .add(
                "Cervical mucus",
                _mucus_reading(entry, "HIGH FERTILITY - avoid intercourse", "moderate fertility")
                or "Monitor cervical mucus for fertility awareness",
            )
            .add("Contraception backup", "Use barrier methods during uncertain periods")
        )
    return (
        PromptBlock("HEALTH MONITORING")
        .add("Current cycle phase", current)
        .add("Fertile window", fertile)
        .add("Expected ovulation", ovulation)
        .add("BBT tracking", _bbt_reading(entry) or "BBT tracking helps understand cycle patterns")
        .add(
            "Cervical mucus",
            _mucus_reading(entry, "high fertility phase", "moderate fertility phase")
            or "Monitor cervical mucus for cycle awareness",
        )
    )


def fertility_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    timing = timing_from_history(cycle_history, entry, today)
    days = timing.days_since_period
    goal = f.text(entry, "fertilityGoal", "")

    return [
        profile_block(profile),
        PromptBlock("CURRENT CYCLE STATUS")
        .add("Last Period", f.format_date(timing.last_period, f.NOT_RECORDED))
        .add("Cycle Length", f"{timing.cycle_length} days")
        .add("Days Since Period", f"{days} days" if days is not None else f.NOT_CALCULATED)
        .add("Current Cycle Phase", timing.phase)
        .add("Fertility Status", timing.fertility_status)
        .add("Expected Ovulation", f.format_date(timing.expected_ovulation))
        .add("Expected Next Period", f.format_date(timing.expected_period)),
        PromptBlock("CALCULATED FERTILITY TIMING")
        .add("Fertile Window", f.format_range(*timing.fertile_window))
        .add("Peak Fertility Day", f.format_date(timing.expected_ovulation))
        .add("Safe Period (NFP)", f.format_range(*timing.safe_period))
        .add("Optimal TTC Window", f.format_range(*timing.ttc_window)),
        PromptBlock("FERTILITY GOALS & HISTORY")
        .add(
            "Fertility Goal",
            f"{goal or f.NOT_SPECIFIED} ({_GOAL_NAMES.get(goal.lower(), 'Health Monitoring')})",
        )
        .add("Conception Timeline", f.text(entry, "conceptionTimeline"))
        .add("Tracking Mode", f.text(entry, "trackingMode"))
        .add("Previous Pregnancies", f.text(entry, "previousPregnancies", "0"))
        .add("Previous Miscarriages", f.text(entry, "previousMiscarriages", "0"))
        .add("Fertility Treatments", f.joined(entry, "fertilityTreatments"))
        .add("Contraception Preference", f.text(entry, "contraceptionPreference", f.NONE)),
        PromptBlock("BASAL BODY TEMPERATURE (BBT)")
        .add("BBT", unit(entry, "bbt", "°F"))
        .add("BBT Time", f.text(entry, "bbtTime"))
        .add("BBT Method", f.text(entry, "bbtMethod", "oral")),
        PromptBlock("CERVICAL SIGNS")
        .add("Cervical Mucus", f.text(entry, "cervicalMucus", "Not observed"))
        .add("Mucus Amount", f.text(entry, "mucusAmount"))
        .add("Mucus Stretch", unit(entry, "mucusStretch", " cm", "0 cm"))
        .add("Cervical Position", f.text(entry, "cervicalPosition", "Not checked")),
        PromptBlock("OVULATION & HORMONE TESTING")
        .add("Ovulation Test", f.text(entry, "ovulationTest", f.NOT_TESTED))
        .add("LH Level", f.text(entry, "lhLevel", f.NOT_TESTED))
        .add("Test Time", f.text(entry, "testTime"))
        .add("Test Brand", f.text(entry, "testBrand"))
        .add("Progesterone Level", f.text(entry, "progesteroneLevel", f.NOT_TESTED))
        .add("Progesterone Test Date", f.text(entry, "progesteroneTestDate", f.NOT_TESTED)),
        PromptBlock("INTERCOURSE & CONCEPTION")
        .add("Intercourse", f.yes_no(entry, "intercourse"))
        .add("Intercourse Time", f.text(entry, "intercourseTime"))
        .add("Contraception", f.text(entry, "contraception", "none"))
        .add("Pregnancy Test", f.text(entry, "pregnancyTest", f.NOT_TESTED))
        .add("Pregnancy Test Result", f.text(entry, "pregnancyTestResult", f.NOT_TESTED)),
        PromptBlock("ADVANCED FERTILITY INDICATORS")
        .add("Libido", f.scale(entry, "libido"))
        .add("Energy", f.scale(entry, "energy"))
        .add("Mood", f.scale(entry, "mood"))
        .add("Sleep", f.scale(entry, "sleep"))
        .add("Stress", f.scale(entry, "stress")),
        PromptBlock("MEDICAL & LIFESTYLE FACTORS")
        .add("Medications", f.joined(entry, "medications"))
        .add("Supplements", f.joined(entry, "supplements"))
        .add("Exercise", f.text(entry, "exercise"))
        .add("Alcohol", f.text(entry, "alcohol"))
        .add("Smoking", f.text(entry, "smoking"))
        .add("Caffeine", f"{f.text(entry, 'caffeine', '0')} cups/day")
        .add("Weight", unit(entry, "weight", " lbs"))
        .add("Blood Pressure", f.text(entry, "bloodPressure", f.NOT_RECORDED))
        .add("Diet Quality", f.text(entry, "dietQuality"))
        .add("Family History", f.joined(entry, "familyHistory")),
        PromptBlock("SYMPTOMS & OBSERVATIONS")
        .add("Symptoms", f.joined(entry, "symptoms"))
        .add("Notes", f.text(entry, "notes", f.NONE)),
        goal_guidance(entry, timing),
        render_history(
            "HISTORICAL FERTILITY DATA",
            record,
            [
                ("BBT", lambda e: unit(e, "bbt", "°F")),
                ("Mucus", lambda e: f.text(e, "cervicalMucus", "Not observed")),
                ("Position", lambda e: f.text(e, "cervicalPosition", "Not checked")),
                ("Test", lambda e: f.text(e, "ovulationTest", f.NOT_TESTED)),
                ("Intercourse", lambda e: f.yes_no(e, "intercourse")),
            ],
        ),
    ]


def build_fertility_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=fertility_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
