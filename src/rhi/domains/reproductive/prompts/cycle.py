"""Menstrual cycle consultation prompt."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.insights.models import InsightSchema
from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock, render_history, render_prompt
from rhi.domains.reproductive.domain_logic.cycle_math import cycle_timing
from rhi.domains.reproductive.prompts.common import profile_block, unit


def cycle_blocks(
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> list[PromptBlock | str]:
    entry = f.latest_entry(record)
    timing = cycle_timing(entry, today)
    days = timing.days_since_period

    return [
        profile_block(profile),
        PromptBlock("CYCLE INFORMATION")
        .add("Last Period", f.format_date(timing.last_period, f.NOT_SPECIFIED))
        .add("Cycle Length", f"{timing.cycle_length} days")
        .add("Period Length", unit(entry, "periodLength", " days", f.NOT_SPECIFIED))
        .add("Flow Intensity", f.text(entry, "flowIntensity"))
        .add("Pain Level", f.scale(entry, "pain", 0))
        .add("Symptoms", f.joined(entry, "symptoms", "None reported"))
        .add("Bleeding Pattern", f.text(entry, "bleedingPattern"))
        .add("Clots", f.text(entry, "clots", f.NONE)),
        PromptBlock("CYCLE TIMING")
        .add("Days Since Period", f"{days} days" if days is not None else f.NOT_CALCULATED)
        .add("Current Cycle Phase", timing.phase)
        .add("Expected Next Period", f.format_date(timing.expected_period))
        .add("Fertile Window", f.format_range(*timing.fertile_window)),
        PromptBlock("LIFESTYLE & HEALTH FACTORS")
        .add("Stress Level", f.scale(entry, "stressLevel"))
        .add("Sleep Quality", f.scale(entry, "sleepQuality"))
        .add("Exercise Frequency", f.text(entry, "exerciseFrequency"))
        .add("Diet Quality", f.text(entry, "dietQuality"))
        .add("Current Medications", f.joined(entry, "medicationUse"))
        .add("Family History", f.joined(entry, "familyHistory", "None reported"))
        .add("Weight", unit(entry, "weight", " lbs"))
        .add("Blood Pressure", f.text(entry, "bloodPressure", f.NOT_RECORDED))
        .add("Additional Notes", f.text(entry, "notes", f.NONE)),
        render_history(
            "HISTORICAL PATTERNS",
            record,
            [
                ("Date", lambda e: f.text(e, "lastPeriod")),
                ("Length", lambda e: unit(e, "cycleLength", " days", f.NOT_SPECIFIED)),
                ("Flow", lambda e: f.text(e, "flowIntensity")),
                ("Pain", lambda e: f.scale(e, "pain", 0)),
                ("Symptoms", lambda e: f.joined(e, "symptoms")),
                ("Stress", lambda e: f.scale(e, "stressLevel")),
                ("Sleep", lambda e: f.scale(e, "sleepQuality")),
            ],
            label="Cycle",
        ),
    ]


def build_cycle_prompt(
    schema: InsightSchema,
    record: list[dict[str, Any]],
    profile: dict[str, Any],
    *,
    today: date,
    cycle_history: list[dict[str, Any]] | None = None,
) -> str:
    return render_prompt(
        framing=schema.framing,
        blocks=cycle_blocks(record, profile, today=today, cycle_history=cycle_history),
        sections=schema.sections,
        closing=schema.closing_instructions,
    )
