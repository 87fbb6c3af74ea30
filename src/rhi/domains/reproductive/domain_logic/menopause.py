"""Menopause support: quick check, stage and age based tips and reminders."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import count, items, latest_entry, number, text

DEFAULT_STAGE = "pre-menopause"

_NEXT_MILESTONE = {
    "pre-menopause": "Monitor for perimenopause symptoms",
    "perimenopause": "Track transition to menopause",
    "menopause": "Focus on post-menopause health",
    "post-menopause": "Maintain long-term health monitoring",
}

_STAGE_TIPS = {
    "pre-menopause": [
        "Monitor for early menopause symptoms and maintain regular health check-ups",
        "Focus on bone health and cardiovascular fitness to prepare for transition",
    ],
    "perimenopause": [
        "Track symptoms and consider hormone therapy options if symptoms are severe",
        "Maintain regular exercise and stress management during this transition",
    ],
    "menopause": [
        "Focus on symptom management and long-term health maintenance",
        "Consider hormone therapy if symptoms are affecting quality of life",
    ],
    "post-menopause": [
        "Prioritize bone health, cardiovascular health, and regular screenings",
        "Maintain active lifestyle and healthy diet for long-term wellness",
    ],
}

_STAGE_REMINDERS = {
    "pre-menopause": [
        "Continue regular health check-ups and monitor for early menopause signs",
        "Maintain bone health with calcium, vitamin D, and weight-bearing exercise",
    ],
    "perimenopause": [
        "Track symptoms regularly and discuss treatment options with healthcare provider",
        "Focus on stress management and sleep hygiene during this transition",
    ],
    "menopause": [
        "Continue symptom management and consider hormone therapy if needed",
        "Maintain regular health screenings and focus on long-term health",
    ],
    "post-menopause": [
        "Prioritize bone density testing and cardiovascular health monitoring",
        "Continue regular health check-ups and maintain healthy lifestyle",
    ],
}

# (symptoms that trigger the tip, tip)
_SYMPTOM_TIPS = [
    (
        {"hot flashes", "night sweats"},
        "Dress in layers, keep bedroom cool, and avoid triggers like spicy foods and caffeine",
    ),
    (
        {"sleep disturbances"},
        "Maintain consistent sleep schedule and create a cool, dark bedroom environment",
    ),
    (
        {"mood swings", "anxiety"},
        "Practice stress management techniques like meditation, yoga, or deep breathing",
    ),
    (
        {"vaginal dryness"},
        "Use vaginal moisturizers and lubricants, and discuss hormone therapy options",
    ),
    (
        {"weight gain"},
        "Focus on regular exercise and a balanced diet to manage weight during menopause",
    ),
]


def stage_of(entry: dict[str, Any]) -> str:
    return text(entry, "menopauseStage", DEFAULT_STAGE).lower()


def overall_health(symptom_count: int, severity: str) -> str:
    if symptom_count == 0:
        return "Good"
    if severity == "mild" and symptom_count <= 3:
        return "Fair"
    if severity == "moderate" or symptom_count > 3:
        return "Needs Attention"
    return "Severe"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    stage = stage_of(entry)
    severity = text(entry, "severity", "mild").lower()
    symptoms = count(entry, "symptoms")
    return {
        "menopauseStage": stage,
        "symptoms": symptoms,
        "severity": severity,
        "treatments": count(entry, "treatments"),
        "overallHealth": overall_health(symptoms, severity),
        "nextMilestone": _NEXT_MILESTONE.get(stage, "Continue regular health check-ups"),
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips = list(_STAGE_TIPS.get(stage_of(entry), []))

    symptoms = {s.lower() for s in items(entry, "symptoms")}
    for triggers, tip in _SYMPTOM_TIPS:
        if symptoms & triggers:
            tips.append(tip)

    age = number(profile, "age")
    if age is not None and age >= 50:
        tips.append("Prioritize bone density testing and cardiovascular health monitoring")
        tips.append("Consider calcium and vitamin D supplements for bone health")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders = list(_STAGE_REMINDERS.get(stage_of(entry), []))

    age = number(profile, "age")
    if age is not None and age >= 50:
        reminders.append("Schedule bone density testing (DEXA scan) as recommended")
        reminders.append("Monitor cardiovascular health with regular check-ups")
    if age is not None and age >= 65:
        reminders.append("Continue regular health screenings and maintain active lifestyle")
        reminders.append("Focus on fall prevention and bone health maintenance")

    reminders.append("Maintain regular exercise and healthy diet for overall wellness")
    reminders.append("Don't hesitate to discuss menopause concerns with your healthcare provider")
    return reminders
