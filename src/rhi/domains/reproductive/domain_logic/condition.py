"""Reproductive condition management (PCOS, endometriosis): quick check, tips and reminders."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import count, items, latest_entry, text

DEFAULT_SEVERITY = "mild"

CONDITION_NAMES = {
    "pcos": "Polycystic Ovary Syndrome",
    "endometriosis": "Endometriosis",
}

_CONDITION_TIPS = {
    "pcos": [
        "Balanced meals with steady carbohydrates can help manage insulin resistance",
        "Regular exercise supports hormone balance and cycle regularity with PCOS",
    ],
    "endometriosis": [
        "Track pain alongside your cycle to show your provider how symptoms change",
        "Heat therapy and gentle movement can ease endometriosis pain flares",
    ],
}


def condition_of(entry: dict[str, Any]) -> str:
    return text(entry, "condition", "Unspecified condition")


def severity_of(entry: dict[str, Any]) -> str:
    return text(entry, "severity", DEFAULT_SEVERITY).lower()


def overall_health(severity: str, symptoms: int) -> str:
    if severity == "severe":
        return "Needs Attention"
    if severity == "moderate" or symptoms > 3:
        return "Fair"
    return "Good"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    condition = condition_of(entry)
    severity = severity_of(entry)
    symptoms = count(entry, "symptoms")
    return {
        "condition": condition,
        "conditionName": CONDITION_NAMES.get(condition.lower(), condition),
        "severity": severity,
        "symptoms": symptoms,
        "treatments": count(entry, "medications"),
        "lifestyleModifications": count(entry, "lifestyle"),
        "bloodPressure": text(entry, "bloodPressure", "Not provided"),
        "bloodSugar": text(entry, "bloodSugar", "Not provided"),
        "overallHealth": overall_health(severity, symptoms),
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    condition = condition_of(entry)
    tips = [
        f"Based on your {condition} data, continue monitoring your symptoms "
        "and follow your treatment plan",
        f"Your current symptom severity is {severity_of(entry)} - this is important "
        "information for your healthcare provider",
    ]
    tips.extend(_CONDITION_TIPS.get(condition.lower(), []))
    if not items(entry, "lifestyle"):
        tips.append(
            "Lifestyle modifications like regular exercise and balanced nutrition "
            "can support condition management"
        )
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders = [
        "Monitor symptoms regularly",
        "Keep scheduled appointments with healthcare provider",
        "Track any changes in symptom severity",
    ]
    if count(entry, "medications"):
        reminders.insert(0, "Continue current treatment plan")
    if severity_of(entry) == "severe":
        reminders.append("Contact your healthcare provider about severe symptoms")
    return reminders
