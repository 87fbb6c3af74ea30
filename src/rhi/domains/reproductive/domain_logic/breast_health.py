"""Breast health: self-exam findings, family history risk and screening cadence."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import items, latest_entry, number, text, yes_no

# Findings and symptoms that warrant a prompt visit to a provider.
WARNING_SIGNS = {
    "lump or mass",
    "breast lumps",
    "thickening",
    "dimpling",
    "nipple discharge",
    "nipple changes",
    "skin changes",
    "size changes",
    "shape changes",
}

_NO_FAMILY_HISTORY = "no family history"
_GENETIC_MARKERS = ("brca", "multiple family members", "early onset")


def warning_signs(entry: dict[str, Any]) -> list[str]:
    """Reported findings or symptoms that match a known warning sign, in order."""
    found: list[str] = []
    for item in items(entry, "examFindings") + items(entry, "symptoms"):
        if item.lower() in WARNING_SIGNS and item not in found:
            found.append(item)
    return found


def family_history_risk(entry: dict[str, Any]) -> str:
    history = [h.lower() for h in items(entry, "familyHistory")]
    history = [h for h in history if h != _NO_FAMILY_HISTORY]
    if any(marker in h for h in history for marker in _GENETIC_MARKERS):
        return "High"
    if history:
        return "Elevated"
    return "Average"


def screening_guidance(age: float | None) -> str:
    if age is None:
        return "Discuss an age-appropriate screening schedule with your healthcare provider"
    if age < 40:
        return "Clinical breast exams every 1-3 years, mammograms not routinely recommended"
    if age < 50:
        return "Annual clinical breast exams, mammograms every 1-2 years"
    return "Annual mammograms and clinical breast exams"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    signs = warning_signs(entry)
    risk = family_history_risk(entry)
    if signs:
        health = "Needs Attention"
    elif risk != "Average":
        health = "Fair"
    else:
        health = "Good"
    return {
        "selfExamPerformed": yes_no(entry, "selfExamPerformed") == "Yes",
        "warningSigns": signs,
        "screeningType": text(entry, "screeningType", "Not performed"),
        "screeningResults": text(entry, "screeningResults", "Not available"),
        "familyHistoryRisk": risk,
        "screeningGuidance": screening_guidance(number(profile, "age")),
        "overallHealth": health,
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []

    if yes_no(entry, "selfExamPerformed") == "Yes":
        tips.append("Great job maintaining regular monitoring with self-exams")
    else:
        tips.append("Consider performing monthly self-exams to learn what is normal for you")

    signs = warning_signs(entry)
    if signs:
        tips.append(
            f"Report {', '.join(s.lower() for s in signs)} to your healthcare provider promptly"
        )

    risk = family_history_risk(entry)
    if risk == "High":
        tips.append("Ask your healthcare provider about genetic counseling and BRCA testing")
    elif risk == "Elevated":
        tips.append("Share your family history with your provider to tailor your screening")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    return [
        "Perform monthly self-exams",
        screening_guidance(number(profile, "age")),
        "Report any changes to healthcare provider",
        "Keep up with regular check-ups",
    ]
