"""Pregnancy tracking: quick check, trimester tips and prenatal reminders."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import count, format_number, items, latest_entry, number, text
from rhi.domains.reproductive.domain_logic.cycle_math import gestational_weeks, trimester_for


def trimester_of(entry: dict[str, Any], today: date) -> int:
    """Recorded trimester if valid, else derived from gestational weeks, else 1."""
    recorded = number(entry, "trimester")
    if recorded is not None and int(recorded) in (1, 2, 3):
        return int(recorded)
    return trimester_for(gestational_weeks(entry, today)) or 1


def next_milestone(weeks: float | None) -> str:
    weeks = weeks or 0
    if weeks < 12:
        return "First trimester screening (10-14 weeks)"
    if weeks < 20:
        return "Anatomy scan (18-22 weeks)"
    if weeks < 28:
        return "Glucose tolerance test (24-28 weeks)"
    if weeks < 36:
        return "Group B strep test (35-37 weeks)"
    return "Delivery preparation (37+ weeks)"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    weeks = gestational_weeks(entry, today)
    return {
        "gestationalAge": format_number(weeks) if weeks is not None else "Not calculated",
        "trimester": trimester_of(entry, today),
        "weight": number(entry, "weight"),
        "weightGain": number(entry, "weightGain"),
        "bloodPressure": text(entry, "bloodPressure", "Not recorded"),
        "fetalHeartbeat": number(entry, "fetalHeartbeat"),
        "symptoms": items(entry, "symptoms"),
        "overallHealth": "Good",
        "nextMilestone": next_milestone(weeks),
    }


def _lower(entry: dict[str, Any], key: str) -> str:
    return text(entry, key, "").lower()


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []
    trimester = trimester_of(entry, today)
    weeks = gestational_weeks(entry, today)

    if trimester == 1:
        at = f" at {format_number(weeks)} weeks" if weeks is not None else ""
        tips.append(
            f"Focus on folic acid supplementation - you're in the critical first trimester{at}"
        )
        tips.append("Avoid harmful substances like alcohol, smoking, and certain medications")
    elif trimester == 2:
        tips.append("Enjoy increased energy and consider gentle exercise like prenatal yoga")
        tips.append("Focus on balanced nutrition for optimal fetal development")
    else:
        tips.append("Prepare for delivery and monitor for signs of labor")
        tips.append("Focus on comfort measures and birth preparation")

    symptoms = {s.lower() for s in items(entry, "symptoms")}
    if symptoms & {"nausea", "morning sickness"}:
        tips.append("Eat small, frequent meals to manage nausea and morning sickness")
    if symptoms & {"fatigue", "tiredness"}:
        tips.append("Prioritize rest and sleep for energy management")
    if "back pain" in symptoms:
        tips.append("Use proper posture and consider prenatal massage for back pain relief")

    stress = number(entry, "stress")
    if stress is not None and stress > 6:
        tips.append("Practice stress management techniques like meditation or gentle exercise")
    if _lower(entry, "exercise") in ("none", "light"):
        tips.append("Consider adding gentle exercise like walking or prenatal yoga to your routine")
    if _lower(entry, "diet") in ("poor", "fair"):
        tips.append("Focus on nutrient-dense foods to support your baby's development")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    weeks = gestational_weeks(entry, today) or 0
    reminders: list[str] = []

    if weeks < 12:
        reminders += [
            "Continue taking prenatal vitamins daily for optimal fetal development",
            "Stay hydrated and maintain balanced nutrition to support early pregnancy",
            "Schedule first prenatal appointment if not done already",
            "Avoid harmful substances and focus on healthy lifestyle choices",
        ]
    elif weeks < 20:
        reminders += [
            "Prepare for anatomy scan appointment (18-22 weeks)",
            "Continue regular prenatal care appointments",
            "Monitor for increased energy as you enter second trimester",
        ]
    elif weeks < 28:
        reminders += [
            "Prepare for glucose tolerance test (24-28 weeks)",
            "Continue monitoring fetal movement patterns",
            "Focus on balanced nutrition for optimal fetal growth",
        ]
    else:
        reminders += [
            "Monitor for signs of labor and prepare for delivery",
            "Continue regular prenatal care appointments",
            "Focus on comfort measures and birth preparation",
        ]

    if count(entry, "medications"):
        reminders.append(
            "Continue taking prescribed medications as directed by your healthcare provider"
        )
    if count(entry, "supplements"):
        reminders.append("Continue taking prenatal supplements as recommended")
    if _lower(entry, "exercise") in ("none", "light"):
        reminders.append("Consider adding gentle exercise like walking to your daily routine")
    stress = number(entry, "stress")
    if stress is not None and stress > 6:
        reminders.append("Practice stress management techniques for maternal and fetal well-being")
    return reminders
