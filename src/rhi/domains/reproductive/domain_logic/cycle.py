"""Menstrual cycle tracking: quick check, personalized tips and gentle reminders."""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import items, latest_entry, number, text
from rhi.domains.reproductive.domain_logic.cycle_math import cycle_timing


def _overall_health(pain: float | None, stress: float | None) -> str:
    if pain is not None and pain >= 8:
        return "Needs Attention"
    if (pain is not None and pain > 5) or (stress is not None and stress > 6):
        return "Fair"
    return "Good"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    timing = cycle_timing(entry, today)
    start, end = timing.fertile_window
    pain = number(entry, "pain")
    return {
        "cycleLength": timing.cycle_length,
        "flowIntensity": text(entry, "flowIntensity"),
        "painLevel": pain if pain is not None else 0,
        "symptoms": items(entry, "symptoms"),
        "overallHealth": _overall_health(pain, number(entry, "stressLevel")),
        "nextPeriod": timing.expected_period.isoformat() if timing.expected_period else None,
        "fertileWindow": (
            {"start": start.isoformat(), "end": end.isoformat()} if start and end else None
        ),
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []

    pain = number(entry, "pain")
    if pain is not None and pain > 5:
        tips.append("Consider heat therapy and gentle exercise for pain relief")
    stress = number(entry, "stressLevel")
    if stress is not None and stress > 6:
        tips.append("Practice stress management techniques like meditation or yoga")
    sleep = number(entry, "sleepQuality")
    if sleep is not None and sleep < 4:
        tips.append("Improve sleep hygiene with consistent bedtime routine")
    if text(entry, "exerciseFrequency").lower() == "low":
        tips.append("Incorporate regular physical activity to support cycle health")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders = ["Track your next period to monitor cycle regularity"]
    pain = number(entry, "pain")
    if pain is not None and pain > 6:
        reminders.append("Consider discussing pain management with your healthcare provider")
    reminders.append("Maintain consistent sleep schedule for hormonal balance")
    reminders.append("Stay hydrated and eat balanced meals throughout your cycle")
    return reminders
