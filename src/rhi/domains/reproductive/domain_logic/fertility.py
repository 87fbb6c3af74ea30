"""Fertility tracking: quick check, personalized tips and gentle reminders.

Pure functions over the latest fertility log entry; no provider involved.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import latest_entry, number, parse_date, text
from rhi.domains.reproductive.domain_logic.cycle_math import cycle_length_of, next_window_from

# BBT (°F) at or below which a pre-ovulatory dip is assumed.
BBT_DIP_THRESHOLD = 97.5


def _lower(entry: dict[str, Any], key: str) -> str:
    value = entry.get(key)
    return value.strip().lower() if isinstance(value, str) else ""


def _overall_fertility(entry: dict[str, Any]) -> str:
    if _lower(entry, "cervicalMucus") == "egg-white":
        return "High"
    if _lower(entry, "ovulationTest") == "positive":
        return "High"
    return "Good"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    reference = parse_date(entry.get("date"))
    return {
        "fertilityGoal": text(entry, "fertilityGoal"),
        "bbt": number(entry, "bbt"),
        "cervicalMucus": text(entry, "cervicalMucus", "Not observed"),
        "ovulationTest": text(entry, "ovulationTest", "Not tested"),
        "intercourse": bool(entry.get("intercourse")),
        "overallFertility": _overall_fertility(entry),
        "nextFertileWindow": next_window_from(reference, cycle_length_of(entry)),
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []

    bbt = number(entry, "bbt")
    if bbt is not None and bbt < BBT_DIP_THRESHOLD:
        tips.append("Your BBT suggests potential ovulation - continue tracking")
    if _lower(entry, "cervicalMucus") == "egg-white":
        tips.append(
            "Egg-white cervical mucus indicates high fertility - optimal timing for conception"
        )
    if _lower(entry, "ovulationTest") == "positive":
        tips.append("Positive ovulation test - fertile window is open")

    goal = _lower(entry, "fertilityGoal")
    if goal == "ttc":
        tips.append(
            "Trying to conceive (ttc): focus on timing intercourse during your fertile window"
        )
    elif goal == "nfp":
        tips.append(
            "Natural family planning: avoid unprotected intercourse during your fertile window"
        )
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders = [
        "Continue tracking BBT daily for ovulation detection",
        "Monitor cervical mucus changes throughout your cycle",
    ]
    if _lower(entry, "fertilityGoal") == "ttc":
        reminders.append("Time intercourse during fertile window for best conception chances")
    reminders.append("Maintain healthy lifestyle habits to support fertility")
    return reminders
