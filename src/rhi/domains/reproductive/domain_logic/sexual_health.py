"""Sexual health: quick check, screening cadence, tips and reminders."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from rhi.core.prompt.fields import count, items, latest_entry, number, parse_date, text

SCREENING_INTERVAL_DAYS = 365
NOT_ACTIVE = "not sexually active"


def next_screening(last_screening: date | None) -> str:
    if last_screening is None:
        return "Schedule initial screening"
    due = last_screening + timedelta(days=SCREENING_INTERVAL_DAYS)
    return f"Next screening: {due.isoformat()}"


def overall_health(symptoms: int, concerns: int) -> str:
    if symptoms == 0 and concerns == 0:
        return "Good"
    if symptoms <= 2 and concerns <= 1:
        return "Fair"
    return "Needs Attention"


def _activity(entry: dict[str, Any]) -> str:
    return text(entry, "sexualActivity", "").lower()


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    symptoms = count(entry, "symptoms")
    concerns = len(items(entry, "concerns"))
    return {
        "sexualActivity": text(entry, "sexualActivity"),
        "contraception": text(entry, "contraception"),
        "lastScreening": text(entry, "lastSTIScreening", "Not scheduled"),
        "symptoms": symptoms,
        "overallHealth": overall_health(symptoms, concerns),
        "nextScreening": next_screening(parse_date(entry.get("lastSTIScreening"))),
    }


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []

    age = number(profile, "age")
    if age is not None:
        if age < 25:
            tips.append("Focus on STI prevention and regular screening as a young adult")
            tips.append("Consider HPV vaccination if not already completed")
        elif age < 40:
            tips.append("Maintain regular sexual health screenings and contraception management")
            tips.append("Discuss fertility planning if considering pregnancy")
        else:
            tips.append(
                "Continue regular screenings and discuss menopause-related sexual health changes"
            )
            tips.append("Consider hormone therapy options if experiencing sexual health issues")

    activity = _activity(entry)
    if activity in ("multiple partners", "new partner recently"):
        tips.append("Use barrier protection consistently and get tested regularly")
        tips.append("Communicate openly with partners about sexual health")
    elif activity == "monogamous relationship":
        tips.append("Maintain regular STI screenings even in monogamous relationships")
        tips.append("Discuss sexual health goals and concerns with your partner")

    symptoms = {s.lower() for s in items(entry, "symptoms")}
    if "pain during sex" in symptoms:
        tips.append("Consider using lubricant and discussing pain with a healthcare provider")
    if "decreased libido" in symptoms:
        tips.append("Discuss libido changes with a healthcare provider - this can be addressed")
    if "vaginal dryness" in symptoms:
        tips.append("Try vaginal moisturizers and discuss hormone therapy options")

    if text(entry, "contraception", "").lower() == "none" and activity != NOT_ACTIVE:
        tips.append("Discuss contraception options with a healthcare provider")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders: list[str] = []

    last_screening = parse_date(entry.get("lastSTIScreening"))
    if last_screening is None:
        reminders.append("Schedule your first STI screening if sexually active")
    elif (today - last_screening).days >= SCREENING_INTERVAL_DAYS:
        reminders.append("Time for annual STI screening - schedule your appointment")

    age = number(profile, "age")
    if age is not None and age >= 21:
        reminders.append("Schedule regular Pap smears as recommended by your healthcare provider")
    if age is not None and age >= 25:
        reminders.append("Consider HPV testing as part of your cervical cancer screening")

    if _activity(entry) != NOT_ACTIVE:
        reminders.append("Use protection consistently to prevent STIs and unintended pregnancy")
        reminders.append("Communicate openly with partners about sexual health and boundaries")

    reminders.append("Maintain good sexual health hygiene and self-care practices")
    reminders.append(
        "Don't hesitate to discuss sexual health concerns with your healthcare provider"
    )
    return reminders
