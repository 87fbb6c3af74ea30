"""Men's hormonal health: quick check, risk tiers, tips and reminders.

Scores are 0-10 self-reports. A score that was not recorded never triggers
a rule.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from rhi.core.prompt.fields import latest_entry, number, text

# Self-report scores followed over time.
TRACKED_SCORES = ("energyLevel", "mood", "libido", "sleepQuality", "stressLevel")

INSUFFICIENT_DATA = "insufficient_data"
_TREND_THRESHOLD = 0.5


def score_trend(record: list[dict[str, Any]], key: str) -> str:
    """'improving', 'declining' or 'stable' from first to last recorded value."""
    values = [v for v in (number(e, key) for e in record) if v is not None]
    if len(values) < 2:
        return INSUFFICIENT_DATA
    change = values[-1] - values[0]
    if change > _TREND_THRESHOLD:
        return "improving"
    if change < -_TREND_THRESHOLD:
        return "declining"
    return "stable"


def score_trends(record: list[dict[str, Any]]) -> dict[str, str] | None:
    if len(record) < 2:
        return None
    return {key: score_trend(record, key) for key in TRACKED_SCORES}


# (score key, low-risk note, moderate note, high-risk note)
_TIERED_SCORES = [
    (
        "energyLevel",
        "Good energy levels",
        "Energy levels could be optimized",
        "Low energy - consider hormone testing",
    ),
    (
        "mood",
        "Stable mood",
        "Mood stability could be improved",
        "Mood concerns - may need medical evaluation",
    ),
    (
        "libido",
        "Healthy libido",
        "Libido could be enhanced",
        "Low libido - consider comprehensive evaluation",
    ),
]


def risk_tiers(entry: dict[str, Any]) -> dict[str, list[str]]:
    """Sort energy, mood and libido into low (>=7), moderate (5-7) and high (<5) risk."""
    tiers: dict[str, list[str]] = {"low": [], "moderate": [], "high": []}
    for key, low, moderate, high in _TIERED_SCORES:
        score = number(entry, key)
        if score is None:
            continue
        if score >= 7:
            tiers["low"].append(low)
        elif score >= 5:
            tiers["moderate"].append(moderate)
        else:
            tiers["high"].append(high)
    return tiers


def overall_health(tiers: dict[str, list[str]]) -> str:
    if tiers["high"]:
        return "Needs Attention"
    if tiers["moderate"]:
        return "Fair"
    return "Good"


def quick_check(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> dict[str, Any]:
    entry = latest_entry(record)
    tiers = risk_tiers(entry)
    return {
        "testosteroneLevel": text(entry, "testosteroneLevel", "Not tested"),
        "energyLevel": number(entry, "energyLevel"),
        "mood": number(entry, "mood"),
        "libido": number(entry, "libido"),
        "sleepQuality": number(entry, "sleepQuality"),
        "stressLevel": number(entry, "stressLevel"),
        "riskLevels": tiers,
        "overallHealth": overall_health(tiers),
        "trends": score_trends(record),
    }


def _below(entry: dict[str, Any], key: str, threshold: float) -> bool:
    value = number(entry, key)
    return value is not None and value < threshold


def personalized_tips(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    tips: list[str] = []

    if _below(entry, "energyLevel", 6) or _below(entry, "libido", 6):
        tips.append("Consider lifestyle factors that support healthy testosterone levels")
    if _below(entry, "sleepQuality", 7):
        tips.append("Optimize sleep hygiene to support hormonal balance")
    stress = number(entry, "stressLevel")
    if stress is not None and stress > 6:
        tips.append("Implement stress reduction techniques to support hormonal health")
    return tips


def gentle_reminders(
    record: list[dict[str, Any]], profile: dict[str, Any], *, today: date
) -> list[str]:
    entry = latest_entry(record)
    reminders: list[str] = []

    if not text(entry, "testosteroneLevel", ""):
        reminders.append("Consider comprehensive hormone panel testing")
    if _below(entry, "sleepQuality", 7):
        reminders.append("Optimize sleep to support hormonal balance")
    reminders.append("Continue tracking hormonal health indicators")
    return reminders
