"""Cycle arithmetic — phase, fertility status and date windows from a last-period date.

All windows are whole-day offsets from the last period date ``L`` with cycle
length ``C``:

    expected ovulation    L + C - 14
    expected next period  L + C
    fertile window        L + C - 19 .. L + C - 13
    NFP safer period      L + C - 6  .. L + C - 1
    optimal TTC window    L + C - 17 .. L + C - 13
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from rhi.core.prompt.fields import latest_entry, number, parse_date

DEFAULT_CYCLE_LENGTH = 28

UNKNOWN = "Unknown"
MENSTRUAL = "Menstrual Phase"
FOLLICULAR = "Follicular Phase"
OVULATORY = "Ovulatory Phase"
LUTEAL = "Luteal Phase"

HIGH_FERTILITY = "High Fertility"
MODERATE_FERTILITY = "Moderate Fertility"
LOW_FERTILITY = "Low Fertility"


def cycle_phase(days_since_period: int | None) -> str:
    if days_since_period is None or days_since_period < 0:
        return UNKNOWN
    if days_since_period <= 5:
        return MENSTRUAL
    if days_since_period <= 13:
        return FOLLICULAR
    if days_since_period <= 16:
        return OVULATORY
    return LUTEAL


def fertility_status(days_since_period: int | None) -> str:
    if days_since_period is None or days_since_period < 0:
        return UNKNOWN
    if 10 <= days_since_period <= 16:
        return HIGH_FERTILITY
    if 8 <= days_since_period <= 18:
        return MODERATE_FERTILITY
    return LOW_FERTILITY


def _offset(start: date | None, days: int) -> date | None:
    return start + timedelta(days=days) if start is not None else None


@dataclass(frozen=True)
class CycleTiming:
    """Derived cycle dates for one reference day."""

    last_period: date | None
    cycle_length: int
    today: date

    @property
    def days_since_period(self) -> int | None:
        if self.last_period is None:
            return None
        return (self.today - self.last_period).days

    @property
    def phase(self) -> str:
        return cycle_phase(self.days_since_period)

    @property
    def fertility_status(self) -> str:
        return fertility_status(self.days_since_period)

    @property
    def expected_ovulation(self) -> date | None:
        return _offset(self.last_period, self.cycle_length - 14)

    @property
    def expected_period(self) -> date | None:
        return _offset(self.last_period, self.cycle_length)

    @property
    def fertile_window(self) -> tuple[date | None, date | None]:
        return (
            _offset(self.last_period, self.cycle_length - 19),
            _offset(self.last_period, self.cycle_length - 13),
        )

    @property
    def safe_period(self) -> tuple[date | None, date | None]:
        return (
            _offset(self.last_period, self.cycle_length - 6),
            _offset(self.last_period, self.cycle_length - 1),
        )

    @property
    def ttc_window(self) -> tuple[date | None, date | None]:
        return (
            _offset(self.last_period, self.cycle_length - 17),
            _offset(self.last_period, self.cycle_length - 13),
        )


def cycle_length_of(entry: dict[str, Any]) -> int:
    """Cycle length from an entry, falling back to the default for missing or absurd values."""
    value = number(entry, "cycleLength")
    if value is None or not 10 <= value <= 90:
        return DEFAULT_CYCLE_LENGTH
    return int(value)


def cycle_timing(entry: dict[str, Any], today: date) -> CycleTiming:
    """Timing derived from one cycle entry (``lastPeriod`` and ``cycleLength``)."""
    return CycleTiming(
        last_period=parse_date(entry.get("lastPeriod")),
        cycle_length=cycle_length_of(entry),
        today=today,
    )


def timing_from_history(
    cycle_history: list[dict[str, Any]] | None,
    fallback: dict[str, Any],
    today: date,
) -> CycleTiming:
    """Use the latest cycle-history entry when given, otherwise ``fallback``."""
    source = latest_entry(cycle_history) if cycle_history else {}
    if not source.get("lastPeriod"):
        source = fallback
    return cycle_timing(source, today)


def next_window_from(
    reference: date | None, cycle_length: int = DEFAULT_CYCLE_LENGTH
) -> dict[str, str] | None:
    """Predicted fertile window counted from ``reference`` as ISO ``start``/``end`` dates."""
    if reference is None:
        return None
    ovulation_day = cycle_length - 14
    return {
        "start": (reference + timedelta(days=ovulation_day - 5)).isoformat(),
        "end": (reference + timedelta(days=ovulation_day + 1)).isoformat(),
    }


def trimester_for(weeks: float | None) -> int | None:
    """Trimester from gestational weeks: 1 (<14), 2 (<28), 3 otherwise."""
    if weeks is None or weeks < 0:
        return None
    if weeks < 14:
        return 1
    if weeks < 28:
        return 2
    return 3


def gestational_weeks(entry: dict[str, Any], today: date) -> float | None:
    """Weeks of pregnancy: explicit ``gestationalAge``, else from ``lastMenstrualPeriod``."""
    weeks = number(entry, "gestationalAge")
    if weeks is not None:
        return weeks
    lmp = parse_date(entry.get("lastMenstrualPeriod"))
    if lmp is None or lmp > today:
        return None
    return (today - lmp).days // 7
