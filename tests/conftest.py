"""Shared test fixtures for the reproductive health insight tests."""

from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDERS", "gemini,ollama")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("GEMINI_API_KEYS", "")
    monkeypatch.setenv("OLLAMA_BASE_URL", "")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("SCHEMA_DIR", "")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from rhi.core.insights.models import (  # noqa: E402
    InsightDomain,
    InsightSchema,
    KeywordRule,
    RuleTable,
    SectionSpec,
)
from rhi.core.insights.registry import DomainRegistry  # noqa: E402
from rhi.core.llm.providers.mock import MockProvider  # noqa: E402
from rhi.core.llm.registry import ProviderRegistry  # noqa: E402
from rhi.domains.reproductive.catalog import build_reproductive_domains  # noqa: E402

TODAY = date(2024, 3, 15)
NOW = datetime(2024, 3, 15, 9, 30, 0)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

FERTILITY_RESPONSE = """\
👋 **GREETING**
Hello! Thank you for tracking your fertility signs so carefully this cycle.

🩺 **CLINICAL SUMMARY (SNAPSHOT)**
You are in your ovulatory phase with egg-white mucus and a positive LH test.
Mild stress is noted, but your tracking is wonderfully consistent.

🏥 **SYSTEMIC & LIFESTYLE FACTORS**
Your sleep and exercise support fertility; small lifestyle tweaks such as
reducing caffeine may help further.

🔬 **CLINICAL IMPRESSION**
The most likely explanation is normal ovulation around day 14. Continue tracking;
if cycles become irregular and persistent, a specialist consultation is advisable.

💡 **PERSONALIZED TIPS**
1. Focus on timing intercourse every other day during your fertile window.
2. Keep recording BBT each morning before getting up.

🌸 **GENTLE REMINDERS**
1. Stay hydrated and keep stress low this week.
2. Reach out to your doctor with any concerns.
"""


def make_fertility_entry(**overrides: Any) -> dict[str, Any]:
    """A latest fertility log entry: ttc goal, egg-white mucus, positive test."""
    entry: dict[str, Any] = {
        "date": "2024-03-14",
        "lastPeriod": "2024-03-01",
        "cycleLength": 28,
        "fertilityGoal": "ttc",
        "bbt": 97.4,
        "cervicalMucus": "egg-white",
        "ovulationTest": "positive",
        "intercourse": True,
        "symptoms": ["mild cramping"],
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def fertility_record() -> list[dict[str, Any]]:
    return [
        make_fertility_entry(date="2024-03-12", cervicalMucus="creamy", ovulationTest="negative"),
        make_fertility_entry(date="2024-03-13", cervicalMucus="watery", ovulationTest="negative"),
        make_fertility_entry(),
    ]


@pytest.fixture
def profile() -> dict[str, Any]:
    return {
        "age": 31,
        "conditions": {"reproductive": ["none"]},
        "familyHistory": {"womensConditions": ["PCOS"]},
        "lifestyle": {"exercise": {"frequency": "moderate"}, "stress": {"level": "low"}},
    }


# ---------------------------------------------------------------------------
# Schema / domain builders
# ---------------------------------------------------------------------------

def make_test_schema(
    id: str = "test_domain",
    sections: list[SectionSpec] | None = None,
    **overrides: Any,
) -> InsightSchema:
    """Create a small two-section schema with sensible defaults."""
    fields: dict[str, Any] = {
        "id": id,
        "version": "1.0",
        "display_name": f"Test: {id}",
        "description": f"Test domain {id}",
        "analysis_title": "Test Analysis",
        "analysis_subtitle": "Test subtitle",
        "framing": "You are a test clinician.",
        "sections": sections
        or [
            SectionSpec(key="summary", header="**SUMMARY**", aliases=["## SUMMARY"]),
            SectionSpec(key="advice", header="**ADVICE**", aliases=["## ADVICE"]),
        ],
        "risk_rules": RuleTable(
            source_sections=["summary"],
            rules=[KeywordRule(flag="Stress noted", any_of=["stress"])],
        ),
        "recommendation_rules": RuleTable(
            source_sections=["advice"],
            rules=[KeywordRule(flag="Sleep more", any_of=["sleep"])],
        ),
        "alert_rules": RuleTable(
            source_sections=["summary"],
            rules=[KeywordRule(flag="See a doctor", all_of=["severe", "pain"])],
        ),
        "fallback_analysis": "Analysis is temporarily unavailable.",
        "fallback_recommendations": ["Keep tracking"],
        "tags": ["test"],
    }
    fields.update(overrides)
    return InsightSchema(**fields)


def make_test_domain(schema: InsightSchema | None = None) -> InsightDomain:
    """Pair a schema with trivial deterministic builders."""
    schema = schema or make_test_schema()

    def build_prompt(record, profile, *, today, cycle_history=None):
        return f"{schema.framing}\nentries={len(record)}\ntoday={today.isoformat()}"

    def quick_check(record, profile, *, today):
        return {"entries": len(record)}

    def tips(record, profile, *, today):
        return ["Drink water"]

    def reminders(record, profile, *, today):
        return [f"Check again after {today.isoformat()}"]

    return InsightDomain(
        schema=schema,
        build_prompt=build_prompt,
        quick_check=quick_check,
        personalized_tips=tips,
        gentle_reminders=reminders,
    )


@pytest.fixture
def domains() -> DomainRegistry:
    """The packaged reproductive domains."""
    return build_reproductive_domains()


@pytest.fixture
def live_providers() -> ProviderRegistry:
    """A single healthy provider answering with the canned fertility response."""
    return ProviderRegistry([MockProvider(FERTILITY_RESPONSE, name="gemini")])


@pytest.fixture
def failing_providers() -> ProviderRegistry:
    """A chain where no provider is configured."""
    return ProviderRegistry([
        MockProvider(name="gemini", configured=False),
        MockProvider(name="ollama", configured=False),
    ])


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def fertility_response() -> str:
    return FERTILITY_RESPONSE


@pytest.fixture
def make_entry():
    """Factory for fertility entries with field overrides."""
    return make_fertility_entry


@pytest.fixture
def make_schema():
    """Factory for small test schemas."""
    return make_test_schema


@pytest.fixture
def make_domain():
    """Factory for test domains wrapping a schema."""
    return make_test_domain
