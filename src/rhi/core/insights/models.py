"""Data models for insight schemas and insight results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Protocol

HealthRecord = list[dict[str, Any]]
UserProfile = dict[str, Any]
SectionMap = dict[str, str]

DEFAULT_PLACEHOLDER_MARKERS = ["completed successfully", "generated", "available"]
DEFAULT_MIN_SECTION_LENGTH = 20


@dataclass
class SectionSpec:
    """One named section of a model response.

    ``header`` is what the prompt asks the model to write; ``aliases`` are
    the variants the extractor accepts, tried in order.
    """

    key: str
    header: str
    aliases: list[str] = field(default_factory=list)
    instructions: str = ""

    @property
    def patterns(self) -> list[str]:
        """Header first, then aliases, without duplicates."""
        seen: list[str] = []
        for pattern in [self.header, *self.aliases]:
            if pattern and pattern not in seen:
                seen.append(pattern)
        return seen


@dataclass
class KeywordRule:
    """Emit ``flag`` when any of ``any_of`` and all of ``all_of`` occur in the text."""

    flag: str
    any_of: list[str] = field(default_factory=list)
    all_of: list[str] = field(default_factory=list)


@dataclass
class RuleTable:
    """Keyword rules scanned over the named sections (or the raw text)."""

    source_sections: list[str] = field(default_factory=list)
    rules: list[KeywordRule] = field(default_factory=list)


@dataclass
class InsightSchema:
    """Declarative part of a domain: sections, rule tables and fallback copy."""

    id: str
    version: str
    display_name: str
    description: str
    analysis_title: str
    analysis_subtitle: str
    framing: str
    sections: list[SectionSpec]
    closing_instructions: str = ""
    risk_rules: RuleTable = field(default_factory=RuleTable)
    recommendation_rules: RuleTable = field(default_factory=RuleTable)
    alert_rules: RuleTable = field(default_factory=RuleTable)
    fallback_analysis: str = ""
    fallback_recommendations: list[str] = field(default_factory=list)
    min_section_length: int = DEFAULT_MIN_SECTION_LENGTH
    placeholder_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_PLACEHOLDER_MARKERS)
    )
    tags: list[str] = field(default_factory=list)

    def section(self, key: str) -> SectionSpec | None:
        for spec in self.sections:
            if spec.key == key:
                return spec
        return None


class PromptBuilder(Protocol):
    def __call__(
        self,
        record: HealthRecord,
        profile: UserProfile,
        *,
        today: date,
        cycle_history: HealthRecord | None = None,
    ) -> str: ...


class RecordRule(Protocol):
    def __call__(self, record: HealthRecord, profile: UserProfile, *, today: date) -> list[str]: ...


class QuickCheck(Protocol):
    def __call__(
        self, record: HealthRecord, profile: UserProfile, *, today: date
    ) -> dict[str, Any]: ...


@dataclass
class InsightDomain:
    """A schema paired with the domain's prompt builder and rule generators."""

    schema: InsightSchema
    build_prompt: PromptBuilder
    quick_check: QuickCheck
    personalized_tips: RecordRule
    gentle_reminders: RecordRule

    @property
    def id(self) -> str:
        return self.schema.id


@dataclass(frozen=True)
class AIAnalysis:
    """The holistic analysis block: full text plus whatever sections parsed."""

    title: str
    subtitle: str
    content: str
    sections: dict[str, str]
    status: str  # 'live' | 'unavailable'
    provider: str | None
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "content": self.content,
            "sections": dict(self.sections),
            "status": self.status,
            "provider": self.provider,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class InsightResult:
    """Structured insight handed back to the caller.

    Identical in shape on the live and the provider-failure path.
    """

    quick_check: dict[str, Any]
    ai_analysis: AIAnalysis
    risk_assessment: tuple[str, ...]
    recommendations: tuple[str, ...]
    medical_alerts: tuple[str, ...]
    personalized_tips: tuple[str, ...]
    gentle_reminders: tuple[str, ...]

    @property
    def is_fallback(self) -> bool:
        return self.ai_analysis.status != "live"

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys the UI layer consumes."""
        return {
            "quickCheck": dict(self.quick_check),
            "aiAnalysis": self.ai_analysis.to_dict(),
            "riskAssessment": list(self.risk_assessment),
            "recommendations": list(self.recommendations),
            "medicalAlerts": list(self.medical_alerts),
            "personalizedTips": list(self.personalized_tips),
            "gentleReminders": list(self.gentle_reminders),
        }


INSIGHT_RESULT_KEYS = (
    "quickCheck",
    "aiAnalysis",
    "riskAssessment",
    "recommendations",
    "medicalAlerts",
    "personalizedTips",
    "gentleReminders",
)
