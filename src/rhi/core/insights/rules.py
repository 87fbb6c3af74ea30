"""Keyword rule tables — derive risk/recommendation/alert lists from text."""

from __future__ import annotations

from rhi.core.insights.models import KeywordRule, RuleTable, SectionMap


def _matches(rule: KeywordRule, haystack: str) -> bool:
    if not rule.any_of and not rule.all_of:
        return False
    if rule.any_of and not any(k.lower() in haystack for k in rule.any_of):
        return False
    return all(k.lower() in haystack for k in rule.all_of)


def scan_text(table: RuleTable, sections: SectionMap, raw_text: str) -> str:
    """Text a rule table runs over: its source sections if present, else the raw response."""
    parts = [sections[key] for key in table.source_sections if sections.get(key)]
    return "\n".join(parts) if parts else raw_text


def apply_rules(table: RuleTable, sections: SectionMap, raw_text: str) -> list[str]:
    """Return the flags whose keywords occur, in rule order, without duplicates."""
    haystack = scan_text(table, sections, raw_text).lower()
    flags: list[str] = []
    for rule in table.rules:
        if rule.flag not in flags and _matches(rule, haystack):
            flags.append(rule.flag)
    return flags
