"""Blocks shared by the reproductive prompt builders."""

from __future__ import annotations

from typing import Any

from rhi.core.prompt import fields as f
from rhi.core.prompt.renderer import PromptBlock


def _nested(profile: dict[str, Any], *path: str) -> Any:
    value: Any = profile
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def profile_block(
    profile: dict[str, Any],
    *,
    conditions: tuple[str, ...] = ("conditions", "reproductive"),
    family_history: tuple[str, ...] = ("familyHistory", "womensConditions"),
) -> PromptBlock:
    """Age, conditions, family history and lifestyle from the user profile.

    ``conditions`` and ``family_history`` are key paths into the profile.
    """
    age = f.number(profile, "age")
    exercise = f.display(_nested(profile, "lifestyle", "exercise", "frequency"))
    stress = f.display(_nested(profile, "lifestyle", "stress", "level"))
    return (
        PromptBlock("PATIENT PROFILE")
        .add("Age", f"{f.format_number(age)} years old" if age is not None else f.NOT_SPECIFIED)
        .add(
            "Medical Conditions",
            f.display(_nested(profile, *conditions), "None reported"),
        )
        .add(
            "Family History",
            f.display(_nested(profile, *family_history), "None reported"),
        )
        .add("Lifestyle", f"{exercise} exercise, {stress} stress level")
        .add("Tobacco Use", f.text(profile, "tobaccoUse", "No"))
    )


def unit(entry: dict[str, Any], key: str, suffix: str, placeholder: str = f.NOT_RECORDED) -> str:
    """Numeric field with a unit suffix, e.g. ``98.2°F``."""
    value = f.number(entry, key)
    if value is None:
        return f.text(entry, key, placeholder)
    return f"{f.format_number(value)}{suffix}"
