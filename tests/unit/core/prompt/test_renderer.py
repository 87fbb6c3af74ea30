"""Tests for the prompt renderer."""

from __future__ import annotations

from rhi.core.insights.models import SectionSpec
from rhi.core.prompt.renderer import (
    PromptBlock,
    render_history,
    render_output_format,
    render_prompt,
)

SECTIONS = [
    SectionSpec(key="summary", header="🩺 **SUMMARY**", instructions="Two sentences."),
    SectionSpec(key="tips", header="💡 **TIPS**"),
]


def test_block_renders_labelled_lines():
    block = PromptBlock("CYCLE").add("Length", "28 days").add("Flow", "medium")
    assert block.render() == "**CYCLE:**\n- Length: 28 days\n- Flow: medium"


def test_history_numbers_entries_by_position_in_record():
    record = [{"n": 1}, {"n": 2}, {"n": 3}, {"n": 4}]
    text = render_history("HISTORY", record, [("N", lambda e: str(e["n"]))], label="Cycle")

    assert text.startswith("**HISTORY (Last 3 entries):**")
    assert "Cycle 1:" not in text
    assert "Cycle 2:\n- N: 2" in text
    assert "Cycle 4:\n- N: 4" in text


def test_history_of_empty_record():
    text = render_history("HISTORY", [], [("N", lambda e: "x")])
    assert text == "**HISTORY (Last 3 entries):**\nNo historical data available"


def test_output_format_lists_headers_verbatim_in_order():
    text = render_output_format(SECTIONS, closing="Start with the summary.")

    assert "🩺 **SUMMARY**\nTwo sentences." in text
    assert text.index("🩺 **SUMMARY**") < text.index("💡 **TIPS**")
    assert text.endswith("Start with the summary.")


def test_render_prompt_is_deterministic_and_ordered():
    kwargs = dict(
        framing="You are a gynecologist.",
        blocks=[PromptBlock("PROFILE").add("Age", "31"), "", "**RAW BLOCK**"],
        sections=SECTIONS,
    )
    first = render_prompt(**kwargs)
    second = render_prompt(**kwargs)

    assert first == second
    assert first.startswith("You are a gynecologist.\n\nPATIENT DATA:\n\n**PROFILE:**")
    assert first.index("**RAW BLOCK**") < first.index("**RESPONSE FORMAT:**")
    assert "\n\n\n\n" not in first
