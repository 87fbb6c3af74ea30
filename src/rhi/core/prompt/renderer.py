"""Prompt renderer — assembles labelled data blocks and the response format into one prompt."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rhi.core.insights.models import SectionSpec
from rhi.core.prompt.fields import trailing

HistoryColumn = tuple[str, Callable[[dict[str, Any]], str]]


@dataclass
class PromptBlock:
    """A titled list of ``label: value`` lines."""

    title: str
    lines: list[tuple[str, str]] = field(default_factory=list)

    def add(self, label: str, value: str) -> PromptBlock:
        self.lines.append((label, value))
        return self

    def render(self) -> str:
        body = "\n".join(f"- {label}: {value}" for label, value in self.lines)
        return f"**{self.title}:**\n{body}" if body else f"**{self.title}:**"


def render_history(
    title: str,
    record: list[dict[str, Any]],
    columns: list[HistoryColumn],
    *,
    window: int = 3,
    label: str = "Entry",
    empty: str = "No historical data available",
) -> str:
    """Render the trailing window of a record, numbered by position in the record."""
    entries = trailing(record, window)
    header = f"**{title} (Last {window} entries):**"
    if not entries:
        return f"{header}\n{empty}"

    first = len(record) - len(entries) + 1
    chunks: list[str] = []
    for offset, entry in enumerate(entries):
        lines = [f"{label} {first + offset}:"]
        lines.extend(f"- {name}: {render(entry)}" for name, render in columns)
        chunks.append("\n".join(lines))
    return header + "\n" + "\n\n".join(chunks)


def render_output_format(sections: list[SectionSpec], closing: str = "") -> str:
    """Response-format block built from the section declarations.

    Section headers are emitted verbatim so the extractor can find them.
    """
    parts = [
        "**RESPONSE FORMAT:**\n"
        "Provide your response in this EXACT format, using these section headers verbatim:"
    ]
    for section in sections:
        if section.instructions:
            parts.append(f"{section.header}\n{section.instructions}")
        else:
            parts.append(section.header)
    if closing:
        parts.append(closing)
    return "\n\n".join(parts)


def render_prompt(
    *,
    framing: str,
    blocks: list[PromptBlock | str],
    sections: list[SectionSpec],
    closing: str = "",
) -> str:
    """Combine framing, data blocks and the response format into a complete prompt.

    Pure: the same inputs always produce the same string.
    """
    parts: list[str] = [framing.strip(), "PATIENT DATA:"]
    for block in blocks:
        rendered = block.render() if isinstance(block, PromptBlock) else block
        if rendered:
            parts.append(rendered)
    parts.append(render_output_format(sections, closing))
    return "\n\n".join(parts)
