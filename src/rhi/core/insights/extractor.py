"""Section extraction from free-text model responses.

A section starts at the first trimmed line containing one of its header
patterns (case-sensitive substring) and runs until the next header-like
line: a bolded standalone line, a markdown heading, or a line carrying
another declared section's header. Bodies that are too short or that echo
template placeholders are rejected so the section stays absent.
"""

from __future__ import annotations

import logging
import re

from rhi.core.insights.models import (
    DEFAULT_MIN_SECTION_LENGTH,
    DEFAULT_PLACEHOLDER_MARKERS,
    SectionMap,
    SectionSpec,
)

logger = logging.getLogger(__name__)

# Leading emoji in front of a bolded header ("🩺 **X**"). List bullets are
# never stripped, so a bolded bullet item stays part of the body.
_LEADING_MARKER = re.compile(r"^[^\w*#\-+•]+")


def _is_bold_header(line: str) -> bool:
    candidate = _LEADING_MARKER.sub("", line).strip()
    return len(candidate) > 4 and candidate.startswith("**") and candidate.endswith("**")


def _is_boundary(line: str, header: str, boundaries: tuple[str, ...]) -> bool:
    if line.startswith("#"):
        return True
    if line != header and _is_bold_header(line):
        return True
    return any(b and b != header and b in line for b in boundaries)


def extract_section(text: str, header: str, boundaries: tuple[str, ...] = ()) -> str:
    """Return the trimmed body following ``header``, or "" if it never appears.

    Args:
        text: Raw model response.
        header: Pattern the header line must contain.
        boundaries: Other section headers that also end the body.
    """
    collected: list[str] = []
    in_section = False

    for raw_line in text.splitlines():
        line = raw_line.strip()

        if header in line:
            if in_section:
                # A repeated header inside the body is dropped, not treated as a boundary.
                continue
            in_section = True
            continue

        if in_section:
            if _is_boundary(line, header, boundaries):
                break
            collected.append(line)

    return "\n".join(collected).strip()


def is_valid_section(
    content: str,
    *,
    min_length: int = DEFAULT_MIN_SECTION_LENGTH,
    placeholder_markers: list[str] | None = None,
) -> bool:
    """Reject empty, too-short, or template-echo section bodies."""
    markers = DEFAULT_PLACEHOLDER_MARKERS if placeholder_markers is None else placeholder_markers
    if len(content.strip()) <= min_length:
        return False
    return not any(marker in content for marker in markers)


def extract_sections(
    text: str,
    sections: list[SectionSpec],
    *,
    min_length: int = DEFAULT_MIN_SECTION_LENGTH,
    placeholder_markers: list[str] | None = None,
) -> SectionMap:
    """Extract every declared section that yields a valid body.

    Keys whose patterns never match, or only match placeholder content,
    are left out of the result.
    """
    all_patterns = tuple(p for spec in sections for p in spec.patterns)
    found: SectionMap = {}

    for spec in sections:
        own = set(spec.patterns)
        boundaries = tuple(p for p in all_patterns if p not in own)
        for pattern in spec.patterns:
            content = extract_section(text, pattern, boundaries)
            if content and is_valid_section(
                content, min_length=min_length, placeholder_markers=placeholder_markers
            ):
                found[spec.key] = content
                logger.debug("Extracted section %s with pattern %r", spec.key, pattern)
                break
        else:
            logger.debug("No valid content for section %s", spec.key)

    if not found and sections:
        logger.info("No structured sections found in response (%d chars)", len(text))
    return found
