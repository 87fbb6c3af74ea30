"""Field accessors for prompt rendering.

Every accessor degrades to a readable placeholder instead of raising, so a
missing or malformed record field never blocks prompt generation and the
rendered prompt never shows ``None``, ``null`` or ``undefined``.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

NOT_RECORDED = "Not recorded"
NOT_SPECIFIED = "Not specified"
NOT_CALCULATED = "Not calculated"
NOT_TESTED = "Not tested"
NONE = "None"

# "none" is a real answer (e.g. contraception: none), not a blank.
_NULL_STRINGS = {"", "null", "undefined", "nan"}


def is_blank(value: Any) -> bool:
    """True for values that should render as a placeholder."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() in _NULL_STRINGS
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, (list, tuple, set, dict)):
        return not any(not is_blank(v) for v in value)
    return False


def _get(entry: Any, key: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(key)
    return None


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_render(v) for v in value if not is_blank(v))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return ", ".join(f"{k}: {_render(v)}" for k, v in value.items() if not is_blank(v))
    return str(value).strip()


def display(value: Any, placeholder: str = NOT_SPECIFIED) -> str:
    """Any value as display text, or ``placeholder`` when blank."""
    if is_blank(value):
        return placeholder
    return _render(value)


def text(entry: Any, key: str, placeholder: str = NOT_SPECIFIED) -> str:
    """Field value as display text, or ``placeholder`` when missing."""
    return display(_get(entry, key), placeholder)


def joined(entry: Any, key: str, placeholder: str = NONE) -> str:
    """List field joined with commas; scalars pass through as text."""
    return text(entry, key, placeholder)


def number(entry: Any, key: str, default: float | None = None) -> float | None:
    """Field coerced to a finite float, or ``default``."""
    value = _get(entry, key)
    if isinstance(value, bool) or is_blank(value):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def count(entry: Any, key: str) -> int:
    """Number of non-blank items in a list field (0 for anything else)."""
    value = _get(entry, key)
    if isinstance(value, (list, tuple, set)):
        return sum(1 for v in value if not is_blank(v))
    return 0


def items(entry: Any, key: str) -> list[str]:
    """List field as a list of non-blank strings."""
    value = _get(entry, key)
    if isinstance(value, (list, tuple, set)):
        return [_render(v) for v in value if not is_blank(v)]
    if is_blank(value):
        return []
    return [_render(value)]


def scale(entry: Any, key: str, default: float = 5) -> str:
    """A 0-10 self-report score rendered as ``n/10``."""
    value = number(entry, key, default)
    return f"{format_number(value if value is not None else default)}/10"


def yes_no(entry: Any, key: str) -> str:
    value = _get(entry, key)
    if isinstance(value, str):
        return "Yes" if value.strip().lower() in {"yes", "true", "y", "1"} else "No"
    return "Yes" if bool(value) and not is_blank(value) else "No"


def parse_date(value: Any) -> date | None:
    """Parse an ISO date (or datetime) value; anything else yields ``None``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or is_blank(value):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def format_date(value: date | None, placeholder: str = NOT_CALCULATED) -> str:
    return value.isoformat() if value is not None else placeholder


def format_range(start: date | None, end: date | None, placeholder: str = NOT_CALCULATED) -> str:
    if start is None or end is None:
        return placeholder
    return f"{start.isoformat()} to {end.isoformat()}"


def latest_entry(record: Any) -> dict[str, Any]:
    """Last entry of a record, or an empty mapping."""
    if isinstance(record, (list, tuple)) and record and isinstance(record[-1], dict):
        return record[-1]
    return {}


def trailing(record: Any, window: int = 3) -> list[dict[str, Any]]:
    """The last ``window`` mapping entries of a record."""
    if not isinstance(record, (list, tuple)):
        return []
    return [e for e in record[-window:] if isinstance(e, dict)]
