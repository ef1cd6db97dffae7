"""
Text Functions
==============

Expansion of the ``{{DATE(...)}}`` and ``{{TIME(...)}}`` macros allowed in card
text. Timestamps are formatted in the offset they carry, never converted to the
server's local time, so the same card always renders the same text.
"""

import re
from datetime import datetime

TEXT_FUNCTION_PATTERN = re.compile(
    r"\{\{(?P<func>DATE|TIME)\((?P<value>[^,)]+?)(?:,\s*(?P<hint>COMPACT|SHORT|LONG))?\s*\)\}\}",
    re.IGNORECASE,
)

_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _parse_timestamp(value: str) -> datetime:
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_date(moment: datetime, hint: str = "COMPACT") -> str:
    """Format a date as COMPACT (2/14/2017), SHORT or LONG text."""
    hint = hint.upper()
    day_name = _DAYS[moment.weekday()]
    month_name = _MONTHS[moment.month - 1]
    if hint == "LONG":
        return f"{day_name}, {month_name} {moment.day}, {moment.year}"
    if hint == "SHORT":
        return f"{day_name[:3]}, {month_name[:3]} {moment.day}, {moment.year}"
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: datetime) -> str:
    """Format a time as 12-hour clock text (6:08 AM)."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def apply_text_functions(text: str) -> str:
    """
    Replace DATE/TIME macros in text with formatted values.

    Macros whose timestamp cannot be parsed are left as written.
    """
    if not text or "{{" not in text:
        return text

    def _replace(match: "re.Match[str]") -> str:
        try:
            moment = _parse_timestamp(match.group("value"))
        except ValueError:
            return match.group(0)
        if match.group("func").upper() == "TIME":
            return format_time(moment)
        return format_date(moment, match.group("hint") or "COMPACT")

    return TEXT_FUNCTION_PATTERN.sub(_replace, text)
