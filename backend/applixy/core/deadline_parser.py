"""Deadline Parser — free-text deadline strings to calendar dates.

Invariants:
    - parse_deadline never returns None
    - Formats tried in fixed order; first match wins
    - Yearless format ("November 13") takes the current calendar year
    - Empty or unparseable input falls back to today (not a "no deadline" sentinel)

Design Decisions:
    - Yearless input parsed with the year appended: strptime's implicit 1900
      would reject "February 29"
"""

from datetime import date, datetime


# (strptime pattern, has_year), tried in order
DEADLINE_FORMATS: tuple[tuple[str, bool], ...] = (
    ("%Y-%m-%d", True),      # 2025-12-01
    ("%m/%d/%Y", True),      # 12/01/2025
    ("%B %d, %Y", True),     # December 1, 2025
    ("%B %d", False),        # December 1
)

ISO_FORMAT = "%Y-%m-%d"


def try_parse_deadline(text: str | None, today: date | None = None) -> date | None:
    """Return the parsed date, or None when no format matches."""
    if not text:
        return None
    s = text.strip()
    if not s:
        return None
    year = (today or date.today()).year
    for fmt, has_year in DEADLINE_FORMATS:
        try:
            if has_year:
                return datetime.strptime(s, fmt).date()
            return datetime.strptime(f"{s} {year}", f"{fmt} %Y").date()
        except ValueError:
            continue
    return None


def parse_deadline(text: str | None, today: date | None = None) -> date:
    """Parse a deadline string; unparseable input maps to today."""
    parsed = try_parse_deadline(text, today)
    if parsed is not None:
        return parsed
    return today or date.today()


def format_deadline(value: date) -> str:
    return value.strftime(ISO_FORMAT)
