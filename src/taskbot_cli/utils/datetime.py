"""Datetime utilities for Taskbot CLI.

This module normalizes the free-text dates users attach to deadlines, events
and ``get`` queries into one display form, and provides the UTC helpers used
for save-file metadata.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Tuple

import parsedatetime

DEFAULT_DATE_FORMAT = "%b %d %Y"
DEFAULT_TIME_FORMAT = "%I:%M %p"

# (regex, strptime format, has_time)
_STRICT_FORMATS = [
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"), "%Y-%m-%d", False),
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2} \d{4}$"), "%Y-%m-%d %H%M", True),
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2} \d{1,2}:\d{2}$"), "%Y-%m-%d %H:%M", True),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%d/%m/%Y", False),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4} \d{4}$"), "%d/%m/%Y %H%M", True),
]

# parsedatetime status flags that carry a date component
_PDT_DATE_FLAGS = (1, 3)

_calendar = parsedatetime.Calendar()


def now_utc() -> datetime:
    """Return current datetime in UTC timezone.

    Returns:
        Current datetime with timezone=UTC
    """
    return datetime.now(timezone.utc)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetime is timezone-aware, assuming UTC if naive.

    Args:
        dt: Datetime to check/convert, or None

    Returns:
        Timezone-aware datetime in UTC, or None if input was None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """Convert datetime to ISO string with timezone info."""
    if dt is None:
        return None
    return ensure_aware(dt).isoformat()


def parse_date(text: str, natural: bool = False) -> Optional[Tuple[datetime, bool]]:
    """Parse a user supplied date.

    Args:
        text: Date text such as ``2019-12-02``, ``2019-12-02 1800`` or ``2/12/2019``
        natural: Also accept natural language (``tomorrow``, ``next friday``)

    Returns:
        Tuple of (parsed datetime, whether a time of day was given), or None
        if the text is not a recognised date.
    """
    if not text:
        return None

    text = text.strip()

    for pattern, fmt, has_time in _STRICT_FORMATS:
        if pattern.match(text):
            try:
                return datetime.strptime(text, fmt), has_time
            except ValueError:
                return None

    if natural:
        time_struct, parse_status = _calendar.parse(text)
        if parse_status in _PDT_DATE_FLAGS:
            return datetime(*time_struct[:6]), parse_status == 3

    return None


def normalize_date(
    text: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    time_format: str = DEFAULT_TIME_FORMAT,
    natural: bool = False,
) -> str:
    """Normalize a date string for display and matching.

    ``2019-12-02`` becomes ``Dec 02 2019`` and ``2019-12-02 1800`` becomes
    ``Dec 02 2019, 06:00 PM``. Text that is not a recognised date is returned
    stripped but otherwise unchanged.
    """
    parsed = parse_date(text, natural=natural)
    if parsed is None:
        return text.strip()

    dt, has_time = parsed
    formatted = dt.strftime(date_format)
    if has_time:
        formatted += f", {dt.strftime(time_format)}"
    return formatted
