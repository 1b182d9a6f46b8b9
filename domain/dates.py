"""
Calendar date helpers.

Bills carry date-only semantics. Incoming values may be plain ``YYYY-MM-DD``
strings, full ISO timestamps sent by browsers (``2024-06-15T00:00:00.000Z``),
or ``date``/``datetime`` objects. The calendar day as written is kept; no
timezone conversion is applied, so a server in any locale stores the same day.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])")

DateLike = Union[date, datetime, str]


def normalize_date(value: DateLike) -> date:
    """Return the calendar day of ``value``.

    Raises:
        ValueError: if ``value`` is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _ISO_DATE_PREFIX.match(value.strip())
        if match:
            year, month, day = (int(part) for part in match.groups())
            return date(year, month, day)
    raise ValueError(f"Invalid date: {value!r}")


def today_in(tz_name: str) -> date:
    """Current calendar day in the given IANA timezone"""
    return datetime.now(ZoneInfo(tz_name)).date()


def exclusive_upper_bound(end: Optional[date]) -> Optional[date]:
    """Turn an inclusive end day into the exclusive bound used in queries"""
    if end is None:
        return None
    return end + timedelta(days=1)
