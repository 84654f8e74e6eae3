"""Timestamp parsing and formatting for recurrence text.

Values use the iCalendar basic formats:
- date: ``YYYYMMDD``
- date-time: ``YYYYMMDDTHHMMSS`` with an optional ``Z`` suffix for UTC

Date-time values without ``Z`` are interpreted in the zone named by their
TZID parameter. When the zone cannot be resolved the configured fallback
zone (UTC by default) is used instead of failing, since third-party exports
regularly carry non-standard zone names.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from icalendar import vDate, vDatetime

logger = logging.getLogger("py_recurrence.parser")


def resolve_timezone(tzid: str | None, fallback: str = "UTC") -> tzinfo:
    """Resolve a TZID to a tzinfo.

    Args:
        tzid: Zone name from the tz database (e.g. "Europe/Oslo")
        fallback: Zone name used when tzid is missing or unknown

    Returns:
        Resolved zone, the fallback zone, or UTC as a last resort
    """
    for name in (tzid, fallback):
        if not name:
            continue
        if name.upper() in ("UTC", "Z"):
            return UTC
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.debug(f"unknown timezone {name!r}")
    return UTC


def parse_date(value: str) -> date:
    """Parse a ``YYYYMMDD`` date value.

    Raises:
        ValueError: If the value is not a valid date
    """
    parsed: date = vDate.from_ical(value)
    return parsed


def parse_date_time(value: str, tzid: str | None = None, fallback_timezone: str = "UTC") -> datetime:
    """Parse a ``YYYYMMDDTHHMMSS[Z]`` date-time value.

    Args:
        value: Date-time value
        tzid: TZID parameter of the property, if any
        fallback_timezone: Zone used when tzid is missing or unknown

    Returns:
        Timezone-aware datetime. Values with a ``Z`` suffix are in UTC.

    Raises:
        ValueError: If the value is not a valid date-time

    Example:
        >>> parse_date_time("20100721T230000", tzid="Europe/Oslo").astimezone(UTC).hour
        21
    """
    parsed: datetime = vDatetime.from_ical(value)

    # Trailing Z: the value is absolute, TZID does not apply
    if parsed.tzinfo is not None:
        return parsed.astimezone(UTC)

    return parsed.replace(tzinfo=resolve_timezone(tzid, fallback_timezone))


def parse_timestamp(value: str, tzid: str | None = None, fallback_timezone: str = "UTC") -> date:
    """Parse either a date or a date-time value, depending on its shape."""
    if "T" in value:
        return parse_date_time(value, tzid, fallback_timezone)
    return parse_date(value)


def to_utc(ts: date) -> datetime:
    """Convert a date or datetime to an aware UTC datetime.

    Naive datetimes are taken to be in UTC; dates become midnight UTC.
    """
    if not isinstance(ts, datetime):
        return datetime.combine(ts, time(), tzinfo=UTC)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def format_complete(ts: date) -> str:
    """Format a timestamp as a complete UTC date-time (``YYYYMMDDTHHMMSSZ``).

    Example:
        >>> format_complete(datetime(2010, 7, 22, 13, 49, 9, tzinfo=UTC))
        '20100722T134909Z'
    """
    return to_utc(ts).strftime("%Y%m%dT%H%M%SZ")


def format_date(ts: date) -> str:
    """Format a timestamp as a date-only value (``YYYYMMDD``).

    Datetimes are converted to UTC first.
    """
    if isinstance(ts, datetime):
        ts = to_utc(ts)
    return ts.strftime("%Y%m%d")
