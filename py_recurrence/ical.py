"""Export of recurrence rules as iCalendar objects.

Calendar clients that consume complete calendar objects rather than bare
recurrence text get a VCALENDAR with a single VEVENT carrying the rule's
DTSTART, DTEND and RRULE.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from icalendar import Calendar as iCalendar
from icalendar import Event as iEvent

from .config import RecurrenceConfig
from .internal import MissingRequiredField
from .recurrence import RecurrenceRule
from .timestamps import to_utc


def rule_to_rrule(rule: RecurrenceRule) -> dict[str, Any] | None:
    """Convert a rule's frequency and end to an icalendar RRULE mapping.

    Returns:
        Mapping suitable for ``Event.add("rrule", ...)``, or None if the rule
        has no frequency
    """
    frequency = rule.frequency
    if frequency is None:
        return None

    rrule: dict[str, Any] = {"FREQ": frequency.unit.value.upper()}
    if frequency.interval is not None:
        rrule["INTERVAL"] = frequency.interval
    if frequency.by_axis and frequency.qualifiers:
        rrule[frequency.by_axis] = list(frequency.qualifiers)
    if rule.repeat_until is not None:
        # UNTIL must match DTSTART's value type
        if rule.all_day:
            rrule["UNTIL"] = to_utc(rule.repeat_until).date()
        else:
            rrule["UNTIL"] = to_utc(rule.repeat_until)
    return rrule


def recurrence_to_event(rule: RecurrenceRule, uid: str, summary: str = "") -> iEvent:
    """Build a VEVENT for a recurrence rule.

    Args:
        rule: Rule with start_time and end_time set
        uid: Event unique identifier
        summary: Event title

    Returns:
        icalendar Event component

    Raises:
        MissingRequiredField: If start_time or end_time is not set
    """
    if rule.start_time is None:
        raise MissingRequiredField("start_time")
    if rule.end_time is None:
        raise MissingRequiredField("end_time")

    event = iEvent()
    event.add("uid", uid)
    if summary:
        event.add("summary", summary)

    if rule.all_day:
        event.add("dtstart", to_utc(rule.start_time).date())
        event.add("dtend", to_utc(rule.end_time).date())
    else:
        event.add("dtstart", to_utc(rule.start_time))
        event.add("dtend", to_utc(rule.end_time))

    rrule = rule_to_rrule(rule)
    if rrule:
        event.add("rrule", rrule)

    event.add("dtstamp", datetime.now(UTC))
    return event


def recurrence_to_ical(
    rule: RecurrenceRule,
    uid: str,
    summary: str = "",
    config: RecurrenceConfig | None = None,
) -> str:
    """Serialize a recurrence rule as a complete iCalendar object.

    Returns:
        iCalendar string (BEGIN:VCALENDAR...END:VCALENDAR)

    Raises:
        MissingRequiredField: If start_time or end_time is not set
    """
    config = config or RecurrenceConfig()

    cal = iCalendar()
    cal.add("prodid", config.prodid)
    cal.add("version", "2.0")
    cal.add_component(recurrence_to_event(rule, uid, summary))

    ical_str: str = cal.to_ical().decode("utf-8")
    return ical_str
