"""Human-readable descriptions of recurrence rules.

The output is meant for display only. It does not round-trip and its
wording may change.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from .frequency import FrequencyUnit
from .timestamps import to_utc

if TYPE_CHECKING:
    from .recurrence import RecurrenceRule

UNIT_PHRASES = {
    FrequencyUnit.SECONDLY: "every {} second",
    FrequencyUnit.MINUTELY: "every {} minute",
    FrequencyUnit.HOURLY: "every {} hour",
    FrequencyUnit.WEEKLY: "on {}",
    FrequencyUnit.MONTHLY: "on {}",
    FrequencyUnit.YEARLY: "on the {} day of the year",
}


def describe(rule: RecurrenceRule) -> str:
    """Describe a rule in English.

    Example:
        >>> describe(parse_recurrence("RRULE:FREQ=WEEKLY;INTERVAL=2;BYDAY=WE;UNTIL=20100929"))
        'weekly on WE for 2 times and repeats until 09/29/2010'
    """
    parts: list[str] = []

    frequency = rule.frequency
    if frequency is not None:
        parts.append(frequency.unit.value.lower())

        phrase = UNIT_PHRASES.get(frequency.unit)
        if phrase and frequency.qualifiers:
            parts.append(phrase.format(",".join(frequency.qualifiers)))

        if frequency.interval is not None:
            parts.append(f"for {frequency.interval} times")

    output = " ".join(parts)
    if rule.repeat_until is not None:
        until = rule.repeat_until
        if isinstance(until, datetime):
            until = to_utc(until)
        output += f" and repeats until {until.strftime('%m/%d/%Y')}"
    return output
