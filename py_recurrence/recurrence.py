"""Recurrence rules: parsing from and serialization to recurrence text.

A recurrence text is a newline-separated list of iCalendar properties, e.g.::

    DTSTART;TZID=Europe/Oslo:20100721T230000
    DTEND;TZID=Europe/Oslo:20100722T000000
    RRULE:FREQ=WEEKLY;INTERVAL=2;BYDAY=WE;UNTIL=20100929T210000Z
    BEGIN:VTIMEZONE
    ...
    END:VTIMEZONE

Only DTSTART, DTEND and RRULE at the top level are read. Properties inside
BEGIN/END blocks (such as the DTSTART/RRULE pairs describing daylight saving
transitions of a VTIMEZONE) are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from .config import RecurrenceConfig
from .frequency import BY_AXIS, QUALIFIER_AXES, Frequency, FrequencyUnit, parse_interval
from .internal import (
    FieldResult,
    InvalidFieldValue,
    MissingRequiredField,
    ParsedProperty,
    parse_property,
    scan_lines,
)
from .internal.internal import invalid
from .timestamps import format_complete, format_date, parse_date, parse_date_time, parse_timestamp

logger = logging.getLogger("py_recurrence.parser")


class RecurrenceRule:
    """A recurring event's start, end and repetition pattern.

    Fields are validated on assignment. Assigning through the attributes
    raises InvalidFieldValue; the ``set_*`` methods return a FieldResult
    instead.

    Example:
        >>> rule = RecurrenceRule(
        ...     start_time=datetime(2009, 6, 20, 16, 30, tzinfo=UTC),
        ...     end_time=datetime(2009, 6, 20, 18, 30, tzinfo=UTC),
        ...     frequency={"Weekly": ["SA"]},
        ... )
        >>> print(rule.to_recurrence_string(), end="")
        DTSTART;VALUE=DATE-TIME:20090620T163000Z
        DTEND;VALUE=DATE-TIME:20090620T183000Z
        RRULE:FREQ=WEEKLY;BYDAY=SA;
    """

    def __init__(
        self,
        start_time: date | None = None,
        end_time: date | None = None,
        frequency: Frequency | Mapping[str, Any] | None = None,
        repeat_until: date | None = None,
        all_day: bool = False,
    ) -> None:
        self._start_time: date | None = None
        self._end_time: date | None = None
        self._frequency: Frequency | None = None
        self._repeat_until: date | None = None
        self.all_day = all_day

        if start_time is not None:
            self.start_time = start_time
        if end_time is not None:
            self.end_time = end_time
        if frequency is not None:
            self.frequency = frequency
        if repeat_until is not None:
            self.repeat_until = repeat_until

    @classmethod
    def build(cls, **fields: Any) -> FieldResult:
        """Construct a rule, returning a FieldResult instead of raising.

        Accepts the same keyword arguments as the constructor.
        """
        try:
            return FieldResult(value=cls(**fields))
        except InvalidFieldValue as e:
            return FieldResult(error=e)

    @classmethod
    def from_string(cls, text: str, config: RecurrenceConfig | None = None) -> RecurrenceRule:
        """Parse recurrence text into a rule. See parse_recurrence."""
        return parse_recurrence(text, config)

    def __repr__(self) -> str:
        return (
            f"RecurrenceRule(start_time={self._start_time!r}, end_time={self._end_time!r}, "
            f"frequency={self._frequency!r}, repeat_until={self._repeat_until!r}, "
            f"all_day={self.all_day!r})"
        )

    def __str__(self) -> str:
        from .render import describe

        return describe(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecurrenceRule):
            return NotImplemented
        return (
            self._start_time == other._start_time
            and self._end_time == other._end_time
            and self._frequency == other._frequency
            and self._repeat_until == other._repeat_until
            and self.all_day == other.all_day
        )

    # Validated setters

    def set_start_time(self, value: Any) -> FieldResult:
        """Set the start date/time. Must be a date or datetime."""
        if not isinstance(value, date):
            return invalid("start_time", value, "must be a date or a datetime")
        self._start_time = value
        return FieldResult(value=value)

    def set_end_time(self, value: Any) -> FieldResult:
        """Set the end date/time. Must be a date or datetime."""
        if not isinstance(value, date):
            return invalid("end_time", value, "must be a date or a datetime")
        self._end_time = value
        return FieldResult(value=value)

    def set_repeat_until(self, value: Any) -> FieldResult:
        """Set the date until which the rule repeats, or None for no end."""
        if value is not None and not isinstance(value, date):
            return invalid("repeat_until", value, "must be a date")
        self._repeat_until = value
        return FieldResult(value=value)

    def set_frequency(self, value: Any) -> FieldResult:
        """Set the frequency from a Frequency, its mapping form, or None.

        The mapping has one unit key ("Secondly", "Minutely", "Hourly",
        "Daily", "Weekly", "Monthly" or "Yearly", any casing) whose value is
        a list of qualifiers, and optionally an "interval" key:

            {"Weekly": ["TU"]}                   every Tuesday
            {"Monthly": ["+1MO", "+3MO"]}        first and third Monday
            {"Yearly": [366]}                    last day of the year
            {"Weekly": ["FR"], "interval": 2}    every other Friday
        """
        if value is None or isinstance(value, Frequency):
            self._frequency = value
            return FieldResult(value=value)
        try:
            frequency = Frequency.from_mapping(value)
        except InvalidFieldValue as e:
            return FieldResult(error=e)
        self._frequency = frequency
        return FieldResult(value=frequency)

    # Attribute access

    @property
    def start_time(self) -> date | None:
        """The event start date/time."""
        return self._start_time

    @start_time.setter
    def start_time(self, value: Any) -> None:
        self.set_start_time(value).unwrap()

    @property
    def end_time(self) -> date | None:
        """The event end date/time."""
        return self._end_time

    @end_time.setter
    def end_time(self, value: Any) -> None:
        self.set_end_time(value).unwrap()

    @property
    def repeat_until(self) -> date | None:
        """The date until which the event repeats."""
        return self._repeat_until

    @repeat_until.setter
    def repeat_until(self, value: Any) -> None:
        self.set_repeat_until(value).unwrap()

    @property
    def frequency(self) -> Frequency | None:
        """The repetition pattern."""
        return self._frequency

    @frequency.setter
    def frequency(self, value: Any) -> None:
        self.set_frequency(value).unwrap()

    # Serialization

    def to_recurrence_string(self) -> str:
        """Serialize the rule as recurrence text.

        Returns:
            Three newline-terminated lines: DTSTART, DTEND and RRULE. The
            RRULE line carries ``UNTIL=YYYYMMDD`` when repeat_until is set.

        Raises:
            MissingRequiredField: If start_time or end_time is not set
        """
        if self._start_time is None:
            raise MissingRequiredField("start_time")
        if self._end_time is None:
            raise MissingRequiredField("end_time")

        output = self._format_bound("DTSTART", self._start_time)
        output += self._format_bound("DTEND", self._end_time)

        output += "RRULE:"
        if self._frequency is not None:
            f = self._frequency
            output += f"FREQ={f.unit.value.upper()};"
            if f.interval is not None:
                output += f"INTERVAL={f.interval};"
            if f.by_axis and f.qualifiers:
                output += f"{f.by_axis}={','.join(f.qualifiers)};"
        if self._repeat_until is not None:
            output += f"UNTIL={format_date(self._repeat_until)}"

        return output + "\n"

    def _format_bound(self, name: str, ts: date) -> str:
        if self.all_day:
            return f"{name};VALUE=DATE:{format_date(ts)}\n"
        return f"{name};VALUE=DATE-TIME:{format_complete(ts)}\n"


def parse_recurrence(text: str, config: RecurrenceConfig | None = None) -> RecurrenceRule:
    """Parse recurrence text into a RecurrenceRule.

    Parsing is best effort: unknown properties and values that fail to parse
    are skipped, and the rule holds whatever was recognized. Only the block
    structure is enforced.

    Args:
        text: Recurrence text (DTSTART/DTEND/RRULE lines, optionally with
            BEGIN/END blocks)
        config: Parser configuration (uses default if None)

    Returns:
        Parsed rule

    Raises:
        ScopeMismatch: If BEGIN/END blocks are not properly nested
    """
    config = config or RecurrenceConfig()
    rule = RecurrenceRule()

    for line, is_top_level in scan_lines(text):
        if not is_top_level or not line:
            continue

        prop = parse_property(line)
        if prop.name in ("DTSTART", "DTEND"):
            _fold_bound(rule, prop, config)
        elif prop.name == "RRULE":
            _fold_rrule(rule, prop, config)
        else:
            logger.debug(f"ignoring property {prop.name!r}")

    return rule


def _fold_bound(rule: RecurrenceRule, prop: ParsedProperty, config: RecurrenceConfig) -> None:
    """Apply a DTSTART or DTEND property to the rule."""
    is_date = prop.name_parameters.get("VALUE") == "DATE"

    try:
        if is_date:
            ts: date = parse_date(prop.value)
        else:
            ts = parse_date_time(
                prop.value,
                tzid=prop.name_parameters.get("TZID"),
                fallback_timezone=config.fallback_timezone,
            )
    except ValueError:
        logger.debug(f"skipping {prop.name} with malformed value {prop.value!r}")
        return

    if prop.name == "DTSTART":
        rule.start_time = ts
        if is_date:
            rule.all_day = True
    else:
        rule.end_time = ts


def _fold_rrule(rule: RecurrenceRule, prop: ParsedProperty, config: RecurrenceConfig) -> None:
    """Apply an RRULE property to the rule."""
    params = prop.value_parameters

    until = params.get("UNTIL")
    if until:
        try:
            rule.repeat_until = parse_timestamp(until, fallback_timezone=config.fallback_timezone)
        except ValueError:
            logger.debug(f"skipping malformed UNTIL {until!r}")

    freq = params.get("FREQ")
    if not freq:
        logger.debug("RRULE without FREQ, frequency left unset")
        return
    try:
        unit = FrequencyUnit.parse(freq)
    except ValueError:
        logger.debug(f"skipping unknown FREQ {freq!r}")
        return

    interval = None
    if "INTERVAL" in params:
        interval = parse_interval(params["INTERVAL"])
        if interval is None:
            logger.debug(f"skipping malformed INTERVAL {params['INTERVAL']!r}")

    qualifiers: list[str] = []
    axes = list(QUALIFIER_AXES)
    unit_axis = BY_AXIS.get(unit)
    if unit_axis and unit_axis not in axes:
        axes.append(unit_axis)

    for axis in axes:
        value = params.get(axis)
        if value:
            qualifiers.extend(q for q in value.split(",") if q)

    rule.frequency = Frequency(unit=unit, qualifiers=qualifiers, interval=interval)
