"""Tests for parsing recurrence text into rules."""

from datetime import UTC, date, datetime

import pytest

from py_recurrence import (
    Frequency,
    FrequencyUnit,
    RecurrenceConfig,
    RecurrenceRule,
    ScopeMismatch,
    parse_recurrence,
)

# Similar to a recurrence written by this library: times are in UTC
BASIC_RRULE = "DTSTART:20100722T134909Z\nDTEND:20100722T144909Z\nRRULE:FREQ=WEEKLY;BYDAY=SA;\n"

# Similar to Google Calendar output, with an explicit timezone definition
ADVANCED_RRULE = """DTSTART;TZID=America/Argentina/Buenos_Aires:20100722T190000
DTEND;TZID=America/Argentina/Buenos_Aires:20100722T200000
RRULE:FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR;WKST=SU
BEGIN:VTIMEZONE
TZID:America/Argentina/Buenos_Aires
X-LIC-LOCATION:America/Argentina/Buenos_Aires
BEGIN:STANDARD
TZOFFSETFROM:-0300
TZOFFSETTO:-0300
TZNAME:ART
DTSTART:19700101T000000
END:STANDARD
END:VTIMEZONE
"""

# Interval, until and a timezone with daylight saving rules
COMPLEX_RRULE = """DTSTART;TZID=Europe/Oslo:20100721T230000
DTEND;TZID=Europe/Oslo:20100722T000000
RRULE:FREQ=WEEKLY;INTERVAL=2;BYDAY=WE;UNTIL=20100929T210000Z;WKST=SU
BEGIN:VTIMEZONE
TZID:Europe/Oslo
X-LIC-LOCATION:Europe/Oslo
BEGIN:DAYLIGHT
TZOFFSETFROM:+0100
TZOFFSETTO:+0200
TZNAME:CEST
DTSTART:19700329T020000
RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU
END:DAYLIGHT
BEGIN:STANDARD
TZOFFSETFROM:+0200
TZOFFSETTO:+0100
TZNAME:CET
DTSTART:19701025T030000
RRULE:FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU
END:STANDARD
END:VTIMEZONE"""


def test_parse_basic_rrule():
    """Test parsing a rule with UTC times."""
    rule = parse_recurrence(BASIC_RRULE)

    assert rule.start_time.astimezone(UTC).hour == 13, "times should be in UTC"
    assert rule.start_time.minute == 49
    assert rule.end_time.astimezone(UTC).hour == 14, "times should be in UTC"
    assert rule.end_time.minute == 49
    assert rule.start_time.tzinfo == UTC
    assert rule.end_time.tzinfo == UTC
    assert rule.all_day is False
    assert rule.frequency.as_mapping() == {"Weekly": ["SA"]}
    assert rule.repeat_until is None


def test_parse_advanced_rrule():
    """Test parsing a rule with TZID and a VTIMEZONE block."""
    rule = parse_recurrence(ADVANCED_RRULE)

    assert rule.start_time.astimezone(UTC).hour == 22
    assert rule.start_time.minute == 0
    assert rule.end_time.hour == 20, "end time should stay in its local zone"
    assert rule.frequency.unit == FrequencyUnit.WEEKLY
    assert rule.frequency.qualifiers == ["MO", "TU", "WE", "TH", "FR"]


def test_parse_complex_rrule():
    """Test parsing a rule with interval, until and daylight saving."""
    rule = parse_recurrence(COMPLEX_RRULE)

    assert rule.start_time.astimezone(UTC).hour == 21
    assert rule.start_time.minute == 0
    assert rule.end_time.astimezone(UTC).hour == 22
    assert rule.frequency.as_mapping() == {"Weekly": ["WE"], "interval": 2}
    assert rule.repeat_until.date() == date(2010, 9, 29)


def test_nested_rrule_does_not_leak():
    """Test that RRULEs inside blocks do not override the top-level one."""
    text = "RRULE:FREQ=DAILY\nBEGIN:VTIMEZONE\nBEGIN:DAYLIGHT\nRRULE:FREQ=YEARLY;BYDAY=-1SU\nEND:DAYLIGHT\nEND:VTIMEZONE"

    rule = parse_recurrence(text)

    assert rule.frequency == Frequency(FrequencyUnit.DAILY)


def test_nested_dtstart_does_not_leak():
    """Test that a DTSTART inside a block is ignored."""
    text = "BEGIN:VTIMEZONE\nDTSTART:19700101T000000\nEND:VTIMEZONE\nDTSTART:20100722T134909Z"

    rule = parse_recurrence(text)

    assert rule.start_time == datetime(2010, 7, 22, 13, 49, 9, tzinfo=UTC)


def test_unterminated_block_fails():
    """Test that a missing END:VTIMEZONE fails the parse."""
    text = "DTSTART:20100722T134909Z\nBEGIN:VTIMEZONE\nTZID:Europe/Oslo"

    with pytest.raises(ScopeMismatch):
        parse_recurrence(text)


def test_all_day_detection():
    """Test that VALUE=DATE produces an all-day rule."""
    rule = parse_recurrence("DTSTART;VALUE=DATE:20100722\nDTEND;VALUE=DATE:20100723\nRRULE:FREQ=DAILY")

    assert rule.all_day is True
    assert rule.start_time == date(2010, 7, 22)
    assert not isinstance(rule.start_time, datetime), "start should be date-only"
    assert rule.end_time == date(2010, 7, 23)


def test_dtend_does_not_set_all_day():
    """Test that only DTSTART decides all_day."""
    rule = parse_recurrence("DTSTART:20100722T134909Z\nDTEND;VALUE=DATE:20100723")

    assert rule.all_day is False
    assert rule.end_time == date(2010, 7, 23)


def test_unknown_parameter_is_ignored():
    """Test that unknown RRULE parameters do not affect the result."""
    with_wkst = parse_recurrence("DTSTART:20100722T134909Z\nRRULE:FREQ=WEEKLY;BYDAY=SA;WKST=SU;X-NAME=foo")
    without = parse_recurrence("DTSTART:20100722T134909Z\nRRULE:FREQ=WEEKLY;BYDAY=SA")

    assert with_wkst == without


def test_unknown_properties_are_skipped():
    """Test that unrecognized and malformed lines are skipped."""
    text = "X-WR-CALNAME:Work\nDTSTART:not-a-date\nDTEND:20100722T144909Z\n\nRRULE:FREQ=WEEKLY;BYDAY=SA"

    rule = parse_recurrence(text)

    assert rule.start_time is None
    assert rule.end_time == datetime(2010, 7, 22, 14, 49, 9, tzinfo=UTC)
    assert rule.frequency.as_mapping() == {"Weekly": ["SA"]}


def test_rrule_without_freq():
    """Test that an RRULE without FREQ leaves frequency unset."""
    rule = parse_recurrence("RRULE:BYDAY=MO;UNTIL=20101231")

    assert rule.frequency is None
    assert rule.repeat_until == date(2010, 12, 31)


def test_rrule_with_unknown_freq():
    """Test that an unknown FREQ leaves frequency unset."""
    rule = parse_recurrence("RRULE:FREQ=FORTNIGHTLY;BYDAY=MO")

    assert rule.frequency is None


def test_freq_is_case_insensitive():
    """Test that FREQ is canonicalized."""
    rule = parse_recurrence("RRULE:FREQ=monthly;BYDAY=+1TU,+3TU")

    assert rule.frequency.as_mapping() == {"Monthly": ["+1TU", "+3TU"]}


def test_qualifier_axes_are_concatenated():
    """Test that BYDAY, BYMONTHDAY and BYYEARDAY share one list in fixed order."""
    rule = parse_recurrence("RRULE:FREQ=YEARLY;BYYEARDAY=100,-1;BYMONTHDAY=15;BYDAY=MO")

    assert rule.frequency.qualifiers == ["MO", "15", "100", "-1"]


def test_malformed_interval_is_skipped():
    """Test that a non-numeric INTERVAL is ignored."""
    rule = parse_recurrence("RRULE:FREQ=DAILY;INTERVAL=often")

    assert rule.frequency.as_mapping() == {"Daily": []}


def test_unresolvable_timezone_falls_back_to_utc():
    """Test that an unknown TZID is treated as UTC."""
    rule = parse_recurrence("DTSTART;TZID=Mars/Olympus_Mons:20100722T100000")

    assert rule.start_time == datetime(2010, 7, 22, 10, 0, tzinfo=UTC)


def test_configured_fallback_timezone():
    """Test that times without TZID use the configured fallback zone."""
    config = RecurrenceConfig(fallback_timezone="Europe/Berlin")

    rule = parse_recurrence("DTSTART:20100722T100000", config)

    assert rule.start_time.astimezone(UTC).hour == 8


def test_from_string():
    """Test the classmethod parser entry point."""
    rule = RecurrenceRule.from_string(BASIC_RRULE)

    assert rule == parse_recurrence(BASIC_RRULE)


@pytest.mark.parametrize("tzid", ["Europe", "America"])
def test_timezone_region_falls_back_to_utc(tzid):
    """Test that a TZID naming a region rather than a zone is treated as UTC."""
    rule = parse_recurrence(f"DTSTART;TZID={tzid}:20100721T230000\nRRULE:FREQ=DAILY")

    assert rule.start_time == datetime(2010, 7, 21, 23, 0, tzinfo=UTC)
    assert rule.frequency == Frequency(FrequencyUnit.DAILY)


@pytest.mark.parametrize(
    "rrule,expected",
    [
        ("RRULE:FREQ=HOURLY;BYHOUR=9,17", {"Hourly": ["9", "17"]}),
        ("RRULE:FREQ=MINUTELY;BYMINUTE=15", {"Minutely": ["15"]}),
        ("RRULE:FREQ=SECONDLY;BYSECOND=30", {"Secondly": ["30"]}),
        ("RRULE:FREQ=DAILY;BYHOUR=9", {"Daily": []}),
    ],
)
def test_unit_axis_is_read(rrule, expected):
    """Test that the BY clause belonging to the unit is read."""
    rule = parse_recurrence(rrule)

    assert rule.frequency.as_mapping() == expected
