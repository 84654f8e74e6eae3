"""Tests for line scanning and scope tracking."""

import pytest

from py_recurrence.internal import LineScanner, ScopeMismatch, scan_lines

VTIMEZONE_RULE = """DTSTART;TZID=Europe/Oslo:20100721T230000
RRULE:FREQ=WEEKLY;BYDAY=WE
BEGIN:VTIMEZONE
TZID:Europe/Oslo
BEGIN:DAYLIGHT
DTSTART:19700329T020000
RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU
END:DAYLIGHT
END:VTIMEZONE"""


def test_top_level_flags():
    """Test that only lines outside blocks are top-level."""
    pairs = list(scan_lines(VTIMEZONE_RULE))

    assert pairs == [
        ("DTSTART;TZID=Europe/Oslo:20100721T230000", True),
        ("RRULE:FREQ=WEEKLY;BYDAY=WE", True),
        ("BEGIN:VTIMEZONE", False),
        ("TZID:Europe/Oslo", False),
        ("BEGIN:DAYLIGHT", False),
        ("DTSTART:19700329T020000", False),
        ("RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU", False),
        ("END:DAYLIGHT", False),
        ("END:VTIMEZONE", False),
    ], f"Unexpected scan result: {pairs}"


def test_lines_after_block_are_top_level():
    """Test that closing a block restores top-level scope."""
    pairs = list(scan_lines("BEGIN:X\nINNER:1\nEND:X\nOUTER:2"))

    assert pairs[-1] == ("OUTER:2", True)
    assert pairs[1] == ("INNER:1", False)


def test_scanner_is_restartable():
    """Test that each iteration starts a fresh scan."""
    scanner = LineScanner(VTIMEZONE_RULE)

    first = list(scanner)
    second = list(scanner)

    assert first == second


def test_crlf_line_endings():
    """Test that carriage returns are stripped."""
    pairs = list(scan_lines("BEGIN:X\r\nA:1\r\nEND:X\r\nB:2\r\n"))

    assert pairs == [("BEGIN:X", False), ("A:1", False), ("END:X", False), ("B:2", True), ("", True)]


def test_unterminated_block_fails():
    """Test that a BEGIN without END fails at end of input."""
    with pytest.raises(ScopeMismatch, match="unterminated block 'VTIMEZONE'") as exc_info:
        list(scan_lines("RRULE:FREQ=DAILY\nBEGIN:VTIMEZONE\nTZID:Europe/Oslo"))

    assert exc_info.value.expected == "VTIMEZONE"
    assert exc_info.value.found is None


def test_mismatched_end_fails():
    """Test that END must close the innermost block."""
    with pytest.raises(ScopeMismatch, match="does not close") as exc_info:
        list(scan_lines("BEGIN:VTIMEZONE\nBEGIN:STANDARD\nEND:VTIMEZONE"))

    assert exc_info.value.expected == "STANDARD"
    assert exc_info.value.found == "VTIMEZONE"


def test_end_without_begin_fails():
    """Test that END with an empty stack fails."""
    with pytest.raises(ScopeMismatch, match="without matching BEGIN"):
        list(scan_lines("DTSTART:20100722T134909Z\nEND:VTIMEZONE"))


def test_scan_is_lazy():
    """Test that lines before a scope error are still produced."""
    iterator = iter(scan_lines("A:1\nEND:X"))

    assert next(iterator) == ("A:1", True)
    with pytest.raises(ScopeMismatch):
        next(iterator)
