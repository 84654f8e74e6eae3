"""Internal scanning, decoding and error helpers."""

from .internal import (
    FieldResult,
    InvalidFieldValue,
    MissingRequiredField,
    RecurrenceError,
    ScopeMismatch,
)
from .property import ParsedProperty, parse_property, parse_term
from .scanner import LineScanner, scan_lines

__all__ = [
    "FieldResult",
    "InvalidFieldValue",
    "MissingRequiredField",
    "RecurrenceError",
    "ScopeMismatch",
    "ParsedProperty",
    "parse_property",
    "parse_term",
    "LineScanner",
    "scan_lines",
]
