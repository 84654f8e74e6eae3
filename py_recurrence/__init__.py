"""A Python library for parsing and writing calendar recurrence rules."""

from .config import RecurrenceConfig
from .frequency import Frequency, FrequencyUnit
from .ical import recurrence_to_event, recurrence_to_ical
from .internal import (
    FieldResult,
    InvalidFieldValue,
    MissingRequiredField,
    RecurrenceError,
    ScopeMismatch,
)
from .recurrence import RecurrenceRule, parse_recurrence
from .render import describe
from .timestamps import format_complete

__version__ = "0.1.0"

__all__ = [
    "RecurrenceConfig",
    "Frequency",
    "FrequencyUnit",
    "recurrence_to_event",
    "recurrence_to_ical",
    "FieldResult",
    "InvalidFieldValue",
    "MissingRequiredField",
    "RecurrenceError",
    "ScopeMismatch",
    "RecurrenceRule",
    "parse_recurrence",
    "describe",
    "format_complete",
]
