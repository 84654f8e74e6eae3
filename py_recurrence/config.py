"""Configuration for the recurrence parser and exporters."""

from __future__ import annotations

import os
from dataclasses import dataclass

PY_RECURRENCE_FALLBACK_TZ = os.getenv("PY_RECURRENCE_FALLBACK_TZ")
PY_RECURRENCE_PRODID = os.getenv("PY_RECURRENCE_PRODID")


@dataclass
class RecurrenceConfig:
    """Configuration for parsing and exporting recurrence rules.

    Defaults can be overridden through environment variables.
    """

    # Zone used when a TZID cannot be resolved or no TZID is given
    fallback_timezone: str = PY_RECURRENCE_FALLBACK_TZ or "UTC"

    # PRODID written by the iCalendar exporter
    prodid: str = PY_RECURRENCE_PRODID or "-//py-recurrence//EN"
