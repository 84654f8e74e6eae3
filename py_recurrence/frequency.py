"""Recurrence frequency: repeat unit, qualifiers and interval."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .internal import InvalidFieldValue

INTERVAL_KEY = "interval"


class FrequencyUnit(Enum):
    """Granularity at which a rule repeats.

    Values are the canonical keys of the frequency mapping.
    """

    SECONDLY = "Secondly"
    MINUTELY = "Minutely"
    HOURLY = "Hourly"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"

    @classmethod
    def parse(cls, name: str) -> FrequencyUnit:
        """Parse a unit name in any casing (``WEEKLY``, ``weekly``, ``Weekly``).

        Raises:
            ValueError: If the name is not a frequency unit
        """
        return cls(name.lower().capitalize())


# Qualifier axis written by the serializer for each unit
BY_AXIS = {
    FrequencyUnit.SECONDLY: "BYSECOND",
    FrequencyUnit.MINUTELY: "BYMINUTE",
    FrequencyUnit.HOURLY: "BYHOUR",
    FrequencyUnit.WEEKLY: "BYDAY",
    FrequencyUnit.MONTHLY: "BYDAY",
    FrequencyUnit.YEARLY: "BYYEARDAY",
}

# Axes read by the parser for every unit, in the order their values are
# concatenated. The unit's own BY_AXIS clause is read after them.
QUALIFIER_AXES = ("BYDAY", "BYMONTHDAY", "BYYEARDAY")


@dataclass
class Frequency:
    """How often a rule repeats.

    ``qualifiers`` is a single flat list regardless of which BY axis the
    values came from:
    - Secondly/Minutely/Hourly: position within the parent unit ("0".."59")
    - Weekly: two-letter weekday codes ("MO", "TU", ...)
    - Monthly: signed ordinal + weekday ("+1TU" is the first Tuesday)
    - Yearly: signed day of the year ("366", "-1")

    ``interval`` is the stride between repetitions; None means every unit.

    Examples:
        Every Tuesday:
            Frequency(FrequencyUnit.WEEKLY, ["TU"])
        Every other week on Friday:
            Frequency.from_mapping({"Weekly": ["FR"], "interval": 2})
    """

    unit: FrequencyUnit
    qualifiers: list[str] = field(default_factory=list)
    interval: int | None = None

    @property
    def by_axis(self) -> str | None:
        """Name of the BY clause the qualifiers are written to."""
        return BY_AXIS.get(self.unit)

    def as_mapping(self) -> dict[str, Any]:
        """Return the ordered mapping form, e.g. ``{"Weekly": ["WE"], "interval": 2}``."""
        mapping: dict[str, Any] = {self.unit.value: list(self.qualifiers)}
        if self.interval is not None:
            mapping[INTERVAL_KEY] = self.interval
        return mapping

    @classmethod
    def from_mapping(cls, mapping: Any) -> Frequency:
        """Build a Frequency from its mapping form.

        The unit key may use any casing. ``"interval"`` may be an int or a
        string of digits. Qualifiers may be strings or ints.

        Raises:
            InvalidFieldValue: If the mapping is not well-formed
        """
        if not isinstance(mapping, Mapping):
            raise InvalidFieldValue("frequency", mapping, "must be a mapping")

        unit: FrequencyUnit | None = None
        qualifiers: list[str] = []
        interval: int | None = None

        for key, value in mapping.items():
            if not isinstance(key, str):
                raise InvalidFieldValue("frequency", mapping, f"unknown key {key!r}")

            if key.lower() == INTERVAL_KEY:
                interval = parse_interval(value)
                if interval is None:
                    raise InvalidFieldValue("frequency", mapping, "interval must be a positive integer")
                continue

            try:
                parsed_unit = FrequencyUnit.parse(key)
            except ValueError:
                raise InvalidFieldValue("frequency", mapping, f"unknown key {key!r}") from None

            if unit is not None:
                raise InvalidFieldValue("frequency", mapping, "only one frequency unit is allowed")
            unit = parsed_unit

            if value is None:
                continue
            if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
                raise InvalidFieldValue("frequency", mapping, f"qualifiers for {key} must be a list")
            qualifiers = [str(q) for q in value]

        if unit is None:
            raise InvalidFieldValue("frequency", mapping, "a frequency unit is required")

        return cls(unit=unit, qualifiers=qualifiers, interval=interval)


def parse_interval(value: Any) -> int | None:
    """Parse an interval value, returning None if it is not a positive integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        interval = int(value)
        return interval if interval > 0 else None
    return None
