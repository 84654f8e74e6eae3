"""Low-level error types and results for recurrence parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class RecurrenceError(Exception):
    """Base class for recurrence engine errors."""


class ScopeMismatch(RecurrenceError):
    """BEGIN/END blocks are not properly nested.

    ``expected`` is the innermost open block (None when no block is open),
    ``found`` is the name carried by the offending END marker (None when the
    input ended with blocks still open).
    """

    def __init__(self, expected: str | None, found: str | None):
        self.expected = expected
        self.found = found
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.found is None:
            return f"recurrence: unterminated block {self.expected!r}"
        if self.expected is None:
            return f"recurrence: END:{self.found} without matching BEGIN"
        return f"recurrence: END:{self.found} does not close BEGIN:{self.expected}"


class InvalidFieldValue(RecurrenceError):
    """A value assigned to a recurrence rule field is not acceptable."""

    def __init__(self, field: str, value: Any, reason: str = ""):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        s = f"recurrence: invalid value for {self.field}: {self.value!r}"
        if self.reason:
            return f"{s} ({self.reason})"
        return s


class MissingRequiredField(RecurrenceError):
    """A field needed for serialization is not set."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"recurrence: {self.field} is required"


@dataclass(frozen=True)
class FieldResult:
    """Outcome of a validated assignment.

    Either ``value`` holds the accepted value or ``error`` holds the
    ``InvalidFieldValue`` describing why it was rejected.
    """

    value: Any = None
    error: InvalidFieldValue | None = None

    @property
    def ok(self) -> bool:
        """Check if the assignment succeeded."""
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def invalid(field: str, value: Any, reason: str = "") -> FieldResult:
    """Create a failed FieldResult."""
    return FieldResult(error=InvalidFieldValue(field, value, reason))
