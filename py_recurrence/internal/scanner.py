"""Line scanning with BEGIN/END scope tracking."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .internal import ScopeMismatch

logger = logging.getLogger("py_recurrence.parser")

BEGIN_MARKER = "BEGIN:"
END_MARKER = "END:"


class LineScanner:
    """Split recurrence text into lines and report their scope.

    Iterating yields ``(line, is_top_level)`` pairs, where ``is_top_level`` is
    True iff no BEGIN block is open when the line is seen. BEGIN and END
    markers themselves are never top-level. Every call to ``iter()`` starts a
    new scan with an empty scope stack.

    Raises:
        ScopeMismatch: If an END marker does not close the innermost open
            block, or the text ends with blocks still open
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        stack: list[str] = []

        for raw in self.text.split("\n"):
            line = raw.rstrip("\r")

            if line.startswith(BEGIN_MARKER):
                name = line[len(BEGIN_MARKER):]
                stack.append(name)
                logger.debug(f"enter block {name} (depth {len(stack)})")
                yield line, False
            elif line.startswith(END_MARKER):
                name = line[len(END_MARKER):]
                if not stack:
                    raise ScopeMismatch(None, name)
                open_name = stack.pop()
                if open_name != name:
                    raise ScopeMismatch(open_name, name)
                logger.debug(f"leave block {name} (depth {len(stack)})")
                yield line, False
            else:
                yield line, not stack

        if stack:
            raise ScopeMismatch(stack[-1], None)


def scan_lines(text: str) -> LineScanner:
    """Scan recurrence text into ``(line, is_top_level)`` pairs."""
    return LineScanner(text)
