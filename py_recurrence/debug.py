"""Debug logging utilities for the recurrence engine."""

from __future__ import annotations

import logging

logger = logging.getLogger("py_recurrence")


def setup_debug_logging() -> None:
    """Configure debug logging for parsing and serialization."""
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)

    # Messages are already self-describing
    formatter = logging.Formatter("%(name)s: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False
