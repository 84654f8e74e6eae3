"""Decoding of ``NAME[;PARAM=VALUE]*:VALUE[;PARAM=VALUE]*`` property lines."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ParsedProperty:
    """A single decoded property line."""

    name: str
    name_parameters: dict[str, str | None] = field(default_factory=dict)
    value: str = ""
    value_parameters: dict[str, str | None] = field(default_factory=dict)


def parse_term(text: str) -> tuple[str, dict[str, str | None]]:
    """Split one side of a property line into its head and parameters.

    The head is the first ``;``-separated segment when it has no ``=``,
    otherwise it is empty. Remaining segments are ``KEY=VALUE`` pairs; a
    segment without ``=`` maps its key to None.

    Args:
        text: Name side (``DTSTART;TZID=Europe/Oslo``) or value side
            (``FREQ=WEEKLY;BYDAY=WE``) of a line

    Returns:
        Tuple of (head, parameters)

    Example:
        >>> parse_term("FREQ=WEEKLY;BYDAY=MO,TU")
        ('', {'FREQ': 'WEEKLY', 'BYDAY': 'MO,TU'})
    """
    segments = text.split(";")

    head = ""
    if "=" not in segments[0]:
        head = segments.pop(0)

    parameters: dict[str, str | None] = {}
    for segment in segments:
        if "=" in segment:
            key, value = segment.split("=", 1)
            parameters[key] = value
        else:
            parameters[segment] = None

    return head, parameters


def parse_property(line: str) -> ParsedProperty:
    """Decode a property line into a ParsedProperty.

    The line is split on the first ``:``; both sides go through parse_term.
    """
    name_side, _, value_side = line.partition(":")
    name, name_parameters = parse_term(name_side)
    value, value_parameters = parse_term(value_side)
    return ParsedProperty(
        name=name,
        name_parameters=name_parameters,
        value=value,
        value_parameters=value_parameters,
    )
