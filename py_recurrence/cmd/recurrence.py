"""Recurrence rule command-line tool."""

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the recurrence tool."""
    parser = argparse.ArgumentParser(
        description="Parse, normalize and describe calendar recurrence rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalize a recurrence read from a file
  py-recurrence rule.txt

  # Describe a recurrence read from stdin
  printf 'DTSTART:20100722T134909Z\\nRRULE:FREQ=WEEKLY;BYDAY=SA' | py-recurrence --describe

  # Wrap a recurrence in a complete iCalendar object
  py-recurrence --ical --uid meeting-1 rule.txt
        """,
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="print an English description instead of the normalized rule",
    )
    parser.add_argument(
        "--ical",
        action="store_true",
        help="print a VCALENDAR containing the rule as a VEVENT",
    )
    parser.add_argument(
        "--uid",
        default="py-recurrence",
        help="UID of the exported event (default: py-recurrence)",
    )
    parser.add_argument(
        "--summary",
        default="",
        help="SUMMARY of the exported event",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging (logs skipped lines and block scopes)",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="file containing the recurrence text (default: stdin)",
    )

    args = parser.parse_args(argv)

    if args.debug:
        from py_recurrence.debug import setup_debug_logging
        setup_debug_logging()

    if args.file == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: file does not exist: {path}", file=sys.stderr)
            return 1
        text = path.read_text(encoding="utf-8")

    from py_recurrence import RecurrenceError, parse_recurrence, recurrence_to_ical

    try:
        rule = parse_recurrence(text)
        if args.describe:
            print(str(rule))
        elif args.ical:
            print(recurrence_to_ical(rule, args.uid, args.summary), end="")
        else:
            print(rule.to_recurrence_string(), end="")
    except RecurrenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
