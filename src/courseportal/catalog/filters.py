"""Validation and parsing of catalog filter parameters."""

from __future__ import annotations

import re
from datetime import time

from courseportal.catalog.exceptions import FilterValidationError

# Clock times only. A bare number ("8") or a day-prefixed span ("1.08:00") is
# unparsable, so such a filter is ignored rather than read as a duration.
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time(value: str | None) -> time | None:
    """Parse an ``HH:MM`` or ``HH:MM:SS`` string.

    Returns None for missing, blank or unparsable input.
    """
    if value is None:
        return None
    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hours, minutes, seconds = match.group(1), match.group(2), match.group(3) or "0"
    try:
        return time(int(hours), int(minutes), int(seconds))
    except ValueError:
        return None


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or value.strip() == ""


def validate_filters(
    credits_min: int | None = None,
    credits_max: int | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
) -> None:
    """Check catalog filters before they reach the query.

    Unparsable times are not an error here; the query ignores them too.

    Raises:
        FilterValidationError: With the message for the first failed check.
    """
    if credits_min is not None and credits_min < 0:
        raise FilterValidationError("Minimum credits cannot be negative.")

    if credits_max is not None and credits_max < 0:
        raise FilterValidationError("Maximum credits cannot be negative.")

    start = parse_time(start_time)
    end = parse_time(end_time)
    if start is not None and end is not None and end < start:
        raise FilterValidationError("The end time cannot be earlier than the start time.")
