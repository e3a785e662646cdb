"""Wall-clock time parsing for weekly availability."""

from datetime import datetime, time
import re

_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")


def parse_time_of_day(value: str) -> time:
    """
    Parse ``HH:MM`` or ``HH:MM:SS`` into a ``time``.

    Raises:
        ValueError: If the string is not a valid 24h time of day
    """
    if not isinstance(value, str) or not _TIME_PATTERN.match(value.strip()):
        raise ValueError(f"Invalid time format: {value!r}")
    normalized = value.strip()
    if len(normalized) == 5:
        normalized += ":00"
    return datetime.strptime(normalized, "%H:%M:%S").time()


def format_time_of_day(t: time) -> str:
    """Render as ``HH:MM``, adding seconds only when present."""
    if t.second:
        return t.strftime("%H:%M:%S")
    return t.strftime("%H:%M")
