"""Wall-clock ``HH:MM`` helpers.

Times arrive as 24-hour strings where the hour may be one digit (``9:00``).
They are stored zero-padded and compared as minutes since midnight, so
``9:00`` and ``09:00`` are the same instant.
"""

import re
from datetime import date

from seminar_booking.core.errors import ValidationError

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")

DAY_START = "00:00"
DAY_END = "23:59"


def to_minutes(value: str) -> int:
    """``"09:30"`` -> ``570``. Raises ValidationError on a malformed time."""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValidationError(f"Invalid time format (HH:MM): {value!r}")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def normalize_time(value: str) -> str:
    return from_minutes(to_minutes(value))


def validate_range(start_time: str, end_time: str) -> tuple[str, str]:
    """Normalise both ends and require end strictly after start."""
    start = normalize_time(start_time)
    end = normalize_time(end_time)
    if to_minutes(end) <= to_minutes(start):
        raise ValidationError("End time must be after start time")
    return start, end


def validate_not_past(day: date, today: date | None = None):
    today = today or date.today()
    if day < today:
        raise ValidationError("Cannot book halls for past dates")
