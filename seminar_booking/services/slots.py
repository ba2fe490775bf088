from __future__ import annotations

from typing import Iterable

from seminar_booking.models.booking import Booking
from seminar_booking.services.timeutils import DAY_END, DAY_START, from_minutes, to_minutes


def merge_busy(bookings: Iterable[Booking]) -> list[tuple[int, int]]:
    """Collapse booked slots into sorted, non-touching (start, end) minute ranges."""
    blocked = sorted((to_minutes(b.start_time), to_minutes(b.end_time)) for b in bookings)
    if not blocked:
        return []

    merged = []
    start, end = blocked[0]
    for s, e in blocked[1:]:
        if s <= end:
            end = max(end, e)
        else:
            merged.append((start, end))
            start, end = s, e
    merged.append((start, end))
    return merged


def free_slots(bookings: Iterable[Booking]) -> list[dict]:
    """Gaps between the given bookings within ``[00:00, 23:59]``."""
    day_start, day_end = to_minutes(DAY_START), to_minutes(DAY_END)

    available = []
    last = day_start
    for s, e in merge_busy(bookings):
        if s > last:
            available.append({"start": from_minutes(last), "end": from_minutes(s)})
        last = max(last, e)

    if last < day_end:
        available.append({"start": from_minutes(last), "end": DAY_END})

    return available
