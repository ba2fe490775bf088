"""Booking conflict detection.

A slot ``[start, end)`` conflicts with an existing, non-rejected booking of
the same hall on the same calendar day when any of these holds:

1. the new start falls inside the existing booking
   (``existing.start <= new.start < existing.end``),
2. the new end falls inside the existing booking
   (``existing.start < new.end <= existing.end``),
3. the new slot fully contains the existing booking
   (``new.start <= existing.start`` and ``existing.end <= new.end``).

Touching slots (``existing.end == new.start``) do not conflict.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol

from seminar_booking.models.booking import Booking
from seminar_booking.services.timeutils import to_minutes


class BookingFinder(Protocol):
    def find_active_on_day(
        self, hall_id: int, day: date, exclude_booking_id: int | None = None
    ) -> list[Booking]:
        ...


def overlaps(existing_start: int, existing_end: int, new_start: int, new_end: int) -> bool:
    """Overlap test on minutes-since-midnight values."""
    starts_inside = existing_start <= new_start and existing_end > new_start
    ends_inside = existing_start < new_end and existing_end >= new_end
    contains = existing_start >= new_start and existing_end <= new_end
    return starts_inside or ends_inside or contains


def find_conflicts(start_time: str, end_time: str, existing: Iterable[Booking]) -> list[Booking]:
    """Return the bookings in ``existing`` whose slot overlaps ``[start_time, end_time)``."""
    new_start = to_minutes(start_time)
    new_end = to_minutes(end_time)
    return [
        booking
        for booking in existing
        if overlaps(to_minutes(booking.start_time), to_minutes(booking.end_time), new_start, new_end)
    ]


class BookingConflictChecker:
    """Answers whether a candidate slot collides with stored bookings.

    Every check is a fresh read through ``finder``; nothing is cached.
    Persistence failures propagate unchanged.
    """

    def __init__(self, finder: BookingFinder):
        self.finder = finder

    def conflicting(
        self,
        hall_id: int,
        day: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: int | None = None,
    ) -> list[Booking]:
        candidates = self.finder.find_active_on_day(hall_id, day, exclude_booking_id)
        return find_conflicts(start_time, end_time, candidates)

    def has_conflict(
        self,
        hall_id: int,
        day: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: int | None = None,
    ) -> bool:
        return bool(self.conflicting(hall_id, day, start_time, end_time, exclude_booking_id))
