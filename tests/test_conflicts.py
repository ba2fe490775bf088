"""Tests for the booking overlap rules and the conflict checker."""

from datetime import date
from types import SimpleNamespace

import pytest

from seminar_booking.services.conflicts import BookingConflictChecker, find_conflicts, overlaps

DAY = date(2030, 3, 4)


def _booking(start: str, end: str, booking_id: int = 1):
    return SimpleNamespace(id=booking_id, start_time=start, end_time=end)


class FakeFinder:
    """Stands in for the repository; records what it was asked for."""

    def __init__(self, bookings):
        self.bookings = bookings
        self.calls = []

    def find_active_on_day(self, hall_id, day, exclude_booking_id=None):
        self.calls.append((hall_id, day, exclude_booking_id))
        return [b for b in self.bookings if b.id != exclude_booking_id]


@pytest.mark.parametrize(
    "existing, new, expected",
    [
        (("10:00", "11:00"), ("11:00", "12:00"), False),  # touching after
        (("11:00", "12:00"), ("10:00", "11:00"), False),  # touching before
        (("09:00", "12:00"), ("10:00", "11:00"), True),   # new inside existing
        (("10:00", "11:00"), ("09:00", "12:00"), True),   # new contains existing
        (("09:00", "11:00"), ("10:00", "12:00"), True),   # partial, new ends later
        (("10:00", "12:00"), ("09:00", "11:00"), True),   # partial, new starts earlier
        (("10:00", "11:00"), ("10:00", "10:30"), True),   # same start
        (("10:00", "11:00"), ("10:30", "11:00"), True),   # same end
        (("08:00", "09:00"), ("13:00", "14:00"), False),  # far apart
    ],
)
def test_find_conflicts_cases(existing, new, expected):
    conflicts = find_conflicts(new[0], new[1], [_booking(*existing)])
    assert bool(conflicts) is expected


def test_overlaps_matches_half_open_rule():
    """The three explicit cases agree with start < other_end and end > other_start."""
    points = range(0, 8)
    for es in points:
        for ee in points:
            if ee <= es:
                continue
            for ns in points:
                for ne in points:
                    if ne <= ns:
                        continue
                    assert overlaps(es, ee, ns, ne) == (es < ne and ee > ns)


def test_single_digit_hours_compare_by_clock_value():
    """``9:00`` is earlier than ``10:00`` even though it sorts later as text."""
    assert find_conflicts("9:00", "9:30", [_booking("10:00", "11:00")]) == []
    assert find_conflicts("9:30", "10:30", [_booking("10:00", "11:00")]) != []


def test_checker_reports_conflict_and_passes_query_through():
    finder = FakeFinder([_booking("09:00", "11:00", booking_id=7)])
    checker = BookingConflictChecker(finder)

    assert checker.has_conflict(3, DAY, "10:00", "12:00") is True
    assert finder.calls == [(3, DAY, None)]


def test_checker_excludes_booking_being_updated():
    finder = FakeFinder([_booking("09:00", "11:00", booking_id=7)])
    checker = BookingConflictChecker(finder)

    assert checker.has_conflict(3, DAY, "09:00", "11:00", exclude_booking_id=7) is False
    assert finder.calls == [(3, DAY, 7)]


def test_checker_propagates_storage_failures():
    class Broken:
        def find_active_on_day(self, *args, **kwargs):
            raise RuntimeError("connection reset")

    with pytest.raises(RuntimeError):
        BookingConflictChecker(Broken()).has_conflict(1, DAY, "10:00", "11:00")
